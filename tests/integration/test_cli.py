import json
from pathlib import Path

import pytest

from cli.main import main


def test_cli_runs_a_preset(tmp_path, capsys):
    run_dir = tmp_path / "run"
    main(["--preset", "perceptron", "--run-dir", str(run_dir), "--iterations", "30"])
    payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert payload["iterations"] == 30
    assert (run_dir / "metrics.jsonl").exists()
    assert (run_dir / "manifest.json").exists()
    assert "image" not in payload


def test_cli_overrides_and_dump_config(tmp_path, capsys):
    dump = tmp_path / "resolved.json"
    main(
        [
            "--preset",
            "xor-quadrants",
            "--hidden",
            "3,2",
            "--granularity",
            "50",
            "--clicks",
            "1",
            "--iterations",
            "5",
            "--seed",
            "5",
            "--width",
            "100",
            "--height",
            "100",
            "--run-dir",
            str(tmp_path / "run"),
            "--no-render",
            "--dump-config",
            str(dump),
        ]
    )
    config = json.loads(dump.read_text())
    assert config["model"]["hidden"] == [3, 2]
    assert config["train"]["granularity"] == 50
    assert config["train"]["render"] is False
    payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert payload["iterations"] == 5


def test_cli_learns_from_image(tmp_path, capsys):
    from paintnet.data.patterns import get_pattern
    from paintnet.reporting.render import save_image

    image = save_image(tmp_path / "drawing.png", get_pattern("xor", width=50, height=50).to_rgb())
    main(
        [
            "--image",
            image,
            "--granularity",
            "10",
            "--clicks",
            "1",
            "--iterations",
            "10",
            "--run-dir",
            str(tmp_path / "run"),
        ]
    )
    payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert Path(payload["image"]).exists()


@pytest.mark.parametrize("flag", ["--list-presets", "--list-patterns"])
def test_cli_listing_exits(flag, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([flag])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip()
