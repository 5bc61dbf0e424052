import json
from pathlib import Path

import pytest

from paintnet.training import pipelines


def _config(run_dir: Path) -> dict:
    return {
        "canvas": {"pattern": "circle", "width": 60, "height": 40, "options": {"radius": 0.25}},
        "model": {"hidden": [4]},
        "rprop": {"initial_step": 0.05},
        "train": {
            "granularity": 10,
            "clicks": 3,
            "iterations_per_click": 20,
            "seed": 11,
            "run_dir": str(run_dir),
            "render": True,
            "enable_plots": False,
        },
    }


def test_pipeline_produces_artifacts(tmp_path, capsys):
    result = pipelines.run_pipeline(_config(tmp_path / "run"))
    assert result.iterations == 60
    assert 0.0 <= result.error <= 1.0

    records = [json.loads(line) for line in Path(result.metrics_path).read_text().splitlines()]
    assert [r["step"] for r in records] == list(range(1, 61))
    assert all("loss" in r and r["seed"] == 11 for r in records)

    manifest = json.loads(Path(result.manifest_path).read_text())
    assert manifest["config"]["train"]["seed"] == 11
    assert manifest["samples"]["count"] == 24
    assert manifest["status"]["iteration"] == 60
    assert manifest["status"]["layer_sizes"] == [2, 4, 1]

    summary = json.loads(Path(result.summary_path).read_text())
    assert summary["iterations"] == 60
    assert Path(result.image_path).exists()
    assert (tmp_path / "run" / "metrics.csv").exists()
    assert (tmp_path / "run" / "config.json").exists()

    out = capsys.readouterr().out
    assert "=== PaintNet run ===" in out
    assert "Iteration 60 | Error:" in out


def test_pipeline_determinism(tmp_path):
    first = pipelines.run_pipeline(_config(tmp_path / "a"))
    second = pipelines.run_pipeline(_config(tmp_path / "b"))
    assert Path(first.metrics_path).read_text() == Path(second.metrics_path).read_text()
    assert Path(first.summary_path).read_bytes() == Path(second.summary_path).read_bytes()
    assert first.error == second.error


def test_presets_and_merge():
    names = set(pipelines.presets())
    assert {"xor-quadrants", "circle", "stripes", "perceptron", "checker-deep"} <= names
    preset = pipelines.load_preset("xor-quadrants")
    merged = pipelines.merge_config(preset, {"train": {"clicks": 1}, "model": {"hidden": [2]}})
    assert merged["train"]["clicks"] == 1
    assert merged["train"]["granularity"] == 25
    assert merged["model"]["hidden"] == [2]
    assert pipelines.load_preset("xor-quadrants")["train"]["clicks"] == 4
    with pytest.raises(KeyError):
        pipelines.load_preset("nope")


def test_config_file_loading(tmp_path):
    json_path = tmp_path / "override.json"
    json_path.write_text(json.dumps({"train": {"clicks": 2}}))
    assert pipelines.read_config_file(json_path) == {"train": {"clicks": 2}}
    yaml_path = tmp_path / "override.yaml"
    yaml_path.write_text("model:\n  hidden: [3, 3]\n")
    assert pipelines.read_config_file(yaml_path) == {"model": {"hidden": [3, 3]}}
    with pytest.raises(ValueError):
        pipelines.read_config_file(tmp_path / "override.txt")


def test_pipeline_rejects_bad_schedule(tmp_path):
    config = _config(tmp_path / "bad")
    config["train"]["clicks"] = 0
    with pytest.raises(ValueError):
        pipelines.run_pipeline(config)
    with pytest.raises(KeyError):
        pipelines.run_pipeline({"model": {}, "train": {}})
