import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


def test_bench_topologies_runs_quickly(tmp_path):
    out = tmp_path / "bench"
    subprocess.check_call(
        [
            sys.executable,
            str(ROOT / "scripts" / "bench_topologies.py"),
            "--patterns",
            "xor",
            "--seeds",
            "0",
            "--iterations",
            "5",
            "--granularity",
            "25",
            "--out",
            str(out),
        ],
        cwd=ROOT,
    )
    md = (out / "bench_topologies.md").read_text(encoding="utf-8")
    assert "| xor | none |" in md and "| xor | h6x4 |" in md
    assert (out / "bench_topologies.csv").exists()
