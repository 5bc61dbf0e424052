"""Deterministic training-run summaries."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Sequence

import numpy as np


def loss_auc(losses: Sequence[float]) -> float:
    """Area under the loss curve along an implicit iteration axis."""

    if len(losses) < 2:
        return 0.0
    y = np.asarray(losses, dtype=np.float64)
    return float(np.sum((y[1:] + y[:-1]) * 0.5))


def first_below(losses: Sequence[float], steps: Sequence[int], threshold: float) -> int | None:
    """First iteration whose loss drops below ``threshold``."""

    for step, loss in zip(steps, losses):
        if loss < threshold:
            return int(step)
    return None


def _read_records(path: Path) -> list[Mapping[str, object]]:
    records: list[Mapping[str, object]] = []
    if path.exists():
        for line in path.read_text().splitlines():
            line = line.strip()
            if line:
                records.append(json.loads(line))
    return records


def write_summary(
    metrics_jsonl: str | Path,
    out_summary_json: str | Path,
    *,
    final_error: float,
    threshold: float = 0.05,
    tail: int = 32,
) -> str:
    """Summarise the loss history in ``metrics_jsonl`` into ``out_summary_json``."""

    out_path = Path(out_summary_json)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    records = _read_records(Path(metrics_jsonl))
    steps = [int(r["step"]) for r in records if "loss" in r]
    losses = [float(r["loss"]) for r in records if "loss" in r]

    loss_stats: dict[str, float] = {}
    if losses:
        arr = np.asarray(losses, dtype=np.float64)
        window = arr[-min(tail, arr.size) :]
        loss_stats = {
            "min": float(np.min(arr)),
            "max": float(np.max(arr)),
            "mean": float(np.mean(arr)),
            "last": float(arr[-1]),
            "tail_auc": loss_auc(window.tolist()),
        }

    summary = {
        "version": 1,
        "iterations": len(losses),
        "final_error": float(final_error),
        "final_error_percent": float(final_error) * 100.0,
        "threshold": float(threshold),
        "first_below_threshold": first_below(losses, steps, threshold),
        "loss": loss_stats,
    }
    out_path.write_text(json.dumps(summary, sort_keys=True, indent=2))
    return str(out_path)


__all__ = ["first_below", "loss_auc", "write_summary"]
