"""Config-driven headless runs of the painting demo."""

from __future__ import annotations

import json
import os
import time
from copy import deepcopy
from pathlib import Path
from typing import Dict, Mapping, Sequence

from ..core.types import RunResult, SampleSet
from ..data.grid import build_samples, sample_points
from ..data.patterns import get_pattern
from ..reporting.artifacts import write_manifest
from ..reporting.metrics import CsvSink, JsonlSink, StatusCapture
from ..reporting.plots import PlotAdapter
from ..reporting.render import (
    format_status,
    overlay_samples,
    render_network,
    save_image,
    side_by_side,
)
from ..reporting.summary import write_summary
from .rprop import RpropConfig
from .session import TrainingSession

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor-quadrants": {
        "canvas": {"pattern": "xor", "width": 200, "height": 200, "options": {}},
        "model": {"hidden": [4]},
        "rprop": {},
        "train": {
            "granularity": 25,
            "clicks": 4,
            "iterations_per_click": 250,
            "seed": 0,
            "render": True,
            "enable_plots": False,
        },
    },
    "circle": {
        "canvas": {"pattern": "circle", "width": 200, "height": 200, "options": {"radius": 0.3}},
        "model": {"hidden": [6, 4]},
        "rprop": {},
        "train": {
            "granularity": 20,
            "clicks": 5,
            "iterations_per_click": 200,
            "seed": 1,
            "render": True,
            "enable_plots": False,
        },
    },
    "stripes": {
        "canvas": {"pattern": "stripes", "width": 240, "height": 160, "options": {"bands": 3}},
        "model": {"hidden": [8]},
        "rprop": {},
        "train": {
            "granularity": 16,
            "clicks": 5,
            "iterations_per_click": 200,
            "seed": 2,
            "render": True,
            "enable_plots": False,
        },
    },
    "perceptron": {
        "canvas": {"pattern": "stripes", "width": 120, "height": 120, "options": {"bands": 2}},
        "model": {"hidden": []},
        "rprop": {},
        "train": {
            "granularity": 10,
            "clicks": 1,
            "iterations_per_click": 100,
            "seed": 3,
            "render": False,
            "enable_plots": False,
        },
    },
}

_PRESET_DIR = Path(__file__).resolve().parents[2] / "configs" / "presets"
_FILE_PRESETS_CACHE: Dict[str, Mapping[str, object]] | None = None
_REQUIRED_SECTIONS = {"canvas", "model", "train"}


def read_config_file(path: str | Path) -> Mapping[str, object]:
    """Decode a JSON or YAML config file into a mapping."""

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise ValueError(f"Unsupported config file type: {path.suffix}")
    text = path.read_text()
    if suffix == ".json":
        data = json.loads(text or "{}")
    else:
        import yaml

        data = yaml.safe_load(text) or {}

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return data


def _file_presets() -> Dict[str, Mapping[str, object]]:
    global _FILE_PRESETS_CACHE
    if _FILE_PRESETS_CACHE is None:
        presets: Dict[str, Mapping[str, object]] = {}
        if _PRESET_DIR.exists():
            for file in sorted(_PRESET_DIR.iterdir()):
                if file.suffix.lower() not in {".yaml", ".yml", ".json"}:
                    continue
                data = read_config_file(file)
                missing = _REQUIRED_SECTIONS - set(data)
                if missing:
                    missing_str = ", ".join(sorted(missing))
                    raise KeyError(f"Preset {file.name} is missing required sections: {missing_str}")
                presets[file.stem] = json.loads(json.dumps(data))
        _FILE_PRESETS_CACHE = presets
    return {name: deepcopy(cfg) for name, cfg in _FILE_PRESETS_CACHE.items()}


def presets() -> Mapping[str, Mapping[str, object]]:
    combined: Dict[str, Mapping[str, object]] = {}
    combined.update({name: deepcopy(cfg) for name, cfg in _PRESETS.items()})
    combined.update(_file_presets())
    return combined


def load_preset(name: str) -> Dict[str, object]:
    available = presets()
    if name not in available:
        raise KeyError(f"Unknown preset {name!r}. Available presets: {', '.join(sorted(available))}")
    return dict(available[name])


def merge_config(base: Mapping[str, object], override: Mapping[str, object]) -> Dict[str, object]:
    """Recursively merge ``override`` into a copy of ``base``."""

    merged = deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    """Paint, sample, train and report according to ``config``."""

    missing = _REQUIRED_SECTIONS - set(config)
    if missing:
        raise KeyError(f"Config is missing required sections: {', '.join(sorted(missing))}")
    canvas_cfg = dict(config["canvas"])
    model_cfg = dict(config["model"])
    train_cfg = dict(config["train"])
    rprop_cfg = dict(config.get("rprop") or {})

    canvas = get_pattern(
        str(canvas_cfg.get("pattern", "xor")),
        width=int(canvas_cfg.get("width", 200)),
        height=int(canvas_cfg.get("height", 200)),
        **dict(canvas_cfg.get("options") or {}),
    )
    granularity = int(train_cfg.get("granularity", 25))
    samples = build_samples(canvas, granularity)

    seed = train_cfg.get("seed")
    seed = int(seed) if seed is not None else None
    clicks = int(train_cfg.get("clicks", 1))
    per_click = int(train_cfg.get("iterations_per_click", 1))
    if clicks < 1 or per_click < 1:
        raise ValueError("clicks and iterations_per_click must both be >= 1")
    hidden = [int(h) for h in model_cfg.get("hidden", [])]

    run_dir = _resolve_run_dir(train_cfg, str(canvas_cfg.get("pattern", "xor")))
    run_dir.mkdir(parents=True, exist_ok=True)

    _print_startup_summary(
        pattern=str(canvas_cfg.get("pattern", "xor")),
        canvas=(canvas.width, canvas.height),
        granularity=granularity,
        samples=samples,
        hidden=hidden,
        schedule=(clicks, per_click),
    )

    jsonl = JsonlSink(run_dir / "metrics.jsonl", seed=seed)
    csv_sink = CsvSink(run_dir / "metrics.csv")
    capture = StatusCapture()
    plots = PlotAdapter(run_dir, enable_plots=bool(train_cfg.get("enable_plots", False)))

    session = TrainingSession(
        hidden,
        rprop=RpropConfig(**rprop_cfg),
        seed=seed,
        callbacks=[jsonl, csv_sink, capture, plots],
    )
    status = None
    for _ in range(clicks):
        status = session.train(samples, per_click)
        print(format_status(status.iteration, status.error))
    plots.close()

    image_path = ""
    if bool(train_cfg.get("render", True)):
        painted = overlay_samples(canvas.to_rgb(), sample_points(canvas.width, canvas.height, granularity))
        learned = render_network(session.network, canvas.width, canvas.height)
        image_path = save_image(run_dir / "render.png", side_by_side([painted, learned]))

    safe_config = json.loads(json.dumps(config))
    (run_dir / "config.json").write_text(json.dumps(safe_config, indent=2))
    manifest = write_manifest(
        run_dir / "manifest.json",
        config=safe_config,
        samples={
            "count": len(samples),
            "granularity": granularity,
            "positive": int(samples.targets.sum()),
        },
        status={
            "iteration": status.iteration,
            "error": status.error,
            "accuracy": session.trainer.accuracy(),
            "layer_sizes": list(session.network.layer_sizes),
        },
    )
    summary_path = write_summary(
        jsonl.path,
        run_dir / "summary.json",
        final_error=status.error,
        threshold=float(train_cfg.get("threshold", 0.05)),
        tail=int(train_cfg.get("summary_tail", 32)),
    )

    return RunResult(
        iterations=status.iteration,
        error=status.error,
        metrics_path=str(jsonl.path),
        manifest_path=manifest,
        summary_path=summary_path,
        image_path=image_path,
    )


def _resolve_run_dir(train_cfg: Mapping[str, object], pattern: str) -> Path:
    if train_cfg.get("run_dir"):
        return Path(str(train_cfg["run_dir"]))
    base = Path(os.environ.get("PAINTNET_RUNS_DIR", "runs"))
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return base / timestamp / pattern


def _print_startup_summary(
    *,
    pattern: str,
    canvas: tuple[int, int],
    granularity: int,
    samples: SampleSet,
    hidden: Sequence[int],
    schedule: tuple[int, int],
) -> None:
    sizes = [samples.d_in, *hidden, samples.d_out]
    params = sum((sizes[i] + 1) * sizes[i + 1] for i in range(len(sizes) - 1))
    print("=== PaintNet run ===")
    print(f"Pattern       : {pattern} ({canvas[0]}x{canvas[1]})")
    print(f"Granularity   : {granularity}")
    print(f"Samples       : {len(samples)}")
    print(f"Layers        : {sizes}")
    print(f"Parameters    : {params}")
    print(f"Schedule      : {schedule[0]} x {schedule[1]} iterations")
    print("====================")


__all__ = ["load_preset", "merge_config", "presets", "read_config_file", "run_pipeline"]
