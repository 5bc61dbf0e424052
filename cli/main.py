"""Command line entry point for PaintNet training runs."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

from paintnet.data.patterns import available_patterns
from paintnet.data.topology import Topology
from paintnet.training import pipelines


def _format_result(result) -> str:
    payload = {
        "iterations": result.iterations,
        "error_percent": round(result.error * 100.0, 4),
        "metrics": result.metrics_path,
        "manifest": result.manifest_path,
        "summary": result.summary_path,
    }
    if result.image_path:
        payload["image"] = result.image_path
    return json.dumps(payload, sort_keys=True)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="xor-quadrants",
        help="Preset configuration to execute",
    )
    parser.add_argument("--config", type=Path, help="Optional JSON/YAML config override")
    parser.add_argument("--pattern", help="Pattern used to paint the canvas")
    parser.add_argument(
        "--image",
        type=Path,
        help="Painted image to learn from (implies --pattern image)",
    )
    parser.add_argument("--width", type=int, help="Canvas width in pixels")
    parser.add_argument("--height", type=int, help="Canvas height in pixels")
    parser.add_argument(
        "--hidden",
        help="Comma separated hidden layer widths, e.g. 4,4 (empty for none)",
    )
    parser.add_argument("--granularity", type=int, help="Sample grid spacing in pixels")
    parser.add_argument("--clicks", type=int, help="Number of training calls")
    parser.add_argument(
        "--iterations", type=int, help="Rprop iterations per training call"
    )
    parser.add_argument("--seed", type=int, help="Seed for weight initialisation")
    parser.add_argument("--run-dir", type=Path, help="Directory for run artifacts")
    parser.add_argument(
        "--render",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Save the painted and learned images side by side",
    )
    parser.add_argument(
        "--enable-plots", action="store_true", help="Save the training error curve"
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--list-patterns", action="store_true", help="List available patterns and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def _apply_overrides(config: dict, args: argparse.Namespace) -> dict:
    canvas = config.setdefault("canvas", {})
    train = config.setdefault("train", {})
    if args.image is not None:
        canvas["pattern"] = "image"
        canvas.setdefault("options", {})["path"] = str(args.image)
    elif args.pattern:
        canvas["pattern"] = args.pattern
        canvas["options"] = {}
    if args.width is not None:
        canvas["width"] = int(args.width)
    if args.height is not None:
        canvas["height"] = int(args.height)
    if args.hidden is not None:
        config.setdefault("model", {})["hidden"] = Topology.parse(args.hidden).hidden_layers
    if args.granularity is not None:
        train["granularity"] = int(args.granularity)
    if args.clicks is not None:
        train["clicks"] = int(args.clicks)
    if args.iterations is not None:
        train["iterations_per_click"] = int(args.iterations)
    if args.seed is not None:
        train["seed"] = int(args.seed)
    if args.run_dir is not None:
        train["run_dir"] = str(args.run_dir)
    if args.render is not None:
        train["render"] = bool(args.render)
    if args.enable_plots:
        train["enable_plots"] = True
    return config


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    if args.list_patterns:
        for name in available_patterns():
            print(name)
        raise SystemExit(0)

    config = pipelines.load_preset(args.preset)
    if args.config:
        config = pipelines.merge_config(config, pipelines.read_config_file(args.config))
    config = _apply_overrides(json.loads(json.dumps(config)), args)

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    result = pipelines.run_pipeline(config)
    print(_format_result(result))


if __name__ == "__main__":
    main()
