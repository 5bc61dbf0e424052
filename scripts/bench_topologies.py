from __future__ import annotations

import argparse
import csv
import json
import sys
from pathlib import Path
from statistics import mean, pstdev

TOPOLOGIES = {"none": [], "h4": [4], "h8": [8], "h6x4": [6, 4]}


def _fmt_mu_sigma(vals):
    mu = mean(vals)
    sd = pstdev(vals) if len(vals) > 1 else 0.0
    return f"{mu * 100:.2f}% ± {sd * 100:.2f}%"


def train_one(pattern: str, hidden, seed: int, iterations: int, granularity: int) -> dict:
    from paintnet.core.network import Network
    from paintnet.data.grid import build_samples
    from paintnet.data.patterns import get_pattern
    from paintnet.training.rprop import Trainer

    samples = build_samples(get_pattern(pattern, width=100, height=100), granularity)
    trainer = Trainer(Network([2, *hidden, 1], seed=seed), samples.inputs, samples.targets)
    trainer.step(iterations)
    return {"final_error": trainer.error, "final_acc": trainer.accuracy()}


def main(argv=None):
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))

    ap = argparse.ArgumentParser()
    ap.add_argument("--patterns", nargs="+", default=["xor", "circle", "stripes"])
    ap.add_argument("--seeds", nargs="+", type=int, default=[0, 1, 2])
    ap.add_argument("--iterations", type=int, default=300)
    ap.add_argument("--granularity", type=int, default=10)
    ap.add_argument("--out", type=str, default=".artifacts/bench")
    args = ap.parse_args(argv)

    out = Path(args.out)
    out.mkdir(parents=True, exist_ok=True)
    runs = []
    for pattern in args.patterns:
        for name, hidden in TOPOLOGIES.items():
            for s in args.seeds:
                r = train_one(pattern, hidden, s, args.iterations, args.granularity)
                runs.append({"pattern": pattern, "topology": name, "seed": s, **r})
    (out / "results.jsonl").write_text(
        "\n".join(json.dumps(x) for x in runs), encoding="utf-8"
    )

    rows = []
    for pattern in args.patterns:
        for name in TOPOLOGIES:
            errors = [r["final_error"] for r in runs if r["pattern"] == pattern and r["topology"] == name]
            accs = [r["final_acc"] for r in runs if r["pattern"] == pattern and r["topology"] == name]
            rows.append((pattern, name, errors, accs))

    with (out / "bench_topologies.csv").open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["pattern", "topology", "seeds", "iterations", "final_error_mu", "final_acc_mu"])
        for pattern, name, errors, accs in rows:
            w.writerow([pattern, name, len(errors), args.iterations, mean(errors), mean(accs)])

    lines = ["| Pattern | Topology | Error | Accuracy |", "|---|---|---|---|"]
    for pattern, name, errors, accs in rows:
        lines.append(f"| {pattern} | {name} | {_fmt_mu_sigma(errors)} | {mean(accs):.3f} |")
    (out / "bench_topologies.md").write_text("\n".join(lines) + "\n", encoding="utf-8")
    print("\n".join(lines))


if __name__ == "__main__":
    main()
