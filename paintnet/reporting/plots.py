"""Headless-safe plotting adapters."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Tuple


class PlotAdapter:
    """Collect the training loss and optionally save it as ``loss.png``."""

    def __init__(self, run_dir: str | Path, enable_plots: bool = False):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self._history: List[Tuple[int, float]] = []
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    def on_step(self, step: int, metrics: Mapping[str, float]) -> None:
        if not self.enable_plots:
            return
        self._history.append((step, float(metrics.get("loss", 0.0))))

    def close(self) -> str | None:
        if not self.enable_plots or not self._history:
            return None
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt  # imported lazily for headless safety

        steps, losses = zip(*self._history)
        fig, ax = plt.subplots()
        ax.plot(steps, [loss * 100.0 for loss in losses])
        ax.set_xlabel("Iteration")
        ax.set_ylabel("Error (%)")
        ax.set_title("Rprop training error")
        plot_path = self.run_dir / "loss.png"
        fig.savefig(plot_path)
        plt.close(fig)
        return str(plot_path)

    __call__ = on_step
