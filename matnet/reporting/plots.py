"""Headless-safe cost curve plotting."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Tuple


class PlotAdapter:
    """Collect the cost per epoch and optionally render it with matplotlib."""

    def __init__(
        self,
        run_dir: str | Path,
        enable_plots: bool = False,
        *,
        filename: str = "cost.png",
    ):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self.filename = filename
        self._history: List[Tuple[int, float]] = []
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    @property
    def history(self) -> List[Tuple[int, float]]:
        return list(self._history)

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        if not self.enable_plots:
            return
        self._history.append((int(epoch), float(metrics.get("cost", 0.0))))

    def close(self) -> Path | None:
        if not self.enable_plots or not self._history:
            return None
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt  # imported lazily for headless safety

        epochs, costs = zip(*self._history)
        fig, ax = plt.subplots()
        ax.plot(epochs, costs, color="#e33", linewidth=2)
        ax.set_xlabel("Epoch")
        ax.set_ylabel("Cost")
        ax.set_title(f"Cost: {costs[-1]:.6f}  Epoch: {epochs[-1]}")
        plot_path = self.run_dir / self.filename
        fig.savefig(plot_path)
        plt.close(fig)
        return plot_path

    __call__ = on_epoch
