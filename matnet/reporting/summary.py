"""Compact JSON summary of a finished training run."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Dict

import numpy as np

from ..core.types import RunResult


def _json_float(value: float) -> float | None:
    return float(value) if math.isfinite(value) else None


def _tail_slope(costs: np.ndarray) -> float:
    """Least-squares change in cost per epoch over ``costs``."""

    if costs.size < 2:
        return 0.0
    slope, _ = np.polyfit(np.arange(costs.size, dtype=np.float64), costs, 1)
    return float(slope)


def summarise_run(result: RunResult, *, tail: int = 32) -> Dict[str, object]:
    """Describe how the cost evolved over ``result.history``.

    ``history[k]`` is the cost measured at the start of epoch ``k + 1``.  NaN
    entries (a diverged run) are left out of the statistics; when nothing
    finite remains those fields are ``None``.
    """

    costs = np.asarray(result.history, dtype=np.float64)
    finite_idx = np.flatnonzero(np.isfinite(costs))
    finite = costs[finite_idx]
    tail_costs = finite[-tail:] if tail > 0 else finite[:0]

    summary: Dict[str, object] = {
        "version": 1,
        "epochs": result.epochs,
        "steps": result.steps,
        "stop_reason": result.stop_reason,
        "final_cost": _json_float(result.cost),
        "initial_cost": None,
        "best_cost": None,
        "best_epoch": None,
        "reduction": None,
        "tail_window": int(tail_costs.size),
        "tail_mean": None,
        "tail_slope": _tail_slope(tail_costs),
    }
    if finite.size:
        best = int(np.argmin(finite))
        initial = float(finite[0])
        summary.update(
            initial_cost=initial,
            best_cost=float(finite[best]),
            best_epoch=int(finite_idx[best]) + 1,
            tail_mean=float(np.mean(tail_costs)) if tail_costs.size else None,
        )
        if initial > 0 and math.isfinite(result.cost):
            summary["reduction"] = 1.0 - result.cost / initial
    return summary


def write_summary(result: RunResult, out_summary_json: str | Path, *, tail: int = 32) -> str:
    """Write :func:`summarise_run` for ``result`` to ``out_summary_json``."""

    out_path = Path(out_summary_json)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(summarise_run(result, tail=tail), sort_keys=True, indent=2))
    return str(out_path)


__all__ = ["summarise_run", "write_summary"]
