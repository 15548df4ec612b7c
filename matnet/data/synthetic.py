"""Pure in-memory synthetic regression data."""

from __future__ import annotations

import numpy as np

from .registry import DatasetSpec, register_dataset
from .utils import to_rows


def _make_sine(
    n_points: int, freq: float, amplitude: float, noise: float, seed: int
) -> tuple[np.ndarray, np.ndarray]:
    rng = np.random.default_rng(seed)
    x = np.linspace(-1.0, 1.0, n_points).reshape(-1, 1)
    y = amplitude * np.sin(freq * np.pi * x)
    if noise > 0:
        y = y + noise * rng.standard_normal(size=y.shape)
    return x, y


@register_dataset("sine")
def make_sine(
    *,
    n_points: int = 32,
    freq: float = 1.0,
    amplitude: float = 0.8,
    noise: float = 0.0,
    seed: int = 0,
    **_: object,
) -> DatasetSpec:
    """``y = amplitude * sin(freq * pi * x)`` sampled on ``[-1, 1]``."""

    if n_points < 1:
        raise ValueError(f"n_points must be positive, got {n_points}")
    x, y = _make_sine(n_points, freq, amplitude, noise, seed)
    return DatasetSpec(
        name="sine",
        inputs=to_rows(x),
        targets=to_rows(y),
        provenance={
            "type": "synthetic",
            "n_points": n_points,
            "freq": freq,
            "amplitude": amplitude,
            "noise": noise,
            "seed": seed,
        },
    )


__all__ = ["make_sine"]
