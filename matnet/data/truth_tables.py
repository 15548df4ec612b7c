"""Two-input boolean truth tables."""

from __future__ import annotations

from typing import Callable

import numpy as np

from .registry import DatasetSpec, register_dataset
from .utils import to_rows

_INPUTS = np.array([[0, 0], [0, 1], [1, 0], [1, 1]], dtype=np.float64)


def _table(name: str, gate: Callable[[int, int], int]):
    def factory(*, low: float = 0.0, high: float = 1.0, **_: object) -> DatasetSpec:
        targets = np.array(
            [[high if gate(int(a), int(b)) else low] for a, b in _INPUTS],
            dtype=np.float64,
        )
        return DatasetSpec(
            name=name,
            inputs=to_rows(_INPUTS),
            targets=to_rows(targets),
            provenance={"type": "truth_table", "gate": name, "low": low, "high": high},
        )

    register_dataset(name, factory)
    return factory


make_xor = _table("xor", lambda a, b: a ^ b)
make_and = _table("and", lambda a, b: a & b)
make_or = _table("or", lambda a, b: a | b)

__all__ = ["make_xor", "make_and", "make_or"]
