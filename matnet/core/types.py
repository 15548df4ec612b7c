"""Core typing contracts for matnet."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .matrix import Matrix

Array = np.ndarray


@dataclass(frozen=True)
class LayerTrace:
    """Values produced by a single layer during one forward pass."""

    inputs: Matrix
    pre_activation: Matrix
    post_activation: Matrix


@dataclass(frozen=True)
class ForwardTrace:
    """Per-layer record of a forward pass, consumed by backpropagation.

    ``weights`` holds the weight matrices the pass was computed with; an
    exact-gradient backward sweep projects the error through these instead of
    the already updated ones.
    """

    layers: List[LayerTrace]
    weights: List[Matrix]

    @property
    def inputs(self) -> Matrix:
        return self.layers[0].inputs

    @property
    def outputs(self) -> Matrix:
        return self.layers[-1].post_activation


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :meth:`matnet.training.trainer.Trainer.run`."""

    epochs: int
    steps: int
    cost: float
    stop_reason: str
    history: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class PipelineResult:
    """Paths and outcome of :func:`matnet.training.pipelines.run_pipeline`."""

    run: RunResult
    metrics_path: str
    manifest_path: str
    summary_path: str = ""
    predictions_path: str = ""
