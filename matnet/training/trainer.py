"""Epoch loop driving per-sample gradient descent."""

from __future__ import annotations

import logging
import math
from typing import List, Mapping, Sequence, Tuple

from ..core.errors import InvalidArgumentError
from ..core.matrix import Matrix
from ..core.network import NeuralNet
from ..core.types import RunResult

logger = logging.getLogger(__name__)

CONVERGED = "converged"
DIVERGED = "diverged"
MAX_EPOCHS = "max_epochs"


class Trainer:
    """Train a :class:`NeuralNet` one sample at a time until a stop condition.

    Every epoch first evaluates the cost over all samples.  Training stops
    when that cost drops below ``cost_threshold`` or becomes NaN; otherwise
    the cost is reported to the callbacks and one backprop step is taken per
    sample, in order.  After ``max_epochs`` epochs the loop stops regardless.
    """

    def __init__(
        self,
        network: NeuralNet,
        learning_rate: float,
        *,
        cost_threshold: float = 1e-4,
        max_epochs: int = 100_000,
        callbacks: Sequence[object] | None = None,
    ) -> None:
        if max_epochs < 1:
            raise InvalidArgumentError(f"max_epochs must be positive, got {max_epochs}")
        self.network = network
        self.learning_rate = float(learning_rate)
        self.cost_threshold = float(cost_threshold)
        self.max_epochs = int(max_epochs)
        self.callbacks = list(callbacks or [])

    def run(self, inputs: Sequence[Matrix], targets: Sequence[Matrix]) -> RunResult:
        inputs = list(inputs)
        targets = list(targets)
        if not inputs:
            raise InvalidArgumentError("Training requires at least one sample")
        if len(inputs) != len(targets):
            raise InvalidArgumentError(
                f"Got {len(inputs)} inputs but {len(targets)} targets"
            )

        history: List[float] = []
        steps = 0
        epoch = 0
        cost = math.nan
        reason = MAX_EPOCHS
        while epoch < self.max_epochs:
            epoch += 1
            cost = self.network.cost(inputs, targets)
            history.append(cost)
            reason = self._classify(cost)
            if reason != MAX_EPOCHS:
                break

            self._emit_epoch(epoch, {"cost": cost})
            for sample, expected in zip(inputs, targets):
                self.network.backprop(sample, expected, self.learning_rate)
                steps += 1

        if reason == MAX_EPOCHS:
            # the last epoch's update is not reflected in the recorded cost
            cost = self.network.cost(inputs, targets)
            reason = self._classify(cost)
        logger.info("Training stopped (%s) at epoch %d with cost %.6g", reason, epoch, cost)
        return RunResult(
            epochs=epoch,
            steps=steps,
            cost=float(cost),
            stop_reason=reason,
            history=history,
        )

    def _classify(self, cost: float) -> str:
        if math.isnan(cost):
            return DIVERGED
        if cost < self.cost_threshold:
            return CONVERGED
        return MAX_EPOCHS

    def _emit_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        for callback in self.callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(epoch, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(epoch, metrics)


def predictions(network: NeuralNet, inputs: Sequence[Matrix]) -> List[Tuple[Matrix, Matrix]]:
    """Pair every input with the network's prediction for it."""

    return [(sample, network.forward(sample)) for sample in inputs]


__all__ = ["Trainer", "predictions", "CONVERGED", "DIVERGED", "MAX_EPOCHS"]
