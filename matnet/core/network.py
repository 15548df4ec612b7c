"""Feed-forward networks built from affine layers and activations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Sequence

import numpy as np

from .activations import REGISTRY as ACTIVATIONS
from .activations import Activation
from .errors import InvalidArgumentError, ShapeMismatchError
from .matrix import Matrix
from .types import ForwardTrace, LayerTrace


@dataclass(frozen=True)
class LayerSpec:
    """Declared width and activation of one layer."""

    neurons: int
    activation: Activation

    @classmethod
    def from_config(cls, config: "LayerSpec | Mapping[str, object]") -> "LayerSpec":
        if isinstance(config, LayerSpec):
            return config
        try:
            neurons = config["neurons"]
            activation = config["activation"]
        except KeyError as exc:
            raise InvalidArgumentError(
                f"Layer config requires 'neurons' and 'activation', got {dict(config)!r}"
            ) from exc
        return cls(neurons=int(neurons), activation=ACTIVATIONS.resolve(activation))


@dataclass
class Layer:
    """Affine transform ``inputs @ weights + biases`` followed by an activation."""

    weights: Matrix
    biases: Matrix
    activation: Activation

    def __post_init__(self) -> None:
        if self.biases.rows != 1 or self.biases.cols != self.weights.cols:
            raise ShapeMismatchError(
                f"Biases must be 1x{self.weights.cols}, got "
                f"{self.biases.rows}x{self.biases.cols}"
            )

    @classmethod
    def initialise(
        cls,
        inputs_count: int,
        outputs_count: int,
        activation: Activation,
        rng: np.random.Generator,
    ) -> "Layer":
        return cls(
            weights=Matrix(inputs_count, outputs_count, rng=rng),
            biases=Matrix(1, outputs_count, rng=rng),
            activation=activation,
        )

    @property
    def input_width(self) -> int:
        return self.weights.rows

    @property
    def output_width(self) -> int:
        return self.weights.cols

    def activate(self, inputs: Matrix) -> LayerTrace:
        pre_activation = inputs.dot(self.weights).add(self.biases)
        post_activation = pre_activation.map(self.activation.fn, vectorized=True)
        return LayerTrace(
            inputs=inputs,
            pre_activation=pre_activation,
            post_activation=post_activation,
        )

    def clone(self) -> "Layer":
        return Layer(self.weights.clone(), self.biases.clone(), self.activation)


class NeuralNet:
    """Ordered stack of layers trained with plain gradient descent.

    Parameters
    ----------
    input_width:
        Number of columns of every input row.
    layers:
        One :class:`LayerSpec` (or ``{"neurons": ..., "activation": ...}``
        mapping) per layer, first hidden layer first.
    rng, seed:
        Source of the uniform ``[-1, 1)`` initial weights and biases.  Pass
        either a generator or a seed; with neither the draw is unseeded.
    """

    def __init__(
        self,
        input_width: int,
        layers: Sequence["LayerSpec | Mapping[str, object]"],
        *,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        if rng is not None and seed is not None:
            raise InvalidArgumentError("Pass either rng or seed, not both")
        if int(input_width) < 1:
            raise InvalidArgumentError(f"input_width must be positive, got {input_width}")
        specs = [LayerSpec.from_config(spec) for spec in layers]
        if not specs:
            raise InvalidArgumentError("A network needs at least one layer")
        for spec in specs:
            if spec.neurons < 1:
                raise InvalidArgumentError(
                    f"Layer widths must be positive, got {spec.neurons}"
                )
        generator = rng if rng is not None else np.random.default_rng(seed)
        self.input_width = int(input_width)
        self.specs: List[LayerSpec] = specs
        self.widths: List[int] = [self.input_width] + [spec.neurons for spec in specs]
        self.layers: List[Layer] = [
            Layer.initialise(n_in, spec.neurons, spec.activation, generator)
            for n_in, spec in zip(self.widths[:-1], specs)
        ]

    @property
    def output_width(self) -> int:
        return self.widths[-1]

    def parameter_count(self) -> int:
        return int(
            sum(layer.weights.rows * layer.weights.cols + layer.biases.cols for layer in self.layers)
        )

    def clone(self) -> "NeuralNet":
        """Return an independent network with copies of the current parameters."""

        cloned = NeuralNet.__new__(NeuralNet)
        cloned.input_width = self.input_width
        cloned.specs = list(self.specs)
        cloned.widths = list(self.widths)
        cloned.layers = [layer.clone() for layer in self.layers]
        return cloned

    # ------------------------------------------------------------------
    # Forward pass

    def trace(self, inputs: Matrix) -> ForwardTrace:
        """Run a forward pass and keep every layer's intermediate values."""

        steps: List[LayerTrace] = []
        activation = inputs
        for layer in self.layers:
            step = layer.activate(activation)
            steps.append(step)
            activation = step.post_activation
        return ForwardTrace(layers=steps, weights=[layer.weights for layer in self.layers])

    def forward(self, inputs: Matrix) -> Matrix:
        return self.trace(inputs).outputs

    def cost(self, inputs_batch: Iterable[Matrix], outputs_batch: Iterable[Matrix]) -> float:
        """Mean over samples of the summed squared error of every output."""

        inputs_list = list(inputs_batch)
        outputs_list = list(outputs_batch)
        if not inputs_list:
            raise InvalidArgumentError("cost requires at least one sample")
        if len(inputs_list) != len(outputs_list):
            raise InvalidArgumentError(
                f"Got {len(inputs_list)} inputs but {len(outputs_list)} expected outputs"
            )
        total = 0.0
        for inputs, expected in zip(inputs_list, outputs_list):
            diff = self.forward(inputs).sub(expected)
            total += diff.mult(diff).sum()
        return total / len(inputs_list)

    # ------------------------------------------------------------------
    # Backward pass

    def backprop(
        self,
        inputs: Matrix,
        expected_outputs: Matrix,
        learning_rate: float,
        *,
        trace: ForwardTrace | None = None,
        exact_gradient: bool = False,
    ) -> ForwardTrace:
        """Take one gradient-descent step on ``inputs`` and update every layer.

        The error signal starts as ``(outputs - expected) * f'(z)`` at the last
        layer and is carried backwards through each next layer's transposed
        weights.  Layers are updated last to first as soon as their gradient
        is known, so by default the signal passes through the next layer's
        freshly updated weights.  With ``exact_gradient=True`` it passes
        through the weights recorded in the trace instead, which makes the
        step the exact gradient of half the squared error.  The bias gradient
        of a multi-row batch is summed over the rows.  Returns the forward
        trace the step was computed from.
        """

        learning_rate = float(learning_rate)
        if not math.isfinite(learning_rate) or learning_rate < 0:
            raise InvalidArgumentError(
                f"learning_rate must be a finite non-negative number, got {learning_rate}"
            )
        if trace is None:
            trace = self.trace(inputs)
        elif len(trace.layers) != len(self.layers):
            raise InvalidArgumentError(
                f"Trace covers {len(trace.layers)} layers, network has {len(self.layers)}"
            )

        delta: Matrix | None = None
        for idx in reversed(range(len(self.layers))):
            layer = self.layers[idx]
            step = trace.layers[idx]
            z_deriv = step.pre_activation.map(layer.activation.deriv, vectorized=True)
            if delta is None:
                delta = trace.outputs.sub(expected_outputs).mult(z_deriv)
            else:
                if exact_gradient:
                    next_weights = trace.weights[idx + 1]
                else:
                    next_weights = self.layers[idx + 1].weights
                delta = delta.dot(next_weights.transpose()).mult(z_deriv)

            dw = step.inputs.transpose().dot(delta).mult(learning_rate)
            db = delta.sum_rows().mult(learning_rate)
            layer.weights = layer.weights.sub(dw)
            layer.biases = layer.biases.sub(db)
        return trace

    def __repr__(self) -> str:
        layers = ", ".join(f"{spec.neurons}:{spec.activation.label}" for spec in self.specs)
        return f"NeuralNet(input_width={self.input_width}, layers=[{layers}])"


__all__ = ["Layer", "LayerSpec", "NeuralNet"]
