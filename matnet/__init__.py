"""matnet public API."""

from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.activations import COS, LINEAR, RELU, SIGMOID, SIN, TANH, Activation, leaky_relu
from .core.errors import InvalidArgumentError, MatnetError, ShapeMismatchError
from .core.matrix import Matrix
from .core.network import Layer, LayerSpec, NeuralNet
from .training.pipelines import load_preset, presets, run_pipeline
from .training.trainer import Trainer, predictions

__all__ = [
    "Activation",
    "COS",
    "InvalidArgumentError",
    "LINEAR",
    "Layer",
    "LayerSpec",
    "MatnetError",
    "Matrix",
    "NeuralNet",
    "RELU",
    "SIGMOID",
    "SIN",
    "ShapeMismatchError",
    "TANH",
    "Trainer",
    "activations",
    "leaky_relu",
    "load_preset",
    "predictions",
    "presets",
    "run_pipeline",
    "types",
]
