"""Core numerical primitives for matnet."""

from . import activations, errors, matrix, network, types
from .activations import Activation
from .errors import InvalidArgumentError, MatnetError, ShapeMismatchError
from .matrix import Matrix
from .network import Layer, LayerSpec, NeuralNet

__all__ = [
    "activations",
    "errors",
    "matrix",
    "network",
    "types",
    "Activation",
    "InvalidArgumentError",
    "Layer",
    "LayerSpec",
    "MatnetError",
    "Matrix",
    "NeuralNet",
    "ShapeMismatchError",
]
