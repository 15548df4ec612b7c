"""Activation functions and their registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Mapping, Tuple

import numpy as np

from .types import Array

ActivationFn = Callable[[Any], Any]


@dataclass(frozen=True)
class Activation:
    """A named element-wise function paired with its derivative.

    ``fn`` and ``deriv`` accept a scalar or an array and are both evaluated at
    the pre-activation value.
    """

    name: str
    fn: ActivationFn = field(repr=False, compare=False)
    deriv: ActivationFn = field(repr=False, compare=False)
    params: Tuple[float, ...] = ()

    def __call__(self, x):
        return self.fn(x)

    @property
    def label(self) -> str:
        if not self.params:
            return self.name
        return self.name + ":" + ",".join(f"{p:g}" for p in self.params)


def _sigmoid(x):
    x = np.asarray(x, dtype=np.float64)
    with np.errstate(over="ignore"):
        return (1.0 / (1.0 + np.exp(-x)))[()]


def _dsigmoid(x):
    s = _sigmoid(x)
    return s * (1.0 - s)


def _tanh(x):
    return np.tanh(x)


def _dtanh(x):
    return 1.0 - np.tanh(x) ** 2


def _dcos(x):
    return -np.sin(x)


def _rectifier(k: float) -> Tuple[ActivationFn, ActivationFn]:
    def fn(x):
        x = np.asarray(x, dtype=np.float64)
        return np.where(x > 0, x, k * x)[()]

    def deriv(x):
        x = np.asarray(x, dtype=np.float64)
        return np.where(x > 0, 1.0, k)[()]

    return fn, deriv


SIGMOID = Activation("sigmoid", _sigmoid, _dsigmoid)
RELU = Activation("relu", *_rectifier(0.0))
TANH = Activation("tanh", _tanh, _dtanh)
SIN = Activation("sin", np.sin, np.cos)
COS = Activation("cos", np.cos, _dcos)


def leaky_relu(k: float = 0.01) -> Activation:
    """Return the leaky rectifier with slope ``k`` for negative inputs."""

    k = float(k)
    return Activation("leaky_relu", *_rectifier(k), params=(k,))


def _identity(x):
    return np.asarray(x, dtype=np.float64)[()]


def _ones(x: Array) -> Array:
    return np.ones_like(np.asarray(x, dtype=np.float64))[()]


LINEAR = Activation("linear", _identity, _ones)


class ActivationRegistry:
    """Central registry mapping names to activation factories."""

    def __init__(self) -> None:
        self._registry: Dict[str, Callable[..., Activation]] = {}

    def register(self, name: str, factory: Callable[..., Activation]) -> None:
        self._registry[name] = factory

    def get(self, name: str, *params: float) -> Activation:
        try:
            factory = self._registry[name]
        except KeyError as exc:
            available = ", ".join(self.names())
            raise KeyError(
                f"Unknown activation {name!r}. Available activations: {available}"
            ) from exc
        return factory(*params)

    def names(self) -> Iterable[str]:
        return sorted(self._registry)

    def resolve(self, spec: "str | Activation | Mapping[str, object]") -> Activation:
        """Turn a config value into an :class:`Activation`.

        Accepts an instance, a name (``"tanh"``), a name with comma separated
        parameters (``"leaky_relu:0.1"``) or a mapping such as
        ``{"name": "leaky_relu", "k": 0.1}``.
        """

        if isinstance(spec, Activation):
            return spec
        if isinstance(spec, Mapping):
            options = dict(spec)
            name = str(options.pop("name"))
            return self.get(name, *(float(v) for v in options.values()))
        if isinstance(spec, str):
            name, _, raw = spec.partition(":")
            params = [float(p) for p in raw.split(",") if p.strip()]
            return self.get(name.strip().lower(), *params)
        raise TypeError(f"Cannot resolve activation from {type(spec).__name__}")


REGISTRY = ActivationRegistry()
REGISTRY.register("sigmoid", lambda: SIGMOID)
REGISTRY.register("relu", lambda: RELU)
REGISTRY.register("leaky_relu", leaky_relu)
REGISTRY.register("tanh", lambda: TANH)
REGISTRY.register("sin", lambda: SIN)
REGISTRY.register("cos", lambda: COS)
REGISTRY.register("linear", lambda: LINEAR)


__all__ = [
    "Activation",
    "ActivationRegistry",
    "REGISTRY",
    "SIGMOID",
    "RELU",
    "TANH",
    "SIN",
    "COS",
    "LINEAR",
    "leaky_relu",
]
