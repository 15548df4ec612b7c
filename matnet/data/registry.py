"""Dataset registry and metadata contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, MutableMapping

from ..core.errors import InvalidArgumentError
from ..core.matrix import Matrix


@dataclass(frozen=True)
class DatasetSpec:
    """A dataset as paired lists of single-row input and target matrices.

    Attributes
    ----------
    name:
        Registry identifier the dataset was built from.
    inputs, targets:
        Equally long lists; sample ``i`` is ``(inputs[i], targets[i])``.
    provenance:
        Options and normalisation metadata needed to rebuild the dataset.
        The registry does not interpret these values.
    """

    name: str
    inputs: List[Matrix]
    targets: List[Matrix]
    provenance: Dict[str, Any] = field(default_factory=dict)

    @property
    def d_in(self) -> int:
        return self.inputs[0].cols

    @property
    def d_out(self) -> int:
        return self.targets[0].cols

    def __len__(self) -> int:
        return len(self.inputs)


DatasetFactory = Callable[..., DatasetSpec]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(
    name: str | None = None,
    factory: DatasetFactory | None = None,
) -> Callable[[DatasetFactory], DatasetFactory] | DatasetFactory:
    """Register a dataset factory.

    ``register_dataset`` can be used both as a decorator::

        @register_dataset("xor")
        def make_xor(**kwargs):
            ...

    or directly::

        register_dataset("xor", make_xor)
    """

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if name is None:
        raise TypeError("register_dataset requires a name when used without a decorator")
    return _decorator


def get_dataset(dataset: str | None = None, /, **options: Any) -> DatasetSpec:
    """Build the :class:`DatasetSpec` registered under ``dataset``."""

    if dataset is None:
        if "name" in options:
            dataset = str(options.pop("name"))
        else:
            raise TypeError("Dataset name must be provided")

    if dataset not in _REGISTRY:
        available = ", ".join(available_datasets())
        raise KeyError(f"Unknown dataset {dataset!r}. Available datasets: {available}")

    spec = _REGISTRY[dataset](**options)
    _validate_spec(spec)
    return spec


def available_datasets() -> Iterable[str]:
    """Return the sorted list of available dataset identifiers."""

    return sorted(_REGISTRY)


def _validate_spec(spec: DatasetSpec) -> None:
    if not spec.inputs:
        raise InvalidArgumentError(f"Dataset {spec.name!r} has no samples")
    if len(spec.inputs) != len(spec.targets):
        raise InvalidArgumentError(
            f"Dataset {spec.name!r} has {len(spec.inputs)} inputs "
            f"but {len(spec.targets)} targets"
        )
    for matrix in spec.inputs + spec.targets:
        if matrix.rows != 1:
            raise InvalidArgumentError("Dataset samples must be single-row matrices")
    if len({m.cols for m in spec.inputs}) != 1 or len({m.cols for m in spec.targets}) != 1:
        raise InvalidArgumentError(f"Dataset {spec.name!r} mixes sample widths")


get = get_dataset


__all__ = [
    "DatasetSpec",
    "available_datasets",
    "get",
    "get_dataset",
    "register_dataset",
]
