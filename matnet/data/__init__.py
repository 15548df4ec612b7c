"""Dataset registry and built-in datasets."""

# Ensure built-in datasets register themselves when the package is imported.
from . import csv_generic as _csv_generic  # noqa: F401
from . import synthetic as _synthetic  # noqa: F401
from . import truth_tables as _truth_tables  # noqa: F401
from .registry import (
    DatasetSpec,
    available_datasets,
    get,
    get_dataset,
    register_dataset,
)

__all__ = [
    "DatasetSpec",
    "available_datasets",
    "get",
    "get_dataset",
    "register_dataset",
]
