"""Generic CSV loader for regression and classification tables."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
from sklearn.preprocessing import LabelEncoder

from .registry import DatasetSpec, register_dataset
from .utils import min_max_scale, to_rows


def _load_csv(path: Path, target_col: str) -> tuple[np.ndarray, np.ndarray]:
    df = pd.read_csv(path)
    if target_col not in df.columns:
        raise KeyError(f"Target column {target_col!r} not found in CSV")
    y = df.pop(target_col).to_numpy()
    X = df.to_numpy(dtype=np.float64)
    return X, y


@register_dataset("csv")
def load_csv(
    *,
    csv_path: str | Path | None = None,
    target_col: str = "target",
    task: str = "regression",
    scale_inputs: bool = True,
    **_: object,
) -> DatasetSpec:
    """Load every row of a CSV file as one training sample.

    ``task="classification"`` label-encodes the target column and one-hot
    encodes it, so the network needs one output per class.
    """

    if csv_path is None:
        raise ValueError("The csv dataset requires a csv_path option")
    path = Path(csv_path)
    X, y_raw = _load_csv(path, target_col)

    provenance: dict[str, object] = {
        "type": "csv",
        "path": str(path),
        "target_col": target_col,
        "task": task,
        "scale_inputs": scale_inputs,
    }
    if scale_inputs:
        X, col_min, col_max = min_max_scale(X)
        provenance["normalization"] = {
            "min": col_min.flatten().tolist(),
            "max": col_max.flatten().tolist(),
        }

    if task == "regression":
        y = np.asarray(y_raw, dtype=np.float64).reshape(-1, 1)
    elif task == "classification":
        encoder = LabelEncoder()
        y_encoded = encoder.fit_transform(y_raw)
        num_classes = int(np.max(y_encoded)) + 1
        y = np.eye(num_classes, dtype=np.float64)[y_encoded]
        provenance["classes"] = encoder.classes_.tolist()
    else:
        raise ValueError(f"Unknown task: {task!r} (expected 'regression' or 'classification')")

    return DatasetSpec(
        name="csv",
        inputs=to_rows(X),
        targets=to_rows(y),
        provenance=provenance,
    )


__all__ = ["load_csv"]
