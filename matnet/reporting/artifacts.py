"""Run artifact helpers."""

from __future__ import annotations

import json
import platform
import subprocess
import time
from pathlib import Path
from typing import Mapping, Sequence

from ..core.matrix import Matrix


def git_sha() -> str:
    try:
        out = subprocess.check_output(["git", "rev-parse", "HEAD"], stderr=subprocess.DEVNULL)
        return out.decode().strip()
    except Exception:  # pragma: no cover - git may be unavailable in tests
        return "unknown"


def write_manifest(
    path: str | Path,
    *,
    config: Mapping[str, object],
    dataset_provenance: Mapping[str, object],
    outcome: Mapping[str, object] | None = None,
) -> str:
    """Write a manifest JSON file capturing reproducibility metadata."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    manifest = {
        "git_sha": git_sha(),
        "generated_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "config": config,
        "dataset": dict(dataset_provenance),
        "outcome": dict(outcome or {}),
        "environment": {"python": platform.python_version()},
    }
    path.write_text(json.dumps(manifest, indent=2))
    return str(path)


def write_predictions(
    path: str | Path, pairs: Sequence[tuple[Matrix, Matrix]]
) -> str:
    """Dump ``(inputs, prediction)`` value lists as a JSON array."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [
        {"inputs": inputs.values, "prediction": prediction.values}
        for inputs, prediction in pairs
    ]
    path.write_text(json.dumps(payload, indent=2))
    return str(path)


__all__ = ["git_sha", "write_manifest", "write_predictions"]
