"""Config-driven training runs and their presets."""

from __future__ import annotations

import json
import time
from copy import deepcopy
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from ..core.network import LayerSpec, NeuralNet
from ..core.types import PipelineResult
from ..data import registry
from ..reporting.artifacts import write_manifest, write_predictions
from ..reporting.metrics import CsvSink, JsonlSink
from ..reporting.plots import PlotAdapter
from ..reporting.summary import write_summary
from .trainer import Trainer, predictions

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor-tanh": {
        "data": {"name": "xor", "options": {}},
        "model": {
            "d_in": 2,
            "layers": [
                {"neurons": 4, "activation": "tanh"},
                {"neurons": 2, "activation": "tanh"},
                {"neurons": 1, "activation": "tanh"},
            ],
            "seed": 0,
        },
        "train": {
            "lr": 0.2,
            "cost_threshold": 1e-4,
            "max_epochs": 100_000,
            "run_dir": "runs/xor-tanh",
            "enable_plots": False,
        },
    },
    "xor-sigmoid": {
        "data": {"name": "xor", "options": {}},
        "model": {
            "d_in": 2,
            "layers": [
                {"neurons": 4, "activation": "sigmoid"},
                {"neurons": 1, "activation": "sigmoid"},
            ],
            "seed": 0,
        },
        "train": {
            "lr": 0.5,
            "cost_threshold": 1e-3,
            "max_epochs": 50_000,
            "run_dir": "runs/xor-sigmoid",
            "enable_plots": False,
        },
    },
    "sine-tanh": {
        "data": {"name": "sine", "options": {"n_points": 32, "freq": 1.0, "seed": 0}},
        "model": {
            "d_in": 1,
            "layers": [
                {"neurons": 8, "activation": "tanh"},
                {"neurons": 1, "activation": "linear"},
            ],
            "seed": 0,
        },
        "train": {
            "lr": 0.02,
            "cost_threshold": 1e-3,
            "max_epochs": 5_000,
            "run_dir": "runs/sine-tanh",
            "enable_plots": False,
        },
    },
}

_PRESET_DIR = Path(__file__).resolve().parents[2] / "configs" / "presets"
_FILE_PRESETS_CACHE: Dict[str, Mapping[str, object]] | None = None


def read_config_file(path: Path) -> Mapping[str, object]:
    """Load a JSON or YAML mapping from ``path``."""

    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise ValueError(f"Unsupported config file type: {path.suffix}")

    text = path.read_text()
    if suffix == ".json":
        data = json.loads(text or "{}")
    else:
        import yaml

        data = yaml.safe_load(text) or {}

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return data


def _file_presets() -> Dict[str, Mapping[str, object]]:
    global _FILE_PRESETS_CACHE
    if _FILE_PRESETS_CACHE is None:
        found: Dict[str, Mapping[str, object]] = {}
        if _PRESET_DIR.exists():
            for file in sorted(_PRESET_DIR.iterdir()):
                if file.suffix.lower() not in {".yaml", ".yml", ".json"}:
                    continue
                data = read_config_file(file)
                missing = {"data", "model", "train"} - set(data)
                if missing:
                    missing_str = ", ".join(sorted(missing))
                    raise KeyError(f"Preset {file.name} is missing required sections: {missing_str}")
                found[file.stem] = json.loads(json.dumps(data))
        _FILE_PRESETS_CACHE = found
    return {name: deepcopy(cfg) for name, cfg in _FILE_PRESETS_CACHE.items()}


def presets() -> Mapping[str, Mapping[str, object]]:
    combined: Dict[str, Mapping[str, object]] = {}
    combined.update({name: deepcopy(cfg) for name, cfg in _PRESETS.items()})
    combined.update(_file_presets())
    return combined


def load_preset(name: str) -> Mapping[str, object]:
    file_presets = _file_presets()
    if name in file_presets:
        return file_presets[name]
    try:
        return deepcopy(_PRESETS[name])
    except KeyError as exc:
        available = ", ".join(sorted(presets()))
        raise KeyError(f"Unknown preset {name!r}. Available presets: {available}") from exc


def merge_config(base: dict, override: Mapping[str, object]) -> dict:
    """Recursively merge ``override`` into ``base`` (lists are replaced)."""

    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            base[key] = merge_config(dict(base[key]), value)
        else:
            base[key] = value
    return base


def build_network(model_cfg: Mapping[str, object], d_in: int | None = None) -> NeuralNet:
    layers = model_cfg.get("layers")
    if not layers:
        raise KeyError("Model config requires a non-empty `layers` list")
    specs: List[LayerSpec] = [LayerSpec.from_config(layer) for layer in layers]  # type: ignore[union-attr]
    width = int(model_cfg.get("d_in", d_in if d_in is not None else 0))
    seed = model_cfg.get("seed")
    return NeuralNet(width, specs, seed=int(seed) if seed is not None else None)


def run_pipeline(config: Mapping[str, object]) -> PipelineResult:
    data_cfg = dict(config["data"])
    model_cfg = dict(config["model"])
    train_cfg = dict(config["train"])

    dataset = registry.get(data_cfg["name"], **data_cfg.get("options", {}))
    d_in = int(model_cfg.get("d_in", dataset.d_in))
    if d_in != dataset.d_in:
        raise ValueError(f"Configured d_in={d_in} but dataset {dataset.name!r} has {dataset.d_in}")
    network = build_network(model_cfg, d_in=d_in)
    if network.output_width != dataset.d_out:
        raise ValueError(
            f"Network outputs {network.output_width} values but dataset "
            f"{dataset.name!r} targets have {dataset.d_out}"
        )

    seed = model_cfg.get("seed")
    run_dir = _resolve_run_dir(train_cfg, dataset.name)
    run_dir.mkdir(parents=True, exist_ok=True)
    lr = float(train_cfg.get("lr", 0.1))

    _print_startup_summary(
        dataset_name=dataset.name,
        samples=len(dataset),
        dims=network.widths,
        activations=[spec.activation.label for spec in network.specs],
        lr=lr,
        param_count=network.parameter_count(),
    )

    jsonl = JsonlSink(run_dir / "metrics.jsonl", split="train", seed=seed)
    csv_sink = CsvSink(run_dir / "metrics.csv", split="train")
    plot = PlotAdapter(run_dir, enable_plots=bool(train_cfg.get("enable_plots", False)))

    trainer = Trainer(
        network,
        lr,
        cost_threshold=float(train_cfg.get("cost_threshold", 1e-4)),
        max_epochs=int(train_cfg.get("max_epochs", 10_000)),
        callbacks=[jsonl, csv_sink, plot],
    )
    result = trainer.run(dataset.inputs, dataset.targets)
    plot.close()

    safe_config = json.loads(json.dumps(config))
    manifest = write_manifest(
        run_dir / "manifest.json",
        config=safe_config,
        dataset_provenance=dataset.provenance,
        outcome={
            "epochs": result.epochs,
            "steps": result.steps,
            "cost": result.cost,
            "stop_reason": result.stop_reason,
        },
    )
    summary_path = write_summary(
        result, run_dir / "summary.json", tail=int(train_cfg.get("summary_tail", 32))
    )
    (run_dir / "config.json").write_text(json.dumps(safe_config, indent=2))
    predictions_path = write_predictions(
        run_dir / "predictions.json", predictions(network, dataset.inputs)
    )

    return PipelineResult(
        run=result,
        metrics_path=str(jsonl.path),
        manifest_path=manifest,
        summary_path=summary_path,
        predictions_path=predictions_path,
    )


def _resolve_run_dir(train_cfg: Mapping[str, object], dataset: str) -> Path:
    if "run_dir" in train_cfg:
        return Path(str(train_cfg["run_dir"]))
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return Path("runs") / timestamp / dataset


def _print_startup_summary(
    *,
    dataset_name: str,
    samples: int,
    dims: Sequence[int],
    activations: Sequence[str],
    lr: float,
    param_count: int,
) -> None:
    print("=== matnet run ===")
    print(f"Dataset       : {dataset_name} ({samples} samples)")
    print(f"Widths        : {list(dims)}")
    print(f"Activations   : {list(activations)}")
    print(f"Learning rate : {lr}")
    print(f"Parameters    : {param_count}")
    print("==================")


__all__ = [
    "build_network",
    "load_preset",
    "merge_config",
    "presets",
    "read_config_file",
    "run_pipeline",
]
