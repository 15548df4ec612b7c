"""Command line entry point for matnet training runs."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Iterable

from matnet.training import pipelines


def _format_result(result) -> str:
    payload = {
        "epochs": result.run.epochs,
        "steps": result.run.steps,
        "cost": result.run.cost,
        "stop_reason": result.run.stop_reason,
        "metrics": result.metrics_path,
        "manifest": result.manifest_path,
        "predictions": result.predictions_path,
    }
    if result.summary_path:
        payload["summary"] = result.summary_path
    return json.dumps(payload, sort_keys=True)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="xor-tanh",
        help="Preset configuration to execute",
    )
    parser.add_argument("--config", type=Path, help="Optional JSON/YAML config override")
    parser.add_argument("--lr", type=float, help="Override the learning rate")
    parser.add_argument("--max-epochs", type=int, help="Override the epoch limit")
    parser.add_argument(
        "--cost-threshold", type=float, help="Stop once the cost drops below this value"
    )
    parser.add_argument("--seed", type=int, help="Seed for the initial weights")
    parser.add_argument("--run-dir", type=Path, help="Directory receiving run artifacts")
    parser.add_argument(
        "--enable-plots", action="store_true", help="Render the cost curve to cost.png"
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("MATNET_LOG_LEVEL", "WARNING"),
        help="Logging level for library messages (default: $MATNET_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.WARNING)
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def _print_results(result_path: str, epochs: int, cost: float) -> None:
    print(f"epoch: {epochs}, cost: {cost}")
    for entry in json.loads(Path(result_path).read_text()):
        print(entry["inputs"], entry["prediction"])


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level)

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    config = json.loads(json.dumps(pipelines.load_preset(args.preset)))

    if args.config:
        override = pipelines.read_config_file(args.config)
        if {"data", "model", "train"} <= set(override.keys()):
            config = json.loads(json.dumps(override))
        else:
            config = pipelines.merge_config(config, override)

    train_cfg = config.setdefault("train", {})
    if args.lr is not None:
        train_cfg["lr"] = float(args.lr)
    if args.max_epochs is not None:
        train_cfg["max_epochs"] = int(args.max_epochs)
    if args.cost_threshold is not None:
        train_cfg["cost_threshold"] = float(args.cost_threshold)
    if args.run_dir is not None:
        train_cfg["run_dir"] = str(args.run_dir)
    if args.enable_plots:
        train_cfg["enable_plots"] = True
    if args.seed is not None:
        config.setdefault("model", {})["seed"] = int(args.seed)

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    result = pipelines.run_pipeline(config)
    _print_results(result.predictions_path, result.run.epochs, result.run.cost)
    print(_format_result(result))


if __name__ == "__main__":
    main()
