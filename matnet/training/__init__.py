"""Training driver and config pipelines."""

from .pipelines import load_preset, presets, run_pipeline
from .trainer import Trainer, predictions

__all__ = ["Trainer", "load_preset", "predictions", "presets", "run_pipeline"]
