import json
from pathlib import Path

import pytest

from matnet.training import pipelines


def _config(run_dir: Path, max_epochs: int = 20) -> dict:
    config = pipelines.load_preset("xor-tanh")
    config["train"].update({"max_epochs": max_epochs, "run_dir": str(run_dir)})
    return config


def test_trainer_pipeline_produces_artifacts(tmp_path):
    config = _config(tmp_path / "run")

    result = pipelines.run_pipeline(config)

    assert result.run.epochs <= 20
    assert result.run.stop_reason in {"converged", "diverged", "max_epochs"}
    manifest = json.loads(Path(result.manifest_path).read_text())
    assert manifest["config"]["model"]["seed"] == 0
    assert manifest["dataset"]["gate"] == "xor"
    assert manifest["outcome"]["stop_reason"] == result.run.stop_reason

    metrics = [
        json.loads(line)
        for line in Path(result.metrics_path).read_text().splitlines()
        if line
    ]
    assert metrics, "metrics should not be empty"
    first = metrics[0]
    assert first["split"] == "train"
    assert "sha" in first and first["seed"] == 0
    assert [m["epoch"] for m in metrics] == list(range(1, len(metrics) + 1))
    assert all("cost" in entry for entry in metrics)

    summary = json.loads(Path(result.summary_path).read_text())
    assert summary["epochs"] == result.run.epochs
    assert summary["stop_reason"] == result.run.stop_reason
    assert summary["initial_cost"] == pytest.approx(metrics[0]["cost"])

    run_dir = Path(config["train"]["run_dir"])
    assert (run_dir / "metrics.csv").exists()
    assert json.loads((run_dir / "config.json").read_text()) == config
    predictions = json.loads(Path(result.predictions_path).read_text())
    assert [p["inputs"] for p in predictions] == [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
    assert all(len(p["prediction"]) == 1 for p in predictions)


def test_pipeline_determinism(tmp_path):
    first = pipelines.run_pipeline(_config(tmp_path / "run1"))
    second = pipelines.run_pipeline(_config(tmp_path / "run2"))

    assert Path(first.metrics_path).read_text() == Path(second.metrics_path).read_text()
    assert first.run.cost == second.run.cost


def test_pipeline_rejects_mismatched_model(tmp_path):
    config = _config(tmp_path / "run")
    config["model"]["layers"][-1]["neurons"] = 2
    with pytest.raises(ValueError, match="outputs 2"):
        pipelines.run_pipeline(config)

    config = _config(tmp_path / "run")
    config["model"]["d_in"] = 3
    with pytest.raises(ValueError, match="d_in=3"):
        pipelines.run_pipeline(config)
