import json
from pathlib import Path

import pytest

from cli.main import main


def test_cli_basic_preset(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    main(["--preset", "xor-tanh", "--max-epochs", "5"])
    run_dir = Path("runs/xor-tanh")
    assert (run_dir / "metrics.jsonl").exists()
    assert (run_dir / "manifest.json").exists()

    out = capsys.readouterr().out
    assert "=== matnet run ===" in out
    assert "epoch: " in out and "cost: " in out
    assert "[0.0, 1.0] [" in out
    payload = json.loads(out.strip().splitlines()[-1])
    assert payload["epochs"] <= 5
    assert payload["stop_reason"] in {"converged", "diverged", "max_epochs"}


def test_cli_overrides_and_dump_config(tmp_path, capsys):
    override = tmp_path / "override.yaml"
    override.write_text("train:\n  lr: 0.05\n")
    dumped = tmp_path / "resolved.json"
    main(
        [
            "--preset",
            "xor-sigmoid",
            "--config",
            str(override),
            "--max-epochs",
            "3",
            "--seed",
            "4",
            "--run-dir",
            str(tmp_path / "run"),
            "--dump-config",
            str(dumped),
        ]
    )
    config = json.loads(dumped.read_text())
    assert config["train"]["lr"] == 0.05
    assert config["train"]["max_epochs"] == 3
    assert config["model"]["seed"] == 4
    assert (tmp_path / "run" / "predictions.json").exists()
    capsys.readouterr()


def test_cli_is_a_regular_package():
    import cli
    from setuptools import find_packages

    assert cli.__file__ is not None
    root = Path(__file__).resolve().parents[2]
    found = find_packages(where=str(root), include=["matnet*", "cli*"])
    assert "cli" in found and "matnet.core" in found


def test_cli_list_presets(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--list-presets"])
    assert excinfo.value.code == 0
    listed = capsys.readouterr().out.split()
    assert "xor-tanh" in listed and "xor-leaky-relu" in listed
