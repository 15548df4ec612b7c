import pytest

from matnet.core.activations import leaky_relu
from matnet.training import pipelines


def test_builtin_and_file_presets_are_listed():
    names = set(pipelines.presets())
    assert {"xor-tanh", "xor-sigmoid", "sine-tanh", "xor-leaky-relu"} <= names


def test_file_preset_builds_a_network():
    config = pipelines.load_preset("xor-leaky-relu")
    net = pipelines.build_network(config["model"])
    assert net.widths == [2, 8, 1]
    assert net.specs[0].activation == leaky_relu(0.1)


def test_load_preset_returns_independent_copies():
    a = pipelines.load_preset("xor-tanh")
    a["train"]["lr"] = 99.0
    assert pipelines.load_preset("xor-tanh")["train"]["lr"] == 0.2


def test_unknown_preset():
    with pytest.raises(KeyError, match="Available presets"):
        pipelines.load_preset("mnist-dfa")


def test_merge_config_is_recursive():
    base = {"train": {"lr": 0.1, "max_epochs": 10}, "model": {"layers": [1, 2]}}
    merged = pipelines.merge_config(base, {"train": {"lr": 0.5}, "model": {"layers": [3]}})
    assert merged["train"] == {"lr": 0.5, "max_epochs": 10}
    assert merged["model"]["layers"] == [3]


def test_read_config_file(tmp_path):
    yaml_path = tmp_path / "override.yaml"
    yaml_path.write_text("train:\n  lr: 0.3\n")
    assert pipelines.read_config_file(yaml_path) == {"train": {"lr": 0.3}}
    json_path = tmp_path / "override.json"
    json_path.write_text('{"train": {"max_epochs": 7}}')
    assert pipelines.read_config_file(json_path) == {"train": {"max_epochs": 7}}


def test_read_config_file_rejects_unknown_suffix_before_reading(tmp_path):
    missing = tmp_path / "override.toml"
    assert not missing.exists()
    with pytest.raises(ValueError, match="Unsupported config file type"):
        pipelines.read_config_file(missing)
    present = tmp_path / "override.ini"
    present.write_text("[train]\nlr = 0.3\n")
    with pytest.raises(ValueError, match="Unsupported config file type"):
        pipelines.read_config_file(present)


def test_build_network_requires_layers():
    with pytest.raises(KeyError):
        pipelines.build_network({"d_in": 2})
