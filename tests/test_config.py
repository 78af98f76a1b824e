"""Tests for configuration loading."""

import json

import pytest

from caros_obd import config as config_module
from caros_obd.config import OBDConfig
from caros_obd.exceptions import ConfigError


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_FILE", tmp_path / "absent.json")
    for name in ("PORT", "BAUDRATE", "COMMAND_TIMEOUT"):
        monkeypatch.delenv(f"CAROS_OBD_{name}", raising=False)


class TestLoad:

    def test_defaults(self):
        config = OBDConfig.load()
        assert config.port is None
        assert config.baudrate == 38400
        assert config.command_timeout == 5.0
        assert config.placeholder_vin == "DEMO123456789"
        assert (config.vehicle_make, config.vehicle_model, config.vehicle_year) == ("Mazda", "CX-30", 2024)

    def test_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"port": "/dev/rfcomm1", "baudrate": 9600, "vehicle_make": "Honda"}))

        config = OBDConfig.load(path)

        assert config.port == "/dev/rfcomm1"
        assert config.baudrate == 9600
        assert config.vehicle_make == "Honda"

    def test_default_file_used_when_present(self, tmp_path, monkeypatch):
        path = tmp_path / "default.json"
        path.write_text(json.dumps({"vehicle_year": 2021}))
        monkeypatch.setattr(config_module, "DEFAULT_CONFIG_FILE", path)

        assert OBDConfig.load().vehicle_year == 2021

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"port": "/dev/rfcomm1", "command_timeout": 3}))
        monkeypatch.setenv("CAROS_OBD_PORT", "COM5")
        monkeypatch.setenv("CAROS_OBD_COMMAND_TIMEOUT", "2.5")

        config = OBDConfig.load(path)

        assert config.port == "COM5"
        assert config.command_timeout == 2.5

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError):
            OBDConfig.load(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            OBDConfig.load(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError):
            OBDConfig.load(path)

    def test_invalid_value(self, monkeypatch):
        monkeypatch.setenv("CAROS_OBD_BAUDRATE", "fast")
        with pytest.raises(ConfigError):
            OBDConfig.load()
