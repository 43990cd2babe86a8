import pytest

from sharebridge.config import Config, get_config, require_simulation_mode
from sharebridge.errors import SimulationModeRequired
from sharebridge.logging import configure_logging


def test_defaults(monkeypatch):
    monkeypatch.delenv("SHAREBRIDGE_LOG_LEVEL", raising=False)
    config = get_config()
    assert config.simulation_mode is False
    assert config.log_level == "INFO"
    assert config.validate() == []


@pytest.mark.parametrize("raw,expected", [("1", True), ("true", True), ("YES", True), ("0", False), ("off", False)])
def test_simulation_env(monkeypatch, raw, expected):
    monkeypatch.setenv("SHAREBRIDGE_SIMULATION", raw)
    assert Config().simulation_mode is expected


def test_invalid_boolean(monkeypatch):
    monkeypatch.setenv("SHAREBRIDGE_SIMULATION", "maybe")
    with pytest.raises(ValueError, match="SHAREBRIDGE_SIMULATION"):
        Config()


def test_log_level_upper(monkeypatch):
    monkeypatch.setenv("SHAREBRIDGE_LOG_LEVEL", "debug")
    assert Config().log_level == "DEBUG"


def test_validate_warns():
    warnings = Config(simulation_mode=True, log_level="LOUD").validate()
    assert len(warnings) == 2


def test_require_simulation_mode():
    with pytest.raises(SimulationModeRequired) as exc:
        require_simulation_mode("op", config=Config(simulation_mode=False))
    assert exc.value.operation == "op"
    require_simulation_mode("op", trusted_dealer=True)
    require_simulation_mode("op", config=Config(simulation_mode=True))


def test_configure_logging_reports_warnings():
    warnings = configure_logging("WARNING", config=Config(simulation_mode=True, log_level="WARNING"))
    assert warnings == Config(simulation_mode=True, log_level="WARNING").validate()
    assert len(warnings) == 1
    assert configure_logging("WARNING", config=Config(simulation_mode=False, log_level="INFO")) == []
