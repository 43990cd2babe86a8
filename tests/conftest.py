import pytest

from sharebridge.logging import configure_logging

configure_logging("WARNING")


@pytest.fixture(autouse=True)
def no_simulation_env(monkeypatch):
    # tests opt into trusted-dealer shortcuts explicitly
    monkeypatch.delenv("SHAREBRIDGE_SIMULATION", raising=False)

