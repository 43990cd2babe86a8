"""Bridge configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .errors import SimulationModeRequired

load_dotenv()

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _bool_env(key: str, default: str) -> bool:
    val = os.getenv(key, default).strip().lower()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    raise ValueError(f"Invalid boolean for {key}: {val!r}")


@dataclass(frozen=True)
class Config:
    # Trusted-dealer shortcuts (local resharing, simulated DKG) hold every
    # private share in one process. Off unless explicitly enabled.
    simulation_mode: bool = field(default_factory=lambda: _bool_env("SHAREBRIDGE_SIMULATION", "0"))

    log_level: str = field(default_factory=lambda: os.getenv("SHAREBRIDGE_LOG_LEVEL", "INFO").upper())
    log_json: bool = field(default_factory=lambda: _bool_env("SHAREBRIDGE_LOG_JSON", "0"))

    def validate(self) -> list[str]:
        """Return human-readable warnings for risky settings."""
        warnings = []
        if self.simulation_mode:
            warnings.append(
                "SHAREBRIDGE_SIMULATION is on: private shares may be combined in one process"
            )
        if self.log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            warnings.append(f"Unknown log level {self.log_level!r}, falling back to INFO")
        return warnings


def get_config() -> Config:
    return Config()


def require_simulation_mode(operation: str, trusted_dealer: bool = False, config: Config | None = None) -> None:
    """Refuse a trusted-dealer shortcut unless the caller or config opted in."""
    if trusted_dealer:
        return
    config = config or get_config()
    if not config.simulation_mode:
        raise SimulationModeRequired(
            f"{operation} combines every party's private share in one process; "
            "pass trusted_dealer=True or set SHAREBRIDGE_SIMULATION=1",
            operation=operation,
        )
