"""Configuration values for the pfm client."""

import logging
from dataclasses import dataclass

__version__ = "0.1.0"


@dataclass(frozen=True)
class ApiConfig:
    """Configuration for the remote portfolio API."""

    BASE_URL: str = "https://api.easyportfol.io"
    USERS_PATH: str = "/users/"
    EXCHANGE_RATES_PATH: str = "/exchange_rates"
    DEFAULT_BASE_CURRENCY: str = "USD"
    REQUEST_TIMEOUT_S: float | None = None
    USER_AGENT: str = f"pfm/{__version__}"


@dataclass(frozen=True)
class StateConfig:
    """Configuration for the local state file."""

    STATE_FILE: str = "state.json"
    INDENT: int = 2


@dataclass(frozen=True)
class LogConfig:
    """Log detail selected by the number of -v flags."""

    verbosity: int = 0

    @property
    def level(self) -> int:
        if self.verbosity <= 0:
            return logging.WARNING
        if self.verbosity == 1:
            return logging.INFO
        return logging.DEBUG

    @property
    def library_level(self) -> int:
        # HTTP library internals only show up at the highest verbosity
        return logging.DEBUG if self.verbosity >= 3 else logging.WARNING
