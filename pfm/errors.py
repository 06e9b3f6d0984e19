"""Error types raised by the state store, the API client and the commands."""

from dataclasses import dataclass
from pathlib import Path


class PfmError(Exception):
    """Base class for errors that abort the current command."""


class StateCorrupt(PfmError):
    """The state file exists but cannot be read as a State document."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"State file {path} is corrupt: {reason}")


class InvalidAmount(PfmError):
    """An amount given on the command line is not a number."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Invalid amount: {text!r}")


class TransportError(PfmError):
    """The request never produced a usable response."""


@dataclass
class ApiError(Exception):
    """A well-formed error response from the remote API."""

    code: int
    message: str

    def __str__(self) -> str:
        return self.message
