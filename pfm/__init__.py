"""
pfm - command line client for a remote portfolio service.

Exports:
    State, User, AuthToken, Portfolio, Currency, ExchangeRate: Data models
    StateStore: Loads and saves the local state file
    PortfolioApiClient: Client for the user and exchange rate endpoints
    signup, set_holding, show_total: The three commands
    PfmError, StateCorrupt, InvalidAmount, TransportError, ApiError: Errors
"""

from .config import __version__, ApiConfig, LogConfig, StateConfig
from .models import AuthToken, Currency, ExchangeRate, Portfolio, State, User
from .errors import ApiError, InvalidAmount, PfmError, StateCorrupt, TransportError
from .store import StateStore
from .client import PortfolioApiClient
from .commands import set_holding, show_total, signup

__all__ = [
    "__version__",
    "ApiConfig",
    "LogConfig",
    "StateConfig",
    "AuthToken",
    "Currency",
    "ExchangeRate",
    "Portfolio",
    "State",
    "User",
    "ApiError",
    "InvalidAmount",
    "PfmError",
    "StateCorrupt",
    "TransportError",
    "StateStore",
    "PortfolioApiClient",
    "set_holding",
    "show_total",
    "signup",
]
