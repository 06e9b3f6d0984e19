"""Data models for the local state file and the remote API payloads."""

from dataclasses import dataclass, field
from typing import Any, Optional

BTC_CODE = "btc"


@dataclass(frozen=True)
class User:
    username: str

    def to_dict(self) -> dict[str, Any]:
        return {"username": self.username}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(username=_require_str(data, "username"))


@dataclass(frozen=True)
class AuthToken:
    """Bearer credential returned at signup."""

    id: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AuthToken":
        return cls(id=_require_str(data, "id"))


@dataclass
class Currency:
    """A holding: an amount of one currency or ticker symbol."""

    code: str
    amount: float

    @property
    def decimals(self) -> int:
        return 8 if self.code.lower() == BTC_CODE else 2

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "amount": self.amount}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Currency":
        code = _require_str(data, "code")
        amount = data.get("amount")
        # bool is an int subclass but never a valid amount
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise ValueError(f"'amount' must be a number, got {amount!r}")
        return cls(code=code, amount=float(amount))

    def __str__(self) -> str:
        return f"{self.code}: {self.amount:.{self.decimals}f}"


@dataclass
class Portfolio:
    """Holdings in insertion order. Codes may repeat."""

    currencies: list[Currency] = field(default_factory=list)

    def add(self, currency: Currency) -> None:
        self.currencies.append(currency)

    def to_dict(self) -> dict[str, Any]:
        return {"currencies": [c.to_dict() for c in self.currencies]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Portfolio":
        currencies = _require(data, "currencies", list)
        return cls(currencies=[Currency.from_dict(_as_object(c)) for c in currencies])


@dataclass
class State:
    """Everything the tool persists between invocations."""

    user: Optional[User] = None
    auth_token: Optional[AuthToken] = None
    portfolio: Portfolio = field(default_factory=Portfolio)

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": self.user.to_dict() if self.user is not None else None,
            "auth_token": (
                self.auth_token.to_dict() if self.auth_token is not None else None
            ),
            "portfolio": self.portfolio.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "State":
        user = data.get("user")
        auth_token = data.get("auth_token")
        return cls(
            user=User.from_dict(_as_object(user)) if user is not None else None,
            auth_token=(
                AuthToken.from_dict(_as_object(auth_token))
                if auth_token is not None
                else None
            ),
            portfolio=Portfolio.from_dict(_require(data, "portfolio", dict)),
        )


@dataclass(frozen=True)
class ExchangeRate:
    """One quote from the exchange rate endpoint. Never cached."""

    quote: str
    base: str
    rate: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExchangeRate":
        rate = data.get("rate")
        if isinstance(rate, bool) or not isinstance(rate, (int, float)):
            raise ValueError(f"'rate' must be a number, got {rate!r}")
        return cls(
            quote=_require_str(data, "quote"),
            base=_require_str(data, "base"),
            rate=float(rate),
        )


def _as_object(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"expected an object, got {type(value).__name__}")
    return value


def _require(data: dict[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise ValueError(f"missing field '{key}'")
    value = data[key]
    if not isinstance(value, kind):
        raise ValueError(f"'{key}' must be a {kind.__name__}, got {type(value).__name__}")
    return value


def _require_str(data: dict[str, Any], key: str) -> str:
    return _require(data, key, str)
