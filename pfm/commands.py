"""The three user-facing operations: signup, set a holding, show the total."""

import logging
import math

from rich.console import Console

from .client import PortfolioApiClient
from .errors import ApiError, InvalidAmount
from .models import Currency
from .store import StateStore

logger = logging.getLogger(__name__)

SEPARATOR = "---"
REFERENCE_CURRENCY = "USD"


def _say(console: Console, text: str) -> None:
    # API messages and user symbols are printed verbatim, no markup or emoji codes
    console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)


def signup(
    username: str,
    password: str,
    *,
    client: PortfolioApiClient,
    store: StateStore,
    console: Console,
) -> bool:
    """Create a remote account and remember its user and token locally.

    The state is loaded only after the API accepted the signup, so existing
    holdings are kept. A rejected signup leaves the state file untouched.

    Returns:
        True if the account was created and saved.
    """
    try:
        user, token = client.create_user(username, password)
    except ApiError as e:
        _say(console, e.message)
        return False

    _say(console, f"Signed up as {user.username}")
    state = store.load()
    state.user = user
    state.auth_token = token
    store.save(state)
    return True


def parse_amount(text: str) -> float:
    try:
        value = float(text)
    except ValueError as e:
        raise InvalidAmount(text) from e
    # nan and inf have no JSON representation
    if not math.isfinite(value):
        raise InvalidAmount(text)
    return value


def set_holding(code: str, amount_text: str, *, store: StateStore) -> Currency:
    """Append a holding to the portfolio.

    Existing holdings with the same code are left alone; a second entry is added.

    Raises:
        InvalidAmount: If ``amount_text`` is not a number. Nothing is written.
    """
    logger.debug("Setting %s to %s", code, amount_text)
    amount = parse_amount(amount_text)

    state = store.load()
    currency = Currency(code=code, amount=amount)
    state.portfolio.add(currency)
    store.save(state)
    return currency


def show_total(
    *,
    client: PortfolioApiClient,
    store: StateStore,
    console: Console,
) -> float:
    """Print every holding and the portfolio value in USD.

    Rates are looked up one holding at a time, in insertion order. A holding
    whose lookup is rejected by the API prints the rejection and adds nothing
    to the total.

    Returns:
        The accumulated total.
    """
    state = store.load()
    token = state.auth_token.id if state.auth_token is not None else None
    if token is None and state.portfolio.currencies:
        logger.warning("No auth token stored, run signup first; rate lookups will be rejected")

    total = 0.0

    _say(console, "Currencies")
    _say(console, SEPARATOR)

    for currency in state.portfolio.currencies:
        _say(console, str(currency))
        try:
            rate = client.get_exchange_rate(currency.code, REFERENCE_CURRENCY, token)
        except ApiError as e:
            _say(console, e.message)
            continue
        logger.debug("%s/%s = %s", rate.quote, rate.base, rate.rate)
        total += rate.rate * currency.amount

    _say(console, SEPARATOR)
    _say(console, f"Total: ${total:.2f}")
    return total
