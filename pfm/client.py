"""HTTP client for the remote portfolio API."""

import logging
from typing import Any, Optional

import requests

from .config import ApiConfig
from .errors import ApiError, TransportError
from .models import AuthToken, ExchangeRate, User, _as_object

logger = logging.getLogger(__name__)

MAX_ERROR_CODE = 0xFFFF


class PortfolioApiClient:
    """Client for the user and exchange rate endpoints.

    Non-2xx responses carrying an error body are raised as ``ApiError``.
    Anything else that goes wrong on the wire is a ``TransportError``.
    Requests are never retried.
    """

    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or ApiConfig()
        self.base_url = self.config.BASE_URL.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"User-Agent": self.config.USER_AGENT})

    def create_user(self, username: str, password: str) -> tuple[User, AuthToken]:
        """Register a new user.

        Returns:
            The created user and its auth token.

        Raises:
            ApiError: If the API rejects the signup.
            TransportError: If the request fails or the response is unreadable.
        """
        data = self._request(
            "POST",
            self.config.USERS_PATH,
            json_data={"username": username, "password": password},
        )
        try:
            user = User.from_dict(_as_object(data.get("user")))
            token = AuthToken.from_dict(_as_object(data.get("auth_token")))
        except ValueError as e:
            raise TransportError(f"Unexpected signup response: {e}") from e
        return user, token

    def get_exchange_rate(
        self,
        quote: str,
        base: Optional[str] = None,
        token: Optional[str] = None,
    ) -> ExchangeRate:
        """Look up how many ``base`` units one unit of ``quote`` is worth.

        Without a token the request goes out unauthenticated and the API's
        rejection comes back as an ``ApiError``.
        """
        headers: dict[str, str] = {}
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"

        data = self._request(
            "GET",
            self.config.EXCHANGE_RATES_PATH,
            params={"quote": quote, "base": base or self.config.DEFAULT_BASE_CURRENCY},
            headers=headers,
        )
        try:
            return ExchangeRate.from_dict(data)
        except ValueError as e:
            raise TransportError(f"Unexpected exchange rate response: {e}") from e

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, str]] = None,
        json_data: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s params=%s", method, url, params)

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json_data,
                headers=headers,
                timeout=self.config.REQUEST_TIMEOUT_S,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        logger.debug("%s %s -> %s", method, url, response.status_code)

        try:
            data = _as_object(response.json())
        except ValueError as e:
            raise TransportError(
                f"{method} {url} returned an unreadable body "
                f"(status {response.status_code}): {e}"
            ) from e

        if not response.ok:
            code = data.get("code")
            message = data.get("message")
            if not _is_status_code(code) or not isinstance(message, str):
                raise TransportError(
                    f"{method} {url} returned status {response.status_code} "
                    f"without a valid error body"
                )
            logger.info("API error %s: %s", code, message)
            raise ApiError(code=code, message=message)

        return data


def _is_status_code(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= MAX_ERROR_CODE
    )
