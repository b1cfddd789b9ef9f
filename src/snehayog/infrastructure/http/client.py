"""HTTP client for the Snehayog backend."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Any, Callable, Optional

import requests
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from snehayog.domain.exceptions import APIError, AuthenticationError
from snehayog.infrastructure.config.environment import EnvironmentConfig

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class _TransientHTTPError(Exception):
    """A 5xx response worth retrying."""

    def __init__(self, response: requests.Response) -> None:
        super().__init__(f"Server error {response.status_code}")
        self.response = response


def _error_message(response: requests.Response, fallback: str) -> str:
    """Pull the server's error text out of a JSON error body."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        return str(body.get("error") or body.get("message") or fallback)
    return fallback


class ApiClient:
    """
    Thin async wrapper around a requests session.

    Requests run in a worker thread so callers on the event loop are not
    blocked. Connection errors, timeouts and 5xx responses are retried with an
    incrementing delay (delay, 2 * delay, ...); 4xx responses are mapped to
    domain exceptions straight away.
    """

    def __init__(
        self,
        environment: EnvironmentConfig,
        token_provider: TokenProvider | None = None,
        session: requests.Session | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            environment: Active environment table (base URL, timeouts, retry policy)
            token_provider: Returns the current bearer token, if any
            session: Session to use (a new one is created if omitted)
            max_retries: Total attempts per request (environment default if omitted)
            retry_delay: Base delay between attempts in seconds (environment default if omitted)
        """
        self.environment = environment
        self.token_provider = token_provider
        self.session = session or requests.Session()
        self.max_retries = (
            max_retries if max_retries is not None else environment.get("max_retries", int)
        )
        self.retry_delay = (
            retry_delay if retry_delay is not None
            else environment.get("retry_delay", timedelta).total_seconds()
        )

    def _headers(self, auth_required: bool) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.token_provider() if self.token_provider else None

        if token:
            headers["Authorization"] = f"Bearer {token}"
        elif auth_required:
            raise AuthenticationError("User not authenticated")

        return headers

    def _send(self, method: str, url: str, timeout: float, **kwargs: Any) -> requests.Response:
        response = self.session.request(method, url, timeout=timeout, **kwargs)
        if response.status_code >= 500:
            raise _TransientHTTPError(response)
        return response

    async def request(
        self,
        method: str,
        url: str,
        *,
        timeout: float | None = None,
        auth_required: bool = False,
        retry: bool = True,
        **kwargs: Any,
    ) -> requests.Response:
        """
        Send a request and return the successful (2xx) response.

        Raises:
            AuthenticationError: On 401/403, or if auth is required and no token is stored
            APIError: On other error statuses, network failures and timeouts
        """
        headers = {**self._headers(auth_required), **kwargs.pop("headers", {})}
        timeout = timeout if timeout is not None else self.environment.default_timeout
        attempts = self.max_retries if retry else 1

        retrying = AsyncRetrying(
            stop=stop_after_attempt(max(attempts, 1)),
            wait=wait_incrementing(start=self.retry_delay, increment=self.retry_delay),
            retry=retry_if_exception_type(
                (_TransientHTTPError, requests.ConnectionError, requests.Timeout)
            ),
            reraise=False,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    logger.debug(
                        "%s %s (attempt %d)", method, url, attempt.retry_state.attempt_number
                    )
                    response = await asyncio.to_thread(
                        self._send, method, url, timeout, headers=headers, **kwargs
                    )
        except RetryError as e:
            last = e.last_attempt.exception()
            if isinstance(last, _TransientHTTPError):
                response = last.response
            elif isinstance(last, requests.Timeout):
                raise APIError(f"Request timed out: {method} {url}", cause=last) from last
            else:
                raise APIError(f"Network error: {last}", cause=last) from last
        except requests.RequestException as e:
            raise APIError(f"Request failed: {e}", cause=e) from e

        return self._check(response, method, url)

    def _check(self, response: requests.Response, method: str, url: str) -> requests.Response:
        status = response.status_code
        if 200 <= status < 300:
            return response

        message = _error_message(response, f"{method} {url} failed with status {status}")
        logger.warning("%s %s -> %d: %s", method, url, status, message)

        if status in (401, 403):
            raise AuthenticationError(message)
        raise APIError(message, status)

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        return self.decode_json(await self.request("GET", url, **kwargs))

    async def post_json(self, url: str, payload: Any = None, **kwargs: Any) -> Any:
        return self.decode_json(await self.request("POST", url, json=payload, **kwargs))

    async def delete_json(self, url: str, **kwargs: Any) -> Any:
        return self.decode_json(await self.request("DELETE", url, **kwargs))

    @staticmethod
    def decode_json(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                f"Invalid JSON in response from {response.url}", response.status_code, e
            ) from e

    def close(self) -> None:
        self.session.close()
