"""Blocking HTTP client with a persisted cookie jar and bounded retries."""

from typing import Any, Optional
from urllib.parse import urljoin

import backoff
import requests
from loguru import logger

from acick import USER_AGENT
from acick.domain.exceptions import BuildRequestError, RetryExhaustedError, ServerError, TransportError

from .config import SessionConfig
from .console import Console
from .cookie_store import CookieStore


class HttpClient:
    """
    Sends requests built from a session config.

    Redirects are never followed: a 3xx response is handed back to the caller,
    who decides whether its ``Location`` is the expected one.
    """

    def __init__(self, session_config: SessionConfig, session: Optional[requests.Session] = None):
        """
        Initialize HTTP client.

        Args:
            session_config: Timeout, cookie store path and retry policy
            session: Optional pre-built session (tests mount fake adapters on it)
        """
        self.config = session_config
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT

    def request(self, method: str, url: str, **kwargs: Any) -> "RetryRequestBuilder":
        return RetryRequestBuilder(self, requests.Request(method.upper(), url, **kwargs))

    def get(self, url: str, **kwargs: Any) -> "RetryRequestBuilder":
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> "RetryRequestBuilder":
        return self.request("POST", url, **kwargs)


class RetryRequestBuilder:
    """A request that is re-prepared and re-sent on every attempt."""

    def __init__(self, client: HttpClient, request: requests.Request):
        self.client = client
        self.request = request

    def retry_send(self, console: Console) -> requests.Response:
        """
        Send with at most ``retry_limit + 1`` attempts at fixed spacing.

        Transport errors and 5xx responses are retried; every other response,
        4xx included, is returned as is.

        Raises:
            RetryExhaustedError: All attempts failed; wraps the last error
        """
        config = self.client.config
        attempts = 0

        def on_backoff(details: dict) -> None:
            logger.warning(
                f"Attempt {details['tries']} for {self.request.url} failed, "
                f"retrying in {details['wait']:.1f}s"
            )

        @backoff.on_exception(
            backoff.constant,
            TransportError,
            max_tries=config.retry_limit + 1,
            interval=config.retry_interval.total_seconds(),
            jitter=None,
            on_backoff=on_backoff,
        )
        def attempt() -> requests.Response:
            nonlocal attempts
            attempts += 1
            return self._send_once(console)

        try:
            return attempt()
        except TransportError as e:
            logger.error(f"Giving up on {self.request.method} {self.request.url} after {attempts} attempt(s)")
            raise RetryExhaustedError(attempts, e) from e

    def _send_once(self, console: Console) -> requests.Response:
        session = self.client.session
        config = self.client.config

        if _is_stream(self.request.data):
            raise BuildRequestError(f"Could not clone request body for {self.request.url}")

        with CookieStore.open(config.cookies_path) as store:
            session.cookies = store.jar
            try:
                prepared = session.prepare_request(self.request)
            except (requests.RequestException, ValueError, TypeError) as e:
                raise BuildRequestError(f"Could not build request for {self.request.url}") from e

            console.write(f"{prepared.method:7} {prepared.url} ... ")
            try:
                response = session.send(
                    prepared,
                    allow_redirects=False,
                    timeout=config.timeout.total_seconds(),
                )
            except requests.RequestException as e:
                console.writeln("failed")
                raise TransportError(f"Could not send request to {prepared.url}: {e}") from e

            console.writeln(str(response.status_code))
            store.save()

        if response.status_code >= 500:
            raise ServerError(response.status_code, prepared.url)
        return response


def location_url(response: requests.Response, base_url: str) -> Optional[str]:
    """``Location`` header of a redirect resolved against ``base_url``."""
    location = response.headers.get("Location")
    if location is None:
        return None
    return urljoin(base_url, location)


def _is_stream(data: Any) -> bool:
    return hasattr(data, "read") or (hasattr(data, "__iter__") and hasattr(data, "__next__"))
