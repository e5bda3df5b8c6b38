# -*- coding: utf-8 -*-
"""Async HTTP client with retries and rate-limit handling."""

from __future__ import annotations

import asyncio
import random
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Optional
from structlog.contextvars import bound_contextvars

from watt_autoclaim.config import Settings
from watt_autoclaim.exceptions import ApiRequestError


class _RetryableStatus(Exception):
    """Internal marker: a 429 or 5xx response that should be retried."""

    def __init__(self, status: int, body: str, retry_after: Optional[float] = None) -> None:
        super().__init__(f"HTTP {status}")
        self.status = status
        self.body = body
        self.retry_after = retry_after


class AsyncHttpClient:
    """Async HTTP client for JSON APIs (Jupiter, Solana JSON-RPC) with retries and 429 handling.

    Transport errors, 429 and 5xx responses are retried with exponential
    backoff. Other 4xx responses fail immediately with the response body
    attached, since repeating them cannot succeed.

    Injects Settings and optionally an aiohttp.ClientSession. If no session
    is provided, one is created and must be closed via aclose() or used
    as an async context manager.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (timeout, max_retries, etc.).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.api.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        base = min(4.0, 0.25 * (2**attempt))
        return base + random.uniform(0.0, 0.15)

    @staticmethod
    def _parse_retry_after(header: Optional[str]) -> Optional[float]:
        if not header:
            return None
        try:
            return float(header)
        except ValueError:
            return None

    async def _read_json(self, response: aiohttp.ClientResponse, method: str, url: str) -> Any:
        """Return the JSON body, or raise for non-2xx statuses."""
        if response.status == 429 or response.status >= 500:
            body = await response.text()
            raise _RetryableStatus(
                response.status,
                body,
                retry_after=self._parse_retry_after(response.headers.get("Retry-After")),
            )
        if response.status >= 400:
            body = await response.text()
            raise ApiRequestError(
                f"{method} {url} failed ({response.status}): {body}",
                url=url,
                status_code=response.status,
                body=body,
            )
        return await response.json(content_type=None)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        max_attempts: Optional[int] = None,
    ) -> Any:
        request_id = uuid.uuid4().hex[:12]
        attempts = max_attempts if max_attempts is not None else self._settings.api.max_retries
        event_prefix = f"http_{method.lower()}"
        last_error: Optional[Exception] = None
        last_status: Optional[int] = None
        last_body: Optional[str] = None

        with bound_contextvars(
            http_url=url.split("?")[0],
            http_request_id=request_id,
            http_max_attempts=attempts,
        ):
            for attempt in range(attempts):
                with bound_contextvars(http_attempt=attempt + 1):
                    try:
                        session = await self._get_session()
                        async with session.request(
                            method, url, params=params, json=json
                        ) as response:
                            return await self._read_json(response, method, url)
                    except _RetryableStatus as e:
                        last_error = e
                        last_status = e.status
                        last_body = e.body
                        self._logger.warning(
                            f"{event_prefix}_retryable_status",
                            http_status_code=e.status,
                            http_retry_after_seconds=e.retry_after,
                        )
                        delay = e.retry_after if e.retry_after and e.retry_after > 0 else None
                    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                        last_error = e
                        last_status = None
                        self._logger.debug(
                            f"{event_prefix}_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                        )
                        delay = None
                    if attempt + 1 < attempts:
                        await asyncio.sleep(delay if delay is not None else self._backoff_delay(attempt))

            self._logger.error(
                f"{event_prefix}_failed",
                http_status_code=last_status,
                http_attempts=attempts,
                error_type=type(last_error).__name__ if last_error else None,
                error_message=str(last_error) if last_error else None,
            )
            raise ApiRequestError(
                f"{method} failed after {attempts} attempt(s): {url.split('?')[0]}",
                url=url,
                status_code=last_status,
                body=last_body,
                cause=last_error,
            ) from last_error

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Perform a GET request and return JSON. Retries on transport failure, 429 and 5xx.

        Args:
            url: Full URL to request.
            params: Optional query parameters.

        Returns:
            Parsed JSON response (dict or list).

        Raises:
            ApiRequestError: On a non-retryable 4xx, or when retries are exhausted.
        """
        return await self._request("GET", url, params=params)

    async def post(
        self,
        url: str,
        *,
        json: Optional[Any] = None,
        max_attempts: Optional[int] = None,
    ) -> Any:
        """Perform a POST request with JSON body and return JSON.

        Args:
            url: Full URL to request.
            json: Optional JSON-serializable body.
            max_attempts: Override for the number of attempts. Pass 1 for
                requests that must never be repeated (transaction submission).

        Returns:
            Parsed JSON response (dict or list).

        Raises:
            ApiRequestError: On a non-retryable 4xx, or when attempts are exhausted.
        """
        return await self._request("POST", url, json=json if json is not None else {}, max_attempts=max_attempts)
