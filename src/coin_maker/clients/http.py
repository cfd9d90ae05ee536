# -*- coding: utf-8 -*-
"""Async HTTP client for the transaction index: bounded attempts, 429 backoff."""

from __future__ import annotations

import asyncio
import random
import uuid
from typing import Any, Callable, Dict, Optional

import aiohttp
import structlog
from structlog.contextvars import bound_contextvars

from coin_maker.config import Settings
from coin_maker.exceptions import ChainApiError

MAX_BACKOFF_SECONDS = 4.0


class _RateLimited(Exception):
    """One attempt was answered with 429."""

    def __init__(self, retry_after: Optional[float], error: aiohttp.ClientResponseError) -> None:
        super().__init__("Too Many Requests")
        self.retry_after = retry_after
        self.error = error


def _retry_after_seconds(response: aiohttp.ClientResponse) -> Optional[float]:
    header = response.headers.get("Retry-After")
    if not header:
        return None
    try:
        seconds = float(header)
    except ValueError:
        return None
    return seconds if seconds > 0 else None


class AsyncHttpClient:
    """GET-only JSON client used by the chain index client.

    Owns an aiohttp.ClientSession unless one is injected; owned sessions are
    closed by aclose() or on leaving the async context. Each request is
    bounded by settings.chain.timeout_seconds and tried at most
    settings.chain.max_retries times.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._settings.chain.timeout_seconds)
            )
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client created it."""
        if not self._owns_session or self._session is None:
            return
        if not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    @staticmethod
    def _backoff_delay(attempt: int) -> float:
        """Exponential backoff with a little jitter."""
        return min(MAX_BACKOFF_SECONDS, 0.25 * (2**attempt)) + random.uniform(0.0, 0.15)

    async def _attempt(self, url: str, params: Dict[str, Any]) -> Any:
        """Perform one GET and decode JSON.

        Raises:
            _RateLimited: On 429.
            aiohttp.ClientError, asyncio.TimeoutError, ValueError: On any other failure.
        """
        session = await self._get_session()
        async with session.get(url, params=params) as response:
            if response.status == 429:
                raise _RateLimited(
                    _retry_after_seconds(response),
                    aiohttp.ClientResponseError(
                        response.request_info,
                        response.history,
                        status=429,
                        message="Too Many Requests",
                    ),
                )
            response.raise_for_status()
            # The index sometimes answers JSON with a text/plain content type
            return await response.json(content_type=None)

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        log_url: Optional[str] = None,
    ) -> Any:
        """GET url and return the decoded JSON body.

        Args:
            url: Full URL to request.
            params: Query parameters (may contain the API key).
            log_url: URL shown in logs and errors instead of url.

        Raises:
            ChainApiError: When every attempt failed.
        """
        attempts = max(1, self._settings.chain.max_retries)
        shown_url = log_url or url
        last_error: Optional[BaseException] = None

        with bound_contextvars(http_url=shown_url, http_request_id=uuid.uuid4().hex[:12]):
            for attempt in range(attempts):
                delay = self._backoff_delay(attempt)
                try:
                    return await self._attempt(url, params or {})
                except _RateLimited as e:
                    last_error = e.error
                    delay = e.retry_after or delay
                    self._logger.warning(
                        "http_get_rate_limited",
                        http_attempt=attempt + 1,
                        http_retry_after_seconds=e.retry_after,
                    )
                except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                    last_error = e
                    self._logger.debug(
                        "http_get_attempt_failed",
                        http_attempt=attempt + 1,
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                if attempt + 1 < attempts:
                    await asyncio.sleep(delay)

            status_code = (
                last_error.status if isinstance(last_error, aiohttp.ClientResponseError) else None
            )
            self._logger.warning(
                "http_get_failed",
                http_status_code=status_code,
                http_attempts=attempts,
                error_type=type(last_error).__name__ if last_error else None,
                error_message=str(last_error) if last_error else None,
            )
            raise ChainApiError(
                f"GET failed after {attempts} attempt(s): {shown_url}",
                url=shown_url,
                status_code=status_code,
                cause=last_error if isinstance(last_error, Exception) else None,
            ) from last_error
