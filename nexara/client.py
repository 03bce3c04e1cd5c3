"""HTTP request primitive with a fixed-count, linear-backoff retry loop.

Every network call in nexara goes through :func:`request` or :func:`stream`.
Both build an ``httpx.Client`` from :meth:`Settings.client_options` with the
caller's *options* shallow-merged on top, then run the same retry loop:

    attempt 1 → fail → sleep(retry_delay × 1) → attempt 2 → fail →
    sleep(retry_delay × 2) → ... → attempt N → fail → FetchError

Transport errors and 408/429/5xx responses are retried.  Any other 4xx fails
immediately unless ``settings.retry_client_errors`` is set.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping, Optional, TypeVar

import httpx

from nexara.config import settings
from nexara.errors import FetchError

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

_RETRYABLE_STATUS_CODES = frozenset({408, 429})


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _merge_options(options: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Overlay *options* on the default client options, key by key."""
    merged = settings.client_options()
    if options:
        merged.update(options)
    return merged


def _is_retryable(exc: httpx.HTTPError) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status >= 500 or status in _RETRYABLE_STATUS_CODES:
            return True
        return settings.retry_client_errors
    if isinstance(exc, httpx.TransportError):
        return True
    # Redirect loops, undecodable bodies and the like.
    return settings.retry_client_errors


def _with_retries(url: str, retries: Optional[int], send: Callable[[], _T]) -> _T:
    """Call *send* until it succeeds or the attempt budget is spent."""
    attempts = settings.max_retries if retries is None else retries
    if attempts < 1:
        raise ValueError(f"retries must be at least 1, got {attempts}")

    for attempt in range(1, attempts + 1):
        try:
            return send()
        except httpx.HTTPError as exc:
            if attempt == attempts or not _is_retryable(exc):
                logger.error("GET %s failed after %d attempt(s): %s", url, attempt, exc)
                raise FetchError(url, attempt, exc) from exc
            delay = settings.retry_delay * attempt
            logger.warning(
                "GET %s failed (attempt %d/%d): %s; retrying in %.1fs",
                url, attempt, attempts, exc, delay,
            )
            time.sleep(delay)

    raise AssertionError("unreachable")


def _get(client: httpx.Client, url: str) -> httpx.Response:
    response = client.get(url)
    response.raise_for_status()
    logger.debug("GET %s -> %d (%d bytes)", url, response.status_code, len(response.content))
    return response


def _open_stream(client: httpx.Client, url: str) -> httpx.Response:
    response = client.send(client.build_request("GET", url), stream=True)
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError:
        response.close()
        raise
    logger.debug("GET %s -> %d (streaming)", url, response.status_code)
    return response


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def request(
    url: str,
    options: Optional[Mapping[str, Any]] = None,
    retries: Optional[int] = None,
) -> httpx.Response:
    """GET *url* and return the fully read response.

    Args:
        url: The target URL.
        options: ``httpx.Client`` keyword arguments (``headers``, ``timeout``,
            ``verify``, ``proxy``, ``params`` ...).  Each key replaces the
            corresponding default wholesale.
        retries: Maximum number of attempts; defaults to
            ``settings.max_retries``.

    Raises:
        FetchError: When the last permitted attempt fails, or a
            non-retryable status is returned.
        ValueError: If *retries* is smaller than 1.
    """
    with httpx.Client(**_merge_options(options)) as client:
        return _with_retries(url, retries, lambda: _get(client, url))


def get(url: str, options: Optional[Mapping[str, Any]] = None) -> httpx.Response:
    """Shorthand for :func:`request` with the default attempt count."""
    return request(url, options)


@contextmanager
def stream(
    url: str,
    options: Optional[Mapping[str, Any]] = None,
    retries: Optional[int] = None,
) -> Iterator[httpx.Response]:
    """Open a streaming GET to *url*, retrying exactly like :func:`request`.

    The yielded response body is unread; iterate it with
    ``response.iter_bytes()``.  Response and client are closed on exit.
    """
    with httpx.Client(**_merge_options(options)) as client:
        response = _with_retries(url, retries, lambda: _open_stream(client, url))
        try:
            yield response
        finally:
            response.close()
