"""Shared HTTP helpers used by the discovery fetcher.

Encapsulates request/timeout logging so callers avoid duplicating
try/except blocks. This module is dependency-light and does not import the
discovery package; callers translate ``requests`` exceptions into their own
error types. There are no retries and no cache.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


@contextmanager
def stream_get(
    url: str,
    *,
    timeout: float = Constants.REQUEST_TIMEOUT,
    user_agent: str = Constants.USER_AGENT,
    headers: Optional[Dict[str, str]] = None,
) -> Iterator[requests.Response]:
    """Issue a single streaming GET and yield the response.

    The response is closed when the block exits, whether it completes or
    raises. The status code is not checked here.

    Raises:
        requests.RequestException: DNS failure, refused connection, timeout
            or invalid URL, after logging it.
    """
    safe_target = safe_url(url)
    request_headers = dict(headers or {})
    request_headers["User-Agent"] = user_agent
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                )
            )
        try:
            res = requests.get(url, headers=request_headers, timeout=timeout, stream=True)
        except requests.Timeout:
            logger.warning("%s request timed out after %s seconds", safe_target, timeout)
            raise
        except requests.RequestException as exc:  # includes ConnectionError
            logger.warning("%s connection error: %s", safe_target, exc)
            raise

    try:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                )
            )
        yield res
    finally:
        res.close()
