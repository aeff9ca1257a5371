"""Fetch a discovery page and extract its meta imports."""
from __future__ import annotations

import logging
import time
from typing import Iterator, List, Optional, Tuple

import requests

from common.http_client import stream_get
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from constants import Constants
from discovery.config import DiscoveryConfig
from discovery.errors import NetworkError
from discovery.meta_parser import parse_meta_imports
from discovery.models import DiscoveryRequest, MetaImport

logger = logging.getLogger(__name__)


def _body_chunks(res: requests.Response, url: str, deadline: float) -> Iterator[bytes]:
    """Yield the response body, turning mid-stream transport errors into NetworkError.

    ``requests`` only bounds each socket read, so the overall deadline for the
    exchange is enforced here between chunks.
    """
    try:
        for chunk in res.iter_content(chunk_size=Constants.BODY_CHUNK_SIZE):
            if time.monotonic() > deadline:
                exc = requests.Timeout(f"{safe_url(url)} body not received before deadline")
                raise NetworkError(url, exc) from exc
            yield chunk
    except requests.RequestException as exc:
        raise NetworkError(url, exc) from exc


def fetch_meta_imports(
    request: DiscoveryRequest,
    *,
    config: Optional[DiscoveryConfig] = None,
) -> Tuple[str, List[MetaImport]]:
    """Fetch ``request`` and return ``(url, imports)``.

    The configured schemes are tried in order and a NetworkError moves on to
    the next one; the URL of the first successful fetch is returned. The
    response is always closed before returning.

    Raises:
        NetworkError: every scheme failed at transport level.
        UnsupportedEncoding, NoHints: from the meta tag scan.
    """
    config = config or DiscoveryConfig()
    last_error: Optional[NetworkError] = None
    for scheme in config.schemes:
        url = request.url(scheme)
        deadline = time.monotonic() + config.timeout
        try:
            with stream_get(url, timeout=config.timeout, user_agent=config.user_agent) as res:
                imports = parse_meta_imports(_body_chunks(res, url, deadline), url=url)
        except requests.RequestException as exc:
            last_error = NetworkError(url, exc)
            last_error.__cause__ = exc
        except NetworkError as exc:
            last_error = exc
        else:
            if is_debug_enabled(logger):
                logger.debug("Fetched meta imports", extra=extra_context(
                    event="function_exit", component="fetch", action="fetch_meta_imports",
                    count=len(imports), target=safe_url(url)
                ))
            return url, imports

        if is_debug_enabled(logger):
            logger.debug("Discovery fetch failed", extra=extra_context(
                event="decision", component="fetch", action="fetch_meta_imports",
                outcome="next_scheme", target=safe_url(url)
            ))

    if last_error is None:
        raise ValueError("no discovery schemes configured")
    raise last_error
