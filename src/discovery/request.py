"""Build discovery requests from package identifiers."""
from __future__ import annotations

import logging
import re

from common.logging_utils import extra_context, is_debug_enabled
from discovery.errors import MalformedIdentifier
from discovery.models import DiscoveryRequest

logger = logging.getLogger(__name__)

# Dotted DNS name, optionally followed by a port.
_HOST_RE = re.compile(r"[A-Za-z0-9_-]+(\.[A-Za-z0-9_-]+)+(:[0-9]+)?")


def split_identifier(identifier: str) -> tuple[str, str]:
    """Split an identifier at the first slash into (host, path)."""
    slash = identifier.find("/")
    if slash < 0:
        slash = len(identifier)
    return identifier[:slash], identifier[slash:]


def url_for_import_path(identifier: str) -> DiscoveryRequest:
    """Return the scheme-less discovery request for ``identifier``.

    The scheme is left to the fetcher so it can try every scheme the
    configuration permits.

    Raises:
        MalformedIdentifier: the host segment is not a dotted DNS name
            with an optional port.
    """
    host, path = split_identifier(identifier)
    if "." not in host:
        raise MalformedIdentifier(identifier)
    if not _HOST_RE.fullmatch(host):
        raise MalformedIdentifier(identifier, f"invalid host '{host}'")
    if not path:
        path = "/"
    request = DiscoveryRequest(host=host, path=path)
    if is_debug_enabled(logger):
        logger.debug("Built discovery request", extra=extra_context(
            event="function_exit", component="discovery", action="url_for_import_path",
            target=request.url("https")
        ))
    return request
