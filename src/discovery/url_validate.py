"""Validation of repository root URLs returned by discovery."""
from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from constants import Constants
from discovery.errors import InvalidRepoRoot


def validate_repo_root(repo_root: str, *, url: Optional[str] = None) -> str:
    """Return ``repo_root`` if it is an absolute URL with an allowed scheme.

    A ``file`` root would let a discovery page point later clone operations
    at an arbitrary local path, so it is refused.

    Raises:
        InvalidRepoRoot: unparsable URL, missing scheme, or disallowed scheme.
    """
    try:
        parts = urlsplit(repo_root)
    except ValueError as exc:
        raise InvalidRepoRoot(repo_root, str(exc), url=url) from exc
    if not parts.scheme:
        raise InvalidRepoRoot(repo_root, "no scheme", url=url)
    if parts.scheme.lower() in Constants.DISALLOWED_REPO_SCHEMES:
        raise InvalidRepoRoot(repo_root, f"{parts.scheme} scheme disallowed", url=url)
    return repo_root
