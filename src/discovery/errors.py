"""Error taxonomy for repository-root discovery.

Every failure of a resolution is terminal for that call and is raised as a
subclass of :class:`DiscoveryError`; callers decide whether to skip, abort or
report.
"""
from __future__ import annotations

from typing import List, Optional, Sequence


class DiscoveryError(Exception):
    """Base class for all discovery failures."""


class MalformedIdentifier(DiscoveryError, ValueError):
    """The identifier does not begin with a dotted hostname."""

    def __init__(self, identifier: str, reason: str = "import path does not begin with hostname"):
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"{identifier}: {reason}")


class NetworkError(DiscoveryError):
    """Transport failure (DNS, connection, timeout) while fetching a discovery URL."""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"unable to fetch {url}{detail}")


class UnsupportedEncoding(DiscoveryError):
    """The document declares a character encoding other than utf-8 or ascii."""

    def __init__(self, charset: str):
        self.charset = charset
        super().__init__(f"can't decode document using charset {charset!r}")


class NoHints(DiscoveryError):
    """The document was fetched but contained no go-import meta tags."""

    def __init__(self, url: Optional[str] = None):
        self.url = url
        where = f"{url}: " if url else ""
        super().__init__(f"{where}no import instructions found")


class NoMatch(DiscoveryError):
    """Meta tags were present but none bound the identifier."""

    def __init__(self, identifier: str, mismatches: Sequence[str], url: Optional[str] = None):
        self.identifier = identifier
        self.mismatches: List[str] = list(mismatches)
        self.url = url
        details = ", ".join(
            f"meta tag {prefix} did not match import path {identifier}"
            for prefix in self.mismatches
        )
        where = f"parse {url}: " if url else ""
        super().__init__(f"{where}no go-import meta tags ({details})")


class AmbiguousMatch(DiscoveryError):
    """More than one meta tag of comparable precedence matches the identifier."""

    def __init__(self, identifier: str, url: Optional[str] = None):
        self.identifier = identifier
        self.url = url
        where = f"parse {url}: " if url else ""
        super().__init__(f"{where}multiple meta tags match import path {identifier!r}")


class SecurityMismatch(DiscoveryError):
    """The discovery page for the claimed prefix disagrees with the original claim."""

    def __init__(self, url: str, prefix_url: Optional[str], prefix: str):
        self.url = url
        self.prefix_url = prefix_url
        self.prefix = prefix
        other = prefix_url or f"discovery for {prefix}"
        super().__init__(f"{url} and {other} disagree about go-import for {prefix}")


class InvalidRepoRoot(DiscoveryError):
    """The repository root is not an absolute URL or uses a disallowed scheme."""

    def __init__(self, repo_root: str, reason: str, url: Optional[str] = None):
        self.repo_root = repo_root
        self.reason = reason
        self.url = url
        where = f"{url}: " if url else ""
        super().__init__(f"{where}invalid repo root {repo_root!r}: {reason}")
