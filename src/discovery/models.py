"""Data models for discovery requests and meta import records."""

from dataclasses import dataclass
from urllib.parse import quote

from constants import Constants

# Sub-delimiters left unescaped in a URL path; "?", "#" and spaces are escaped.
_PATH_SAFE = "/$&+,:;=@"


@dataclass(frozen=True)
class DiscoveryRequest:
    """Scheme-less discovery target derived from an identifier."""
    host: str
    path: str = "/"
    query: str = Constants.DISCOVERY_QUERY

    def url(self, scheme: str) -> str:
        """Render the wire URL for the given scheme."""
        return f"{scheme}://{self.host}{quote(self.path, safe=_PATH_SAFE)}?{self.query}"


@dataclass(frozen=True)
class MetaImport:
    """One parsed <meta name="go-import" content="prefix vcs repo_root"> tag."""
    prefix: str
    vcs: str
    repo_root: str

    @property
    def is_module(self) -> bool:
        """True for module-aware ("mod") hints."""
        return self.vcs == Constants.MODULE_VCS
