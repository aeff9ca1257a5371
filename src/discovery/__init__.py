"""Discovery of repository roots for vanity import paths."""

from discovery.config import DiscoveryConfig, load_config
from discovery.errors import (
    AmbiguousMatch,
    DiscoveryError,
    InvalidRepoRoot,
    MalformedIdentifier,
    NetworkError,
    NoHints,
    NoMatch,
    SecurityMismatch,
    UnsupportedEncoding,
)
from discovery.matcher import match_go_import
from discovery.models import DiscoveryRequest, MetaImport
from discovery.resolver import repo_root_for_import_dynamic, resolve
from discovery.url_validate import validate_repo_root

__all__ = [
    "AmbiguousMatch",
    "DiscoveryConfig",
    "DiscoveryError",
    "DiscoveryRequest",
    "InvalidRepoRoot",
    "MalformedIdentifier",
    "MetaImport",
    "NetworkError",
    "NoHints",
    "NoMatch",
    "SecurityMismatch",
    "UnsupportedEncoding",
    "load_config",
    "match_go_import",
    "repo_root_for_import_dynamic",
    "resolve",
    "validate_repo_root",
]
