"""Repository roots for hosting services whose layout is known in advance."""
from __future__ import annotations

import logging
from typing import Optional

from constants import Constants
from discovery.config import DiscoveryConfig
from discovery.errors import MalformedIdentifier
from discovery.resolver import repo_root_for_import_dynamic

logger = logging.getLogger(__name__)


def github_repo_root(identifier: str) -> str:
    """Map ``github.com/org/repo[/sub...]`` to ``https://github.com/org/repo``.

    Raises:
        MalformedIdentifier: fewer than two path components after the host.
    """
    parts = identifier.split("/")
    if len(parts) < 3 or not parts[1] or not parts[2]:
        raise MalformedIdentifier(identifier, "github import path must name an owner and a repository")
    return f"{Constants.GITHUB_URL_BASE}/{parts[1]}/{parts[2]}"


def resolve_one(identifier: str, config: Optional[DiscoveryConfig] = None) -> str:
    """Resolve an identifier, skipping discovery for statically known hosts."""
    if identifier.startswith(Constants.GITHUB_HOST + "/"):
        root = github_repo_root(identifier)
        logger.debug("%s resolved statically to %s", identifier, root)
        return root
    return repo_root_for_import_dynamic(identifier, config)
