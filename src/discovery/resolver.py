"""Resolve a vanity import path to the repository root that hosts it.

A host may only speak for paths it controls. When the matching meta tag
claims a prefix shorter than the identifier, the prefix's own discovery page
is fetched and must make exactly the same claim before the repository root is
trusted. For example, if "uni.edu/bob/project" says the prefix "uni.edu"
lives at "evilroot.com", "uni.edu" itself is asked before Bob is believed.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from constants import ModuleMode
from discovery.config import DiscoveryConfig
from discovery.errors import DiscoveryError, NoHints, SecurityMismatch
from discovery.fetch import fetch_meta_imports
from discovery.matcher import match_go_import
from discovery.models import MetaImport
from discovery.request import url_for_import_path
from discovery.url_validate import validate_repo_root

logger = logging.getLogger(__name__)


def _apply_module_mode(imports: List[MetaImport], config: DiscoveryConfig, url: str) -> List[MetaImport]:
    if config.module_mode is ModuleMode.PREFER:
        return imports
    kept = [im for im in imports if not im.is_module]
    if not kept:
        raise NoHints(url)
    return kept


def discover(identifier: str, config: DiscoveryConfig) -> Tuple[str, MetaImport]:
    """Fetch the discovery page for ``identifier`` and select its meta import.

    Returns:
        ``(url, meta_import)`` where ``url`` is the discovery URL fetched.
    """
    request = url_for_import_path(identifier)
    url, imports = fetch_meta_imports(request, config=config)
    imports = _apply_module_mode(imports, config, url)
    return url, match_go_import(imports, identifier, url=url)


def verify_prefix(mmi: MetaImport, url: str, config: DiscoveryConfig) -> None:
    """Confirm that the prefix's own discovery page makes the same claim.

    Raises:
        SecurityMismatch: the prefix lookup failed or returned a different tag.
    """
    prefix_url: Optional[str] = None
    try:
        prefix_url, confirmed = discover(mmi.prefix, config)
    except DiscoveryError as exc:
        logger.warning("Verification of prefix %s failed: %s", mmi.prefix, exc)
        raise SecurityMismatch(url, getattr(exc, "url", None), mmi.prefix) from exc
    if confirmed != mmi:
        logger.warning(
            "Prefix %s disagrees: %s claims %s %s, %s claims %s %s",
            mmi.prefix, url, mmi.vcs, mmi.repo_root,
            prefix_url, confirmed.vcs, confirmed.repo_root,
        )
        raise SecurityMismatch(url, prefix_url, mmi.prefix)


def repo_root_for_import_dynamic(identifier: str, config: Optional[DiscoveryConfig] = None) -> str:
    """Find the repository root for a custom-domain identifier.

    Handles identifiers like "name.tld/pkg/foo" or just "name.tld". Issues one
    request, or two when the matching tag's prefix differs from the
    identifier.

    Raises:
        DiscoveryError: any failure; see :mod:`discovery.errors`.
    """
    config = config or DiscoveryConfig()
    if is_debug_enabled(logger):
        logger.debug("Resolving identifier", extra=extra_context(
            event="function_entry", component="resolver", action="resolve", target=identifier
        ))

    url, mmi = discover(identifier, config)
    if mmi.prefix != identifier:
        verify_prefix(mmi, url, config)

    repo_root = validate_repo_root(mmi.repo_root, url=url)
    logger.debug("%s resolved to %s (%s)", identifier, repo_root, mmi.vcs)
    return repo_root


resolve = repo_root_for_import_dynamic
