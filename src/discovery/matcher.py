"""Select the meta import that governs an identifier.

Both the primary lookup and the prefix verification call
:func:`match_go_import`, so the two phases always apply the same policy.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from discovery.errors import AmbiguousMatch, NoMatch
from discovery.models import MetaImport


def path_prefix(s: str, sub: str) -> bool:
    """Report whether ``sub`` is a prefix of ``s`` on whole path components."""
    if not s.startswith(sub):
        return False
    rem = s[len(sub):]
    return rem == "" or rem[0] == "/"


def match_go_import(
    imports: Sequence[MetaImport],
    identifier: str,
    *,
    url: Optional[str] = None,
) -> MetaImport:
    """Return the single meta import whose prefix bounds ``identifier``.

    Module-aware ("mod") entries are expected to precede all others; once a
    mod entry has matched, later non-mod matches are ignored.

    Raises:
        AmbiguousMatch: two entries of comparable precedence match.
        NoMatch: no entry matches; carries the rejected prefixes.
    """
    match: Optional[MetaImport] = None
    mismatches: List[str] = []
    for im in imports:
        if not path_prefix(identifier, im.prefix):
            mismatches.append(im.prefix)
            continue
        if match is not None:
            if match.is_module and not im.is_module:
                break
            raise AmbiguousMatch(identifier, url=url)
        match = im

    if match is None:
        raise NoMatch(identifier, mismatches, url=url)
    return match
