"""Tolerant scanner for <meta name="go-import"> tags.

The document is untrusted and frequently not well-formed, so it is never
parsed into a tree. Byte chunks are decoded incrementally and fed to a
forward-only :class:`html.parser.HTMLParser` that records go-import tags and
stops at the end of <head> or the start of <body>, whichever comes first.
"""
from __future__ import annotations

import codecs
import logging
import re
from html.parser import HTMLParser
from typing import Iterable, List, Optional, Sequence, Tuple

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from discovery.errors import NetworkError, NoHints, UnsupportedEncoding
from discovery.models import MetaImport

logger = logging.getLogger(__name__)

_PROLOG_ENCODING = re.compile(r"""encoding\s*=\s*["']([^"']*)["']""", re.IGNORECASE)


def check_charset(charset: str) -> None:
    """Reject any declared charset other than utf-8 or ascii.

    ascii is read as utf-8; bytes above 0x7f are not rejected.
    """
    if charset.strip().lower() not in Constants.SUPPORTED_CHARSETS:
        raise UnsupportedEncoding(charset)


def attr_value(attrs: Sequence[Tuple[str, Optional[str]]], name: str) -> str:
    """Return the value of the case-insensitive attribute ``name``, or ''."""
    for key, value in attrs:
        if key.lower() == name:
            return value or ""
    return ""


class MetaImportScanner(HTMLParser):
    """HTMLParser collecting go-import meta tags from the document head."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.imports: List[MetaImport] = []
        self.done = False

    def handle_pi(self, data: str) -> None:
        if self.done or not data.lower().startswith("xml"):
            return
        match = _PROLOG_ENCODING.search(data)
        if match:
            check_charset(match.group(1))

    def handle_starttag(self, tag: str, attrs) -> None:
        if self.done:
            return
        if tag.lower() == "body":
            self.done = True
            return
        if tag.lower() != "meta":
            return
        if attr_value(attrs, "name").lower() != Constants.DISCOVERY_META_NAME:
            return
        fields = attr_value(attrs, "content").split()
        if len(fields) == 3:
            self.imports.append(MetaImport(prefix=fields[0], vcs=fields[1], repo_root=fields[2]))

    def handle_endtag(self, tag: str) -> None:
        if tag.lower() == "head":
            self.done = True


def parse_meta_imports(
    chunks: Iterable[bytes],
    encoding: Optional[str] = None,
    *,
    url: Optional[str] = None,
) -> List[MetaImport]:
    """Return the go-import meta tags found in a document, in document order.

    Args:
        chunks: The document body as an iterable of byte chunks.
        encoding: Encoding declared by the caller, if any.
        url: Discovery URL, used only in error messages.

    Raises:
        UnsupportedEncoding: a declared encoding is neither utf-8 nor ascii.
        NetworkError: the body stream failed before any tag was found.
        NoHints: the document holds no usable go-import tag.
    """
    if encoding is not None:
        check_charset(encoding)

    scanner = MetaImportScanner()
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    iterator = iter(chunks)
    while not scanner.done:
        try:
            chunk = next(iterator)
        except StopIteration:
            scanner.feed(decoder.decode(b"", final=True))
            scanner.close()
            break
        except NetworkError:
            if not scanner.imports:
                raise
            logger.debug("Body stream failed after %d meta tags; keeping partial result",
                         len(scanner.imports))
            break
        if chunk:
            scanner.feed(decoder.decode(chunk))

    if is_debug_enabled(logger):
        logger.debug("Parsed meta imports", extra=extra_context(
            event="parse", component="meta_parser", action="parse_meta_imports",
            count=len(scanner.imports), stopped_early=scanner.done
        ))
    if not scanner.imports:
        raise NoHints(url)
    return scanner.imports
