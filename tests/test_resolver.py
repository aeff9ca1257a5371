"""Tests for end-to-end repository root resolution and prefix verification."""

import pytest
import requests

from constants import ModuleMode
from discovery import resolve
from discovery.config import DiscoveryConfig
from discovery.errors import (
    AmbiguousMatch,
    InvalidRepoRoot,
    MalformedIdentifier,
    NetworkError,
    NoHints,
    NoMatch,
    SecurityMismatch,
)
from discovery.resolver import repo_root_for_import_dynamic

from conftest import go_import_page

PKG_TAG = ("example.org/pkg", "git", "https://example.org/pkg.git")
PKG_URL = "https://example.org/pkg?go-get=1"
SUB_URL = "https://example.org/pkg/sub?go-get=1"


class TestResolve:
    """Test the primary lookup."""

    def test_exact_prefix_needs_single_fetch(self, fake_web):
        fake_web.serve(PKG_URL, go_import_page(PKG_TAG))

        assert resolve("example.org/pkg") == "https://example.org/pkg.git"
        assert fake_web.urls == [PKG_URL]

    def test_subpackage_is_verified_against_prefix(self, fake_web):
        page = go_import_page(PKG_TAG)
        fake_web.serve(SUB_URL, page)
        fake_web.serve(PKG_URL, page)

        assert resolve("example.org/pkg/sub") == "https://example.org/pkg.git"
        assert fake_web.urls == [SUB_URL, PKG_URL]

    def test_string_prefix_only_is_no_match(self, fake_web):
        fake_web.serve("https://example.org/pkgfoo?go-get=1", go_import_page(PKG_TAG))

        with pytest.raises(NoMatch) as exc_info:
            resolve("example.org/pkgfoo")
        assert exc_info.value.mismatches == ["example.org/pkg"]
        assert len(fake_web.calls) == 1

    @pytest.mark.parametrize("identifier", ["localhost/pkg", "example.org@evil.com/pkg", "example.org#x/pkg"])
    def test_malformed_identifier_makes_no_request(self, fake_web, identifier):
        fake_web.serve("https://evil.com/pkg?go-get=1", go_import_page(
            ("example.org@evil.com/pkg", "git", "https://evil.com/x.git"),
        ))
        with pytest.raises(MalformedIdentifier):
            resolve(identifier)
        assert fake_web.calls == []

    def test_ambiguous_tags(self, fake_web):
        fake_web.serve("https://a.org/b/c?go-get=1", go_import_page(
            ("a.org", "git", "https://x.example/a"),
            ("a.org/b", "git", "https://y.example/ab"),
        ))
        with pytest.raises(AmbiguousMatch):
            resolve("a.org/b/c")

    def test_network_error_on_primary_fetch(self, fake_web):
        fake_web.fail(PKG_URL, requests.ConnectionError("dns failure"))
        with pytest.raises(NetworkError):
            resolve("example.org/pkg")

    def test_page_without_tags(self, fake_web):
        fake_web.serve(PKG_URL, b"<html><head><title>pkg</title></head></html>")
        with pytest.raises(NoHints):
            resolve("example.org/pkg")

    def test_file_repo_root_rejected(self, fake_web):
        fake_web.serve(PKG_URL, go_import_page(("example.org/pkg", "git", "file:///tmp/x")))
        with pytest.raises(InvalidRepoRoot) as exc_info:
            resolve("example.org/pkg")
        assert exc_info.value.url == PKG_URL

    def test_schemeless_repo_root_rejected(self, fake_web):
        fake_web.serve(PKG_URL, go_import_page(("example.org/pkg", "git", "pkg.git")))
        with pytest.raises(InvalidRepoRoot):
            resolve("example.org/pkg")

    def test_responses_are_released(self, fake_web):
        page = go_import_page(PKG_TAG)
        fake_web.serve(SUB_URL, page)
        fake_web.serve(PKG_URL, page)

        resolve("example.org/pkg/sub")

        assert len(fake_web.responses) == 2
        for res in fake_web.responses:
            res.close.assert_called_once()

    def test_resolve_is_an_alias(self):
        assert resolve is repo_root_for_import_dynamic


class TestPrefixVerification:
    """Test that a subpath cannot speak for a prefix it does not control."""

    def test_disagreeing_prefix_page(self, fake_web):
        fake_web.serve(SUB_URL, go_import_page(("example.org/pkg", "git", "https://evil.example/pkg.git")))
        fake_web.serve(PKG_URL, go_import_page(PKG_TAG))

        with pytest.raises(SecurityMismatch) as exc_info:
            resolve("example.org/pkg/sub")

        err = exc_info.value
        assert err.prefix == "example.org/pkg"
        assert err.url == SUB_URL
        assert err.prefix_url == PKG_URL
        assert str(err) == f"{SUB_URL} and {PKG_URL} disagree about go-import for example.org/pkg"

    def test_prefix_page_with_different_vcs(self, fake_web):
        fake_web.serve(SUB_URL, go_import_page(("example.org/pkg", "hg", "https://example.org/pkg.git")))
        fake_web.serve(PKG_URL, go_import_page(PKG_TAG))
        with pytest.raises(SecurityMismatch):
            resolve("example.org/pkg/sub")

    def test_unreachable_prefix_page(self, fake_web):
        fake_web.serve(SUB_URL, go_import_page(PKG_TAG))
        fake_web.fail(PKG_URL, requests.ConnectionError("refused"))

        with pytest.raises(SecurityMismatch) as exc_info:
            resolve("example.org/pkg/sub")
        assert isinstance(exc_info.value.__cause__, NetworkError)
        assert fake_web.urls == [SUB_URL, PKG_URL]

    def test_prefix_page_without_matching_tag(self, fake_web):
        fake_web.serve(SUB_URL, go_import_page(PKG_TAG))
        fake_web.serve(PKG_URL, go_import_page(("other.org/x", "git", "https://other.org/x")))
        with pytest.raises(SecurityMismatch) as exc_info:
            resolve("example.org/pkg/sub")
        assert isinstance(exc_info.value.__cause__, NoMatch)

    def test_prefix_page_delegating_further_up(self, fake_web):
        fake_web.serve("https://example.org/pkg/sub/deep?go-get=1", go_import_page(PKG_TAG))
        fake_web.serve(PKG_URL, go_import_page(("example.org", "git", "https://example.org/all.git")))
        with pytest.raises(SecurityMismatch):
            resolve("example.org/pkg/sub/deep")

    def test_verification_matches_on_the_prefix(self, fake_web):
        fake_web.serve(SUB_URL, go_import_page(PKG_TAG))
        fake_web.serve(PKG_URL, go_import_page(
            PKG_TAG,
            ("example.org/pkg/sub", "git", "https://example.org/sub.git"),
        ))
        assert resolve("example.org/pkg/sub") == "https://example.org/pkg.git"

    def test_prefix_page_must_claim_the_prefix_itself(self, fake_web):
        """A page that only describes deeper paths does not vouch for the prefix."""
        fake_web.serve(SUB_URL, go_import_page(PKG_TAG))
        fake_web.serve(PKG_URL, go_import_page(
            ("example.org/pkg/sub", "git", "https://example.org/pkg.git"),
        ))
        with pytest.raises(SecurityMismatch) as exc_info:
            resolve("example.org/pkg/sub")
        assert isinstance(exc_info.value.__cause__, NoMatch)


class TestModuleMode:
    """Test handling of module-aware tags."""

    PAGE_TAGS = (
        ("example.org/pkg", "mod", "https://proxy.example.org"),
        ("example.org/pkg", "git", "https://example.org/pkg.git"),
    )

    def test_prefer_returns_mod_root(self, fake_web):
        fake_web.serve(PKG_URL, go_import_page(*self.PAGE_TAGS))
        assert resolve("example.org/pkg") == "https://proxy.example.org"

    def test_ignore_drops_mod_tags(self, fake_web):
        fake_web.serve(PKG_URL, go_import_page(*self.PAGE_TAGS))
        config = DiscoveryConfig(module_mode=ModuleMode.IGNORE)
        assert resolve("example.org/pkg", config) == "https://example.org/pkg.git"

    def test_ignore_with_only_mod_tags(self, fake_web):
        fake_web.serve(PKG_URL, go_import_page(self.PAGE_TAGS[0]))
        config = DiscoveryConfig(module_mode=ModuleMode.IGNORE)
        with pytest.raises(NoHints):
            resolve("example.org/pkg", config)
