"""Shared fixtures: fake discovery pages served through a patched requests.get."""

from unittest.mock import MagicMock, patch

import pytest
import requests


def go_import_page(*tags, body_tags=()):
    """Build an HTML discovery page from (prefix, vcs, repo_root) tuples."""
    metas = "\n".join(
        f'<meta name="go-import" content="{p} {v} {r}">' for p, v, r in tags
    )
    after = "\n".join(
        f'<meta name="go-import" content="{p} {v} {r}">' for p, v, r in body_tags
    )
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        f"{metas}\n"
        "</head>\n<body>\n"
        f"{after}\nNothing to see here.\n</body>\n</html>\n"
    ).encode("utf-8")


def make_response(body=b"", status_code=200, chunk_size=16, error=None):
    """Fake streaming response yielding ``body`` in chunks, then raising ``error`` if given."""
    res = MagicMock()
    res.status_code = status_code
    res.ok = 200 <= status_code < 300

    def iter_content(chunk_size_arg=None, **_kwargs):
        for i in range(0, len(body), chunk_size):
            yield body[i:i + chunk_size]
        if error is not None:
            raise error

    res.iter_content.side_effect = iter_content
    return res


class FakeWeb:
    """Maps URLs to fake responses or exceptions and records every request."""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.responses = []

    def serve(self, url, body=b"", **kwargs):
        self.routes[url] = ("body", body, kwargs)

    def fail(self, url, exc):
        self.routes[url] = ("error", exc, {})

    @property
    def urls(self):
        return [c["url"] for c in self.calls]

    def __call__(self, url, **kwargs):
        self.calls.append(dict(kwargs, url=url))
        kind, value, extra = self.routes.get(
            url, ("error", requests.ConnectionError(f"no route to {url}"), {})
        )
        if kind == "error":
            raise value
        res = make_response(value, **extra)
        self.responses.append(res)
        return res


@pytest.fixture
def fake_web():
    """Patch requests.get as used by the HTTP client with a FakeWeb router."""
    web = FakeWeb()
    with patch("common.http_client.requests.get", side_effect=web):
        yield web
