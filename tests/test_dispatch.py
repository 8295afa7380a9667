"""Tests for autosite.pages.dispatch — per-request serving logic."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from chirp.http.response import Redirect, Response

from autosite.content.paths import Date
from autosite.pages.binder import bind_template
from autosite._errors import PageError
from autosite.pages.dispatch import dispatch, raw_request_uri, render_context
from autosite.pages.page import Page


def _boom() -> str:
    msg = "helper exploded"
    raise ValueError(msg)


@pytest.fixture
def about(tmp_site: Path) -> Page:
    template = bind_template(
        ["base.tmpl", "pages/about.tmpl"],
        root=tmp_site,
        helpers={"live": lambda: False, "domain": lambda: ""},
    )
    return Page(title="My Site", uri="/about", template=template)


class TestUriMatch:
    """The request URI must equal the page URI exactly."""

    def test_exact_match_renders(self, about: Page) -> None:
        result = dispatch(about, "/about")
        assert isinstance(result, Response)
        assert result.status == 200
        assert "<title>My Site</title>" in result.text
        assert "My Site: /about" in result.text

    def test_trailing_slash_is_not_found(self, about: Page) -> None:
        result = dispatch(about, "/about/")
        assert isinstance(result, Response)
        assert result.status == 404

    def test_query_string_is_not_found(self, about: Page) -> None:
        result = dispatch(about, "/about?ref=home")
        assert isinstance(result, Response)
        assert result.status == 404

    def test_mismatch_logged(self, about: Page, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="autosite.dispatch"):
            dispatch(about, "/other")
        assert "bad request URI /other, want /about" in caplog.text


class TestLiveHost:
    """With a live domain, the request host must match it."""

    def test_matching_host(self, about: Page) -> None:
        result = dispatch(about, "/about", host="example.com", live_domain="example.com")
        assert isinstance(result, Response)
        assert result.status == 200

    def test_port_ignored(self, about: Page) -> None:
        result = dispatch(about, "/about", host="example.com:8080", live_domain="example.com")
        assert result.status == 200

    def test_foreign_host(self, about: Page) -> None:
        result = dispatch(about, "/about", host="other.org", live_domain="example.com")
        assert result.status == 404

    def test_missing_host(self, about: Page) -> None:
        result = dispatch(about, "/about", live_domain="example.com")
        assert result.status == 404

    def test_dev_ignores_host(self, about: Page) -> None:
        result = dispatch(about, "/about", host="anything")
        assert result.status == 200


class TestRedirect:
    """Redirect pages answer with a 302 to their target."""

    def test_redirect(self) -> None:
        page = Page(title="T", uri="/x", redirect_uri="/y")
        result = dispatch(page, "/x")
        assert isinstance(result, Redirect)
        assert result.url == "/y"
        assert result.status == 302

    def test_redirect_still_requires_exact_uri(self) -> None:
        page = Page(title="T", uri="/x", redirect_uri="/y")
        result = dispatch(page, "/x?y=1")
        assert isinstance(result, Response)
        assert result.status == 404


class TestRenderFailure:
    """A failing render is a 500 plus a critical log record."""

    def test_internal_error(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        (tmp_path / "p.tmpl").write_text("{{ boom() }}")
        template = bind_template(["p.tmpl"], root=tmp_path, helpers={"boom": _boom})
        page = Page(title="T", uri="/p", template=template)

        with caplog.at_level(logging.CRITICAL, logger="autosite.dispatch"):
            result = dispatch(page, "/p")

        assert isinstance(result, Response)
        assert result.status == 500
        assert result.text == "Internal server error."
        assert any(r.levelno == logging.CRITICAL for r in caplog.records)

    def test_page_without_body_raises(self) -> None:
        page = Page(title="T", uri="/x", redirect_uri="/y")
        page.redirect_uri = ""
        with pytest.raises(PageError, match="neither a template nor a redirect"):
            dispatch(page, "/x")


class TestRenderContext:
    """render_context — PageContext plus flattened fields."""

    def test_keys(self) -> None:
        page = Page(title="T", uri="/x", date=Date(2020, 3), redirect_uri="/y")
        ctx = render_context(page)
        assert ctx["page"] == page.context()
        assert ctx["title"] == "T"
        assert ctx["uri"] == "/x"
        assert ctx["date"] == Date(2020, 3)
        assert ctx["is_live"] is False
        assert ctx["data"] is None


class TestRawRequestUri:
    """raw_request_uri — the URI as the client sent it."""

    def test_prefers_raw_path(self) -> None:
        scope = {"path": "/about", "raw_path": b"/%61bout", "query_string": b""}
        assert raw_request_uri(scope) == "/%61bout"

    def test_appends_query(self) -> None:
        scope = {"path": "/about", "raw_path": b"/about", "query_string": b"x=%20"}
        assert raw_request_uri(scope) == "/about?x=%20"

    def test_falls_back_to_path(self) -> None:
        assert raw_request_uri({"path": "/about"}) == "/about"
        assert raw_request_uri({"path": "/about", "raw_path": None}) == "/about"

    def test_encoded_uri_misses_page(self, about: Page) -> None:
        result = dispatch(about, raw_request_uri({"path": "/about", "raw_path": b"/%61bout"}))
        assert isinstance(result, Response)
        assert result.status == 404
