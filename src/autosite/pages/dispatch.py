"""Request dispatch — serve one page for one request.

Pure per-request logic: exact URI check, optional live-host check, then a
redirect or a render.  The chirp handler built by ``Site.register()`` only
extracts the request URI and host and delegates here.
"""

import logging
from collections.abc import Mapping
from contextvars import ContextVar
from typing import Any

from chirp.http.response import Redirect, Response

from autosite._errors import PageError, RenderError
from autosite.pages.page import Page

logger = logging.getLogger("autosite.dispatch")

# Undecoded request URI (raw path plus ?query) of the request being served
request_uri_var: ContextVar[str | None] = ContextVar("autosite_request_uri", default=None)

NOT_FOUND_BODY = "Not Found"
INTERNAL_ERROR_BODY = "Internal server error."


def _strip_port(host: str) -> str:
    if host.startswith("["):
        # [::1]:8000
        return host.partition("]")[0] + "]"
    return host.partition(":")[0]


def raw_request_uri(scope: Mapping[str, Any]) -> str:
    """Return the request URI of an ASGI *scope* as the client sent it.

    Uses ``raw_path`` (not percent-decoded) when the server provides it and
    falls back to ``path`` otherwise.
    """
    raw = scope.get("raw_path")
    path = raw.decode("latin-1") if raw else scope["path"]
    query = scope.get("query_string", b"")
    if query:
        return f"{path}?{query.decode('latin-1')}"
    return path


def render_context(page: Page) -> dict[str, Any]:
    """Template context for *page*: the PageContext plus its fields flattened."""
    ctx = page.context()
    return {
        "page": ctx,
        "title": ctx.title,
        "uri": ctx.uri,
        "date": ctx.date,
        "is_live": ctx.is_live,
        "data": ctx.data,
    }


def dispatch(
    page: Page,
    request_uri: str,
    *,
    host: str | None = None,
    live_domain: str = "",
) -> Response | Redirect:
    """Serve *page* for a request whose raw URI is *request_uri*.

    The URI must equal ``page.uri`` exactly, query string included, so
    ``/about?x=1`` and ``/about/`` both miss ``/about``.

    Args:
        page: The page the request was routed to.
        request_uri: Undecoded request path plus ``?query`` when present.
        host: Request ``Host`` header, if any.
        live_domain: When set, the host (port stripped) must equal it.

    Returns:
        404 on mismatch, a 302 ``Redirect`` for redirect pages, otherwise
        the rendered page (500 if rendering fails).

    """
    if request_uri != page.uri:
        logger.warning("bad request URI %s, want %s; serving 404", request_uri, page.uri)
        return Response(NOT_FOUND_BODY, status=404, content_type="text/plain; charset=utf-8")

    if live_domain and _strip_port(host or "") != live_domain:
        logger.warning("bad host %r for %s, want %r; serving 404", host, page.uri, live_domain)
        return Response(NOT_FOUND_BODY, status=404, content_type="text/plain; charset=utf-8")

    if page.redirect_uri:
        return Redirect(page.redirect_uri)

    template = page.template
    if template is None:
        msg = f"page {page.uri} has neither a template nor a redirect"
        raise PageError(msg)
    try:
        body = template.render(render_context(page))
    except RenderError:
        logger.critical("render failed for %s", page, exc_info=True)
        return Response(
            INTERNAL_ERROR_BODY, status=500, content_type="text/plain; charset=utf-8"
        )
    return Response(body)
