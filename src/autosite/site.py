"""Site — pages discovered from template files, served as chirp routes.

Example::

    site = Site.new(
        "Some title",        # for HTML <head>
        "pages/*.tmpl",      # pattern for pages on disk
        "example.com",       # live domain
        ["base.tmpl"],       # shared templates
        root=Path("my-site"),
    )
    site.change_uri("/index", "/")
    site.add_redirect("/old", "/new")
    site.register(app)

This serves ``/Foo`` and ``/Bar`` for ``pages/Foo.tmpl`` and
``pages/Bar.tmpl``, each compiled together with ``base.tmpl``.

Lifecycle:
    The build phase (``new``/``read``, ``add_page``, ``change_uri``,
    ``add_redirect``) is single-threaded.  ``register()`` freezes the
    registry; after that pages are read-only and concurrent dispatch is
    safe without locks.

"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from chirp import App
from chirp.http.request import Request
from chirp.http.response import Redirect, Response

from autosite._errors import RegistryError
from autosite.content.discovery import get_files
from autosite.content.paths import DEFAULT_SUFFIX, Date, parse_path
from autosite.pages.binder import bind_template
from autosite.pages.dispatch import dispatch, raw_request_uri, request_uri_var
from autosite.pages.page import Page

if TYPE_CHECKING:
    from autosite._types import LiveDetector

logger = logging.getLogger("autosite.site")


def _never_live() -> bool:
    return False


class PageRegistry:
    """URI -> Page mapping, built once and read thereafter.

    Not safe for concurrent mutation.  ``freeze()`` ends the build phase;
    any later mutation raises ``RegistryError``.
    """

    __slots__ = ("_frozen", "_pages")

    def __init__(self) -> None:
        self._pages: dict[str, Page] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the page registry after its handlers are registered. "
                "Add, remap, and redirect pages before calling register()."
            )
            raise RegistryError(msg)

    def put(self, page: Page) -> None:
        """Insert *page* under its URI, replacing any existing entry."""
        self._check_not_frozen()
        self._pages[page.uri] = page

    def insert(self, page: Page) -> None:
        """Insert *page* under its URI; the URI must be free."""
        self._check_not_frozen()
        if page.uri in self._pages:
            msg = f"URI {page.uri} is already registered to {self._pages[page.uri]}"
            raise RegistryError(msg)
        self._pages[page.uri] = page

    def move(self, uri: str, new_uri: str) -> Page:
        """Move the page at *uri* to *new_uri*, rewriting ``page.uri``."""
        self._check_not_frozen()
        if not new_uri.startswith("/"):
            msg = f"page URI must start with '/': {new_uri!r}"
            raise RegistryError(msg)
        page = self._pages.get(uri)
        if page is None:
            msg = f"no page with URI {uri}"
            raise RegistryError(msg)
        page.uri = new_uri
        del self._pages[uri]
        self._pages[new_uri] = page
        return page

    def get(self, uri: str) -> Page | None:
        return self._pages.get(uri)

    def __contains__(self, uri: object) -> bool:
        return uri in self._pages

    def __iter__(self) -> Iterator[Page]:
        return iter(list(self._pages.values()))

    def __len__(self) -> int:
        return len(self._pages)


class Site:
    """A site whose routes come from the layout of template files on disk.

    Args:
        title: Site title, copied onto every page.
        glob: Pattern for page templates, relative to *root*.
        live_domain: Production host, e.g. ``"example.com"``.
        templates: Shared templates compiled with every page, relative to *root*.
        root: Directory the glob and template paths resolve against.
        is_live: Detector returning True when running on the live domain.
        base_template: Entry template rendered for each page; defaults to
            the page's own template.
        suffix: Template file extension stripped from page names.

    """

    def __init__(
        self,
        title: str,
        glob: str,
        live_domain: str,
        templates: Sequence[str],
        *,
        root: Path | None = None,
        is_live: LiveDetector | None = None,
        base_template: str | None = None,
        suffix: str = DEFAULT_SUFFIX,
    ) -> None:
        self.title = title
        self.glob = glob
        self.live_domain = live_domain
        self.templates: tuple[str, ...] = tuple(templates)
        self.root = root if root is not None else Path.cwd()
        self.base_template = base_template
        self.suffix = suffix
        self._detect_live: LiveDetector = is_live or _never_live
        self._registry = PageRegistry()
        self._handlers: dict[str, Page] = {}

    @classmethod
    def new(
        cls,
        title: str,
        glob: str,
        live_domain: str,
        templates: Sequence[str],
        **kwargs: Any,
    ) -> Site:
        """Create a site and read its pages from disk.

        Raises:
            BuildError: On any discovery, path, date, or template failure.
                The site must not be served in that case.

        """
        site = cls(title, glob, live_domain, templates, **kwargs)
        site.read()
        return site

    # -- Build phase --

    def read(self) -> None:
        """Discover page templates and add a page for each."""
        for path in get_files(self.glob, self.root):
            uri, d = parse_path(path, self.suffix)
            self.add_page(uri, d, None, path)
        logger.info("read %d pages from %s", len(self._registry), self.glob)

    @property
    def is_live(self) -> bool:
        """Whether the site is running on its live domain."""
        return self._detect_live()

    def _helpers(self, live: bool) -> dict[str, Callable[[], Any]]:
        domain = self.live_domain if live else ""
        return {
            "live": lambda: live,
            "domain": lambda: domain,
        }

    def add_page(self, uri: str, date: Date, data: Any, template_path: str) -> Page:
        """Compile *template_path* with the shared templates and add it at *uri*.

        An existing page at *uri* is replaced.
        """
        live = self.is_live
        template = bind_template(
            [*self.templates, template_path],
            root=self.root,
            helpers=self._helpers(live),
            base=self.base_template,
        )
        page = Page(
            title=self.title,
            uri=uri,
            date=date,
            is_live=live,
            data=data,
            template=template,
        )
        self._registry.put(page)
        logger.debug("added %s from %s", page, template_path)
        return page

    def change_uri(self, uri: str, new_uri: str) -> Page:
        """Serve the page registered at *uri* on *new_uri* instead.

        Raises:
            RegistryError: If no page is registered at *uri*.

        """
        page = self._registry.move(uri, new_uri)
        logger.info("remapped %s to %s", uri, new_uri)
        return page

    def add_redirect(self, uri: str, redirect_uri: str) -> Page:
        """Serve a 302 redirect to *redirect_uri* at *uri*.

        Raises:
            RegistryError: If *uri* is already registered.

        """
        page = Page(
            title=self.title,
            uri=uri,
            is_live=self.is_live,
            redirect_uri=redirect_uri,
        )
        self._registry.insert(page)
        logger.info("added redirect %s -> %s", uri, redirect_uri)
        return page

    # -- Serve phase --

    def handler_pattern(self, page: Page, *, live: bool | None = None) -> str:
        """The pattern *page* is registered under: bare URI, or domain-prefixed when live."""
        if live is None:
            live = self.is_live
        if live:
            return f"{self.live_domain}{page.uri}"
        return page.uri

    def register(self, app: App) -> int:
        """Register a chirp route for every page and freeze the registry.

        Must be called before the chirp app is frozen (before first request).

        Returns:
            The number of handlers registered.

        """
        live = self.is_live
        live_domain = self.live_domain if live else ""
        for page in self._registry:
            pattern = self.handler_pattern(page, live=live)
            handler = self._make_page_handler(page, live_domain)
            app.route(page.uri, name=f"page:{page.uri}")(handler)
            self._handlers[pattern] = page
            logger.info("registered handler %s: %s", pattern, page)
        self._registry.freeze()
        return len(self._handlers)

    def _make_page_handler(self, page: Page, live_domain: str) -> Any:
        """Create a chirp route handler that dispatches to *page*.

        The handler matches on the undecoded URI recorded by ``SiteApp``;
        under a plain chirp ``App`` it falls back to ``request.url``.
        """

        async def page_handler(request: Request) -> Response | Redirect:
            return dispatch(
                page,
                request_uri_var.get() or request.url,
                host=request.headers.get("host"),
                live_domain=live_domain,
            )

        page_handler.__name__ = f"page_{len(self._handlers)}"
        page_handler.__qualname__ = f"Site.page_{len(self._handlers)}"
        return page_handler

    # -- Introspection --

    def get(self, uri: str) -> Page | None:
        """Return the page registered at *uri*, if any."""
        return self._registry.get(uri)

    def __contains__(self, uri: object) -> bool:
        return uri in self._registry

    @property
    def pages(self) -> tuple[Page, ...]:
        """All registered pages, in registration order."""
        return tuple(self._registry)

    @property
    def registry(self) -> PageRegistry:
        return self._registry

    @property
    def handlers(self) -> Mapping[str, Page]:
        """Handler pattern -> Page, populated by ``register()``."""
        return MappingProxyType(self._handlers)


class SiteApp(App):
    """chirp App that records each request's undecoded URI for page handlers.

    ASGI servers percent-decode ``scope["path"]``, so ``/%61bout`` would
    reach the ``/about`` handler looking like ``/about``.  Pages match on
    the URI exactly as sent.
    """

    __slots__ = ()

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await super().__call__(scope, receive, send)
            return
        token = request_uri_var.set(raw_request_uri(scope))
        try:
            await super().__call__(scope, receive, send)
        finally:
            request_uri_var.reset(token)
