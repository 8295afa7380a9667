"""autosite application — build a Site from config and serve it with chirp.

The public functions (dev, serve, routes) are the primary entry points.
Build errors propagate as ``BuildError``; nothing is served from a site
that failed to build.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import TYPE_CHECKING

from autosite.config_loader import load_config
from autosite.site import Site, SiteApp

if TYPE_CHECKING:
    from chirp import App

    from autosite.config import SiteConfig


def build_site(config: SiteConfig) -> Site:
    """Discover pages, then apply the configured remaps and redirects.

    Raises:
        BuildError: If discovery, compilation, or a registry change fails.

    """
    is_live = config.is_live
    site = Site.new(
        config.title,
        config.glob,
        config.live_domain,
        config.templates,
        root=config.root,
        is_live=lambda: is_live,
        base_template=config.base_template,
        suffix=config.template_suffix,
    )
    for old, new in config.remap:
        site.change_uri(old, new)
    for uri, target in config.redirects:
        site.add_redirect(uri, target)
    return site


def create_app(site: Site, config: SiteConfig, *, debug: bool = False) -> App:
    """Create a chirp App serving *site*.

    The app is a ``SiteApp`` so pages match the undecoded request URI.
    Registers one route per page and mounts the static directory under
    ``/static`` when it exists.  Chirp's htmx helper snippets are turned
    off so rendered pages are served exactly as their templates produce them.
    """
    from chirp import AppConfig

    app = SiteApp(
        config=AppConfig(
            template_dir=config.root,
            debug=debug,
            host=config.host,
            port=config.port,
            safe_target=False,
            sse_lifecycle=False,
        )
    )
    site.register(app)
    _mount_static_files(app, config)
    return app


def _mount_static_files(app: App, config: SiteConfig) -> None:
    from chirp.middleware import StaticFiles

    if config.static_path.is_dir():
        app.add_middleware(StaticFiles(directory=config.static_path, prefix="/static"))


# Live serving listens on all interfaces unless the config file or caller says otherwise
_LIVE_DEFAULTS: dict[str, object] = {"host": "0.0.0.0"}


def _start(
    root: str | Path,
    mode: str,
    defaults: dict[str, object] | None = None,
    **kwargs: object,
) -> None:
    from autosite.banner import print_banner

    config = load_config(Path(root), defaults=defaults, mode=mode, **kwargs)
    t0 = time.perf_counter()

    site = build_site(config)
    app = create_app(site, config)

    load_ms = (time.perf_counter() - t0) * 1000
    print_banner(config, len(site.pages), mode=mode, load_ms=load_ms)

    app.run(host=config.host, port=config.port)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def dev(root: str | Path = ".", **kwargs: object) -> None:
    """Serve the site in development mode: pages on bare URIs.

    Args:
        root: Path to the site root directory.
        **kwargs: Override SiteConfig fields.

    """
    _start(root, "dev", **kwargs)


def serve(root: str | Path = ".", **kwargs: object) -> None:
    """Serve the site live: pages registered under the live domain.

    Args:
        root: Path to the site root directory.
        **kwargs: Override SiteConfig fields.

    """
    _start(root, "live", defaults=_LIVE_DEFAULTS, **kwargs)


def routes(root: str | Path = ".", **kwargs: object) -> list[tuple[str, str]]:
    """Build the site and return ``(handler pattern, page)`` rows.

    Args:
        root: Path to the site root directory.
        **kwargs: Override SiteConfig fields (``mode="live"`` shows live patterns).

    """
    config = load_config(Path(root), **kwargs)
    site = build_site(config)
    return [
        (site.handler_pattern(page, live=config.is_live), str(page))
        for page in site.pages
    ]
