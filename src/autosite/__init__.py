"""autosite — routes derived from the layout of template files on disk.

Point it at a glob of page templates and it serves one page per file::

    pages/about.tmpl           -> /about
    blog/2020/03/hello.tmpl    -> /blog/2020/03/hello   (dated March 2020)

Quick start::

    import autosite

    autosite.dev("my-site/")      # pages on bare URIs
    autosite.serve("my-site/")    # pages under the live domain

Programmatic use::

    from autosite import Site

    site = Site.new("Title", "pages/*.tmpl", "example.com", ["base.tmpl"])
    site.change_uri("/index", "/")
    site.register(app)

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "Date",
    "Page",
    "Site",
    "SiteConfig",
    "__version__",
    "dev",
    "routes",
    "serve",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import autosite`` fast while providing a clean top-level API.
    """
    if name == "Site":
        from autosite.site import Site

        return Site

    if name == "SiteConfig":
        from autosite.config import SiteConfig

        return SiteConfig

    if name == "Page":
        from autosite.pages.page import Page

        return Page

    if name == "Date":
        from autosite.content.paths import Date

        return Date

    if name in ("dev", "serve", "routes"):
        from autosite import app as _app

        return getattr(_app, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
