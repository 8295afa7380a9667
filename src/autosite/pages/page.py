"""Page model — one routable resource and its render-context view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from autosite._errors import PageError
from autosite.content.paths import Date

if TYPE_CHECKING:
    from autosite.pages.binder import CompiledTemplate


@dataclass(frozen=True, slots=True)
class PageContext:
    """What templates see of a page.

    A read-only view, so templates never reach into the registry's Page.

    Attributes:
        title: Site title, for ``<title>``.
        uri: URI the page is served on.
        date: Publication date; falsy for undated pages.
        is_live: True when the site runs on its live domain.
        data: Custom data, if any.

    """

    title: str
    uri: str
    date: Date
    is_live: bool
    data: Any = None


@dataclass(slots=True)
class Page:
    """A routable resource: a compiled template or a redirect, never both.

    ``uri`` is rewritten in place by ``Site.change_uri``; nothing else
    mutates a Page once the site is built.
    """

    title: str
    uri: str
    date: Date = field(default_factory=Date)
    is_live: bool = False
    data: Any = None
    redirect_uri: str = ""
    template: CompiledTemplate | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.uri.startswith("/"):
            msg = f"page URI must start with '/': {self.uri!r}"
            raise PageError(msg)
        if (self.template is None) == (not self.redirect_uri):
            msg = (
                f"page {self.uri} needs exactly one of a template or a redirect "
                f"(template={self.template!r}, redirect_uri={self.redirect_uri!r})"
            )
            raise PageError(msg)

    @property
    def is_redirect(self) -> bool:
        return bool(self.redirect_uri)

    def context(self) -> PageContext:
        """Build the render context handed to the template."""
        return PageContext(
            title=self.title,
            uri=self.uri,
            date=self.date,
            is_live=self.is_live,
            data=self.data,
        )

    def __str__(self) -> str:
        r = f"page [{self.uri}]"
        if self.redirect_uri:
            r += f" -> {self.redirect_uri}"
        if self.date.year != 0:
            r += f", published on {self.date.year}"
            if self.date.month != 0:
                r += f", {self.date.month_name}"
        return r
