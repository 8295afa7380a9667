"""Page layer — page model, template binding, and request dispatch."""

from autosite.pages.binder import CompiledTemplate, bind_template
from autosite.pages.dispatch import dispatch, render_context
from autosite.pages.page import Page, PageContext

__all__ = [
    "CompiledTemplate",
    "Page",
    "PageContext",
    "bind_template",
    "dispatch",
    "render_context",
]
