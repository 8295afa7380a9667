"""Template binder — compile a page's template files into a renderable unit.

Each page gets its own kida ``Environment`` over exactly the files it was
bound with: the shared templates first, the page-specific template last.
Templates are addressed by file name, so a page template can
``{% extends "base.tmpl" %}`` a shared layout.  When two files share a
name, the later one wins.

Every file is compiled eagerly so that syntax errors surface at startup,
not on the first request.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Any

from kida import DictLoader, Environment

from autosite._errors import RenderError, TemplateBindError

if TYPE_CHECKING:
    from kida.template import Template


class CompiledTemplate:
    """A compiled set of templates with a fixed entry point.

    Owned by exactly one Page.  Immutable after binding.

    Args:
        env: kida Environment holding every bound template.
        entry: Name of the template executed by ``render()``.
        sources: The file paths the unit was built from, in bind order.

    """

    __slots__ = ("_entry", "_env", "_template", "sources")

    def __init__(self, env: Environment, entry: str, sources: tuple[str, ...]) -> None:
        self._env = env
        self._entry = entry
        self._template: Template = env.get_template(entry)
        self.sources = sources

    @property
    def entry(self) -> str:
        """Name of the entry template."""
        return self._entry

    def render(self, context: Mapping[str, Any]) -> str:
        """Render the entry template with *context*.

        Raises:
            RenderError: If kida fails while rendering.

        """
        try:
            return self._template.render(dict(context))
        except Exception as exc:
            msg = f"failed to render {self._entry!r} ({', '.join(self.sources)}): {exc}"
            raise RenderError(msg) from exc

    def __repr__(self) -> str:
        return f"CompiledTemplate(entry={self._entry!r}, sources={self.sources!r})"


def bind_template(
    paths: Sequence[str],
    *,
    root: Path,
    helpers: Mapping[str, Callable[..., Any]] | None = None,
    base: str | None = None,
) -> CompiledTemplate:
    """Read and compile *paths* into a CompiledTemplate.

    Args:
        paths: Template paths relative to *root*, page-specific template last.
        root: Directory the paths are resolved against.
        helpers: Template globals, e.g. ``live()`` and ``domain()``.
        base: Entry template name; defaults to the last path's file name.

    Raises:
        TemplateBindError: If a file is missing, fails to compile, or
            *base* names a template that was not bound.

    """
    if not paths:
        msg = "no template paths to bind"
        raise TemplateBindError(msg)

    sources: dict[str, str] = {}
    for path in paths:
        try:
            sources[PurePath(path).name] = (root / path).read_text(encoding="utf-8")
        except OSError as exc:
            msg = f"cannot read template {path}: {exc}"
            raise TemplateBindError(msg) from exc

    env = Environment(loader=DictLoader(sources), autoescape=True)
    for name, value in (helpers or {}).items():
        env.add_global(name, value)

    entry = base or PurePath(paths[-1]).name
    if entry not in sources:
        msg = f"base template {entry!r} is not among {list(paths)}"
        raise TemplateBindError(msg)

    for path in paths:
        try:
            env.get_template(PurePath(path).name)
        except Exception as exc:
            msg = f"cannot compile template {path}: {exc}"
            raise TemplateBindError(msg) from exc

    return CompiledTemplate(env, entry, tuple(paths))
