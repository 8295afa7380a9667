"""Shared test fixtures for autosite."""

from __future__ import annotations

from pathlib import Path

import pytest

BASE_TEMPLATE = (
    "<!DOCTYPE html>\n<html>\n<head><title>{{ title }}</title></head>\n"
    "<body>{% block body %}{% endblock %}</body>\n</html>\n"
)

PAGE_TEMPLATE = (
    '{% extends "base.tmpl" %}\n'
    "{% block body %}<h1>{{ page.title }}: {{ uri }}</h1>"
    "{% if live() %}<p>live on {{ domain() }}</p>{% end %}"
    "{% endblock %}\n"
)

POST_TEMPLATE = (
    '{% extends "base.tmpl" %}\n'
    "{% block body %}<p>posted {{ date.year }}-{{ date.month }}</p>{% endblock %}\n"
)


@pytest.fixture
def tmp_site(tmp_path: Path) -> Path:
    """Create a minimal undated site.

    Layout::

        base.tmpl
        pages/index.tmpl
        pages/about.tmpl
        pages/.#about.tmpl      (editor lock file, never a route)

    """
    (tmp_path / "base.tmpl").write_text(BASE_TEMPLATE)
    pages = tmp_path / "pages"
    pages.mkdir()
    (pages / "index.tmpl").write_text(PAGE_TEMPLATE)
    (pages / "about.tmpl").write_text(PAGE_TEMPLATE)
    (pages / ".#about.tmpl").write_text("{% this is not a template")
    return tmp_path


@pytest.fixture
def dated_site(tmp_path: Path) -> Path:
    """Create a site with dated posts under blog/yyyy/mm/."""
    (tmp_path / "base.tmpl").write_text(BASE_TEMPLATE)
    for year, month, name in (("2020", "03", "hello"), ("2021", "11", "again")):
        d = tmp_path / "blog" / year / month
        d.mkdir(parents=True)
        (d / f"{name}.tmpl").write_text(POST_TEMPLATE)
    return tmp_path
