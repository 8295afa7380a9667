"""Tests for autosite package exports and metadata."""

import pytest

import autosite


class TestPackageMetadata:
    """Package-level exports and metadata."""

    def test_version_string(self) -> None:
        assert isinstance(autosite.__version__, str)
        assert "0.1.0" in autosite.__version__

    def test_free_threading_declaration(self) -> None:
        assert autosite._Py_mod_gil == 0

    def test_all_exports_resolvable(self) -> None:
        for name in autosite.__all__:
            getattr(autosite, name)

    def test_site_export(self) -> None:
        from autosite.site import Site

        assert autosite.Site is Site

    def test_invalid_attribute_raises(self) -> None:
        with pytest.raises(AttributeError, match="no attribute"):
            autosite.nonexistent_thing  # type: ignore[attr-defined]  # noqa: B018
