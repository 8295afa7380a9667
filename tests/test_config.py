"""Tests for autosite.config."""

from pathlib import Path

import pytest

from autosite._errors import ConfigError
from autosite.config import SiteConfig


class TestSiteConfig:
    """SiteConfig — frozen dataclass with sensible defaults."""

    def test_defaults(self) -> None:
        config = SiteConfig()
        assert config.glob == "pages/*.tmpl"
        assert config.mode == "dev"
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.template_suffix == ".tmpl"
        assert config.templates == ()
        assert config.base_template is None
        assert config.redirects == ()
        assert config.remap == ()

    def test_frozen(self) -> None:
        config = SiteConfig()
        with pytest.raises(AttributeError):
            config.port = 9000  # type: ignore[misc]

    def test_is_live(self) -> None:
        assert not SiteConfig().is_live
        assert SiteConfig(mode="live").is_live

    def test_bad_mode(self) -> None:
        with pytest.raises(ConfigError, match="mode must be one of"):
            SiteConfig(mode="prod")  # type: ignore[arg-type]

    def test_static_path(self, tmp_path: Path) -> None:
        config = SiteConfig(root=tmp_path, static_dir="assets")
        assert config.static_path == tmp_path / "assets"

    def test_relative_root_resolved_to_absolute(self) -> None:
        """Relative root is resolved to absolute in __post_init__."""
        config = SiteConfig(root=Path("site"))
        assert config.root.is_absolute()

    def test_absolute_root_unchanged(self, tmp_path: Path) -> None:
        config = SiteConfig(root=tmp_path)
        assert config.root == tmp_path
