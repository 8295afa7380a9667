"""autosite configuration.

SiteConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from autosite._errors import ConfigError
from autosite._types import SiteMode
from autosite.content.paths import DEFAULT_SUFFIX

_MODES: frozenset[str] = frozenset({"dev", "live"})


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Configuration for an autosite application.

    Attributes:
        root: Site root directory; page globs and template paths resolve
              against it.  Always resolved to an absolute path on construction.
        title: Site title, for HTML ``<head>``.
        glob: Pattern for page templates, relative to ``root``.
        live_domain: Production host pages are registered under when live.
        templates: Shared templates compiled with every page.
        mode: ``"dev"`` registers bare URIs; ``"live"`` prefixes the live domain.
        host: Bind address.
        port: Bind port.
        template_suffix: Extension stripped from page file names.
        base_template: Entry template rendered for each page (default: the
            page's own template).
        static_dir: Directory of static assets served under ``/static``.
        redirects: ``(uri, target)`` pairs added after discovery.
        remap: ``(old_uri, new_uri)`` pairs applied after discovery.

    """

    root: Path = field(default_factory=Path.cwd)
    title: str = ""
    glob: str = "pages/*.tmpl"
    live_domain: str = ""
    templates: tuple[str, ...] = ()
    mode: SiteMode = "dev"
    host: str = "127.0.0.1"
    port: int = 8000
    template_suffix: str = DEFAULT_SUFFIX
    base_template: str | None = None
    static_dir: str = "static"
    redirects: tuple[tuple[str, str], ...] = ()
    remap: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if self.mode not in _MODES:
            msg = f"mode must be one of {sorted(_MODES)}, got {self.mode!r}"
            raise ConfigError(msg)

    @property
    def is_live(self) -> bool:
        """True when pages are served under the live domain."""
        return self.mode == "live"

    @property
    def static_path(self) -> Path:
        """Absolute path to static assets directory."""
        return self.root / self.static_dir
