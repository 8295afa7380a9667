"""Startup banner — mode-aware status output.

Prints the page count, templates, and the address the site answers on.
Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from autosite.config import SiteConfig


# ---------------------------------------------------------------------------
# ANSI helpers: respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""

_MODE_STYLES: dict[str, tuple[str, str]] = {
    "dev": (_GREEN, "dev"),
    "live": (_CYAN, "live"),
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def print_banner(
    config: SiteConfig,
    page_count: int,
    mode: str,
    *,
    load_ms: float = 0.0,
    warnings: list[str] | None = None,
) -> None:
    """Print the autosite startup banner to stderr.

    Args:
        config: Resolved SiteConfig.
        page_count: Number of pages registered (redirects included).
        mode: ``"dev"`` or ``"live"``.
        load_ms: Time spent building the site in milliseconds.
        warnings: Optional list of warning messages to display.

    """
    from autosite import __version__

    title = config.title or config.root.name
    lines: list[str] = [
        "",
        f"  {_BOLD}{title}{_RESET}  autosite {_DIM}v{__version__}{_RESET}  {_mode_badge(mode)}",
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    pages_label = "page" if page_count == 1 else "pages"
    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines.append(f"  {_DIM}├─{_RESET} {page_count} {pages_label} loaded{timing}")
    lines.append(f"  {_DIM}├─{_RESET} pages: {_DIM}{config.glob}{_RESET}")
    if config.templates:
        lines.append(f"  {_DIM}├─{_RESET} templates: {_DIM}{', '.join(config.templates)}{_RESET}")

    if mode == "live":
        lines.append(f"  {_DIM}└─{_RESET} domain: {_BOLD}{config.live_domain}{_RESET}")
    else:
        lines.append(f"  {_DIM}└─{_RESET} domain: {_DIM}(bare URIs){_RESET}")

    url = f"http://{config.host}:{config.port}"
    lines.append("")
    lines.append(f"  {_BOLD}{_CYAN}{url}{_RESET}")

    if warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)
