"""File discovery — expand the page glob under the site root.

Editor lock files and in-progress saves (``.#about.tmpl``) are skipped so
they never become routes.
"""

import glob
from pathlib import Path

from autosite._errors import DiscoveryError

_TRANSIENT_MARKER = ".#"


def get_files(pattern: str, root: Path) -> list[str]:
    """Return the template paths matching *pattern*, relative to *root*.

    Order follows glob expansion; callers must not assume it is sorted.

    Raises:
        DiscoveryError: If no usable page matches the pattern.

    """
    paths = glob.glob(pattern, root_dir=root)
    files = [p for p in paths if _TRANSIENT_MARKER not in p]
    if not files:
        msg = f"no pages found: {pattern!r} under {root}"
        raise DiscoveryError(msg)
    return files
