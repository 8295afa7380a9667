"""Content layer — template files on disk as routable pages.

Handles glob discovery and path parsing (file path -> URI + date).
"""

from autosite.content.discovery import get_files
from autosite.content.paths import Date, get_date, parse_path

__all__ = [
    "Date",
    "get_date",
    "get_files",
    "parse_path",
]
