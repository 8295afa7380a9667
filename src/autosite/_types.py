"""Shared type definitions for autosite."""

from collections.abc import Callable
from typing import Literal

# Mode of operation
type SiteMode = Literal["dev", "live"]

# Zero-argument live/dev detector
type LiveDetector = Callable[[], bool]
