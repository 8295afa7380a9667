"""autosite error hierarchy.

All autosite-specific errors inherit from AutositeError for easy catching.
Build-phase failures share the BuildError base so callers can refuse to
serve a half-built site with a single ``except``.
"""


class AutositeError(Exception):
    """Base error for all autosite operations."""


class ConfigError(AutositeError):
    """Invalid or unreadable configuration."""


class BuildError(AutositeError):
    """The site could not be built from disk."""


class DiscoveryError(BuildError):
    """Glob expansion failed or matched no pages."""


class PathError(BuildError):
    """A template path does not match a known page shape."""


class DateError(BuildError):
    """The year or month directory of a dated page is invalid."""


class TemplateBindError(BuildError):
    """A page's templates could not be read or compiled."""


class RegistryError(BuildError):
    """An invalid registry mutation (unknown URI, duplicate redirect, frozen)."""


class PageError(AutositeError):
    """A page was constructed in an inconsistent state."""


class RenderError(AutositeError):
    """A compiled template failed to render."""
