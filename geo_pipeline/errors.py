"""Resolver error classes.

Errors are raised where they occur and propagate unmodified to the caller of
``LocationResolver.resolve_locations``.
"""


class ResolverError(Exception):
    """Base exception for the resolution pipeline."""

    pass


class IndexLookupError(ResolverError):
    """Raised when a location or coordinate index cannot answer a lookup."""

    pass


class GazetteerError(ResolverError):
    """Raised when a gazetteer cannot be loaded."""

    pass


class ConfigError(ResolverError):
    """Raised when options or resolver configuration are invalid."""

    pass
