"""
Modular location resolution package.

Resolves place-name and coordinate occurrences extracted from text to
gazetteer entities through pluggable indexes, selection strategies and a
final reduction strategy.
"""

__all__ = [
    "DEFAULT_OPTIONS",
    "ExtractionContext",
    "LocationResolver",
    "Options",
    "ResolutionContext",
    "ResolverConfig",
]

__version__ = "0.1.0"

from .config import DEFAULT_OPTIONS, Options, ResolverConfig  # noqa: E402
from .resolver import LocationResolver  # noqa: E402
from .types import ExtractionContext, ResolutionContext  # noqa: E402
