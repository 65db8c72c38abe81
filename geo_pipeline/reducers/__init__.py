"""Final reduction strategies."""

from .default import DefaultReductionStrategy  # noqa: F401
from .noop import PassThroughReductionStrategy  # noqa: F401
