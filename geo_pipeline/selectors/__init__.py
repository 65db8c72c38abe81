"""Candidate selection strategies."""

from .confidence import ConfidenceCoordinateSelector  # noqa: F401
from .first import FirstCoordinateSelector, FirstLocationSelector  # noqa: F401
from .heuristic import HeuristicLocationSelector  # noqa: F401
