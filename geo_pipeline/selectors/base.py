from typing import Collection, List, Protocol, Sequence

from geo_pipeline.config import Options
from geo_pipeline.types import (
    CoordinateOccurrence,
    LocationOccurrence,
    ResolvedCoordinate,
    ResolvedLocation,
)


class LocationSelectionStrategy(Protocol):
    """Picks at most one location per candidate list.

    Every list passed in is non-empty. Raw coordinate occurrences may be used
    as disambiguating signal; coordinate candidates are never available here.
    """

    def select(
        self,
        candidate_lists: Sequence[List[ResolvedLocation]],
        coordinates: Collection[CoordinateOccurrence],
        options: Options,
    ) -> List[ResolvedLocation]:
        ...


class CoordinateSelectionStrategy(Protocol):
    """Picks at most one coordinate per candidate list, using raw location mentions as signal."""

    def select(
        self,
        candidate_lists: Sequence[List[ResolvedCoordinate]],
        locations: Collection[LocationOccurrence],
        options: Options,
    ) -> List[ResolvedCoordinate]:
        ...
