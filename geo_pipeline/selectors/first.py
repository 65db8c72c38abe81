from typing import Collection, List, Sequence

from geo_pipeline.config import Options
from geo_pipeline.registry import coordinate_selectors, location_selectors
from geo_pipeline.types import (
    CoordinateOccurrence,
    LocationOccurrence,
    ResolvedCoordinate,
    ResolvedLocation,
)


@location_selectors.register("first")
class FirstLocationSelector:
    """Returns the first candidate of each list."""

    def select(
        self,
        candidate_lists: Sequence[List[ResolvedLocation]],
        coordinates: Collection[CoordinateOccurrence],
        options: Options,
    ) -> List[ResolvedLocation]:
        return [candidates[0] for candidates in candidate_lists]


@coordinate_selectors.register("first")
class FirstCoordinateSelector:
    """Returns the first candidate of each list."""

    def select(
        self,
        candidate_lists: Sequence[List[ResolvedCoordinate]],
        locations: Collection[LocationOccurrence],
        options: Options,
    ) -> List[ResolvedCoordinate]:
        return [candidates[0] for candidates in candidate_lists]
