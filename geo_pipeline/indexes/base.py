from typing import List, Protocol

from geo_pipeline.config import Options
from geo_pipeline.types import (
    CoordinateOccurrence,
    LocationOccurrence,
    ResolvedCoordinate,
    ResolvedLocation,
)


class LocationIndex(Protocol):
    """Looks up gazetteer candidates for a place-name mention."""

    def search(
        self, occurrence: LocationOccurrence, options: Options
    ) -> List[ResolvedLocation]:
        ...


class CoordinateIndex(Protocol):
    """Grounds a coordinate mention to candidate points."""

    def search(
        self, occurrence: CoordinateOccurrence, options: Options
    ) -> List[ResolvedCoordinate]:
        ...
