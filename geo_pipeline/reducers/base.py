from typing import Protocol, Sequence

from geo_pipeline.types import (
    ExtractionContext,
    ResolutionContext,
    ResolvedCoordinate,
    ResolvedLocation,
)


class ReductionStrategy(Protocol):
    """Merges both selection results into the final resolution context."""

    def reduce(
        self,
        context: ExtractionContext,
        locations: Sequence[ResolvedLocation],
        coordinates: Sequence[ResolvedCoordinate],
    ) -> ResolutionContext:
        ...
