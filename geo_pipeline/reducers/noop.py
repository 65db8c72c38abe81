from typing import Sequence

from geo_pipeline.registry import reducers
from geo_pipeline.types import (
    ExtractionContext,
    ResolutionContext,
    ResolvedCoordinate,
    ResolvedLocation,
)


@reducers.register("noop")
class PassThroughReductionStrategy:
    """Returns the selections as they are."""

    def reduce(
        self,
        context: ExtractionContext,
        locations: Sequence[ResolvedLocation],
        coordinates: Sequence[ResolvedCoordinate],
    ) -> ResolutionContext:
        return ResolutionContext(locations=tuple(locations), coordinates=tuple(coordinates))
