"""
Default last-pass reduction.

Steps, in order:

1. plausibility: drop locations scoring below ``min_score`` and coordinates
   with confidence below ``min_confidence``
2. de-duplication of identical results for the same occurrence
3. collapsing: a coordinate whose nearest place is also a resolved location
   is folded into that location as supporting evidence
4. deterministic ordering by text position
5. optionally, reporting occurrences left without a result
"""

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, Hashable, Iterable, List, Sequence, Tuple, TypeVar

from geo_pipeline.registry import reducers
from geo_pipeline.types import (
    CoordinateOccurrence,
    ExtractionContext,
    ResolutionContext,
    ResolvedCoordinate,
    ResolvedLocation,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def occurrence_key(occurrence: Any) -> Tuple[int, int, str]:
    return (occurrence.start, occurrence.end, occurrence.text)


def unique_by(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    seen = set()
    result: List[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        result.append(item)
    return result


def _coordinate_identity(coord: ResolvedCoordinate) -> Hashable:
    place_id = coord.nearest_place.id if coord.nearest_place else None
    return (occurrence_key(coord.occurrence), coord.point, place_id)


@reducers.register("default")
class DefaultReductionStrategy:
    """Prunes, de-duplicates, collapses and orders the selected results."""

    def __init__(
        self,
        min_score: float = 0.0,
        min_confidence: float = 0.0,
        collapse_linked: bool = True,
        report_unresolved: bool = False,
    ):
        self.min_score = min_score
        self.min_confidence = min_confidence
        self.collapse_linked = collapse_linked
        self.report_unresolved = report_unresolved

    def reduce(
        self,
        context: ExtractionContext,
        locations: Sequence[ResolvedLocation],
        coordinates: Sequence[ResolvedCoordinate],
    ) -> ResolutionContext:
        kept_locations = [loc for loc in locations if loc.score >= self.min_score]
        kept_coordinates = [c for c in coordinates if c.confidence >= self.min_confidence]
        dropped = (len(locations) - len(kept_locations)) + (
            len(coordinates) - len(kept_coordinates)
        )
        if dropped:
            logger.debug(f"Dropped {dropped} results below plausibility thresholds")

        kept_locations = unique_by(
            kept_locations, key=lambda loc: (occurrence_key(loc.occurrence), loc.place.id)
        )
        kept_coordinates = unique_by(kept_coordinates, key=_coordinate_identity)

        if self.collapse_linked:
            kept_locations, kept_coordinates = self._collapse(kept_locations, kept_coordinates)

        kept_locations.sort(
            key=lambda loc: (loc.occurrence.start, loc.occurrence.end, loc.place.id)
        )
        kept_coordinates.sort(key=lambda c: (c.occurrence.start, c.occurrence.end))

        unresolved_locations: Tuple = ()
        unresolved_coordinates: Tuple = ()
        if self.report_unresolved:
            resolved = {occurrence_key(loc.occurrence) for loc in kept_locations}
            unresolved_locations = tuple(
                o for o in context.locations if occurrence_key(o) not in resolved
            )
            resolved_coords = {occurrence_key(c.occurrence) for c in kept_coordinates}
            for loc in kept_locations:
                resolved_coords.update(occurrence_key(o) for o in loc.supporting_coordinates)
            unresolved_coordinates = tuple(
                o for o in context.coordinates if occurrence_key(o) not in resolved_coords
            )

        return ResolutionContext(
            locations=tuple(kept_locations),
            coordinates=tuple(kept_coordinates),
            unresolved_locations=unresolved_locations,
            unresolved_coordinates=unresolved_coordinates,
        )

    @staticmethod
    def _collapse(
        locations: List[ResolvedLocation], coordinates: List[ResolvedCoordinate]
    ) -> Tuple[List[ResolvedLocation], List[ResolvedCoordinate]]:
        place_ids = {loc.place.id for loc in locations}
        support: Dict[str, List[CoordinateOccurrence]] = {}
        remaining: List[ResolvedCoordinate] = []
        for coord in coordinates:
            if coord.nearest_place is not None and coord.nearest_place.id in place_ids:
                support.setdefault(coord.nearest_place.id, []).append(coord.occurrence)
            else:
                remaining.append(coord)

        if not support:
            return locations, remaining

        collapsed = []
        for loc in locations:
            extra = support.get(loc.place.id)
            if extra:
                merged = unique_by(
                    [*loc.supporting_coordinates, *extra], key=occurrence_key
                )
                merged.sort(key=lambda o: (o.start, o.end))
                loc = replace(loc, supporting_coordinates=tuple(merged))
            collapsed.append(loc)
        logger.debug(
            f"Collapsed {len(coordinates) - len(remaining)} coordinates into resolved locations"
        )
        return collapsed, remaining
