from typing import Collection, List, Optional, Sequence

from rapidfuzz import fuzz, process, utils

from geo_pipeline.config import Options
from geo_pipeline.registry import coordinate_selectors
from geo_pipeline.types import LocationOccurrence, Place, ResolvedCoordinate


@coordinate_selectors.register("confidence")
class ConfidenceCoordinateSelector:
    """
    Prefers the nearby place that the text also mentions by name, otherwise
    the candidate with the highest linkage confidence.
    """

    def select(
        self,
        candidate_lists: Sequence[List[ResolvedCoordinate]],
        locations: Collection[LocationOccurrence],
        options: Options,
    ) -> List[ResolvedCoordinate]:
        texts = list(dict.fromkeys(o.text.strip() for o in locations if o.text.strip()))
        selected: List[ResolvedCoordinate] = []
        for candidates in candidate_lists:
            named = [
                c
                for c in candidates
                if self._is_mentioned(c.nearest_place, texts, options.fuzzy_threshold)
            ]
            pool = named or candidates
            selected.append(max(pool, key=lambda c: c.confidence))
        return selected

    @staticmethod
    def _is_mentioned(place: Optional[Place], texts: List[str], threshold: float) -> bool:
        if place is None or not texts:
            return False
        for name in (place.name, *place.alternate_names):
            match = process.extractOne(
                name,
                texts,
                scorer=fuzz.ratio,
                processor=utils.default_process,
                score_cutoff=threshold,
            )
            if match is not None:
                return True
        return False
