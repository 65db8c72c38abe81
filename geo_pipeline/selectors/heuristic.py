"""
Context-aware location selection.

Each candidate is scored from its own match quality plus signals taken from
the rest of the text:

- locale: the candidate lies in the country given by ``options.locale``
- proximity: the candidate lies near a coordinate mentioned in the text
- coherence: other mentions also offer candidates in the same country
- population: a small prior towards larger places
"""

import logging
from collections import Counter
from math import log10
from typing import Collection, List, Sequence

from geo_pipeline.config import Options
from geo_pipeline.registry import location_selectors
from geo_pipeline.types import CoordinateOccurrence, LatLon, ResolvedLocation
from geo_pipeline.utils.geo import haversine_km, try_lat_lon

logger = logging.getLogger(__name__)


@location_selectors.register("heuristic")
class HeuristicLocationSelector:
    """Chooses the best-scoring candidate per list using cross-mention context."""

    def __init__(
        self,
        locale_weight: float = 0.25,
        proximity_weight: float = 0.5,
        coherence_weight: float = 0.1,
        population_weight: float = 0.05,
    ):
        self.locale_weight = locale_weight
        self.proximity_weight = proximity_weight
        self.coherence_weight = coherence_weight
        self.population_weight = population_weight

    def select(
        self,
        candidate_lists: Sequence[List[ResolvedLocation]],
        coordinates: Collection[CoordinateOccurrence],
        options: Options,
    ) -> List[ResolvedLocation]:
        points = [p for p in (try_lat_lon(c.value) for c in coordinates) if p is not None]

        # Number of lists offering at least one candidate in each country
        country_support: Counter = Counter()
        for candidates in candidate_lists:
            country_support.update(
                {c.place.country_code for c in candidates if c.place.country_code}
            )
        others = max(1, len(candidate_lists) - 1)

        selected: List[ResolvedLocation] = []
        for candidates in candidate_lists:
            own = {c.place.country_code for c in candidates if c.place.country_code}
            best = max(
                candidates,
                key=lambda c: self.score(c, points, country_support, own, others, options),
            )
            logger.debug(
                f"Selected {best.place.id} ({best.place.name}) for {best.occurrence.text!r} "
                f"from {len(candidates)} candidates"
            )
            selected.append(best)
        return selected

    def score(
        self,
        candidate: ResolvedLocation,
        points: List[LatLon],
        country_support: Counter,
        own_countries: set,
        others: int,
        options: Options,
    ) -> float:
        place = candidate.place
        total = candidate.score / 100.0

        if options.locale and place.country_code:
            if place.country_code.upper() == options.locale.upper():
                total += self.locale_weight

        if points:
            nearest = min(haversine_km(place.point, p) for p in points)
            total += self.proximity_weight * max(0.0, 1.0 - nearest / options.max_distance_km)

        if place.country_code:
            support = country_support[place.country_code]
            if place.country_code in own_countries:
                support -= 1
            total += self.coherence_weight * support / others

        if place.population > 0:
            total += self.population_weight * min(1.0, log10(place.population + 1) / 7.0)

        return total
