import logging
from typing import List

from geo_pipeline.config import Options
from geo_pipeline.gazetteers.base import Gazetteer
from geo_pipeline.registry import coordinate_indexes
from geo_pipeline.types import CoordinateOccurrence, Place, ResolvedCoordinate
from geo_pipeline.utils.geo import haversine_km, is_valid_point, to_lat_lon

logger = logging.getLogger(__name__)


@coordinate_indexes.register("nearest_place")
class NearestPlaceCoordinateIndex:
    """
    Grounds coordinates and links them to nearby gazetteer places.

    Places within ``options.max_distance_km`` become candidates, nearest
    first. A well-formed point with no place in range is still returned on
    its own, without linkage. Out-of-range points produce no candidates.
    """

    def __init__(self, gazetteer: Gazetteer):
        if gazetteer is None:
            raise ValueError("Nearest-place lookup requires a gazetteer.")
        self.places: List[Place] = list(gazetteer.all_places())

    def search(
        self, occurrence: CoordinateOccurrence, options: Options
    ) -> List[ResolvedCoordinate]:
        point = to_lat_lon(occurrence.value)
        if not is_valid_point(point):
            logger.debug(f"Coordinate out of range, no candidates: {occurrence.text!r}")
            return []

        nearby = []
        for place in self.places:
            distance = haversine_km(point, place.point)
            if distance <= options.max_distance_km:
                nearby.append((distance, place))
        nearby.sort(key=lambda item: (item[0], item[1].id))

        if not nearby:
            return [ResolvedCoordinate(occurrence=occurrence, point=point)]

        return [
            ResolvedCoordinate(
                occurrence=occurrence,
                point=point,
                nearest_place=place,
                distance_km=distance,
                confidence=1.0 - distance / options.max_distance_km,
            )
            for distance, place in nearby[: options.max_results]
        ]
