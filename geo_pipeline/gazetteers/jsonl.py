import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from geo_pipeline.errors import GazetteerError
from geo_pipeline.registry import gazetteers
from geo_pipeline.types import LatLon, Place

logger = logging.getLogger(__name__)

_KNOWN_FIELDS = {
    "id",
    "name",
    "latitude",
    "longitude",
    "country_code",
    "admin",
    "feature_code",
    "population",
    "alternate_names",
}


def _string_list(item: Dict, key: str) -> Tuple[str, ...]:
    value = item.get(key) or ()
    if isinstance(value, str):
        return (value,)
    values = tuple(value)
    if not all(isinstance(v, str) for v in values):
        raise ValueError(f"{key} must hold strings, got {value!r}")
    return values


def place_from_dict(item: Dict) -> Place:
    """Build a Place from one gazetteer record."""
    name = item["name"]
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"name must be a non-empty string, got {name!r}")
    return Place(
        id=str(item["id"]),
        name=name,
        point=LatLon(latitude=float(item["latitude"]), longitude=float(item["longitude"])),
        country_code=item.get("country_code"),
        admin=_string_list(item, "admin"),
        feature_code=item.get("feature_code"),
        population=int(item.get("population") or 0),
        alternate_names=_string_list(item, "alternate_names"),
        metadata={k: v for k, v in item.items() if k not in _KNOWN_FIELDS},
    )


@gazetteers.register("jsonl")
class JSONLGazetteer:
    """
    Loads places from a JSONL file, one record per line.

    Required fields are ``id``, ``name``, ``latitude`` and ``longitude``;
    ``country_code``, ``admin``, ``feature_code``, ``population`` and
    ``alternate_names`` are optional and any other field is kept as metadata.
    """

    def __init__(self, path: str):
        self.source_path = path
        self.places: Dict[str, Place] = {}
        with Path(path).open(encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    place = place_from_dict(json.loads(line))
                except (KeyError, TypeError, ValueError) as exc:
                    raise GazetteerError(
                        f"{path}:{line_no}: invalid gazetteer record ({exc})"
                    ) from exc
                self.places[place.id] = place
        logger.info(f"Loaded {len(self.places)} places from {path}")

    def get_place(self, place_id: str) -> Optional[Place]:
        return self.places.get(place_id)

    def all_places(self) -> Iterable[Place]:
        return self.places.values()
