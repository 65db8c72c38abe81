from dataclasses import dataclass, field
from math import copysign
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class LatLon:
    """Point in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class DegreesMinutesSeconds:
    """Single sexagesimal axis value (e.g. 48°51'24"N)."""

    degrees: float
    minutes: float = 0.0
    seconds: float = 0.0
    hemisphere: Optional[str] = None

    def to_decimal(self) -> float:
        value = abs(self.degrees) + self.minutes / 60.0 + self.seconds / 3600.0
        negative = copysign(1.0, self.degrees) < 0
        if self.hemisphere and self.hemisphere.upper() in {"S", "W"}:
            negative = True
        return -value if negative else value


@dataclass(frozen=True)
class DMSCoordinate:
    """Latitude/longitude pair in degrees-minutes-seconds."""

    latitude: DegreesMinutesSeconds
    longitude: DegreesMinutesSeconds


@dataclass(frozen=True)
class LocationOccurrence:
    """Raw place-name mention found by the extractor."""

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class CoordinateOccurrence(Generic[T]):
    """Raw coordinate mention with its parsed payload."""

    value: T
    start: int
    end: int
    text: str = ""


@dataclass(frozen=True)
class ExtractionContext:
    """Location and coordinate occurrences of one text, in text order."""

    locations: Tuple[LocationOccurrence, ...] = ()
    coordinates: Tuple[CoordinateOccurrence, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "locations", tuple(self.locations))
        object.__setattr__(self, "coordinates", tuple(self.coordinates))

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "ExtractionContext":
        locations = [
            LocationOccurrence(text=item["text"], start=item["start"], end=item["end"])
            for item in data.get("locations") or []
        ]
        coordinates = [
            CoordinateOccurrence(
                value=_coordinate_value_from_dict(item["value"]),
                start=item["start"],
                end=item["end"],
                text=item.get("text", ""),
            )
            for item in data.get("coordinates") or []
        ]
        return ExtractionContext(locations=tuple(locations), coordinates=tuple(coordinates))


def _axis_from_dict(raw: Any) -> Any:
    if isinstance(raw, dict):
        return DegreesMinutesSeconds(
            degrees=raw["degrees"],
            minutes=raw.get("minutes", 0.0),
            seconds=raw.get("seconds", 0.0),
            hemisphere=raw.get("hemisphere"),
        )
    return float(raw)


def _coordinate_value_from_dict(raw: Dict[str, Any]) -> Any:
    latitude = _axis_from_dict(raw["latitude"])
    longitude = _axis_from_dict(raw["longitude"])
    if isinstance(latitude, DegreesMinutesSeconds) or isinstance(
        longitude, DegreesMinutesSeconds
    ):
        if not isinstance(latitude, DegreesMinutesSeconds):
            latitude = DegreesMinutesSeconds(degrees=latitude)
        if not isinstance(longitude, DegreesMinutesSeconds):
            longitude = DegreesMinutesSeconds(degrees=longitude)
        return DMSCoordinate(latitude=latitude, longitude=longitude)
    return LatLon(latitude=latitude, longitude=longitude)


@dataclass(frozen=True)
class Place:
    """Gazetteer record."""

    id: str
    name: str
    point: LatLon
    country_code: Optional[str] = None
    admin: Tuple[str, ...] = ()
    feature_code: Optional[str] = None
    population: int = 0
    alternate_names: Tuple[str, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def hierarchy(self) -> Tuple[str, ...]:
        """Administrative path, country first."""
        if self.country_code:
            return (self.country_code, *self.admin)
        return tuple(self.admin)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "latitude": self.point.latitude,
            "longitude": self.point.longitude,
            "country_code": self.country_code,
            "admin": list(self.admin),
            "feature_code": self.feature_code,
            "population": self.population,
        }


@dataclass(frozen=True)
class ResolvedLocation:
    """Location occurrence grounded to a gazetteer place."""

    occurrence: LocationOccurrence
    place: Place
    matched_name: str
    score: float
    fuzzy: bool = False
    supporting_coordinates: Tuple[CoordinateOccurrence, ...] = ()

    @property
    def id(self) -> str:
        return self.place.id

    @property
    def name(self) -> str:
        return self.place.name

    @property
    def point(self) -> LatLon:
        return self.place.point

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.occurrence.text,
            "start": self.occurrence.start,
            "end": self.occurrence.end,
            "matched_name": self.matched_name,
            "score": self.score,
            "fuzzy": self.fuzzy,
            "place": self.place.to_dict(),
            "supporting_coordinates": [
                {"text": c.text, "start": c.start, "end": c.end}
                for c in self.supporting_coordinates
            ],
        }


@dataclass(frozen=True)
class ResolvedCoordinate:
    """Coordinate occurrence grounded to a point, optionally linked to a place."""

    occurrence: CoordinateOccurrence
    point: LatLon
    nearest_place: Optional[Place] = None
    distance_km: Optional[float] = None
    confidence: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.occurrence.text,
            "start": self.occurrence.start,
            "end": self.occurrence.end,
            "latitude": self.point.latitude,
            "longitude": self.point.longitude,
            "nearest_place": self.nearest_place.to_dict() if self.nearest_place else None,
            "distance_km": self.distance_km,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class ResolutionContext:
    """Final output of a resolution call."""

    locations: Tuple[ResolvedLocation, ...] = ()
    coordinates: Tuple[ResolvedCoordinate, ...] = ()
    unresolved_locations: Tuple[LocationOccurrence, ...] = ()
    unresolved_coordinates: Tuple[CoordinateOccurrence, ...] = ()

    def __post_init__(self) -> None:
        for name in (
            "locations",
            "coordinates",
            "unresolved_locations",
            "unresolved_coordinates",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def is_empty(self) -> bool:
        return not self.locations and not self.coordinates

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "locations": [loc.to_dict() for loc in self.locations],
            "coordinates": [coord.to_dict() for coord in self.coordinates],
            "unresolved_locations": [
                {"text": o.text, "start": o.start, "end": o.end}
                for o in self.unresolved_locations
            ],
            "unresolved_coordinates": [
                {"text": o.text, "start": o.start, "end": o.end}
                for o in self.unresolved_coordinates
            ],
        }
