"""Shared fixtures for resolution pipeline tests."""

import json
import os
import tempfile
import threading
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import pytest

from geo_pipeline.config import Options
from geo_pipeline.types import (
    CoordinateOccurrence,
    ExtractionContext,
    LatLon,
    LocationOccurrence,
    Place,
    ResolutionContext,
    ResolvedCoordinate,
    ResolvedLocation,
)


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------


def _place(pid, name, lat, lon, cc, admin, code, pop, alts=()) -> Place:
    return Place(
        id=pid,
        name=name,
        point=LatLon(lat, lon),
        country_code=cc,
        admin=tuple(admin),
        feature_code=code,
        population=pop,
        alternate_names=tuple(alts),
    )


SAMPLE_PLACES: Dict[str, Place] = {
    "paris_fr": _place("2988507", "Paris", 48.85341, 2.3488, "FR", ["Ile-de-France"], "PPLC", 2138551, ["Lutetia"]),
    "paris_tx": _place("4717560", "Paris", 33.66094, -95.55551, "US", ["Texas", "Lamar County"], "PPLA2", 24782),
    "paris_tn": _place("4647963", "Paris", 36.30200, -88.32671, "US", ["Tennessee", "Henry County"], "PPLA2", 10156),
    "dallas": _place("4684888", "Dallas", 32.78306, -96.80667, "US", ["Texas"], "PPLA2", 1300092),
    "london_gb": _place("2643743", "London", 51.50853, -0.12574, "GB", ["England"], "PPLC", 8961989, ["Londres"]),
    "london_ca": _place("6058560", "London", 42.98339, -81.23304, "CA", ["Ontario"], "PPL", 346765),
    "lyon": _place("2996944", "Lyon", 45.74846, 4.84671, "FR", ["Auvergne-Rhone-Alpes"], "PPLA", 522969),
}


@pytest.fixture
def places() -> Dict[str, Place]:
    """Sample gazetteer places keyed by a readable handle."""
    return dict(SAMPLE_PLACES)


@pytest.fixture
def default_options() -> Options:
    return Options()


def make_location(
    occurrence: LocationOccurrence, place: Place, score: float = 100.0, fuzzy: bool = False
) -> ResolvedLocation:
    return ResolvedLocation(
        occurrence=occurrence,
        place=place,
        matched_name=place.name,
        score=score,
        fuzzy=fuzzy,
    )


def make_coordinate(
    occurrence: CoordinateOccurrence,
    place: Optional[Place] = None,
    confidence: float = 0.0,
    distance_km: Optional[float] = None,
) -> ResolvedCoordinate:
    point = occurrence.value if isinstance(occurrence.value, LatLon) else LatLon(0.0, 0.0)
    return ResolvedCoordinate(
        occurrence=occurrence,
        point=point,
        nearest_place=place,
        distance_km=distance_km,
        confidence=confidence,
    )


# ---------------------------------------------------------------------------
# Mock classes
# ---------------------------------------------------------------------------


class MockGazetteer:
    """In-memory gazetteer for testing."""

    def __init__(self, places: Optional[Iterable[Place]] = None):
        self._places: Dict[str, Place] = {}
        for place in places or []:
            self._places[place.id] = place

    def get_place(self, place_id: str) -> Optional[Place]:
        return self._places.get(place_id)

    def all_places(self) -> Iterable[Place]:
        return self._places.values()


class MockLocationIndex:
    """Returns predefined candidates keyed by mention text and records calls."""

    def __init__(
        self,
        results: Optional[Dict[str, List[ResolvedLocation]]] = None,
        failures: Optional[Dict[str, Exception]] = None,
    ):
        self.results = results or {}
        self.failures = failures or {}
        self.calls: List[Tuple[LocationOccurrence, Options]] = []

    def search(self, occurrence: LocationOccurrence, options: Options) -> List[ResolvedLocation]:
        self.calls.append((occurrence, options))
        if occurrence.text in self.failures:
            raise self.failures[occurrence.text]
        return list(self.results.get(occurrence.text, []))


class MockCoordinateIndex:
    """Returns predefined candidates keyed by coordinate surface text and records calls."""

    def __init__(
        self,
        results: Optional[Dict[str, List[ResolvedCoordinate]]] = None,
        failures: Optional[Dict[str, Exception]] = None,
    ):
        self.results = results or {}
        self.failures = failures or {}
        self.calls: List[Tuple[CoordinateOccurrence, Options]] = []

    def search(
        self, occurrence: CoordinateOccurrence, options: Options
    ) -> List[ResolvedCoordinate]:
        self.calls.append((occurrence, options))
        if occurrence.text in self.failures:
            raise self.failures[occurrence.text]
        return list(self.results.get(occurrence.text, []))


class RecordingSelector:
    """Selects the first candidate of each list and records what it was given."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: List[Tuple[List[list], tuple, Options]] = []
        self.threads: List[str] = []

    def select(self, candidate_lists: Sequence[list], signals, options: Options) -> list:
        self.calls.append(([list(c) for c in candidate_lists], tuple(signals), options))
        self.threads.append(threading.current_thread().name)
        if self.error is not None:
            raise self.error
        return [candidates[0] for candidates in candidate_lists]


class RecordingReducer:
    """Wraps selections into a ResolutionContext and records its inputs."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: List[Tuple[ExtractionContext, list, list]] = []

    def reduce(self, context, locations, coordinates) -> ResolutionContext:
        self.calls.append((context, list(locations), list(coordinates)))
        if self.error is not None:
            raise self.error
        return ResolutionContext(locations=tuple(locations), coordinates=tuple(coordinates))


# ---------------------------------------------------------------------------
# Mock fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_gazetteer(places: Dict[str, Place]) -> MockGazetteer:
    """Mock gazetteer populated with the sample places."""
    return MockGazetteer(places.values())


# ---------------------------------------------------------------------------
# Temporary file fixtures
# ---------------------------------------------------------------------------


def place_record(place: Place) -> Dict:
    return {
        "id": place.id,
        "name": place.name,
        "latitude": place.point.latitude,
        "longitude": place.point.longitude,
        "country_code": place.country_code,
        "admin": list(place.admin),
        "feature_code": place.feature_code,
        "population": place.population,
        "alternate_names": list(place.alternate_names),
    }


@pytest.fixture
def temp_jsonl_gazetteer(places: Dict[str, Place]) -> Iterator[str]:
    """Create a temporary JSONL gazetteer file."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".jsonl", delete=False) as f:
        for place in places.values():
            f.write(json.dumps(place_record(place)) + "\n")
        path = f.name
    yield path
    os.unlink(path)


# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def minimal_config_dict(temp_jsonl_gazetteer: str) -> Dict:
    """Resolver config using the reference components and the temp gazetteer."""
    return {
        "gazetteer": {"name": "jsonl", "params": {"path": temp_jsonl_gazetteer}},
        "location_index": {"name": "fuzzy_name", "params": {}},
        "coordinate_index": {"name": "nearest_place", "params": {}},
        "location_selector": {"name": "heuristic", "params": {}},
        "coordinate_selector": {"name": "confidence", "params": {}},
        "reducer": {"name": "default", "params": {"report_unresolved": True}},
    }


@pytest.fixture
def sample_context_dict() -> Dict:
    """Extraction context as produced upstream: Paris near a Texas coordinate."""
    return {
        "id": "doc-001",
        "locations": [
            {"text": "Paris", "start": 10, "end": 15},
            {"text": "Atlantis", "start": 40, "end": 48},
        ],
        "coordinates": [
            {
                "text": "33.66N 95.55W",
                "start": 20,
                "end": 33,
                "value": {"latitude": 33.66, "longitude": -95.55},
            }
        ],
    }
