from typing import Iterable, Optional, Protocol

from geo_pipeline.types import Place


class Gazetteer(Protocol):
    """Read-only collection of known places."""

    def get_place(self, place_id: str) -> Optional[Place]:
        ...

    def all_places(self) -> Iterable[Place]:
        ...
