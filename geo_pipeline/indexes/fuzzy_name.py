from typing import Dict, List, Tuple

from rapidfuzz import fuzz, process, utils

from geo_pipeline.config import Options
from geo_pipeline.gazetteers.base import Gazetteer
from geo_pipeline.registry import location_indexes
from geo_pipeline.types import LocationOccurrence, Place, ResolvedLocation


@location_indexes.register("fuzzy_name")
class FuzzyNameLocationIndex:
    """Exact and fuzzy matching of mention text against gazetteer names."""

    def __init__(self, gazetteer: Gazetteer):
        if gazetteer is None:
            raise ValueError("Name lookup requires a gazetteer.")
        self.places: List[Place] = list(gazetteer.all_places())
        # Flat name table; owners[i] is the index of the place names[i] belongs to
        self.names: List[str] = []
        self.owners: List[int] = []
        self.exact: Dict[str, List[Tuple[int, str]]] = {}
        for idx, place in enumerate(self.places):
            for name in dict.fromkeys((place.name, *place.alternate_names)):
                self.names.append(name)
                self.owners.append(idx)
                self.exact.setdefault(name.casefold(), []).append((idx, name))

    def search(
        self, occurrence: LocationOccurrence, options: Options
    ) -> List[ResolvedLocation]:
        query = occurrence.text.strip()
        if not query:
            return []

        # place index -> (score, matched name, fuzzy)
        best: Dict[int, Tuple[float, str, bool]] = {}
        for idx, name in self.exact.get(query.casefold(), []):
            best.setdefault(idx, (100.0, name, False))

        if options.fuzzy and self.names:
            matches = process.extract(
                query,
                self.names,
                scorer=fuzz.WRatio,
                processor=utils.default_process,
                score_cutoff=options.fuzzy_threshold,
                limit=None,
            )
            for name, score, i in matches:
                idx = self.owners[i]
                if idx in best and best[idx][0] >= score:
                    continue
                best[idx] = (float(score), name, True)

        ranked = sorted(
            best.items(),
            key=lambda item: (
                -item[1][0],
                -self.places[item[0]].population,
                self.places[item[0]].id,
            ),
        )
        return [
            ResolvedLocation(
                occurrence=occurrence,
                place=self.places[idx],
                matched_name=name,
                score=score,
                fuzzy=is_fuzzy,
            )
            for idx, (score, name, is_fuzzy) in ranked[: options.max_results]
        ]
