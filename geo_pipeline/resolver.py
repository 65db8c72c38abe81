"""
Resolution workflow for location and coordinate occurrences.

Resolution runs in five steps:

1. find location candidates
2. find coordinate candidates
3. select location candidates (may look at raw coordinate occurrences)
4. select coordinate candidates (may look at raw location occurrences)
5. reduce both selections into the final ResolutionContext

The steps form the graph ``1 -> 3 -> 5 <- 4 <- 2``: the location branch and
the coordinate branch share no data until reduction, so they can run as two
concurrent tasks joined before step 5.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, Optional, Tuple

# Ensure component registration by importing modules with registry decorators.
from geo_pipeline import gazetteers as _gazetteers_pkg  # noqa: F401
from geo_pipeline import indexes as _indexes_pkg  # noqa: F401
from geo_pipeline import reducers as _reducers_pkg  # noqa: F401
from geo_pipeline import selectors as _selectors_pkg  # noqa: F401

from .config import DEFAULT_OPTIONS, Options, ResolverConfig
from .indexes.base import CoordinateIndex, LocationIndex
from .reducers.base import ReductionStrategy
from .registry import (
    coordinate_indexes,
    coordinate_selectors,
    gazetteers,
    location_indexes,
    location_selectors,
    reducers,
)
from .selectors.base import CoordinateSelectionStrategy, LocationSelectionStrategy
from .types import (
    CoordinateOccurrence,
    ExtractionContext,
    LocationOccurrence,
    ResolutionContext,
    ResolvedCoordinate,
    ResolvedLocation,
)

logger = logging.getLogger(__name__)


def _find_candidates(
    search: Callable[[Any, Options], List[Any]],
    occurrences: Iterable[Any],
    options: Options,
) -> List[List[Any]]:
    candidates: List[List[Any]] = []
    for occurrence in occurrences:
        results = list(search(occurrence, options))
        # Strategies rely on every list having at least one candidate
        if results:
            candidates.append(results)
        else:
            logger.debug(f"No candidates for occurrence {occurrence.text!r}, dropping it")
    return candidates


class LocationResolver:
    """Orchestrates candidate generation, selection and reduction."""

    def __init__(
        self,
        location_index: LocationIndex,
        coordinate_index: CoordinateIndex,
        location_selector: LocationSelectionStrategy,
        coordinate_selector: CoordinateSelectionStrategy,
        reducer: ReductionStrategy,
        default_options: Options = DEFAULT_OPTIONS,
        parallel: bool = True,
    ) -> None:
        self.location_index = location_index
        self.coordinate_index = coordinate_index
        self.location_selector = location_selector
        self.coordinate_selector = coordinate_selector
        self.reducer = reducer
        self.default_options = default_options
        self.parallel = parallel

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "LocationResolver":
        """Build a resolver from registered components.

        The configured gazetteer is loaded once and handed to both indexes.
        """
        gazetteer = None
        if config.gazetteer:
            gazetteer_factory = gazetteers.get(config.gazetteer.name)
            gazetteer = gazetteer_factory(**config.gazetteer.params)

        location_index = location_indexes.get(config.location_index.name)(
            gazetteer=gazetteer, **config.location_index.params
        )
        coordinate_index = coordinate_indexes.get(config.coordinate_index.name)(
            gazetteer=gazetteer, **config.coordinate_index.params
        )
        location_selector = location_selectors.get(config.location_selector.name)(
            **config.location_selector.params
        )
        coordinate_selector = coordinate_selectors.get(config.coordinate_selector.name)(
            **config.coordinate_selector.params
        )
        reducer = reducers.get(config.reducer.name)(**config.reducer.params)

        return cls(
            location_index=location_index,
            coordinate_index=coordinate_index,
            location_selector=location_selector,
            coordinate_selector=coordinate_selector,
            reducer=reducer,
            default_options=config.options,
            parallel=config.parallel,
        )

    def find_location_candidates(
        self, locations: Iterable[LocationOccurrence], options: Options
    ) -> List[List[ResolvedLocation]]:
        """One non-empty candidate list per location with index hits, in input order."""
        return _find_candidates(self.location_index.search, locations, options)

    def find_coordinate_candidates(
        self, coordinates: Iterable[CoordinateOccurrence], options: Options
    ) -> List[List[ResolvedCoordinate]]:
        """One non-empty candidate list per coordinate with index hits, in input order."""
        return _find_candidates(self.coordinate_index.search, coordinates, options)

    def resolve_locations(
        self, context: ExtractionContext, options: Optional[Options] = None
    ) -> ResolutionContext:
        """
        Resolve all occurrences of an extraction context.

        Args:
            context: Location and coordinate occurrences to resolve
            options: Settings for this call; defaults to the resolver's
                default options (``DEFAULT_OPTIONS`` unless configured)

        Returns:
            The reduced ResolutionContext

        Any exception raised by an index or strategy propagates unchanged;
        no partial result is returned.
        """
        if options is None:
            options = self.default_options

        logger.debug(
            f"Beginning resolution of {len(context.locations)} locations "
            f"and {len(context.coordinates)} coordinates"
        )

        if self.parallel:
            resolved_locations, resolved_coordinates = self._run_parallel(context, options)
        else:
            resolved_coordinates = self._coordinate_branch(context, options)
            resolved_locations = self._location_branch(context, options)

        return self.reducer.reduce(context, resolved_locations, resolved_coordinates)

    def _run_parallel(
        self, context: ExtractionContext, options: Options
    ) -> Tuple[List[ResolvedLocation], List[ResolvedCoordinate]]:
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="geo-resolver") as executor:
            location_future = executor.submit(self._location_branch, context, options)
            coordinate_future = executor.submit(self._coordinate_branch, context, options)
            # Join point: result() re-raises a branch's exception unchanged
            resolved_coordinates = coordinate_future.result()
            resolved_locations = location_future.result()
        return resolved_locations, resolved_coordinates

    def _location_branch(
        self, context: ExtractionContext, options: Options
    ) -> List[ResolvedLocation]:
        candidates = self.find_location_candidates(context.locations, options)
        logger.debug(f"Found {len(candidates)} location candidate lists")
        selected = list(self.location_selector.select(candidates, context.coordinates, options))
        logger.debug(f"Selected {len(selected)} locations")
        return selected

    def _coordinate_branch(
        self, context: ExtractionContext, options: Options
    ) -> List[ResolvedCoordinate]:
        candidates = self.find_coordinate_candidates(context.coordinates, options)
        logger.debug(f"Found {len(candidates)} coordinate candidate lists")
        selected = list(self.coordinate_selector.select(candidates, context.locations, options))
        logger.debug(f"Selected {len(selected)} coordinates")
        return selected
