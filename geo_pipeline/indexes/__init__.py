"""Location and coordinate indexes."""

from .fuzzy_name import FuzzyNameLocationIndex  # noqa: F401
from .nearest_place import NearestPlaceCoordinateIndex  # noqa: F401
