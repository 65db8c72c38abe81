from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from geo_pipeline.errors import ConfigError


@dataclass(frozen=True)
class Options:
    """Per-call settings handed unmodified to every pipeline stage."""

    fuzzy: bool = True
    fuzzy_threshold: float = 80.0
    max_results: int = 10
    max_distance_km: float = 50.0
    locale: Optional[str] = None
    extras: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if self.max_results < 1:
            raise ConfigError(f"max_results must be >= 1, got {self.max_results}")
        if not 0.0 <= self.fuzzy_threshold <= 100.0:
            raise ConfigError(
                f"fuzzy_threshold must be within [0, 100], got {self.fuzzy_threshold}"
            )
        if self.max_distance_km <= 0:
            raise ConfigError(
                f"max_distance_km must be positive, got {self.max_distance_km}"
            )
        object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))

    def get(self, key: str, default: Any = None) -> Any:
        return self.extras.get(key, default)

    def replace(self, **changes: Any) -> "Options":
        return replace(self, **changes)

    @staticmethod
    def from_dict(data: Optional[Dict[str, Any]]) -> "Options":
        if not data:
            return Options()
        known = {f.name for f in fields(Options)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")
        return Options(**{k: v for k, v in data.items() if v is not None})


DEFAULT_OPTIONS = Options()


@dataclass
class ComponentConfig:
    """Generic component configuration."""

    name: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ResolverConfig:
    """Top-level resolver configuration."""

    location_index: ComponentConfig = field(
        default_factory=lambda: ComponentConfig(name="fuzzy_name")
    )
    coordinate_index: ComponentConfig = field(
        default_factory=lambda: ComponentConfig(name="nearest_place")
    )
    location_selector: ComponentConfig = field(
        default_factory=lambda: ComponentConfig(name="heuristic")
    )
    coordinate_selector: ComponentConfig = field(
        default_factory=lambda: ComponentConfig(name="confidence")
    )
    reducer: ComponentConfig = field(
        default_factory=lambda: ComponentConfig(name="default")
    )
    gazetteer: Optional[ComponentConfig] = None
    options: Options = DEFAULT_OPTIONS
    parallel: bool = True

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "ResolverConfig":
        def build(section: str, default: Optional[str]) -> Optional[ComponentConfig]:
            entry = data.get(section)
            if entry is None:
                return ComponentConfig(name=default) if default else None
            if not isinstance(entry, dict):
                raise ConfigError(
                    f"Section '{section}' must be a mapping with a component name."
                )
            if "name" not in entry:
                raise ConfigError(f"Section '{section}' is missing a component name.")
            return ComponentConfig(name=entry["name"], params=entry.get("params", {}))

        return ResolverConfig(
            location_index=build("location_index", "fuzzy_name"),  # type: ignore[arg-type]
            coordinate_index=build("coordinate_index", "nearest_place"),  # type: ignore[arg-type]
            location_selector=build("location_selector", "heuristic"),  # type: ignore[arg-type]
            coordinate_selector=build("coordinate_selector", "confidence"),  # type: ignore[arg-type]
            reducer=build("reducer", "default"),  # type: ignore[arg-type]
            gazetteer=build("gazetteer", None),
            options=Options.from_dict(data.get("options")),
            parallel=data.get("parallel", True),
        )
