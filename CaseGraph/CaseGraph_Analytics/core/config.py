"""
Configuration dataclasses for CaseGraph analytics.

Every tunable of the engine is an explicit call-time option. The dataclasses
below group those options with their documented defaults and validate them
on construction, so that a bad value fails fast with a clear message.

There is intentionally no file or environment loading: callers build configs
directly or from a plain dictionary with :func:`load_config_from_dict`.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .exceptions import ConfigurationError

SORT_CHOICES = ("degree", "name", None)
COMMUNITY_METHODS = ("seed_grow", "louvain")


class AnalysisMode(Enum):
    """Analysis depth modes with different performance characteristics."""
    FAST = "fast"      # Sampled betweenness for every graph
    MEDIUM = "medium"  # Sampled betweenness above the sampling threshold
    FULL = "full"      # Exact betweenness


def _validate_sort_by(sort_by: Optional[str]) -> None:
    if sort_by not in SORT_CHOICES:
        raise ConfigurationError(
            f"Invalid sort_by '{sort_by}'. Must be one of: {list(SORT_CHOICES)}"
        )


@dataclass
class ForceLayoutConfig:
    """Configuration for the spring-repulsion force simulation."""
    iterations: int = 300
    repulsion_strength: float = 500.0
    attraction_strength: float = 0.01
    damping: float = 0.85
    centering_strength: float = 0.01
    center_x: float = 400.0
    center_y: float = 300.0
    max_displacement: float = 50.0

    def __post_init__(self):
        """Validate force layout configuration after initialization."""
        if self.iterations < 0:
            raise ConfigurationError("iterations cannot be negative")

        if self.repulsion_strength < 0 or self.attraction_strength < 0:
            raise ConfigurationError("Force strengths cannot be negative")

        if not (0.0 <= self.damping <= 1.0):
            raise ConfigurationError("damping must be between 0.0 and 1.0")

        if self.centering_strength < 0:
            raise ConfigurationError("centering_strength cannot be negative")

        if self.max_displacement <= 0:
            raise ConfigurationError("max_displacement must be positive")


@dataclass
class CircularLayoutConfig:
    """Configuration for circular placement."""
    radius: float = 200.0
    center_x: float = 400.0
    center_y: float = 300.0
    sort_by: Optional[str] = "degree"
    group_by_type: bool = False

    def __post_init__(self):
        if self.radius < 0:
            raise ConfigurationError("radius cannot be negative")
        _validate_sort_by(self.sort_by)


@dataclass
class GridLayoutConfig:
    """Configuration for row-major grid placement."""
    spacing: float = 80.0
    start_x: float = 0.0
    start_y: float = 0.0
    sort_by: Optional[str] = "degree"
    group_by_type: bool = False

    def __post_init__(self):
        if self.spacing <= 0:
            raise ConfigurationError("spacing must be positive")
        _validate_sort_by(self.sort_by)


@dataclass
class HierarchicalLayoutConfig:
    """Configuration for degree-banded hierarchical placement."""
    levels: int = 3
    level_height: float = 100.0
    node_spacing: float = 100.0
    start_y: float = 0.0

    def __post_init__(self):
        if self.levels < 1:
            raise ConfigurationError("levels must be at least 1")

        if self.level_height <= 0 or self.node_spacing <= 0:
            raise ConfigurationError("level_height and node_spacing must be positive")


@dataclass
class CommunityLayoutConfig:
    """Configuration for community-clustered placement."""
    radius: float = 200.0
    member_radius: float = 40.0
    center_x: float = 400.0
    center_y: float = 300.0

    def __post_init__(self):
        if self.radius < 0 or self.member_radius < 0:
            raise ConfigurationError("radii cannot be negative")


@dataclass
class AnnealingConfig:
    """Configuration for simulated-annealing crossing reduction."""
    iterations: int = 1000
    temperature: float = 100.0
    step_size: float = 50.0
    crossing_penalty: float = 1000.0

    def __post_init__(self):
        if self.iterations < 0:
            raise ConfigurationError("iterations cannot be negative")

        if self.temperature < 0:
            raise ConfigurationError("temperature cannot be negative")

        if self.step_size <= 0:
            raise ConfigurationError("step_size must be positive")

        if self.crossing_penalty < 0:
            raise ConfigurationError("crossing_penalty cannot be negative")


@dataclass
class CommunityConfig:
    """Configuration for community detection."""
    method: str = "seed_grow"
    absorb_probability: float = 0.7
    seed: Optional[int] = None

    def __post_init__(self):
        if self.method not in COMMUNITY_METHODS:
            raise ConfigurationError(
                f"Invalid community method '{self.method}'. "
                f"Must be one of: {list(COMMUNITY_METHODS)}"
            )

        if not (0.0 <= self.absorb_probability <= 1.0):
            raise ConfigurationError("absorb_probability must be between 0.0 and 1.0")


@dataclass
class AnalysisConfig:
    """Configuration for metric computation depth and budgets."""
    mode: AnalysisMode = AnalysisMode.FULL
    sampling_threshold: int = 500
    sample_size: int = 100
    sample_seed: int = 123
    max_exact_nodes: Optional[int] = None
    use_approximate_betweenness: bool = False
    top_n: int = 5

    def __post_init__(self):
        """Validate analysis configuration after initialization."""
        if not isinstance(self.mode, AnalysisMode):
            raise ConfigurationError(
                f"mode must be an AnalysisMode enum value, got {type(self.mode)}"
            )

        if self.sampling_threshold < 3:
            raise ConfigurationError("sampling_threshold must be at least 3")

        if self.sample_size < 1:
            raise ConfigurationError("sample_size must be positive")

        if self.max_exact_nodes is not None and self.max_exact_nodes < 1:
            raise ConfigurationError("max_exact_nodes must be positive when specified")

        if self.top_n < 1:
            raise ConfigurationError("top_n must be positive")

        # Auto-configure sampling based on mode
        if self.mode == AnalysisMode.FAST:
            self.use_approximate_betweenness = True
        elif self.mode == AnalysisMode.FULL:
            self.use_approximate_betweenness = False

    def should_sample(self, node_count: int) -> bool:
        """Whether betweenness should use the sampled variant for this graph size."""
        if self.mode == AnalysisMode.MEDIUM:
            return self.use_approximate_betweenness or node_count > self.sampling_threshold
        return self.use_approximate_betweenness


@dataclass
class EngineConfig:
    """Top-level configuration grouping every engine section."""
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    community: CommunityConfig = field(default_factory=CommunityConfig)
    force_layout: ForceLayoutConfig = field(default_factory=ForceLayoutConfig)
    circular_layout: CircularLayoutConfig = field(default_factory=CircularLayoutConfig)
    grid_layout: GridLayoutConfig = field(default_factory=GridLayoutConfig)
    hierarchical_layout: HierarchicalLayoutConfig = field(
        default_factory=HierarchicalLayoutConfig
    )
    community_layout: CommunityLayoutConfig = field(default_factory=CommunityLayoutConfig)
    annealing: AnnealingConfig = field(default_factory=AnnealingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to a JSON-compatible dictionary."""
        data = asdict(self)
        data["analysis"]["mode"] = self.analysis.mode.value
        return data


_SECTIONS = {
    "community": CommunityConfig,
    "force_layout": ForceLayoutConfig,
    "circular_layout": CircularLayoutConfig,
    "grid_layout": GridLayoutConfig,
    "hierarchical_layout": HierarchicalLayoutConfig,
    "community_layout": CommunityLayoutConfig,
    "annealing": AnnealingConfig,
}


def load_config_from_dict(config_dict: Dict[str, Any]) -> EngineConfig:
    """
    Creates an EngineConfig instance from a dictionary.

    Missing sections and keys fall back to their defaults.

    Args:
        config_dict: Configuration dictionary, e.g. ``{"analysis": {"mode": "fast"}}``

    Returns:
        EngineConfig: Validated configuration instance.

    Raises:
        ConfigurationError: If configuration validation fails.
    """
    unknown = set(config_dict) - set(_SECTIONS) - {"analysis"}
    if unknown:
        raise ConfigurationError(f"Unknown configuration sections: {sorted(unknown)}")

    try:
        analysis_dict = dict(config_dict.get("analysis", {}))

        # Handle analysis mode - convert string to enum if needed
        mode_value = analysis_dict.get("mode", "full")
        if isinstance(mode_value, str):
            try:
                analysis_dict["mode"] = AnalysisMode(mode_value.lower())
            except ValueError:
                raise ConfigurationError(
                    f"Invalid analysis mode '{mode_value}'. Must be one of: fast, medium, full"
                )

        sections = {
            name: section_cls(**config_dict.get(name, {}))
            for name, section_cls in _SECTIONS.items()
        }
        return EngineConfig(analysis=AnalysisConfig(**analysis_dict), **sections)

    except ConfigurationError:
        raise
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e
