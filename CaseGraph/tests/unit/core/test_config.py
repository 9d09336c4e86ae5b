"""
Unit tests for configuration dataclasses and dictionary loading.
"""

import pytest

from CaseGraph_Analytics.core.config import (
    AnalysisConfig,
    AnalysisMode,
    AnnealingConfig,
    CircularLayoutConfig,
    CommunityConfig,
    EngineConfig,
    ForceLayoutConfig,
    HierarchicalLayoutConfig,
    load_config_from_dict,
)
from CaseGraph_Analytics.core.exceptions import CaseGraphError, ConfigurationError

pytestmark = [pytest.mark.unit, pytest.mark.core]


class TestSectionValidation:
    """Test __post_init__ validation of each section."""

    def test_defaults_are_valid(self):
        config = EngineConfig()

        assert config.force_layout.iterations == 300
        assert config.circular_layout.radius == 200.0
        assert config.grid_layout.spacing == 80.0
        assert config.hierarchical_layout.levels == 3
        assert config.annealing.crossing_penalty == 1000.0
        assert config.community.absorb_probability == 0.7

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: ForceLayoutConfig(damping=1.5),
            lambda: ForceLayoutConfig(iterations=-1),
            lambda: ForceLayoutConfig(max_displacement=0),
            lambda: CircularLayoutConfig(sort_by="size"),
            lambda: HierarchicalLayoutConfig(levels=0),
            lambda: AnnealingConfig(step_size=0),
            lambda: CommunityConfig(method="label_propagation"),
            lambda: CommunityConfig(absorb_probability=-0.1),
            lambda: AnalysisConfig(sample_size=0),
            lambda: AnalysisConfig(max_exact_nodes=0),
        ],
    )
    def test_invalid_values_raise(self, factory):
        with pytest.raises(ConfigurationError):
            factory()

    def test_configuration_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            ForceLayoutConfig(damping=-0.5)
        assert issubclass(ConfigurationError, CaseGraphError)

    def test_mode_must_be_enum(self):
        with pytest.raises(ConfigurationError):
            AnalysisConfig(mode="fast")


class TestAnalysisModes:
    """Test mode-driven betweenness sampling."""

    def test_fast_mode_always_samples(self):
        config = AnalysisConfig(mode=AnalysisMode.FAST)

        assert config.use_approximate_betweenness is True
        assert config.should_sample(3) is True

    def test_full_mode_never_samples(self):
        config = AnalysisConfig(mode=AnalysisMode.FULL, use_approximate_betweenness=True)

        assert config.should_sample(10_000) is False

    def test_medium_mode_samples_above_threshold(self):
        config = AnalysisConfig(mode=AnalysisMode.MEDIUM, sampling_threshold=100)

        assert config.should_sample(100) is False
        assert config.should_sample(101) is True


class TestLoadConfigFromDict:
    """Test building configurations from plain dictionaries."""

    def test_empty_dict_gives_defaults(self):
        assert load_config_from_dict({}) == EngineConfig()

    def test_mode_string_is_case_insensitive(self):
        config = load_config_from_dict({"analysis": {"mode": "FAST"}})

        assert config.analysis.mode is AnalysisMode.FAST

    def test_sections_are_applied(self):
        config = load_config_from_dict(
            {"force_layout": {"iterations": 50}, "grid_layout": {"spacing": 20, "sort_by": "name"}}
        )

        assert config.force_layout.iterations == 50
        assert config.grid_layout.spacing == 20
        assert config.grid_layout.sort_by == "name"
        assert config.circular_layout == CircularLayoutConfig()

    def test_invalid_mode_raises(self):
        with pytest.raises(ConfigurationError, match="Invalid analysis mode"):
            load_config_from_dict({"analysis": {"mode": "turbo"}})

    def test_unknown_section_raises(self):
        with pytest.raises(ConfigurationError, match="Unknown configuration sections"):
            load_config_from_dict({"renderer": {}})

    def test_unknown_key_raises(self):
        with pytest.raises(ConfigurationError, match="Configuration validation failed"):
            load_config_from_dict({"annealing": {"cooling": "exponential"}})

    def test_invalid_value_raises(self):
        with pytest.raises(ConfigurationError):
            load_config_from_dict({"force_layout": {"damping": 2}})

    def test_to_dict_round_trips_through_loader(self):
        config = load_config_from_dict({"analysis": {"mode": "medium"}, "annealing": {"iterations": 5}})

        data = config.to_dict()

        assert data["analysis"]["mode"] == "medium"
        assert load_config_from_dict(data) == config
