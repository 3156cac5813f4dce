#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeedWeaver v0.1.0

Tests for configuration loading and validation.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

import pytest
import yaml

from seedweaver.config.schema import (
    DEFAULT_CONFIG,
    ConfigValidationError,
    SeedGraphConfig,
    apply_overrides,
    load_config,
    save_config_template,
    validate_config,
)


class TestSeedGraphConfig:
    """Test the seed graph threshold dataclass."""

    def test_defaults(self):
        config = SeedGraphConfig()

        assert config.filter_depth == 2.0
        assert config.nucl_depth is None
        assert config.growth_link_ratio == 0.5
        assert config.retention_link_ratio == 0.3
        assert config.bubble_max_length == 50
        assert config.max_expansion_rounds == 100
        assert config.deadline_seconds is None
        assert config.invalid_orientation == 'skip'

    def test_defaults_match_default_config(self):
        config = SeedGraphConfig.from_dict(DEFAULT_CONFIG['seed_graph'])
        assert config == SeedGraphConfig()

    @pytest.mark.parametrize("kwargs", [
        {'filter_depth': -1},
        {'growth_link_ratio': 1.5},
        {'retention_link_ratio': -0.1},
        {'bubble_max_length': 12.5},
        {'max_expansion_rounds': 0},
        {'deadline_seconds': 0},
        {'nucl_depth': 'deep'},
        {'invalid_orientation': 'ignore'},
        {'bubble_max_length': True},
        {'max_expansion_rounds': True},
        {'filter_depth': False},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ConfigValidationError):
            SeedGraphConfig(**kwargs)

    def test_from_dict_ignores_unknown_keys(self):
        config = SeedGraphConfig.from_dict({'filter_depth': 5.0, 'kmer_size': 31})
        assert config.filter_depth == 5.0

    def test_from_dict_none(self):
        assert SeedGraphConfig.from_dict(None) == SeedGraphConfig()


class TestLoadConfig:
    """Test YAML loading and merging."""

    def test_defaults_without_file(self):
        config = load_config()

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_user_values_merged(self, temp_output_dir):
        path = temp_output_dir / "config.yaml"
        path.write_text("seed_graph:\n  filter_depth: 4.5\n")

        config = load_config(path)

        assert config['seed_graph']['filter_depth'] == 4.5
        assert config['seed_graph']['bubble_max_length'] == 50
        assert config['output']['write_gfa'] is True

    def test_defaults_not_mutated(self, temp_output_dir):
        path = temp_output_dir / "config.yaml"
        path.write_text("output:\n  logging:\n    level: DEBUG\n")

        load_config(path)

        assert DEFAULT_CONFIG['output']['logging']['level'] == 'INFO'

    def test_empty_file(self, temp_output_dir):
        path = temp_output_dir / "empty.yaml"
        path.write_text("")
        assert load_config(path) == DEFAULT_CONFIG

    def test_missing_file(self, temp_output_dir):
        with pytest.raises(FileNotFoundError):
            load_config(temp_output_dir / "missing.yaml")

    def test_invalid_yaml(self, temp_output_dir):
        path = temp_output_dir / "bad.yaml"
        path.write_text("seed_graph: [unclosed\n")
        with pytest.raises(ConfigValidationError):
            load_config(path)

    def test_top_level_must_be_mapping(self, temp_output_dir):
        path = temp_output_dir / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigValidationError):
            load_config(path)

    @pytest.mark.parametrize("text,section", [
        ("output: null\n", "output"),
        ("seed_graph: [1, 2]\n", "seed_graph"),
        ("output:\n  logging: INFO\n", "output.logging"),
    ])
    def test_section_must_stay_mapping(self, temp_output_dir, text, section):
        path = temp_output_dir / "sections.yaml"
        path.write_text(text)
        with pytest.raises(ConfigValidationError, match=f"'{section}' must be a mapping"):
            load_config(path)


class TestOverridesAndValidation:
    """Test CLI overrides, templates and validation."""

    def test_apply_overrides(self):
        config = apply_overrides(DEFAULT_CONFIG, {
            'seed_graph.filter_depth': 3.0,
            'seed_graph.max_expansion_rounds': None,
        })

        assert config['seed_graph']['filter_depth'] == 3.0
        assert config['seed_graph']['max_expansion_rounds'] == 100
        assert DEFAULT_CONFIG['seed_graph']['filter_depth'] == 2.0

    def test_template_round_trip(self, temp_output_dir):
        path = temp_output_dir / "template.yaml"
        save_config_template(path)

        with open(path) as f:
            saved = yaml.safe_load(f)

        assert saved == DEFAULT_CONFIG
        assert validate_config(saved) == []

    def test_validate_reports_all_errors(self):
        config = apply_overrides(DEFAULT_CONFIG, {
            'seed_graph.growth_link_ratio': 2.0,
            'seed_graph.min_overlap': 10,
            'output.logging.level': 'LOUD',
        })
        errors = validate_config(config)

        assert len(errors) == 3
        assert any('growth_link_ratio' in e for e in errors)
        assert any('Unknown seed_graph parameter: min_overlap' in e for e in errors)
        assert any('Invalid logging level' in e for e in errors)

    def test_validate_missing_section(self):
        errors = validate_config({'output': {}})
        assert errors == ["Missing required configuration section: seed_graph"]

    @pytest.mark.parametrize("output,message", [
        (None, "Configuration section output must be a mapping"),
        ({'logging': ['INFO']}, "Configuration section output.logging must be a mapping"),
    ])
    def test_validate_non_mapping_output(self, output, message):
        config = apply_overrides(DEFAULT_CONFIG, {})
        config['output'] = output

        assert validate_config(config) == [message]

# SeedWeaver v0.1.0
# Any usage is subject to this software's license.
