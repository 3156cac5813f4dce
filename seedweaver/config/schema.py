"""
SeedWeaver v0.1.0

Configuration schema for SeedWeaver.

Defines all available configuration parameters with defaults and validation.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

from dataclasses import dataclass, fields
from typing import Dict, Any, Optional, List
from pathlib import Path
import copy
import yaml


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


INVALID_ORIENTATION_POLICIES = ('skip', 'raise')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Seed expansion and bubble collapsing
    # ========================================================================
    'seed_graph': {
        # Contigs at or below this depth never take part in expansion
        'filter_depth': 2.0,
        # Accepted for pipeline compatibility; not used by the algorithm
        'nucl_depth': None,
        # A link admits a new seed if link_depth > ratio * min(endpoint depth)
        'growth_link_ratio': 0.5,
        # A seed-to-seed link is kept if link_depth > ratio * min(endpoint depth)
        'retention_link_ratio': 0.3,
        # Contigs at or below this length (bp) may be collapsed as bubbles
        'bubble_max_length': 50,
        'max_expansion_rounds': 100,
        'deadline_seconds': None,  # No wall-clock limit by default
        'invalid_orientation': 'skip',  # 'skip' or 'raise'
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'write_gfa': True,
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': 'seedweaver.log',
        },
    },
}


@dataclass
class SeedGraphConfig:
    """Thresholds for seed expansion, link retention and bubble collapsing."""
    filter_depth: float = 2.0
    nucl_depth: Optional[float] = None
    growth_link_ratio: float = 0.5
    retention_link_ratio: float = 0.3
    bubble_max_length: int = 50
    max_expansion_rounds: int = 100
    deadline_seconds: Optional[float] = None
    invalid_orientation: str = 'skip'

    def __post_init__(self):
        """Validate configuration."""
        errors = _seed_graph_errors(self.__dict__)
        if errors:
            raise ConfigValidationError("; ".join(errors))

    @classmethod
    def from_dict(cls, values: Optional[Dict[str, Any]]) -> "SeedGraphConfig":
        """Build from a 'seed_graph' config section, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (values or {}).items() if k in known})


def _is_number(value: Any) -> bool:
    """True for int or float, excluding bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _seed_graph_errors(section: Dict[str, Any]) -> List[str]:
    errors = []

    filter_depth = section.get('filter_depth', 0)
    if not _is_number(filter_depth) or filter_depth < 0:
        errors.append(f"filter_depth must be a non-negative number, got {filter_depth!r}")

    for key in ('growth_link_ratio', 'retention_link_ratio'):
        ratio = section.get(key, 0.5)
        if not _is_number(ratio) or not 0 <= ratio <= 1:
            errors.append(f"{key} must be between 0 and 1, got {ratio!r}")

    bubble_max_length = section.get('bubble_max_length', 0)
    if not _is_integer(bubble_max_length) or bubble_max_length < 0:
        errors.append(f"bubble_max_length must be a non-negative integer, got {bubble_max_length!r}")

    max_rounds = section.get('max_expansion_rounds', 1)
    if not _is_integer(max_rounds) or max_rounds < 1:
        errors.append(f"max_expansion_rounds must be >= 1, got {max_rounds!r}")

    deadline = section.get('deadline_seconds')
    if deadline is not None and (not _is_number(deadline) or deadline <= 0):
        errors.append(f"deadline_seconds must be positive, got {deadline!r}")

    nucl_depth = section.get('nucl_depth')
    if nucl_depth is not None and not _is_number(nucl_depth):
        errors.append(f"nucl_depth must be a number, got {nucl_depth!r}")

    policy = section.get('invalid_orientation', 'skip')
    if policy not in INVALID_ORIENTATION_POLICIES:
        errors.append(
            f"invalid_orientation must be one of {', '.join(INVALID_ORIENTATION_POLICIES)}, "
            f"got {policy!r}"
        )

    return errors


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary

    Raises:
        ConfigValidationError: If the file is not valid YAML or replaces a
            config section with something other than a mapping
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path) as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in config file {config_path}: {e}")

        if user_config:
            if not isinstance(user_config, dict):
                raise ConfigValidationError(
                    f"Config file {config_path} must contain a mapping at the top level"
                )
            # Deep merge user config into defaults
            config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict, prefix: str = "") -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary
        prefix: Dotted path of ``base`` within the full config

    Returns:
        Merged dictionary

    Raises:
        ConfigValidationError: If a section that is a mapping in ``base``
            is overridden by anything else
    """
    result = base.copy()

    for key, value in override.items():
        path = f"{prefix}{key}"
        if key in result and isinstance(result[key], dict):
            if not isinstance(value, dict):
                raise ConfigValidationError(
                    f"Config section '{path}' must be a mapping, got {type(value).__name__}"
                )
            result[key] = _deep_merge(result[key], value, prefix=f"{path}.")
        else:
            result[key] = value

    return result


def apply_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply command-line overrides to a configuration.

    Keys use dotted notation (e.g. 'seed_graph.filter_depth'); None values
    are skipped so unset CLI options leave the file value alone.
    """
    result = copy.deepcopy(config)
    for key, value in overrides.items():
        if value is None:
            continue
        keys = key.split('.')
        target = result
        for k in keys[:-1]:
            target = target.setdefault(k, {})
        target[keys[-1]] = value
    return result


def save_config_template(output_path: Path):
    """
    Save the default configuration as a YAML template.

    Args:
        output_path: Output file path
    """
    with open(output_path, 'w') as f:
        yaml.dump(DEFAULT_CONFIG, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    seed_graph = config.get('seed_graph')
    if not isinstance(seed_graph, dict):
        errors.append("Missing required configuration section: seed_graph")
    else:
        errors.extend(_seed_graph_errors(seed_graph))
        known = {f.name for f in fields(SeedGraphConfig)}
        for key in seed_graph:
            if key not in known:
                errors.append(f"Unknown seed_graph parameter: {key}")

    output = config.get('output', {})
    if not isinstance(output, dict):
        errors.append("Configuration section output must be a mapping")
        return errors

    logging_section = output.get('logging', {})
    if not isinstance(logging_section, dict):
        errors.append("Configuration section output.logging must be a mapping")
        return errors

    level = logging_section.get('level', 'INFO')
    if level not in LOG_LEVELS:
        errors.append(f"Invalid logging level: {level}")

    return errors
