"""
SeedWeaver v0.1.0

Configuration management for SeedWeaver.

Author: SeedWeaver Development Team
License: MIT - See LICENSE
"""

from .schema import (
    DEFAULT_CONFIG,
    ConfigValidationError,
    SeedGraphConfig,
    apply_overrides,
    load_config,
    save_config_template,
    validate_config,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigValidationError",
    "SeedGraphConfig",
    "apply_overrides",
    "load_config",
    "save_config_template",
    "validate_config",
]
