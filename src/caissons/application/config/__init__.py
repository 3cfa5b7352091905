"""Configuration schema and loading system for caisson specifications.

Public API:
    - CaissonConfiguration: Root configuration model
    - CabinetConfigSchema: Caisson dimensions and construction model
    - OutputConfig: Output format configuration model
    - load_config: Load configuration from a JSON file or a bundled template name
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - catalog_hint: Known hardware keys for a configuration path
    - config_to_cabinet_config: Convert a configuration to the domain value object
    - ValidationResult: Container for validation results
    - validate_config: Perform full configuration validation

Example:
    >>> from pathlib import Path
    >>> from caissons.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("base-600.json"))
    ...     print(f"Caisson: {config.cabinet.width}x{config.cabinet.height}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from caissons.application.config.adapter import config_to_cabinet_config
from caissons.application.config.loader import (
    ConfigError,
    bundled_template_names,
    catalog_hint,
    load_config,
    load_config_from_dict,
    read_bundled_template,
)
from caissons.application.config.schema import (
    OUTPUT_FORMATS,
    SUPPORTED_VERSIONS,
    BackConfigSchema,
    CabinetConfigSchema,
    CaissonConfiguration,
    DoorConfigSchema,
    DrawerConfigSchema,
    HingeConfigSchema,
    OutputConfig,
    ShelvesConfigSchema,
    ThicknessConfigSchema,
)
from caissons.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    check_woodworking_advisories,
    validate_config,
)

__all__ = [
    "BackConfigSchema",
    "CabinetConfigSchema",
    "CaissonConfiguration",
    "ConfigError",
    "DoorConfigSchema",
    "DrawerConfigSchema",
    "HingeConfigSchema",
    "OUTPUT_FORMATS",
    "OutputConfig",
    "SUPPORTED_VERSIONS",
    "ShelvesConfigSchema",
    "ThicknessConfigSchema",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "bundled_template_names",
    "catalog_hint",
    "check_woodworking_advisories",
    "config_to_cabinet_config",
    "load_config",
    "load_config_from_dict",
    "read_bundled_template",
    "validate_config",
]
