"""confhound - precedence-ordered, environment-aware configuration resolution."""

from confhound.accessors import TypedAccessor
from confhound.diagnostics import SourceInfo
from confhound.environment import (
    DEFAULT_DISCOVERY_KEYS,
    DEFAULT_ENVIRONMENT,
    EnvironmentLoader,
)
from confhound.errors import (
    ConfigError,
    ConfigValidationError,
    MissingRequiredConfigError,
    SourceLoadError,
    TypeConversionError,
)
from confhound.keys import ConfigKey, KeyDescriptor, KeyRegistry
from confhound.manager import (
    ConfigManager,
    auto_load_config,
    get_manager,
    reset_manager,
    set_manager,
)
from confhound.masking import MASK
from confhound.prefix import PrefixIndex
from confhound.registry import SourceRegistry
from confhound.resolver import ResolvedValue, Resolver

# Sources
from confhound.sources import (
    ConfigSource,
    EnumerableSource,
    EnvironmentSource,
    FileSource,
    JsonFileSource,
    MapSource,
    ParameterSource,
    ProcessProperties,
    ProcessPropertySource,
    PropertiesFileSource,
    TomlFileSource,
    YamlFileSource,
)

# Validation
from confhound.validation import (
    NotEmpty,
    OneOf,
    Pattern,
    Range,
    Required,
    Rule,
    ValidationError,
    ValidationResult,
    Validator,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "ConfigManager",
    "ConfigKey",
    "KeyDescriptor",
    "KeyRegistry",
    "SourceRegistry",
    "Resolver",
    "ResolvedValue",
    "TypedAccessor",
    "SourceInfo",
    "PrefixIndex",
    "EnvironmentLoader",
    "DEFAULT_DISCOVERY_KEYS",
    "DEFAULT_ENVIRONMENT",
    "MASK",
    # Sources
    "ConfigSource",
    "EnumerableSource",
    "EnvironmentSource",
    "ProcessProperties",
    "ProcessPropertySource",
    "MapSource",
    "ParameterSource",
    "FileSource",
    "PropertiesFileSource",
    "JsonFileSource",
    "YamlFileSource",
    "TomlFileSource",
    # Validation
    "Rule",
    "Required",
    "NotEmpty",
    "Pattern",
    "Range",
    "OneOf",
    "Validator",
    "ValidationError",
    "ValidationResult",
    # Errors
    "ConfigError",
    "MissingRequiredConfigError",
    "TypeConversionError",
    "SourceLoadError",
    "ConfigValidationError",
    # Global
    "get_manager",
    "set_manager",
    "reset_manager",
    "auto_load_config",
]
