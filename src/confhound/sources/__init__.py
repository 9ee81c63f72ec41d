"""Configuration sources.

Sources are named, prioritized providers of raw string values:

- EnvironmentSource: environment variables (priority 60)
- ProcessPropertySource: process-level settable properties (priority 50)
- ParameterSource: external parameters, e.g. from a test runner (priority 80)
- MapSource: in-memory mapping
- PropertiesFileSource / JsonFileSource / YamlFileSource / TomlFileSource
"""

from confhound.sources.base import (
    ENVIRONMENT_LAYER_PRIORITY,
    ENVIRONMENT_PRIORITY,
    GLOBAL_LAYER_PRIORITY,
    GLOBAL_SECTION_PRIORITY,
    JSON_PRIORITY,
    PARAMETER_PRIORITY,
    PROCESS_PROPERTY_PRIORITY,
    PROPERTIES_PRIORITY,
    TOML_PRIORITY,
    YAML_PRIORITY,
    ConfigSource,
    EnumerableSource,
)
from confhound.sources.environment import (
    EnvironmentSource,
    ProcessProperties,
    ProcessPropertySource,
    clear_property,
    get_process_properties,
    set_property,
    to_env_name,
)
from confhound.sources.files import (
    FileSource,
    JsonFileSource,
    PropertiesFileSource,
    TomlFileSource,
    YamlFileSource,
    file_source,
)
from confhound.sources.memory import MapSource, ParameterSource

__all__ = [
    # Contracts
    "ConfigSource",
    "EnumerableSource",
    # Process
    "EnvironmentSource",
    "ProcessProperties",
    "ProcessPropertySource",
    "get_process_properties",
    "set_property",
    "clear_property",
    "to_env_name",
    # Memory
    "MapSource",
    "ParameterSource",
    # Files
    "FileSource",
    "PropertiesFileSource",
    "JsonFileSource",
    "YamlFileSource",
    "TomlFileSource",
    "file_source",
    # Priorities
    "PARAMETER_PRIORITY",
    "ENVIRONMENT_PRIORITY",
    "PROCESS_PROPERTY_PRIORITY",
    "YAML_PRIORITY",
    "TOML_PRIORITY",
    "JSON_PRIORITY",
    "PROPERTIES_PRIORITY",
    "GLOBAL_LAYER_PRIORITY",
    "GLOBAL_SECTION_PRIORITY",
    "ENVIRONMENT_LAYER_PRIORITY",
]
