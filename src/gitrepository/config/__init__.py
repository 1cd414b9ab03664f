"""gitrepository configuration.

Example:
    >>> from gitrepository.config import load_settings
    >>> settings = load_settings()
    >>> settings.remote.default_name
    'origin'
"""

from gitrepository.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG
from ._load import (
    CONFIG_PATH_ENV_VAR,
    get_user_config_path,
    load_settings,
    settings_from_dict,
)
from ._loader import (
    ENV_PREFIX,
    deep_merge,
    parse_env_value,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    GitSettings,
    LogFormat,
    LoggingSettings,
    LogLevel,
    RemoteSettings,
    Settings,
    WorktreeSettings,
)

__all__ = [
    "CONFIG_PATH_ENV_VAR",
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "GitSettings",
    "LogFormat",
    "LogLevel",
    "LoggingSettings",
    "RemoteSettings",
    "Settings",
    "WorktreeSettings",
    "deep_merge",
    "get_user_config_path",
    "load_settings",
    "parse_env_value",
    "parse_env_vars",
    "read_toml_file",
    "set_nested_key",
    "settings_from_dict",
]
