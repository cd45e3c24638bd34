"""Configuration loader for the JSON Tree Editor.

Settings are layered: model defaults, then ``config.yaml`` (with
``${VAR}`` and ``${VAR:-default}`` references expanded), then environment
variables, which may also come from a ``.env`` file.
"""

import os
import re
import yaml
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple
from pydantic import ValidationError
from dotenv import load_dotenv

from .models import EditorConfig, RedisConfig


ENV_PREFIX = "TREE_EDITOR_"

_ENV_REFERENCE = re.compile(r'\$\{(?P<name>[^}:]+?)\s*(?::-(?P<default>[^}]*))?\}')


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""
    pass


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ('1', 'true', 'yes', 'on'):
        return True
    if lowered in ('0', 'false', 'no', 'off'):
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


# (environment variable, config section or None for top level, field, converter)
ENV_SETTINGS: List[Tuple[str, Optional[str], str, Callable[[str], Any]]] = [
    ('REDIS_HOST', 'redis_config', 'host', str),
    ('REDIS_PORT', 'redis_config', 'port', int),
    ('REDIS_PASSWORD', 'redis_config', 'password', str),
    ('REDIS_DB', 'redis_config', 'db', int),
    ('REDIS_CONNECTION_TIMEOUT', 'redis_config', 'connection_timeout', int),
    ('REDIS_SOCKET_TIMEOUT', 'redis_config', 'socket_timeout', int),
    ('REDIS_MAX_CONNECTIONS', 'redis_config', 'max_connections', int),
    (f'{ENV_PREFIX}HISTORY_LIMIT', 'history_config', 'limit', int),
    (f'{ENV_PREFIX}MAX_PATH_DEPTH', 'limits_config', 'max_path_depth', int),
    (f'{ENV_PREFIX}MAX_NESTING_DEPTH', 'limits_config', 'max_nesting_depth', int),
    (f'{ENV_PREFIX}MAX_DOCUMENT_SIZE', 'limits_config', 'max_document_size', int),
    (f'{ENV_PREFIX}STORAGE_KEY', None, 'storage_key', str),
    (f'{ENV_PREFIX}LOG_LEVEL', None, 'log_level', str),
    (f'{ENV_PREFIX}JSON_LOGS', None, 'json_logs', _parse_bool),
    (f'{ENV_PREFIX}HOST', None, 'host', str),
    (f'{ENV_PREFIX}PORT', None, 'port', int),
]


class ConfigLoader:
    """Loads and validates configuration from multiple sources."""

    def __init__(self, config_file: Optional[str] = None, env_file: Optional[str] = None):
        """
        Args:
            config_file: Path to the YAML configuration file, ``config.yaml`` by default
            env_file: Path to a dotenv file, ``.env`` by default. When it does
                not exist, a ``.env`` next to the config file is tried instead.
        """
        self.config_file = config_file or "config.yaml"
        self.env_file = env_file or ".env"

        for candidate in (Path(self.env_file), Path(self.config_file).parent / ".env"):
            if candidate.is_file():
                load_dotenv(candidate)
                break

    def load_config(self) -> EditorConfig:
        """Build the editor configuration, environment variables winning over the file.

        Raises:
            ConfigurationError: If a source cannot be read or the result does not validate
        """
        try:
            settings = self._read_yaml()
            for section, overrides in self._read_environment().items():
                current = settings.get(section)
                if isinstance(current, dict) and isinstance(overrides, dict):
                    settings[section] = {**current, **overrides}
                else:
                    settings[section] = overrides
            return EditorConfig(**settings)
        except ConfigurationError:
            raise
        except ValidationError as e:
            problems = "\n".join(
                f"  {'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationError(f"Configuration validation failed:\n{problems}")
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}")

    def _read_yaml(self) -> Dict[str, Any]:
        path = Path(self.config_file)
        if not path.exists():
            return {}

        try:
            text = expand_env_references(path.read_text(encoding='utf-8'))
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_file}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to read {self.config_file}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {self.config_file} must be a mapping")
        return data

    def _read_environment(self) -> Dict[str, Any]:
        """Collect the settings given through environment variables, grouped by section."""
        settings: Dict[str, Any] = {}
        for variable, section, field, convert in ENV_SETTINGS:
            raw = os.getenv(variable)
            if not raw:
                continue
            try:
                value = convert(raw)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {variable}: {e}")
            if section is None:
                settings[field] = value
            else:
                settings.setdefault(section, {})[field] = value
        return settings


def expand_env_references(text: str) -> str:
    """Replace ``${VAR}`` and ``${VAR:-default}`` with environment values.

    A reference to an unset variable without a default is left untouched.
    """
    def replace(match: re.Match) -> str:
        value = os.getenv(match.group('name').strip())
        if value is not None:
            return value
        default = match.group('default')
        return default.strip() if default is not None else match.group(0)

    return _ENV_REFERENCE.sub(replace, text)


def load_config(config_file: Optional[str] = None, env_file: Optional[str] = None) -> EditorConfig:
    """Load the editor configuration; see :class:`ConfigLoader`."""
    return ConfigLoader(config_file, env_file).load_config()


def create_example_config() -> Dict[str, Any]:
    """Every setting at its default value, with Redis storage enabled."""
    return EditorConfig(redis_config=RedisConfig()).model_dump()
