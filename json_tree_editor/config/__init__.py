"""Configuration management for the JSON Tree Editor."""

from .models import (
    RedisConfig,
    HistoryConfig,
    LimitsConfig,
    EditorConfig
)
from .loader import (
    ConfigLoader,
    ConfigurationError,
    load_config,
    create_example_config
)

__all__ = [
    'RedisConfig',
    'HistoryConfig',
    'LimitsConfig',
    'EditorConfig',
    'ConfigLoader',
    'ConfigurationError',
    'load_config',
    'create_example_config'
]
