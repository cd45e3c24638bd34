"""Configuration models for the JSON Tree Editor."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class RedisConfig(BaseModel):
    """Configuration for the Redis document store."""

    host: str = Field("localhost", description="Redis server hostname")
    port: int = Field(6379, description="Redis server port", ge=1, le=65535)
    password: Optional[str] = Field(None, description="Redis server password")
    db: int = Field(0, description="Redis database number", ge=0, le=15)
    connection_timeout: int = Field(5, description="Connection timeout in seconds", ge=1, le=60)
    socket_timeout: int = Field(5, description="Socket timeout in seconds", ge=1, le=60)
    max_connections: int = Field(10, description="Maximum connections in pool", ge=1, le=100)
    key_prefix: str = Field("json_tree_editor:", description="Prefix applied to stored document keys")


class HistoryConfig(BaseModel):
    """Configuration for the undo history."""

    limit: int = Field(10, description="Maximum number of undo snapshots kept", ge=1, le=1000)


class LimitsConfig(BaseModel):
    """Size and depth limits guarding against pathological input."""

    max_path_depth: int = Field(
        100,
        description="Maximum number of segments in an edit path",
        ge=1,
        le=10000
    )
    max_nesting_depth: int = Field(
        100,
        description="Maximum JSON nesting depth of imported documents",
        ge=1,
        le=10000
    )
    max_document_size: int = Field(
        10485760,  # 10MB
        description="Maximum imported document size in bytes",
        ge=2,
        le=104857600  # 100MB maximum
    )


class EditorConfig(BaseModel):
    """Main configuration container for the JSON Tree Editor."""

    redis_config: Optional[RedisConfig] = Field(
        None,
        description="Optional Redis configuration for persistent document storage"
    )
    history_config: HistoryConfig = Field(
        default_factory=HistoryConfig,
        description="Undo history configuration"
    )
    limits_config: LimitsConfig = Field(
        default_factory=LimitsConfig,
        description="Input limits configuration"
    )
    storage_key: str = Field(
        "treeData",
        description="Key under which the document is persisted"
    )
    log_level: str = Field(
        "INFO",
        description="Logging level"
    )
    json_logs: bool = Field(
        False,
        description="Render log lines as JSON"
    )
    host: str = Field("127.0.0.1", description="REST API bind address")
    port: int = Field(8000, description="REST API port", ge=1, le=65535)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate that log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(sorted(valid_levels))}")
        return v.upper()

    @field_validator('storage_key')
    @classmethod
    def validate_storage_key(cls, v):
        """Ensure the storage key is not empty."""
        if not v or not v.strip():
            raise ValueError("Storage key cannot be empty")
        return v.strip()

    model_config = {
        "validate_assignment": True,
        "extra": "forbid",
    }
