"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

BackendType = Literal["inmemory", "dynamodb", "postgres"]


class DynamoDBConfig(BaseModel):
    """DynamoDB client configuration.

    Credentials are resolved by boto3's default chain (environment,
    shared config, instance role); they never live in this file.
    """

    region: str | None = Field(
        default=None,
        description="AWS region (falls back to AWS_REGION / AWS_DEFAULT_REGION)",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="Custom endpoint, e.g. DynamoDB Local",
    )
    connect_timeout: float = Field(default=5.0, gt=0, description="Connect timeout (seconds)")
    read_timeout: float = Field(default=10.0, gt=0, description="Read timeout (seconds)")


class PostgresConfig(BaseModel):
    """PostgreSQL pool configuration.

    The DSN falls back to ITEMS_DATABASE_URL / DATABASE_URL when unset.
    """

    dsn: str | None = Field(default=None, description="Connection string")
    min_pool_size: int = Field(
        default=5,
        gt=0,
        description="Minimum connections to keep open",
    )
    max_pool_size: int = Field(
        default=20,
        gt=0,
        description="Maximum connections in pool",
    )
    max_inactive_connection_lifetime: float = Field(
        default=300.0,
        gt=0,
        description="Close connections idle longer than this (seconds)",
    )
    command_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Default timeout for queries (seconds)",
    )
    create_table: bool = Field(
        default=True,
        description="Create the items table on startup if missing",
    )


class StorageConfig(BaseModel):
    """Item store configuration."""

    backend: BackendType = Field(default="inmemory", description="Backend type")
    dynamodb: DynamoDBConfig = Field(default_factory=DynamoDBConfig)
    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
