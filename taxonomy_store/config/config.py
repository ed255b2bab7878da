import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError

# Load environment variables from .env file if it exists
load_dotenv()

LOG_LEVELS = ('debug', 'info', 'warning', 'error')


class TaxonomyStoreConfig(BaseModel):
    """Configuration for the taxonomy table and the commands that use it.

    Read once per process and frozen afterwards; every component receives
    the same instance through the TableGateway.
    """

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        description="AWS region name"
    )

    # Local DynamoDB / LocalStack override
    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ENDPOINT_URL") or os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="DynamoDB endpoint URL (for local development)"
    )

    # Table layout
    table_name: str = Field(
        default_factory=lambda: os.getenv("DYNAMODB_TABLE_NAME", "rank-taxonomy"),
        description="Single table holding every taxonomy entity"
    )

    index_name: str = Field(
        default_factory=lambda: os.getenv("DYNAMODB_GSI1_NAME", "GSI1"),
        description="Secondary index keyed on GSI1PK/GSI1SK"
    )

    # Tenant defaults used by the commands
    organization_id: str = Field(
        default_factory=lambda: os.getenv("ORGANIZATION_ID", "org_default_001"),
        description="Organization owning the taxonomy root"
    )

    program_id: str = Field(
        default_factory=lambda: os.getenv("PROGRAM_ID", "shaolin_wing_chun"),
        description="Program identifier of the taxonomy root"
    )

    # Connection settings
    max_attempts: int = Field(
        default_factory=lambda: int(os.getenv("DYNAMODB_MAX_ATTEMPTS", "3")),
        description="Transport-level attempts per request (botocore retry ceiling)"
    )

    max_pool_connections: int = Field(
        default=10,
        description="Maximum number of connections in the connection pool"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Request timeout in seconds"
    )

    # Logging settings
    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "info"),
        description="Logging verbosity threshold"
    )

    @field_validator('region_name', 'table_name', 'index_name', 'organization_id', 'program_id')
    @classmethod
    def validate_required(cls, v, info):
        """Reject empty required settings."""
        if not v:
            raise ValueError(f"{info.field_name} is required")
        return v

    @field_validator('endpoint_url')
    @classmethod
    def validate_endpoint(cls, v):
        """Endpoint override must be an http(s) URL."""
        if v is None or v == "":
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Endpoint URL must start with http:// or https://, got: {v}")
        return v

    @field_validator('max_attempts')
    @classmethod
    def validate_max_attempts(cls, v):
        if v < 1:
            raise ValueError("max_attempts must be at least 1")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate logging threshold."""
        level = v.lower()
        if level == 'warn':
            level = 'warning'
        if level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {list(LOG_LEVELS)}")
        return level

    @classmethod
    def from_env(cls) -> 'TaxonomyStoreConfig':
        """Create configuration from environment variables.

        Returns:
            TaxonomyStoreConfig instance

        Raises:
            ConfigurationError: If any setting is missing or invalid
        """
        try:
            return cls()
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e.error_count()} error(s)",
                errors=e.errors(include_url=False),
                original_error=e
            ) from e
        except ValueError as e:
            # int() on a non-numeric DYNAMODB_MAX_ATTEMPTS
            raise ConfigurationError(f"Invalid configuration: {e}", original_error=e) from e

    @classmethod
    def for_local_development(cls, **overrides) -> 'TaxonomyStoreConfig':
        """Create configuration for DynamoDB Local on its default port.

        Returns:
            TaxonomyStoreConfig instance configured for local development
        """
        settings = {
            'aws_access_key_id': "local",
            'aws_secret_access_key': "local",
            'region_name': "us-east-1",
            'endpoint_url': "http://localhost:8000",
            'log_level': "debug",
        }
        settings.update(overrides)
        return cls(**settings)

    model_config = ConfigDict(
        frozen=True,
        # Settings are read by default factories; validate them too
        validate_default=True
    )
