import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()


def _env_region() -> str:
    return os.getenv("REGION") or os.getenv("AWS_REGION") or "eu-central-1"


class PlatformConfig(BaseModel):
    """Configuration for the event platform's AWS resources and clients.

    Every function receives its table, bucket and region from the deployment
    through process environment variables; nothing is hard-coded.
    """

    # Resources
    table_name: str = Field(
        default_factory=lambda: os.getenv("TABLE_NAME", ""),
        description="Name of the single DynamoDB table"
    )

    bucket_name: str = Field(
        default_factory=lambda: os.getenv("BUCKET_NAME", ""),
        description="Name of the S3 bucket for quizzes, files and payment screenshots"
    )

    region_name: str = Field(
        default_factory=_env_region,
        description="AWS region name"
    )

    # Credentials (normally supplied by the Lambda execution role)
    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    aws_session_token: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SESSION_TOKEN"),
        description="Session token of temporary (role) credentials"
    )

    # Local development endpoints
    dynamodb_endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="DynamoDB endpoint URL (for local development)"
    )

    s3_endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("S3_ENDPOINT_URL"),
        description="S3 endpoint URL (for local development)"
    )

    # Public URL prefix for uploaded files (e.g. a CloudFront distribution)
    assets_base_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("ASSETS_BASE_URL"),
        description="Base URL under which uploaded files are served"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=10,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="Number of botocore retry attempts for failed requests"
    )

    timeout_seconds: float = Field(
        default=10.0,
        description="Request timeout in seconds"
    )

    # Environment settings
    environment: str = Field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "dev"),
        description="Current environment (dev, develop, staging, prod, test)"
    )

    # Logging settings
    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper(),
        description="Root log level for Lambda entry points"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_environments = ['dev', 'develop', 'staging', 'prod', 'test']
        if v not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level name."""
        level = v.upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls) -> 'PlatformConfig':
        """Create configuration from environment variables.

        Returns:
            PlatformConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls) -> 'PlatformConfig':
        """Create configuration for DynamoDB Local / LocalStack development.

        Returns:
            PlatformConfig instance pointing at localhost endpoints
        """
        return cls(
            table_name=os.getenv("TABLE_NAME", "events-local"),
            bucket_name=os.getenv("BUCKET_NAME", "events-local"),
            aws_access_key_id="local",
            aws_secret_access_key="local",
            aws_session_token=None,
            region_name="eu-central-1",
            dynamodb_endpoint_url="http://localhost:4566",
            s3_endpoint_url="http://localhost:4566",
            environment="dev",
            log_level="DEBUG"
        )

    model_config = ConfigDict(
        validate_assignment=True
    )
