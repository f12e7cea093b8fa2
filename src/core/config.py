"""Configuration management for tasksheet."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # DynamoDB Configuration
    dynamodb_table_name: str = Field(default="TodoTasks", description="DynamoDB table holding task records")
    aws_region: str = Field(default="us-east-1", description="AWS region of the task table")
    aws_access_key_id: str | None = Field(
        default=None, description="AWS access key (falls back to the boto3 credential chain)"
    )
    aws_secret_access_key: str | None = Field(default=None, description="AWS secret access key")
    dynamodb_endpoint_url: str | None = Field(
        default=None, description="Override endpoint (e.g., http://localhost:8000 for DynamoDB Local)"
    )

    # Store Backend
    task_store_backend: Literal["dynamodb", "sqlite"] = Field(
        default="dynamodb", description="Which task store backs the API"
    )
    sqlite_db_path: str = Field(default="./data/tasks.db", description="SQLite file for the sqlite backend")

    # HTTP Server Configuration
    api_prefix: str = Field(default="/api", description="Prefix for all JSON API routes")
    host: str = Field(default="0.0.0.0", description="Bind address for the standalone server")  # noqa: S104
    port: int = Field(default=3001, description="Port for the standalone server")
    cors_allow_origins: list[str] = Field(default=["*"], description="Origins allowed by CORS")
    expose_error_details: bool = Field(
        default=True, description="Include the raw store error text in 500 responses"
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment tag")

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value


# Application Constants
class Constants:
    """Application-wide constants."""

    # HTTP Status Codes
    HTTP_OK: int = 200
    HTTP_CREATED: int = 201
    HTTP_BAD_REQUEST: int = 400
    HTTP_NOT_FOUND: int = 404
    HTTP_METHOD_NOT_ALLOWED: int = 405
    HTTP_SERVER_ERROR: int = 500

    # Response Messages
    MSG_TASK_REQUIRED: str = "Task description is required"
    MSG_TASK_NOT_FOUND: str = "Task not found"
    MSG_TASK_DELETED: str = "Task deleted successfully"
    MSG_METHOD_NOT_ALLOWED: str = "Method not allowed"
    MSG_INVALID_JSON: str = "Invalid JSON payload"
    MSG_INTERNAL_ERROR: str = "Internal server error"

    # CORS headers for the serverless handler
    CORS_ALLOW_METHODS: str = "GET,POST,PUT,DELETE,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type"

    # Table provisioning
    TABLE_PARTITION_KEY: str = "id"
    TABLE_BILLING_MODE: str = "PAY_PER_REQUEST"

    # Paths
    TEMPLATES_DIR: Path = Path(__file__).parent.parent / "templates"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
