"""Application settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

StoreBackend = Literal["filesystem", "memory", "mongo"]


class Settings(BaseSettings):
    """Application settings."""

    # Client
    api_url: str = Field(
        default="http://localhost:8080/api",
        description="Base URL of the task API (including the /api prefix)",
    )

    timeout: float = Field(
        default=30.0,
        description="HTTP timeout in seconds for API calls",
    )

    # Server
    host: str = Field(
        default="0.0.0.0",
        description="Bind address for the API server",
    )

    port: int = Field(
        default=8080,
        description="Port for the API server",
    )

    store: StoreBackend = Field(
        default="filesystem",
        description="Document store backend for the API server",
    )

    data_dir: Path = Field(
        default=Path(".taskboard"),
        description="Directory holding task documents (filesystem store)",
    )

    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI (mongo store)",
    )

    database_name: str = Field(
        default="kanban_db",
        description="MongoDB database name (mongo store)",
    )

    collection_name: str = Field(
        default="tasks",
        description="MongoDB collection name (mongo store)",
    )

    # Logging
    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_",
        env_file=".env",
        extra="ignore",
    )
