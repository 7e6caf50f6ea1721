"""Configuration management for the AI Relay.

This module provides centralized configuration management using Pydantic
Settings.  All configuration is loaded from environment variables with the
AIRELAY_ prefix, allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (AIRELAY_* prefix)
2. .env file in the working directory
3. Default values defined in RelayConfig

Two settings also accept the unprefixed names used by existing deployments:
``OPENROUTER_API_KEY`` for the provider key and ``PORT`` for the listening
port.

Example .env file:
    AIRELAY_PROVIDER_API_KEY=sk-or-...
    AIRELAY_SITE_URL=https://example.com
    AIRELAY_SITE_NAME=My AI Tools
    AIRELAY_SERVER_PORT=3000

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time
and serves as the single source of truth for the running server.

Directory Management
--------------------
The configuration creates its working directories on initialization:
- uploads_dir: staged image uploads (one file per in-flight request)
- generated_dir: generated code artifacts (one file per in-flight request)
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RelayConfig(BaseSettings):
    """Main configuration for the AI Relay.

    Attributes
    ----------
    Provider Settings:
        provider_base_url : str
            Base URL of the OpenAI-compatible chat-completion API
        provider_api_key : str
            API key sent as a bearer token to the provider
        site_url : str | None
            Sent as the ``HTTP-Referer`` header for provider rankings
        site_name : str | None
            Sent as the ``X-Title`` header for provider rankings
        vision_model_id : str
            Model used by the image-to-text endpoint.  Vision support varies
            between free models, so check this against the live provider.

    Transcript Settings:
        transcript_languages : list[str]
            Language codes to request, in order of preference

    Paths:
        uploads_dir : Path
            Directory for staged image uploads
        generated_dir : Path
            Directory for generated code artifacts

    Server Settings:
        server_host : str
            Server bind address
        server_port : int
            Server port (1024-65535)
        log_level : str
            Root logging level used by the CLI entry point
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AIRELAY_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Provider settings
    provider_base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        description="Base URL of the OpenAI-compatible provider API",
    )
    provider_api_key: str = Field(
        default="",
        validation_alias=AliasChoices(
            "AIRELAY_PROVIDER_API_KEY",
            "OPENROUTER_API_KEY",
        ),
        description="Provider API key",
    )
    site_url: str | None = Field(
        default=None,
        description="Site URL sent as HTTP-Referer",
    )
    site_name: str | None = Field(
        default=None,
        description="Site name sent as X-Title",
    )
    vision_model_id: str = Field(
        default="qwen/qwen3-32b:free",
        description="Model id used for image description",
    )

    # Transcript settings
    transcript_languages: list[str] = Field(
        default_factory=lambda: ["en"],
        description="Preferred transcript language codes",
    )

    # Paths
    uploads_dir: Path = Field(
        default=Path("uploads"),
        description="Directory for staged image uploads",
    )
    generated_dir: Path = Field(
        default=Path("generated_code"),
        description="Directory for generated code artifacts",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=3000,
        validation_alias=AliasChoices(
            "AIRELAY_SERVER_PORT",
            "PORT",
        ),
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create required directories.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        self.generated_dir.mkdir(parents=True, exist_ok=True)


# Global configuration instance
config = RelayConfig()
