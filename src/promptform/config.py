"""
Configuration module for promptform.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from agents import ModelSettings

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default).lower()).lower() == "true"


@dataclass
class PromptFormConfig:
    """Configuration settings for promptform."""

    # OpenAI settings
    openai_api_key: str = ""
    default_model: str = "gpt-4.1-mini"

    # Model settings for generation
    default_temperature: float = 0.7
    default_max_tokens: int | None = None
    generation_timeout_seconds: float = 60.0

    # Slugs and sharing
    slug_max_length: int = 50
    public_base_url: str = "http://localhost:3000"

    # HTTP API settings
    server_host: str = "0.0.0.0"
    server_port: int = 9110

    # MCP Server settings
    mcp_transport: str = "stdio"  # stdio or sse
    mcp_port: int = 8080
    api_url: str = "http://localhost:9110"

    # Guardrail settings
    enable_guardrails: bool = True

    # Tracing settings
    enable_tracing: bool = True
    trace_console: bool = False
    trace_verbose: bool = False
    trace_file: str | None = None

    # Logging
    log_level: str = "INFO"

    def get_model_settings(self) -> ModelSettings:
        """Get ModelSettings instance with configured defaults."""
        return ModelSettings(
            temperature=self.default_temperature,
            max_tokens=self.default_max_tokens,
        )

    @classmethod
    def from_env(cls) -> "PromptFormConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, the class field default is used.
        """
        _defaults = cls()

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", _defaults.openai_api_key),
            default_model=os.getenv("OPENAI_MODEL", _defaults.default_model),
            default_temperature=float(os.getenv("PROMPTFORM_TEMPERATURE", str(_defaults.default_temperature))),
            generation_timeout_seconds=float(
                os.getenv("PROMPTFORM_GENERATION_TIMEOUT", str(_defaults.generation_timeout_seconds))
            ),
            slug_max_length=int(os.getenv("PROMPTFORM_SLUG_MAX_LENGTH", str(_defaults.slug_max_length))),
            public_base_url=os.getenv("PROMPTFORM_PUBLIC_BASE_URL", _defaults.public_base_url),
            server_host=os.getenv("PROMPTFORM_SERVER_HOST", _defaults.server_host),
            server_port=int(os.getenv("PROMPTFORM_SERVER_PORT", str(_defaults.server_port))),
            mcp_transport=os.getenv("MCP_TRANSPORT", _defaults.mcp_transport),
            mcp_port=int(os.getenv("MCP_PORT", str(_defaults.mcp_port))),
            api_url=os.getenv("PROMPTFORM_API_URL", _defaults.api_url),
            enable_guardrails=_env_flag("PROMPTFORM_ENABLE_GUARDRAILS", _defaults.enable_guardrails),
            enable_tracing=os.getenv("OPENAI_AGENTS_DISABLE_TRACING", "0" if _defaults.enable_tracing else "1") != "1",
            trace_console=_env_flag("PROMPTFORM_TRACE_CONSOLE", _defaults.trace_console),
            trace_verbose=_env_flag("PROMPTFORM_TRACE_VERBOSE", _defaults.trace_verbose),
            trace_file=os.getenv("PROMPTFORM_TRACE_FILE") or _defaults.trace_file,
            log_level=os.getenv("PROMPTFORM_LOG_LEVEL", _defaults.log_level).upper(),
        )


config = PromptFormConfig.from_env()


def get_config() -> PromptFormConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> PromptFormConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
