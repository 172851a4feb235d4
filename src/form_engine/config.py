"""
Configuration module for the form engine.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default).lower()).lower() == "true"


@dataclass
class FormEngineConfig:
    """Configuration settings for the form engine."""

    # Logging
    log_level: str = "INFO"

    # Compilation: reject duplicate names and malformed rules instead of
    # degrading them to no-ops
    strict_compile: bool = False

    # Tracing settings
    enable_tracing: bool = False
    trace_name_prefix: str = "form-engine"

    # Rendering
    select_placeholder: str = "Select an option"
    textarea_rows: int = 4
    default_submit_text: str = "Submit"

    # MCP Server settings
    mcp_transport: str = "stdio"  # stdio or sse
    mcp_port: int = 8080

    @classmethod
    def from_env(cls) -> "FormEngineConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            log_level=os.getenv("FORM_ENGINE_LOG_LEVEL", _defaults.log_level),
            strict_compile=_env_flag("FORM_ENGINE_STRICT_COMPILE", _defaults.strict_compile),
            enable_tracing=_env_flag("FORM_ENGINE_ENABLE_TRACING", _defaults.enable_tracing),
            select_placeholder=os.getenv("FORM_ENGINE_SELECT_PLACEHOLDER", _defaults.select_placeholder),
            textarea_rows=int(os.getenv("FORM_ENGINE_TEXTAREA_ROWS", str(_defaults.textarea_rows))),
            mcp_transport=os.getenv("MCP_TRANSPORT", _defaults.mcp_transport),
            mcp_port=int(os.getenv("MCP_PORT", str(_defaults.mcp_port))),
        )


config = FormEngineConfig.from_env()


def get_config() -> FormEngineConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormEngineConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
