import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


class ClientConfig(BaseModel):
    """Configuration for the underlying client used by the provider."""

    model_config = ConfigDict(extra="forbid")

    api_key: str | None = None
    api_base: str | None = None
    client_args: dict[str, Any] | None = None


class CopilotChatSettings(BaseSettings):
    """Copilot Chat endpoint settings, loaded from YAML files and environment variables.

    Every field can be set through an environment variable with the COPILOT_CHAT_ prefix,
    e.g. COPILOT_CHAT_API_URL or COPILOT_CHAT_INTEGRATION_ID.

    Environment variables take precedence over YAML config values.
    """

    model_config = SettingsConfigDict(
        env_prefix="COPILOT_CHAT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    api_url: str = Field(
        default="https://api.githubcopilot.com",
        description="Base URL of the Copilot Chat completions API",
    )
    editor_version: str = Field(default="copilot-chat/0.1.0", description="Value of the Editor-Version header")
    integration_id: str = Field(default="vscode-chat", description="Value of the Copilot-Integration-Id header")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings source precedence.

        Order (highest to lowest priority):
        1. Environment variables
        2. Init settings (from YAML config file)
        3. .env file
        4. Secrets directory
        """
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    def default_headers(self) -> dict[str, str]:
        """Headers the Copilot API expects on every request."""
        return {
            "Editor-Version": self.editor_version,
            "Copilot-Integration-Id": self.integration_id,
        }


def load_settings(config_path: str | None = None) -> CopilotChatSettings:
    """Load settings from an optional YAML file and environment variables.

    Args:
        config_path: Optional path to YAML config file

    Returns:
        CopilotChatSettings instance with merged configuration

    """
    config_dict: dict[str, Any] = {}

    if config_path and Path(config_path).exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f)
            if yaml_config:
                config_dict = _resolve_env_vars(yaml_config)

    return CopilotChatSettings(**config_dict)


def _resolve_env_vars(config: Any) -> Any:
    """Recursively resolve environment variable references in config.

    Supports ${VAR_NAME} syntax in string values.
    """
    if isinstance(config, dict):
        return {key: _resolve_env_vars(value) for key, value in config.items()}
    if isinstance(config, list):
        return [_resolve_env_vars(item) for item in config]
    if isinstance(config, str) and config.startswith("${") and config.endswith("}"):
        env_var = config[2:-1]
        return os.getenv(env_var, config)
    return config
