from pathlib import Path

import pytest
from pydantic import ValidationError

from copilot_chat.config import ClientConfig, CopilotChatSettings, load_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("COPILOT_CHAT_API_URL", raising=False)

    settings = load_settings()

    assert settings.api_url == "https://api.githubcopilot.com"
    assert settings.default_headers()["Copilot-Integration-Id"] == "vscode-chat"


def test_yaml_file_is_loaded(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("COPILOT_CHAT_API_URL", raising=False)
    monkeypatch.setenv("EDITOR_VERSION_FOR_TEST", "editor/2.0")
    config_file = tmp_path / "copilot.yml"
    config_file.write_text(
        "api_url: https://enterprise.example.test\neditor_version: ${EDITOR_VERSION_FOR_TEST}\n",
        encoding="utf-8",
    )

    settings = load_settings(str(config_file))

    assert settings.api_url == "https://enterprise.example.test"
    assert settings.editor_version == "editor/2.0"


def test_environment_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COPILOT_CHAT_API_URL", "https://from-env.example.test")
    config_file = tmp_path / "copilot.yml"
    config_file.write_text("api_url: https://from-yaml.example.test\n", encoding="utf-8")

    settings = load_settings(str(config_file))

    assert settings.api_url == "https://from-env.example.test"


def test_missing_file_falls_back_to_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("COPILOT_CHAT_INTEGRATION_ID", raising=False)

    settings = load_settings(str(tmp_path / "missing.yml"))

    assert settings == CopilotChatSettings()


def test_unresolved_env_reference_is_kept(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("COPILOT_CHAT_EDITOR_VERSION", raising=False)
    monkeypatch.delenv("UNSET_VARIABLE_FOR_TEST", raising=False)
    config_file = tmp_path / "copilot.yml"
    config_file.write_text("editor_version: ${UNSET_VARIABLE_FOR_TEST}\n", encoding="utf-8")

    assert load_settings(str(config_file)).editor_version == "${UNSET_VARIABLE_FOR_TEST}"


def test_client_config_forbids_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        ClientConfig(api_key="token", unknown="value")  # type: ignore[call-arg]
