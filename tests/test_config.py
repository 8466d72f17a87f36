"""Tests for configuration loading."""

import json
import sys

import pytest

from mcp_demo.config import ChatConfig, DemoConfig, LoggingConfig
from mcp_demo.exceptions import MissingCredentialError, SetupError


@pytest.fixture
def clean_env(monkeypatch):
    for name in [
        "MCP_DEMO_SERVER_COMMAND", "MCP_DEMO_SERVER_ARGS", "MCP_DEMO_MODEL", "MCP_DEMO_HOST",
        "MCP_DEMO_API_KEY", "MCP_DEMO_MAX_HISTORY", "MCP_DEMO_LOG_LEVEL", "MCP_DEMO_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = DemoConfig.from_env()
    assert config.server.command == sys.executable
    assert config.server.args == ["-m", "mcp_demo.server"]
    assert config.chat.model == "qwen3"
    assert config.chat.host == "http://localhost:11434"
    assert config.chat.api_key is None
    assert config.chat.max_history == 10
    assert config.logging.log_level == "INFO"


def test_from_env(clean_env):
    clean_env.setenv("MCP_DEMO_API_KEY", "secret")
    clean_env.setenv("MCP_DEMO_MODEL", "llama3.2")
    clean_env.setenv("MCP_DEMO_SERVER_ARGS", "-m other.server --quiet")
    clean_env.setenv("MCP_DEMO_LOG_LEVEL", "debug")
    clean_env.setenv("MCP_DEMO_MAX_HISTORY", "20")

    config = DemoConfig.from_env()

    assert config.chat.require_api_key() == "secret"
    assert config.chat.model == "llama3.2"
    assert config.chat.max_history == 20
    assert config.server.args == ["-m", "other.server", "--quiet"]
    assert config.logging.log_level == "DEBUG"


def test_missing_credential_is_setup_error():
    with pytest.raises(MissingCredentialError) as excinfo:
        ChatConfig().require_api_key()
    assert isinstance(excinfo.value, SetupError)
    assert "MCP_DEMO_API_KEY" in str(excinfo.value)


def test_invalid_values_rejected():
    with pytest.raises(ValueError):
        LoggingConfig(log_level="LOUD")
    with pytest.raises(ValueError):
        ChatConfig(max_history=2)


def test_file_round_trip_omits_credential(tmp_path):
    config = DemoConfig(chat=ChatConfig(api_key="secret", model="mistral"))
    path = tmp_path / "nested" / "config.json"

    config.save_to_file(path)

    saved = json.loads(path.read_text())
    assert "api_key" not in saved["chat"]
    loaded = DemoConfig.from_file(path)
    assert loaded.chat.model == "mistral"
    assert loaded.chat.api_key is None


def test_from_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        DemoConfig.from_file(tmp_path / "absent.json")
