"""Configuration management for the MCP demo."""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .exceptions import MissingCredentialError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
API_KEY_ENV = "MCP_DEMO_API_KEY"


class ServerConfig(BaseModel):
    """How to launch the tool server process."""

    name: str = Field(default="mcp-demo-server", description="Server name")
    version: str = Field(default="0.1.0", description="Server version")
    command: str = Field(
        default_factory=lambda: sys.executable,
        description="Executable that starts the server"
    )
    args: List[str] = Field(
        default_factory=lambda: ["-m", "mcp_demo.server"],
        description="Arguments passed to the server executable"
    )
    env: Optional[Dict[str, str]] = Field(default=None, description="Extra environment for the server")
    cwd: Optional[Path] = Field(default=None, description="Working directory for the server")


class ChatConfig(BaseModel):
    """Chat model settings for the conversation loop."""

    model: str = Field(default="qwen3", description="Ollama model to use")
    host: str = Field(default="http://localhost:11434", description="Ollama host URL")
    api_key: Optional[str] = Field(default=None, description="Credential sent to the chat model host")
    max_history: int = Field(default=10, description="Maximum number of messages kept in the conversation")

    @field_validator("max_history")
    @classmethod
    def validate_max_history(cls, v):
        if v < 3:
            raise ValueError("max_history must be at least 3")
        return v

    def require_api_key(self) -> str:
        """Return the credential or fail with a setup error."""
        if not self.api_key:
            raise MissingCredentialError(
                f"Chat model credential is not configured. Set {API_KEY_ENV} "
                "or add chat.api_key to the configuration file."
            )
        return self.api_key


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Log file path")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of {valid_levels}')
        return v.upper()


class DemoConfig(BaseModel):
    """Main configuration for the MCP demo."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "DemoConfig":
        """Load configuration from environment variables."""
        config_data = {}

        server_config = {}
        if command := os.getenv("MCP_DEMO_SERVER_COMMAND"):
            server_config["command"] = command
        if args := os.getenv("MCP_DEMO_SERVER_ARGS"):
            server_config["args"] = args.split()

        if server_config:
            config_data["server"] = server_config

        chat_config = {}
        if model := os.getenv("MCP_DEMO_MODEL"):
            chat_config["model"] = model
        if host := os.getenv("MCP_DEMO_HOST"):
            chat_config["host"] = host
        if api_key := os.getenv(API_KEY_ENV):
            chat_config["api_key"] = api_key
        if max_history := os.getenv("MCP_DEMO_MAX_HISTORY"):
            chat_config["max_history"] = int(max_history)

        if chat_config:
            config_data["chat"] = chat_config

        logging_config = {}
        if log_level := os.getenv("MCP_DEMO_LOG_LEVEL"):
            logging_config["log_level"] = log_level
        if log_file := os.getenv("MCP_DEMO_LOG_FILE"):
            logging_config["log_file"] = log_file

        if logging_config:
            config_data["logging"] = logging_config

        return cls(**config_data)

    @classmethod
    def from_file(cls, config_path: Path) -> "DemoConfig":
        """Load configuration from a JSON file."""
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r') as f:
            config_data = json.load(f)

        return cls(**config_data)

    def to_dict(self, include_secrets: bool = False) -> Dict:
        """JSON-ready dict. The chat credential is left out unless asked for."""
        exclude = None if include_secrets else {"chat": {"api_key"}}
        return self.model_dump(mode="json", exclude=exclude)

    def save_to_file(self, config_path: Path, include_secrets: bool = False) -> None:
        """Save configuration to a JSON file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w') as f:
            json.dump(self.to_dict(include_secrets), f, indent=2)


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger. Logs go to stderr unless a file is set."""
    # basicConfig rejects filename and stream together, even when one is None
    target = {"filename": config.log_file} if config.log_file else {"stream": sys.stderr}
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format=LOG_FORMAT,
        **target,
    )
