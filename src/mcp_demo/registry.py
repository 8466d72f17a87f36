"""
Client side adapter for the MCP tool server.

ToolRegistry wraps a fastmcp Client and translates MCP types into the demo's
own models and exceptions. It is an async context manager: the server process
is started on enter and stopped exactly once on exit.
"""

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from fastmcp import Client
from fastmcp.client.transports import StdioTransport

from .config import ServerConfig
from .exceptions import (
    RegistryUnavailableError,
    ToolArgumentError,
    ToolNotFoundError,
    TransportError,
)
from .models import ContentItem, ToolDescriptor, ToolResult

logger = logging.getLogger(__name__)

# Content block fields that are protocol bookkeeping rather than payload.
_NON_PAYLOAD_FIELDS = {"type", "text", "annotations", "meta"}


def resolve_command(command: str) -> str:
    """Return the executable for the server, or raise if it does not exist."""
    resolved = shutil.which(command)
    if resolved:
        return resolved
    if Path(command).is_file():
        return str(Path(command).resolve())
    raise RegistryUnavailableError(
        f"Server executable not found: {command}. "
        "Please install the server or adjust server.command."
    )


def to_content_item(block: Any) -> ContentItem:
    """Convert an MCP content block into a ContentItem."""
    kind = getattr(block, "type", "unknown")
    if kind == "text":
        return ContentItem(kind="text", text=block.text)

    # Wire names (mimeType) on every mcp release, not Python field names
    payload = block.model_dump(
        mode="json", by_alias=True, exclude=_NON_PAYLOAD_FIELDS, exclude_none=True
    )
    return ContentItem(kind=kind, data=payload or None)


def to_descriptor(tool: Any) -> ToolDescriptor:
    """Convert an MCP Tool into a ToolDescriptor."""
    return ToolDescriptor(
        name=tool.name,
        description=tool.description or "",
        input_schema=tool.inputSchema or None,
    )


class ToolRegistry:
    """Connection to a tool server, scoped by ``async with``."""

    def __init__(self, transport: Any, server_name: str = "tool server"):
        self.transport = transport
        self.server_name = server_name
        self.client: Optional[Client] = None
        self._known_tools: Set[str] = set()

    @classmethod
    def from_config(cls, config: ServerConfig) -> "ToolRegistry":
        """Build a registry that launches the server over stdio."""
        command = resolve_command(config.command)
        transport = StdioTransport(
            command=command,
            args=list(config.args),
            env=config.env,
            cwd=str(config.cwd) if config.cwd else None,
        )
        return cls(transport, server_name=config.name)

    async def __aenter__(self) -> "ToolRegistry":
        logger.info(f"Connecting to {self.server_name}")
        client = Client(self.transport)
        try:
            await client.__aenter__()
        except Exception as e:
            logger.error(f"Failed to connect to {self.server_name}: {e}")
            raise RegistryUnavailableError(f"Could not connect to {self.server_name}: {e}") from e
        self.client = client
        logger.info(f"Connected to {self.server_name}")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        client, self.client = self.client, None
        if client is None:
            return
        try:
            await client.__aexit__(exc_type, exc, tb)
        finally:
            logger.info(f"Disconnected from {self.server_name}")

    def _require_client(self, tool_name: str = "") -> Client:
        if self.client is None:
            raise TransportError(tool_name, f"Not connected to {self.server_name}")
        return self.client

    async def list_tools(self) -> List[ToolDescriptor]:
        """List the tools the server exposes."""
        client = self._require_client()
        try:
            tools = await client.list_tools()
        except Exception as e:
            raise TransportError("", f"Failed to list tools: {e}") from e

        descriptors = [to_descriptor(tool) for tool in tools]
        self._known_tools = {d.name for d in descriptors}
        logger.debug(f"Server exposes {len(descriptors)} tools: {sorted(self._known_tools)}")
        return descriptors

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> ToolResult:
        """Invoke a tool by name. The server validates the name and arguments."""
        client = self._require_client(name)
        logger.info(f"Tool call: {name} with arguments: {arguments}")

        try:
            response = await client.call_tool_mcp(name, arguments)
        except Exception as e:
            logger.error(f"Transport failure calling {name}: {e}")
            raise TransportError(name, f"Transport failure calling {name}: {e}") from e

        result = ToolResult(
            content=[to_content_item(block) for block in response.content],
            is_error=bool(response.isError),
        )

        if result.is_error:
            message = result.text or f"Tool {name} failed"
            if not self._known_tools:
                await self.list_tools()
            if name not in self._known_tools:
                raise ToolNotFoundError(name, message)
            raise ToolArgumentError(name, message)

        return result
