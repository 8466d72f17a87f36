"""MCP demo.

A small MCP tool server, a menu client and a chat client that turns
``[TOOL_CALL:Name(args)]`` markers in model replies into tool calls.
"""

__version__ = "0.1.0"

from .exceptions import (
    ChatModelError,
    McpDemoError,
    MissingCredentialError,
    RegistryUnavailableError,
    SetupError,
    ToolArgumentError,
    ToolInvocationError,
    ToolNotFoundError,
    TransportError,
)
from .models import ContentItem, ExtractedCall, ToolDescriptor, ToolResult
from .parsing import extract_tool_call, parse_arguments

__all__ = [
    "ChatModelError",
    "ContentItem",
    "ExtractedCall",
    "McpDemoError",
    "MissingCredentialError",
    "RegistryUnavailableError",
    "SetupError",
    "ToolArgumentError",
    "ToolDescriptor",
    "ToolInvocationError",
    "ToolNotFoundError",
    "ToolResult",
    "TransportError",
    "extract_tool_call",
    "parse_arguments",
]
