"""Exception hierarchy for the MCP demo client and server."""


class McpDemoError(Exception):
    """Base class for every error raised by mcp_demo."""


class SetupError(McpDemoError):
    """Raised when the session cannot be started. Always fatal."""


class MissingCredentialError(SetupError):
    """Raised when the chat model credential is not configured."""


class RegistryUnavailableError(SetupError):
    """Raised when the tool server cannot be launched or reached."""


class ToolInvocationError(McpDemoError):
    """Raised when a single tool call fails."""

    def __init__(self, tool_name: str, message: str):
        super().__init__(message)
        self.tool_name = tool_name


class ToolNotFoundError(ToolInvocationError):
    """The registry does not expose a tool with this name."""


class ToolArgumentError(ToolInvocationError):
    """The registry rejected the arguments for a known tool."""


class TransportError(ToolInvocationError):
    """The connection to the registry failed during a call."""


class ChatModelError(McpDemoError):
    """Raised when the chat model request fails."""
