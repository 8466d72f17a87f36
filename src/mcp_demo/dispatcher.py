"""Tool dispatch and result rendering."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from rich.console import Console
from rich.markup import escape

from .exceptions import RegistryUnavailableError, ToolInvocationError, TransportError
from .models import ContentItem, ExtractedCall, ToolDescriptor, ToolResult

logger = logging.getLogger(__name__)

# Console.print options that print tool and model text exactly as received.
VERBATIM: Dict[str, Any] = {"markup": False, "emoji": False, "highlight": False, "soft_wrap": True}


class Registry(Protocol):
    """What the dispatcher needs from a tool registry."""

    async def list_tools(self) -> List[ToolDescriptor]:
        ...

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> ToolResult:
        ...


async def load_tools(registry: Registry) -> List[ToolDescriptor]:
    """List tools at startup. A server that cannot list its tools is unreachable."""
    try:
        return await registry.list_tools()
    except TransportError as e:
        logger.error(f"Tool listing failed: {e}")
        raise RegistryUnavailableError(f"Tool server is unreachable: {e}") from e


@dataclass
class DispatchOutcome:
    """What happened to one dispatched call."""

    call: ExtractedCall
    ok: bool
    lines: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def summary(self) -> str:
        """One message suitable for the conversation history."""
        if self.ok:
            body = "\n".join(self.lines) if self.lines else "No content returned"
            return f"Tool result ({self.call.tool_name}): {body}"
        return f"Tool error ({self.call.tool_name}): {self.error}"


def render_content(item: ContentItem) -> str:
    """Render one content item. Text is verbatim; anything else is tagged."""
    if item.kind == "text":
        return item.text or ""
    if item.data is None:
        return f"[{item.kind}]"
    return f"[{item.kind}] {json.dumps(item.data, default=str)}"


def render_result(result: ToolResult) -> List[str]:
    return [render_content(item) for item in result.content]


class ToolDispatcher:
    """Thin pass-through from an extracted call to the registry.

    No local validation is done: the registry owns tool names and argument
    shapes. Failures are reported once and never raised to the caller, so a
    bad call cannot end the session.
    """

    def __init__(self, registry: Registry, console: Optional[Console] = None):
        self.registry = registry
        self.console = console or Console()

    async def dispatch(self, call: ExtractedCall) -> DispatchOutcome:
        """Invoke the call and print its result or error."""
        args_text = ", ".join(f"{k}={v!r}" for k, v in call.arguments.items())
        self.console.print(f"🔧 Calling {escape(call.tool_name)}({escape(args_text)})", style="yellow")

        try:
            result = await self.registry.call_tool(call.tool_name, dict(call.arguments))
        except ToolInvocationError as e:
            logger.warning(f"Tool call {call.tool_name} failed: {type(e).__name__}: {e}")
            self.console.print(f"❌ Error calling {escape(call.tool_name)} tool: {escape(str(e))}", style="red")
            return DispatchOutcome(call=call, ok=False, error=str(e))

        lines = render_result(result)
        self.console.print("Tool Result:", style="green")
        if lines:
            for line in lines:
                self.console.print(f"  {line}", **VERBATIM)
        else:
            self.console.print("  No content returned")

        return DispatchOutcome(call=call, ok=True, lines=lines)
