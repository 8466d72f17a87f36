"""Shared fixtures and fakes for the MCP demo tests."""

import io
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest
from rich.console import Console

# Add the src directory to the path so the package imports without installing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mcp_demo.models import ContentItem, ToolDescriptor, ToolResult  # noqa: E402

ADD_SCHEMA = {
    "type": "object",
    "properties": {
        "a": {"type": "number", "description": "First number to add"},
        "b": {"type": "number", "description": "Second number to add"},
    },
    "required": ["a", "b"],
}

ECHO_SCHEMA = {
    "type": "object",
    "properties": {"message": {"type": "string"}},
    "required": ["message"],
}


def text_result(text: str) -> ToolResult:
    return ToolResult(content=[ContentItem(kind="text", text=text)])


class FakeRegistry:
    """In-process stand-in for ToolRegistry."""

    def __init__(
        self,
        tools: Optional[List[ToolDescriptor]] = None,
        handler: Optional[Callable[[str, Dict[str, Any]], ToolResult]] = None,
        error: Optional[Exception] = None,
    ):
        self.tools = tools if tools is not None else [
            ToolDescriptor(name="Echo", description="Echoes the message back to the client.", input_schema=ECHO_SCHEMA),
            ToolDescriptor(name="Add", description="Adds two numbers together.", input_schema=ADD_SCHEMA),
            ToolDescriptor(name="GetDateTime", description="Returns the current date and time."),
        ]
        self.handler = handler or self._default_handler
        self.error = error
        self.calls: List[tuple] = []

    @staticmethod
    def _default_handler(name: str, arguments: Dict[str, Any]) -> ToolResult:
        if name == "Add":
            total = arguments["a"] + arguments["b"]
            return text_result(str(int(total)) if float(total).is_integer() else str(total))
        if name == "Echo":
            return text_result(f"hello {arguments['message']}")
        return text_result("ok")

    async def list_tools(self) -> List[ToolDescriptor]:
        return list(self.tools)

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> ToolResult:
        self.calls.append((name, arguments))
        if self.error is not None:
            raise self.error
        return self.handler(name, arguments)


class ScriptedChatModel:
    """Chat model that replies from a fixed script and records what it saw."""

    def __init__(self, replies: List[Any]):
        self.replies = list(replies)
        self.seen: List[list] = []

    async def complete_chat(self, messages) -> str:
        self.seen.append(list(messages))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class ScriptedInput:
    """Replacement for input() that returns queued answers."""

    def __init__(self, answers: List[str]):
        self.answers = list(answers)
        self.prompts: List[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


def output_of(console: Console) -> str:
    return console.file.getvalue()
