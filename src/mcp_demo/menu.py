"""Menu driven client: pick a tool, enter its arguments, see the result."""

import json
import logging
import math
from typing import Any, Callable, Dict, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from .dispatcher import DispatchOutcome, Registry, ToolDispatcher, load_tools
from .models import ExtractedCall, ToolDescriptor
from .parsing import parse_value

logger = logging.getLogger(__name__)

NUMERIC_TYPES = {"number", "integer"}


def print_tools(console: Console, tools: Sequence[ToolDescriptor]) -> None:
    """Print each tool with its description and, when present, its schema."""
    for tool in tools:
        console.print(f"- {escape(tool.name)}: {escape(tool.description)}")
        if tool.input_schema:
            console.print("  Parameters (from schema):")
            console.print(f"    {escape(json.dumps(tool.input_schema))}")


class MenuClient:
    """Numbered menu over the registry's tools."""

    def __init__(
        self,
        registry: Registry,
        console: Optional[Console] = None,
        input_fn: Callable[[str], str] = input,
    ):
        self.registry = registry
        self.console = console or Console()
        self.input_fn = input_fn
        self.dispatcher = ToolDispatcher(registry, self.console)
        self.tools: List[ToolDescriptor] = []

    def read_number(self, prompt: str) -> float:
        raw = self.input_fn(prompt).strip()
        value = parse_value(raw)
        if isinstance(value, float) and math.isfinite(value):
            return value
        self.console.print("Invalid number. Using 0.", style="yellow")
        return 0.0

    def read_arguments(self, tool: ToolDescriptor) -> Dict[str, Any]:
        """Prompt for every schema property of the tool."""
        arguments: Dict[str, Any] = {}
        for name, prop in tool.parameters.items():
            label = prop.get("description") or name
            if prop.get("type") in NUMERIC_TYPES:
                value: Any = self.read_number(f"Enter {label} ({name}): ")
                if prop.get("type") == "integer":
                    value = int(value)
                arguments[name] = value
            elif prop.get("type") == "string":
                arguments[name] = self.input_fn(f"Enter {label} ({name}): ")
            else:
                arguments[name] = parse_value(self.input_fn(f"Enter {label} ({name}): "))
        return arguments

    async def call(self, tool: ToolDescriptor) -> DispatchOutcome:
        call = ExtractedCall(tool_name=tool.name, arguments=self.read_arguments(tool))
        return await self.dispatcher.dispatch(call)

    def show_menu(self) -> None:
        self.console.print("\nChoose a tool to call:")
        for number, tool in enumerate(self.tools, start=1):
            self.console.print(f"{number}. {escape(tool.name)}")
        self.console.print(f"{len(self.tools) + 1}. Exit")

    async def run(self) -> None:
        """List the tools, then loop over the menu until Exit is chosen."""
        self.console.print("\nListing available tools:")
        self.tools = await load_tools(self.registry)
        print_tools(self.console, self.tools)

        exit_choice = str(len(self.tools) + 1)
        while True:
            self.show_menu()
            try:
                choice = self.input_fn(f"\nEnter your choice (1-{exit_choice}): ").strip()
            except (KeyboardInterrupt, EOFError):
                break

            if choice == exit_choice or choice.lower() == "exit":
                break

            if not choice.isdecimal() or not 1 <= int(choice) <= len(self.tools):
                self.console.print("Invalid choice. Please try again.")
                continue

            tool = self.tools[int(choice) - 1]
            logger.debug(f"Menu selected tool {tool.name}")
            await self.call(tool)
