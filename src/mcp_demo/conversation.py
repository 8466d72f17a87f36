"""
Interactive conversation loop between the user, a chat model and the tool server.

Each turn sends the user's text to the chat model, looks for a single call
marker in the reply and dispatches it. The conversation keeps a bounded
history with the system prompt pinned at index 0.
"""

import logging
from typing import Callable, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from .chat import ChatModel
from .config import ChatConfig
from .dispatcher import VERBATIM, DispatchOutcome, Registry, ToolDispatcher, load_tools
from .exceptions import ChatModelError
from .models import ChatMessage, Role, ToolDescriptor
from .parsing import extract_tool_call

logger = logging.getLogger(__name__)

EXIT_COMMANDS = {"exit", "quit"}


class ConversationHistory:
    """Role-tagged messages, capped at ``max_messages``.

    The system message stays at index 0. Trimming removes the two oldest
    non-system messages at a time until the history fits.
    """

    def __init__(self, system_prompt: str, max_messages: int = 10):
        if max_messages < 3:
            raise ValueError("max_messages must be at least 3")
        self.max_messages = max_messages
        self._messages: List[ChatMessage] = [ChatMessage(role=Role.SYSTEM, content=system_prompt)]

    @property
    def messages(self) -> List[ChatMessage]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def append(self, role: Role, content: str) -> None:
        if role == Role.SYSTEM:
            raise ValueError("The conversation has exactly one system message")
        self._messages.append(ChatMessage(role=role, content=content))

    def trim(self) -> int:
        """Evict old messages while over the cap. Returns how many were removed."""
        removed = 0
        while len(self._messages) > self.max_messages:
            del self._messages[1:3]
            removed += 2
        if removed:
            logger.debug(f"Evicted {removed} messages from the conversation history")
        return removed


def describe_parameters(tool: ToolDescriptor) -> str:
    """Parameter list for a tool, e.g. ``a (number), b (number)``."""
    if not tool.input_schema:
        return "unknown parameters"
    params = tool.parameters
    if not params:
        return "no parameters"
    return ", ".join(f"{name} ({prop.get('type', 'any')})" for name, prop in params.items())


def build_system_prompt(tools: Sequence[ToolDescriptor]) -> str:
    """System prompt that teaches the model the call marker format."""
    lines = [
        "You are a helpful assistant with access to the following tools:",
    ]
    for tool in tools:
        lines.append(f"- {tool.name}: {tool.description} Parameters: {describe_parameters(tool)}")
    lines.extend([
        "",
        "To use a tool, include exactly one marker in your reply, in this format:",
        "[TOOL_CALL:ToolName(name1=value1, name2=value2)]",
        "Use numbers without quotes, true or false for booleans and double quotes around text.",
        "Example: [TOOL_CALL:Add(a=5, b=3)]",
        "Only call a tool when it helps answer the user. Otherwise reply normally.",
    ])
    return "\n".join(lines)


class ConversationLoop:
    """Reads user input, asks the chat model, dispatches tool calls."""

    def __init__(
        self,
        config: ChatConfig,
        registry: Registry,
        chat_model: ChatModel,
        console: Optional[Console] = None,
        input_fn: Callable[[str], str] = input,
    ):
        config.require_api_key()
        self.config = config
        self.registry = registry
        self.chat_model = chat_model
        self.console = console or Console()
        self.input_fn = input_fn
        self.dispatcher = ToolDispatcher(registry, self.console)
        self.history: Optional[ConversationHistory] = None
        self.tools: List[ToolDescriptor] = []

    async def start(self) -> None:
        """Load the tool list and seed the history with the system prompt."""
        self.tools = await load_tools(self.registry)
        self.history = ConversationHistory(build_system_prompt(self.tools), self.config.max_history)
        logger.info(f"Conversation started with {len(self.tools)} tools")

    async def handle_turn(self, user_input: str) -> Optional[DispatchOutcome]:
        """Run one user turn. Returns the dispatch outcome when a tool was called."""
        if self.history is None:
            await self.start()

        self.history.append(Role.USER, user_input)
        try:
            reply = await self.chat_model.complete_chat(self.history.messages)
        except ChatModelError as e:
            self.console.print(f"❌ Error: {escape(str(e))}", style="red")
            self.history.trim()
            return None

        self.history.append(Role.ASSISTANT, reply)
        self.console.print("\n📝 Response:", style="white")
        self.console.print(reply, style="white", **VERBATIM)

        outcome = None
        call = extract_tool_call(reply)
        if call is not None:
            outcome = await self.dispatcher.dispatch(call)
            self.history.append(Role.USER, outcome.summary)

        self.history.trim()
        return outcome

    async def run(self) -> None:
        """Interactive loop until the user types exit."""
        await self.start()

        self.console.print("💡 Ask anything. The assistant can call these tools:", style="blue")
        for tool in self.tools:
            self.console.print(f"   • {escape(tool.name)}: {escape(tool.description)}", style="green")
        self.console.print("   Type 'exit' to quit.", style="blue")

        while True:
            try:
                user_input = self.input_fn("\n> ").strip()
            except (KeyboardInterrupt, EOFError):
                self.console.print("\n👋 Goodbye!", style="cyan")
                break

            if not user_input:
                continue

            if user_input.lower() in EXIT_COMMANDS:
                self.console.print("👋 Goodbye!", style="cyan")
                break

            await self.handle_turn(user_input)

