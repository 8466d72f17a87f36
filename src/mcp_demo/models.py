"""Data models for the MCP demo."""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ArgumentValue = Union[bool, float, str]


class Role(str, Enum):
    """Role tag of a conversation message."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ToolDescriptor(BaseModel):
    """Metadata for one tool exposed by the registry."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Tool name, unique within the registry")
    description: str = Field(default="", description="Human readable description")
    input_schema: Optional[Dict[str, Any]] = Field(
        default=None,
        description="JSON schema of the tool arguments, when the registry provides one"
    )

    @property
    def parameters(self) -> Dict[str, Dict[str, Any]]:
        """Schema properties keyed by argument name (empty without a schema)."""
        if not self.input_schema:
            return {}
        return dict(self.input_schema.get("properties") or {})


class ExtractedCall(BaseModel):
    """A tool call found in a model reply."""

    tool_name: str = Field(..., description="Name of the tool to call")
    arguments: Dict[str, ArgumentValue] = Field(
        default_factory=dict,
        description="Typed arguments in the order they appeared"
    )


class ContentItem(BaseModel):
    """One unit of a tool result payload."""

    kind: str = Field(..., description="Content type, 'text' or another MCP content type")
    text: Optional[str] = Field(None, description="Text for text items")
    data: Optional[Dict[str, Any]] = Field(None, description="Opaque payload for other items")


class ToolResult(BaseModel):
    """Result returned by the registry for one call."""

    content: List[ContentItem] = Field(default_factory=list)
    is_error: bool = Field(default=False)

    @property
    def text(self) -> str:
        """All text items joined by newlines."""
        return "\n".join(item.text for item in self.content if item.kind == "text" and item.text is not None)


class ChatMessage(BaseModel):
    """A role-tagged conversation message."""

    role: Role
    content: str

    def to_payload(self) -> Dict[str, str]:
        """Plain dict in the shape chat APIs expect."""
        return {"role": self.role.value, "content": self.content}
