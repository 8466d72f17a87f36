"""Chat model adapters."""

import logging
from typing import List, Protocol, Sequence

from ollama import AsyncClient

from .config import ChatConfig
from .exceptions import ChatModelError
from .models import ChatMessage

logger = logging.getLogger(__name__)


class ChatModel(Protocol):
    """Anything that can answer a conversation with a single reply."""

    async def complete_chat(self, messages: Sequence[ChatMessage]) -> str:
        ...


class OllamaChatModel:
    """Chat model served by an Ollama compatible host."""

    def __init__(self, config: ChatConfig):
        api_key = config.require_api_key()
        self.model = config.model
        self.host = config.host
        self.client = AsyncClient(
            host=config.host,
            headers={"Authorization": f"Bearer {api_key}"},
        )

    async def complete_chat(self, messages: Sequence[ChatMessage]) -> str:
        payload: List[dict] = [message.to_payload() for message in messages]
        logger.debug(f"Sending {len(payload)} messages to {self.model} at {self.host}")
        try:
            response = await self.client.chat(model=self.model, messages=payload)
        except Exception as e:
            logger.error(f"Chat request to {self.model} failed: {e}")
            raise ChatModelError(f"Chat request to {self.model} failed: {e}") from e

        content = response["message"]["content"] or ""
        logger.debug(f"Received {len(content)} characters from {self.model}")
        return content

    async def close(self) -> None:
        """Release the HTTP connection pool of the Ollama client."""
        await self.client.close()
