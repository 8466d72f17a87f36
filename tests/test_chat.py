"""Tests for the Ollama chat model adapter."""

import asyncio

import pytest

from mcp_demo.chat import OllamaChatModel
from mcp_demo.config import ChatConfig
from mcp_demo.exceptions import ChatModelError, MissingCredentialError
from mcp_demo.models import ChatMessage, Role


class FakeOllamaClient:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.requests = []
        self.closed = False

    async def close(self):
        self.closed = True

    async def chat(self, model, messages):
        self.requests.append((model, messages))
        if self.error is not None:
            raise self.error
        return {"message": {"role": "assistant", "content": self.reply}}


def test_requires_credential():
    with pytest.raises(MissingCredentialError):
        OllamaChatModel(ChatConfig())


def test_sends_role_tagged_messages():
    model = OllamaChatModel(ChatConfig(api_key="k", model="qwen3"))
    model.client = FakeOllamaClient(reply="[TOOL_CALL:GetDateTime()]")
    messages = [
        ChatMessage(role=Role.SYSTEM, content="rules"),
        ChatMessage(role=Role.USER, content="what time is it?"),
    ]

    reply = asyncio.run(model.complete_chat(messages))

    assert reply == "[TOOL_CALL:GetDateTime()]"
    assert model.client.requests == [("qwen3", [
        {"role": "system", "content": "rules"},
        {"role": "user", "content": "what time is it?"},
    ])]


def test_empty_reply_is_empty_string():
    model = OllamaChatModel(ChatConfig(api_key="k"))
    model.client = FakeOllamaClient(reply=None)
    assert asyncio.run(model.complete_chat([])) == ""


def test_failures_become_chat_model_errors():
    model = OllamaChatModel(ChatConfig(api_key="k"))
    model.client = FakeOllamaClient(error=ConnectionError("refused"))

    with pytest.raises(ChatModelError) as excinfo:
        asyncio.run(model.complete_chat([]))
    assert "refused" in str(excinfo.value)


def test_close_releases_the_client():
    model = OllamaChatModel(ChatConfig(api_key="k"))
    model.client = FakeOllamaClient(reply="hi")

    asyncio.run(model.close())

    assert model.client.closed
