"""Shared fixtures: a fake OpenAI SDK and fake ffmpeg/ffprobe processes."""

from __future__ import annotations

import asyncio
import base64
import json
from types import SimpleNamespace
from typing import Any, Callable, List

import pytest

from bi_assistant import media as media_module
from bi_assistant.ai import openai_client as openai_client_module
from bi_assistant.ai.openai_client import OpenAIClient
from bi_assistant.orchestrator import GenerationOrchestrator

JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg\xff\xd9"


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class _FakeCompletions:
    def __init__(self, service: "FakeService"):
        self._service = service

    async def create(self, **kwargs):
        self._service.chat_calls.append(kwargs)
        reply = self._service.text_replies.pop(0) if self._service.text_replies else ""
        if isinstance(reply, BaseException):
            raise reply
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=reply))])


class _FakeImages:
    def __init__(self, service: "FakeService"):
        self._service = service

    async def generate(self, **kwargs):
        self._service.image_calls.append(kwargs)
        images = await self._service.image_handler(kwargs["prompt"])
        return SimpleNamespace(data=[SimpleNamespace(b64_json=item) for item in images])


class FakeService:
    """Stands in for `AsyncOpenAI`; records every request it receives."""

    def __init__(self):
        self.constructed: List[dict[str, Any]] = []
        self.closed = 0
        self.chat_calls: List[dict[str, Any]] = []
        self.image_calls: List[dict[str, Any]] = []
        self.text_replies: List[Any] = []
        self.image_handler: Callable[[str], Any] = self._default_images
        self.chat = SimpleNamespace(completions=_FakeCompletions(self))
        self.images = _FakeImages(self)

    @staticmethod
    async def _default_images(prompt: str) -> list[str]:
        return [b64(f"image for {prompt}".encode())]

    def __call__(self, **kwargs):
        self.constructed.append(kwargs)
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed += 1
        return False


@pytest.fixture
def fake_service(monkeypatch) -> FakeService:
    service = FakeService()
    monkeypatch.setattr(openai_client_module, "AsyncOpenAI", service)
    return service


@pytest.fixture
def ai_client(fake_service) -> OpenAIClient:
    return OpenAIClient(api_key="test-key", base_url="https://example.test/v1")


@pytest.fixture
def orchestrator(ai_client) -> GenerationOrchestrator:
    return GenerationOrchestrator(ai_client, media_timeout_seconds=1.0)


class FakeProcess:
    def __init__(self, stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0, delay: float = 0.0):
        self._stdout = stdout
        self._stderr = stderr
        self._exit_code = returncode
        self._delay = delay
        self.returncode = None
        self.killed = False

    async def communicate(self):
        if self._delay:
            await asyncio.sleep(self._delay)
        self.returncode = self._exit_code
        return self._stdout, self._stderr

    def kill(self):
        self.killed = True
        self.returncode = -9

    async def wait(self):
        return self.returncode


def probe_output(duration: Any) -> bytes:
    return json.dumps({"format": {"duration": duration}, "streams": []}).encode()


@pytest.fixture
def fake_tools(monkeypatch):
    """Queue FakeProcess objects; each subprocess launch pops the next one."""
    state = SimpleNamespace(processes=[], calls=[])

    async def _fake_exec(*args, **_kwargs):
        state.calls.append(list(args))
        result = state.processes.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    monkeypatch.setattr(media_module.asyncio, "create_subprocess_exec", _fake_exec)
    return state
