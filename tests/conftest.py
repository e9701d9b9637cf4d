import os

# Module-level Settings() is built at import time; give it a key before captioner is imported.
os.environ.setdefault("GEMINI_API_KEY", "test-key")

import io
import json
from dataclasses import dataclass, field
from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from captioner.api.deps import get_caption_client
from captioner.core.settings import Settings
from captioner.main import create_app
from captioner.vlm.gemini_client import GeminiCaptionClient

CAPTION = "A ginger cat asleep on a blue sofa next to a window."


def gemini_ok(text: str = CAPTION) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}, "finishReason": "STOP"}]}


def make_image(fmt: str = "PNG", mode: str = "RGB", size=(32, 24), color=(200, 80, 40)) -> bytes:
    if mode == "P":
        img = Image.new("RGB", size, color).convert("P")
    elif mode == "L":
        img = Image.new("L", size, 128)
    elif mode == "RGBA":
        img = Image.new("RGBA", size, color + (120,))
    else:
        img = Image.new(mode, size, color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@dataclass
class FakeGemini:
    """Stands in for the generateContent endpoint; records every request it sees."""
    status_code: int = 200
    body: object = field(default_factory=gemini_ok)
    raises: Exception = None
    before: Callable[[], None] = None
    requests: List[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.before:
            self.before()
        if self.raises:
            raise self.raises
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=str(self.body))

    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)

    def client(self, **kwargs) -> GeminiCaptionClient:
        return GeminiCaptionClient("test-key", transport=httpx.MockTransport(self), **kwargs)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, gemini_api_key="test-key")


@pytest.fixture
def upstream() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def client(settings, upstream):
    app = create_app(settings)
    fake = upstream.client(model=settings.gemini_model, base_url=settings.gemini_base_url)
    app.dependency_overrides[get_caption_client] = lambda: fake
    with TestClient(app) as c:
        yield c
