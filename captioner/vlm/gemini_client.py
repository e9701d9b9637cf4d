"""
Purpose:
- Caption a base64 JPEG through Google Gemini's generateContent REST endpoint.
- One POST per call: no retries, no streaming.

Notes:
- Gemini authenticates with the API key as the `key` query parameter.
- Response path used: candidates[0].content.parts[0].text
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import httpx

from ..core.errors import MalformedResponse, UpstreamError
from ..core.log_config import logger
from ..core.settings import DEFAULT_PROMPT
from ..utils.timing import log_duration
from .normalizer import JPEG_MIME_TYPE

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_MODEL = "gemini-2.5-flash"


def build_payload(prompt: str, image_b64: str, mime_type: str = JPEG_MIME_TYPE) -> Dict[str, Any]:
    return {
        "contents": [{
            "parts": [
                {"text": prompt},
                {"inline_data": {"mime_type": mime_type, "data": image_b64}},
            ]
        }]
    }


def extract_caption(data: Any) -> str:
    """
    Walk candidates[0].content.parts[0].text; anything missing or not a
    non-empty string is a MalformedResponse.
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponse() from e
    if not isinstance(text, str) or not text.strip():
        raise MalformedResponse()
    return text


class GeminiCaptionClient:
    def __init__(
        self,
        api_key: str,
        *,
        model: str = GEMINI_MODEL,
        base_url: str = GEMINI_ENDPOINT,
        prompt: str = DEFAULT_PROMPT,
        timeout: float = 60.0,
        preview_chars: int = 500,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.model = model
        self.prompt = prompt
        self.preview_chars = preview_chars
        self._api_key = api_key
        self._url = f"{base_url.rstrip('/')}/models/{model}:generateContent"
        self._cli = httpx.AsyncClient(timeout=timeout, transport=transport)

    @property
    def url(self) -> str:
        return self._url

    async def aclose(self) -> None:
        await self._cli.aclose()

    async def caption(self, image_b64: str) -> str:
        payload = build_payload(self.prompt, image_b64)
        logger.info("Sending caption request", extra={"model": self.model})

        try:
            async with log_duration("gemini_generate_content", model=self.model):
                r = await self._cli.post(
                    self._url,
                    params={"key": self._api_key},
                    headers={"Content-Type": "application/json"},
                    json=payload,
                )
        except httpx.HTTPError as e:
            raise UpstreamError(None, f"{type(e).__name__}: {e}") from e

        body = r.text
        logger.info(
            "Gemini response",
            extra={"status": r.status_code, "body_preview": body[: self.preview_chars]},
        )

        if not r.is_success:
            raise UpstreamError(r.status_code, body)

        try:
            data = r.json()
        except ValueError as e:
            raise MalformedResponse("Response body is not valid JSON") from e

        text = extract_caption(data)
        logger.info("Caption generated", extra={"caption": text})
        return text
