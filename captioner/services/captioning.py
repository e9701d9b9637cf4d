"""
Purpose:
- The "service" runs one upload through normalize -> Gemini -> caption text.
- Errors propagate as CaptionError subclasses; the HTTP layer decides the status.
"""

from __future__ import annotations
import asyncio

from ..core.settings import Settings
from ..vlm.gemini_client import GeminiCaptionClient
from ..vlm.normalizer import normalize_image


async def caption_upload(raw: bytes, client: GeminiCaptionClient, settings: Settings) -> str:
    # Decode/transcode off the event loop; InvalidImage here means no outbound call
    image_b64 = await asyncio.to_thread(normalize_image, raw, settings.jpeg_quality)
    return await client.caption(image_b64)
