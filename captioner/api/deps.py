"""
Purpose:
- FastAPI dependencies for process-wide, read-only state built in the app lifespan.
"""

from fastapi import Request

from ..core.settings import Settings
from ..vlm.gemini_client import GeminiCaptionClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_caption_client(request: Request) -> GeminiCaptionClient:
    return request.app.state.caption_client
