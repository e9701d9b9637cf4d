# Common language: Environment/ops probe that surfaces library versions and the active captioning config.
# Use this before/after upgrades to confirm no silent drift.

from fastapi import APIRouter, Depends
from ..core.settings import Settings
from .deps import get_settings
import sys, importlib

router = APIRouter(tags=["health"])

def _ver(modname: str) -> str:
    try:
        m = importlib.import_module(modname)
        return getattr(m, "__version__", "unknown")
    except ImportError:
        return "not-installed"

@router.get("/healthz")
def healthz(settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "python": sys.version.split()[0],
        "versions": {
            "fastapi": _ver("fastapi"),
            "uvicorn": _ver("uvicorn"),
            "httpx": _ver("httpx"),
            "PIL": _ver("PIL"),
            "pydantic_settings": _ver("pydantic_settings"),
        },
        "config": {
            "gemini_model": settings.gemini_model,
            "model_label": settings.model_label,
            "jpeg_quality": settings.jpeg_quality,
            "upstream_timeout_s": settings.upstream_timeout_s,
            # presence only; the key itself is never echoed
            "env_keys_present": {"GEMINI_API_KEY": settings.has_api_key()},
        },
    }
