"""
Purpose:
- Centralized configuration using pydantic-settings.
- Reads from environment variables and optional .env file.
- The Gemini key is the only required value; everything else has a working default.
"""

from __future__ import annotations
from typing import List, Optional
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

DEFAULT_PROMPT = "Describe this image in detail. Provide a clear, descriptive caption."

class Settings(BaseSettings):
    # Pydantic v2 config (env file + ignore unexpected env vars)
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # API host/port
    host: str = Field(default="0.0.0.0", description="Bind address for FastAPI/Uvicorn")
    port: int = Field(default=3000, description="Port for FastAPI/Uvicorn")

    # CORS (permissive: the upload page may be opened from anywhere)
    cors_allow_origins: List[str] = Field(default=["*"], description="Allowed origins for browser apps")

    log_level: str = Field(default="INFO")

    # Google Gemini (key comes from env: GEMINI_API_KEY)
    gemini_api_key: Optional[SecretStr] = None
    gemini_base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    gemini_model: str = Field(default="gemini-2.5-flash", description="Model id used in the generateContent URL")
    caption_prompt: str = Field(default=DEFAULT_PROMPT, description="Instruction sent along with the image")

    # Label echoed back to clients; the upstream API does not report one
    model_label: str = Field(default="Google Gemini 2.5 Flash")

    # ---- Transcoding / transport knobs ----
    jpeg_quality: int = Field(default=85, ge=1, le=95)
    upstream_timeout_s: float = Field(default=60.0, gt=0)
    response_preview_chars: int = Field(default=500, ge=0)   # body preview length in logs

    def has_api_key(self) -> bool:
        return self.gemini_api_key is not None and bool(self.gemini_api_key.get_secret_value().strip())

    def require_api_key(self) -> str:
        """Return the Gemini key or fail fast; called once at startup."""
        if not self.has_api_key():
            raise ConfigurationError("GEMINI_API_KEY must be set in the environment or .env file")
        return self.gemini_api_key.get_secret_value().strip()

settings = Settings()
