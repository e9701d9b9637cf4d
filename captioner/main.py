"""
Purpose:
- FastAPI application factory and router mounts.
- Permissive CORS so the upload page works from any origin.
- Lifespan builds the one shared Gemini client from settings and refuses to
  start without GEMINI_API_KEY.
- Uvicorn will serve this on 0.0.0.0:3000 by default (`image-captioner`).
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .core.settings import Settings, settings as default_settings
from .core.log_config import configure_logging
from .vlm.gemini_client import GeminiCaptionClient
from .api.health import router as health_router
from .api.pages import router as pages_router
from .api.upload import router as upload_router


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    logger = configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        api_key = settings.require_api_key()
        client = GeminiCaptionClient(
            api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            prompt=settings.caption_prompt,
            timeout=settings.upstream_timeout_s,
            preview_chars=settings.response_preview_chars,
        )
        app.state.settings = settings
        app.state.caption_client = client
        logger.info("Caption client ready", extra={"model": settings.gemini_model})
        try:
            yield
        finally:
            await client.aclose()
            logger.info("Caption client closed")

    app = FastAPI(title="Image Captioner API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(pages_router)
    app.include_router(upload_router)
    app.include_router(health_router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    logger = configure_logging(default_settings.log_level)
    logger.info(f"Server running on http://localhost:{default_settings.port}")
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    run()
