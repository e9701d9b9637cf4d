"""
Purpose:
- POST /upload: multipart image in, {caption, model, processing_time_ms} out.
- The first file field is used whatever its name (the bundled page sends `image`).
- Single error boundary: CaptionError -> HTTPException with a structured detail.
"""

from __future__ import annotations
import time
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.datastructures import UploadFile

from ..core.errors import CaptionError, MissingFile, UpstreamError
from ..core.log_config import logger
from ..core.settings import Settings
from ..services.captioning import caption_upload
from ..utils.timing import elapsed_ms
from ..vlm.gemini_client import GeminiCaptionClient
from ..vlm.schema import CaptionResult, ErrorResponse
from .deps import get_caption_client, get_settings

router = APIRouter(tags=["caption"])


async def _read_first_file(request: Request) -> bytes:
    form = await request.form()
    try:
        for _name, value in form.multi_items():
            if isinstance(value, UploadFile):
                return await value.read()
    finally:
        await form.close()
    raise MissingFile()


@router.post(
    "/upload",
    response_model=CaptionResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_image(
    request: Request,
    client: GeminiCaptionClient = Depends(get_caption_client),
    settings: Settings = Depends(get_settings),
) -> CaptionResult:
    request_id = str(uuid.uuid4())
    start = time.perf_counter()

    try:
        raw = await _read_first_file(request)
        caption = await caption_upload(raw, client, settings)
    except CaptionError as e:
        if isinstance(e, UpstreamError):
            logger.error(f"Caption error: {e.diagnostic()}", extra={"request_id": request_id, "code": e.code})
        elif e.status_code >= 500:
            logger.error(f"Caption error: {e}", extra={"request_id": request_id, "code": e.code}, exc_info=True)
        else:
            logger.warning(f"Rejected upload: {e}", extra={"request_id": request_id, "code": e.code})
        raise HTTPException(status_code=e.status_code, detail=e.to_detail(request_id)) from e

    return CaptionResult(
        caption=caption,
        model=settings.model_label,
        processing_time_ms=elapsed_ms(start),
    )
