"""
Purpose:
- Closed set of failures a caption request can end in.
- Each kind knows its HTTP status and a stable machine-readable code; the
  /upload handler is the only place they are turned into responses.
"""

from __future__ import annotations
from typing import Any, Dict, Optional


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class CaptionError(Exception):
    status_code: int = 500
    code: str = "CAPTION_FAILED"
    message: str = "Failed to generate caption"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)

    def to_detail(self, request_id: str) -> Dict[str, Any]:
        return {"code": self.code, "message": str(self), "request_id": request_id}


class MissingFile(CaptionError):
    status_code = 400
    code = "MISSING_FILE"
    message = "No file field found in the multipart body"


class InvalidImage(CaptionError):
    status_code = 400
    code = "INVALID_IMAGE"
    message = "Uploaded file is not a decodable image"


class EncodingFailure(CaptionError):
    status_code = 500
    code = "ENCODING_FAILED"
    message = "Failed to re-encode image"


class UpstreamError(CaptionError):
    """
    The captioning API answered with a non-success status or could not be reached.
    status_code/body are kept for logs only; str(exc) stays generic so it is safe to return.
    """
    code = "UPSTREAM_ERROR"
    message = "Captioning service returned an error"

    def __init__(self, upstream_status: Optional[int], body: str):
        super().__init__()
        self.upstream_status = upstream_status
        self.body = body

    def diagnostic(self) -> str:
        status = self.upstream_status if self.upstream_status is not None else "no response"
        return f"API Error {status}: {self.body}"


class MalformedResponse(CaptionError):
    code = "MALFORMED_RESPONSE"
    message = "No caption in response"
