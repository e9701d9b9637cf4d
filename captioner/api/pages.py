"""
Purpose:
- Serve the bundled single-page upload UI at / (static, no templating).
"""

from pathlib import Path
from fastapi import APIRouter
from fastapi.responses import FileResponse

router = APIRouter(tags=["pages"])

INDEX_HTML = Path(__file__).resolve().parent.parent / "static" / "index.html"

@router.get("/", response_class=FileResponse, include_in_schema=False)
def index():
    return FileResponse(INDEX_HTML, media_type="text/html")
