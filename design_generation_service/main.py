# main.py

# --- Imports ---
import uuid
import logging
import urllib.parse
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from design_generation_service.exporter import (
    PPTX_MEDIA_TYPE,
    ExportFailure,
    export_presentation,
    presentation_filename,
)
from design_generation_service.models import ExportRequest, ThemeInfo
from design_generation_service.themes import THEME_PROFILES, UnknownTheme, resolve

# --- Configuration ---
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - [%(levelname)s] - %(message)s')
logger = logging.getLogger(__name__)
app = FastAPI(title="Design & Export Service (python-pptx)")


# --- Helper Functions ---
def content_disposition(filename: str) -> str:
    """Builds an attachment header that survives non-ASCII deck titles."""
    ascii_name = filename.encode("ascii", "replace").decode("ascii").replace('"', "'")
    quoted = urllib.parse.quote(filename, safe="")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quoted}"


# --- Endpoints ---
@app.get("/themes", response_model=List[ThemeInfo])
async def list_themes():
    return [ThemeInfo(**vars(profile)) for profile in THEME_PROFILES.values()]


@app.post("/export-presentation")
async def export_endpoint(request: ExportRequest):
    job_id = str(uuid.uuid4())
    logger.info(f"[{job_id}] Export requested for '{request.deck.title}' with theme: '{request.theme}'.")

    try:
        theme = resolve(request.theme)
    except UnknownTheme:
        logger.warning(f"[{job_id}] Unknown theme '{request.theme}'.")
        raise HTTPException(status_code=400, detail=f"Unknown theme: {request.theme}")

    try:
        payload = export_presentation(request.deck, theme)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ExportFailure as e:
        logger.error(f"[{job_id}] PPTX export failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"PPTX export failed: {e}")

    filename = presentation_filename(request.deck.title)
    logger.info(f"[{job_id}] Export complete: {filename} ({len(payload)} bytes).")
    return Response(
        content=payload,
        media_type=PPTX_MEDIA_TYPE,
        headers={"Content-Disposition": content_disposition(filename)},
    )
