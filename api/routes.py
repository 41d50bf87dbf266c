"""
api/routes.py — FastAPI route definitions
==========================================
All HTTP endpoints are defined here and wired into the app via
`app.include_router(router)` in `api/app.py`.

Endpoint summary
----------------
    GET  /health              — Liveness probe
    GET  /                    — Browser form
    GET  /conditions          — Catalog entries for the condition selector
    GET  /session             — Current form state
    POST /session/condition   — Select a condition (recomputes settings)
    POST /session/image       — Upload a photo (samples, estimates, recomputes)
    POST /session/reset       — Back to defaults
    GET  /settings            — Current settings JSON
    GET  /settings/json       — Same, as plain text for the clipboard
    GET  /settings/download   — Same, as a file attachment
    POST /settings/compute    — Stateless settings for {condition, phototype}
    GET  /docs                — Auto-generated Swagger UI (FastAPI built-in)
"""

import os
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.responses import FileResponse, PlainTextResponse, Response

from api.schemas import (
    ComputeRequest,
    ConditionInfo,
    ConditionSelection,
    SessionState,
    SettingsPayload,
)
from api.session import TherapySession
from config import ALLOWED_CONTENT_PREFIX, MAX_UPLOAD_BYTES
from errors import DecodeError, EmptyRegionError, UnknownConditionError
from export.settings_export import export_filename, settings_to_json
from therapy.adjuster import TreatmentSettings, compute_settings
from therapy.catalog import CATALOG
from utils.logger import get_logger

logger = get_logger("api.routes")

router = APIRouter()

_INDEX_HTML = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
                           "web", "index.html")


def get_session(request: Request) -> TherapySession:
    """The app-wide session created in `create_app()`."""
    return request.app.state.session


def _current_settings(session: TherapySession) -> TreatmentSettings:
    settings = session.snapshot.settings
    if settings is None:
        raise HTTPException(
            status_code=404,
            detail="No settings yet. Upload a photo or select a condition first.",
        )
    return settings


# ── Health / UI ───────────────────────────────────────────────────────────────

@router.get("/health")
async def health():
    """Simple liveness check."""
    return {"status": "ok", "service": "Phototherapy Settings Generator"}


@router.get("/", include_in_schema=False)
async def index():
    """Serve the single-page form."""
    return FileResponse(_INDEX_HTML, media_type="text/html")


# ── Catalog ───────────────────────────────────────────────────────────────────

@router.get("/conditions")
async def conditions() -> list[ConditionInfo]:
    """All treatable conditions with their baseline parameters."""
    return [
        ConditionInfo(
            key=key,
            label=base.label,
            description=base.description,
            led_color=base.led_color,
            intensity_pct=base.intensity_pct,
            ir_minutes=base.ir_minutes,
        )
        for key, base in CATALOG.items()
    ]


# ── Session ───────────────────────────────────────────────────────────────────

@router.get("/session")
async def session_state(session: TherapySession = Depends(get_session)) -> SessionState:
    return SessionState(**session.snapshot.to_dict())


@router.post("/session/condition")
async def select_condition(
    body: ConditionSelection,
    session: TherapySession = Depends(get_session),
) -> SessionState:
    """
    Select the condition to treat.  Settings are recomputed immediately,
    using phototype III if no photo has been analysed yet.
    """
    snapshot = session.select_condition(body.condition)
    return SessionState(**snapshot.to_dict())


@router.post("/session/image")
async def upload_image(
    file: UploadFile = File(...),
    session: TherapySession = Depends(get_session),
) -> SessionState:
    """
    Upload a photo of the area to treat.

    Returns 415 for non-image uploads, 413 if larger than the configured
    limit, 400 if the image cannot be decoded and 422 if it is too flat
    to sample.  On failure the previous results are kept.
    """
    if file.content_type and not file.content_type.startswith(ALLOWED_CONTENT_PREFIX):
        raise HTTPException(
            status_code=415, detail=f"Expected an image upload, got '{file.content_type}'."
        )

    data = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Image exceeds {MAX_UPLOAD_BYTES // (1024 * 1024)} MB limit.",
        )

    try:
        snapshot = await session.process_upload(file.filename, data)
    except DecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EmptyRegionError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return SessionState(**snapshot.to_dict())


@router.post("/session/reset")
async def reset_session(session: TherapySession = Depends(get_session)) -> SessionState:
    """Clear the photo, phototype and settings; condition back to default."""
    return SessionState(**session.reset().to_dict())


# ── Settings / Export ─────────────────────────────────────────────────────────

@router.get("/settings")
async def current_settings(session: TherapySession = Depends(get_session)) -> SettingsPayload:
    return SettingsPayload(**_current_settings(session).to_dict())


@router.get("/settings/json", response_class=PlainTextResponse)
async def settings_text(session: TherapySession = Depends(get_session)) -> str:
    """The exact JSON text the form copies to the clipboard."""
    return settings_to_json(_current_settings(session))


@router.get("/settings/download")
async def download_settings(session: TherapySession = Depends(get_session)):
    """The settings JSON as an attachment named after condition and time."""
    settings = _current_settings(session)
    filename = export_filename(settings)
    ascii_name = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
    disposition = f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
    logger.info("Download requested: %s", filename)
    return Response(
        content=settings_to_json(settings),
        media_type="application/json",
        headers={"Content-Disposition": disposition},
    )


@router.post("/settings/compute")
async def compute(body: ComputeRequest) -> SettingsPayload:
    """
    Settings for any (condition, phototype) pair without touching the
    session.  Unknown conditions give 404; unknown phototypes use III.
    """
    try:
        settings = compute_settings(body.condition, body.phototype)
    except UnknownConditionError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SettingsPayload(**settings.to_dict())
