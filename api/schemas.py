"""
api/schemas.py — Pydantic request & response models
=====================================================
Centralises all data-transfer objects so that FastAPI can auto-generate
OpenAPI docs and perform input validation for free.  `SettingsPayload`
is the exported JSON contract, field for field.
"""

from typing import Optional

from pydantic import BaseModel, Field

from model.phototype import Phototype
from therapy.catalog import Condition


# ── Request Models ───────────────────────────────────────────────────────────


class ConditionSelection(BaseModel):
    """Body of POST /session/condition."""
    condition: Condition


class ComputeRequest(BaseModel):
    """
    Body of POST /settings/compute.

    `condition` stays a plain string so an unknown key reaches the catalog
    and is reported as 404 rather than a validation error; `phototype`
    accepts anything because unrecognised classes fall back to III.
    """
    condition: str
    phototype: Optional[str] = None


# ── Response Models ──────────────────────────────────────────────────────────


class LedSettings(BaseModel):
    color: str = Field(..., pattern="^#[0-9A-F]{6}$")
    intensity_pct: int = Field(..., ge=0, le=100)


class InfraredSettings(BaseModel):
    minutes: int = Field(..., ge=1)


class SettingsPayload(BaseModel):
    """The exported settings document."""
    disease: Condition
    disease_label: str
    phototype: Phototype
    led: LedSettings
    infrared: InfraredSettings
    notes: str


class ConditionInfo(BaseModel):
    key: Condition
    label: str
    description: str
    led_color: str
    intensity_pct: int
    ir_minutes: int


class ColorInfo(BaseModel):
    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)
    hex: str


class SessionState(BaseModel):
    """What the browser form renders after every action."""
    sequence: int
    image_name: Optional[str] = None
    color: Optional[ColorInfo] = None
    phototype: Optional[Phototype] = None
    condition: Condition
    settings: Optional[SettingsPayload] = None
    last_error: Optional[str] = None
