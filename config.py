"""
config.py — Centralised configuration & tunables
=================================================
Every tunable constant in the project lives here so that the rest of the
codebase can import from a single source of truth.
"""

import logging

# ─── Colour Sampling ─────────────────────────────────────────────────────────
# The uploaded photo is rescaled to a fixed working width (height follows the
# aspect ratio) before the central block is averaged.
WORK_WIDTH: int = 300

# Sample block origin, as a fraction of the working width / height.
SAMPLE_ORIGIN_FRAC: float = 0.35
# Sample block size, as a fraction of the working width / height ...
SAMPLE_SIZE_FRAC: float = 0.30
# ... but never smaller than this many pixels per side.
SAMPLE_MIN_PX: int = 20

# ─── Phototype Estimation ────────────────────────────────────────────────────
# HSL lightness thresholds, checked in descending order with strict ">".
# Anything at or below the last threshold is the darkest class.
#   L > 0.75 → I-II   |   L > 0.60 → III   |   L > 0.45 → IV   |   L > 0.30 → V
PHOTOTYPE_THRESHOLDS: tuple[float, ...] = (0.75, 0.60, 0.45, 0.30)

# Class whose adjustment factors are used for an unrecognised phototype, and
# the class assumed when a condition is picked before any photo was analysed.
FALLBACK_PHOTOTYPE: str = "III"

# ─── Treatment Settings ──────────────────────────────────────────────────────
DEFAULT_CONDITION: str = "ulcera_superficial"

# Infrared is scheduled on a smart plug with whole-minute resolution.
MIN_IR_MINUTES: int = 1

ADVISORY_NOTE: str = (
    "El tiempo de infrarrojo está en minutos enteros (no segundos). "
    "Use la toma inteligente para programar encendido/apagado. "
    "Validar clínicamente antes de uso."
)

# ─── Upload / Export ─────────────────────────────────────────────────────────
MAX_UPLOAD_BYTES: int = 16 * 1024 * 1024
ALLOWED_CONTENT_PREFIX: str = "image/"
EXPORT_PREFIX: str = "fototerapia_settings"
EXPORT_INDENT: int = 2

# ─── Logging ─────────────────────────────────────────────────────────────────
LOG_LEVEL: int = logging.INFO

# ─── API ─────────────────────────────────────────────────────────────────────
API_TITLE = "Phototherapy Settings Generator API"
API_VERSION = "0.1.0"
API_HOST = "0.0.0.0"
API_PORT = 8000
