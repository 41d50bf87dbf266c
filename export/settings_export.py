"""
export/settings_export.py — JSON export of treatment settings
==============================================================
The JSON document is the only thing handed to the outside world: the user
pastes it into a lamp manufacturer's app or a smart-plug scheduler.  The
same text backs the "copy" action and the downloadable file.
"""

import json
import os
from datetime import datetime, timezone

from config import EXPORT_INDENT, EXPORT_PREFIX
from therapy.adjuster import TreatmentSettings
from utils.logger import get_logger

logger = get_logger("export")


def settings_to_json(settings: TreatmentSettings) -> str:
    """Pretty-printed JSON; non-ASCII labels are kept as-is."""
    return json.dumps(settings.to_dict(), indent=EXPORT_INDENT, ensure_ascii=False)


def iso_timestamp(now: datetime | None = None) -> str:
    """UTC timestamp like '2026-10-17T09:05:03.120Z' (millisecond precision)."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def export_filename(settings: TreatmentSettings, now: datetime | None = None) -> str:
    """Download name: '<prefix>_<condition>_<ISO timestamp>.json'."""
    return f"{EXPORT_PREFIX}_{settings.condition.value}_{iso_timestamp(now)}.json"


def write_settings_file(
    settings: TreatmentSettings,
    directory: str,
    now: datetime | None = None,
) -> str:
    """
    Write the settings JSON into `directory` and return the file path.

    The directory is created if needed.  Colons in the timestamp are
    replaced with '-' on disk so the name is valid on every filesystem.
    """
    os.makedirs(directory, exist_ok=True)
    filename = export_filename(settings, now).replace(":", "-")
    path = os.path.join(directory, filename)
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(settings_to_json(settings))
        fh.write("\n")
    logger.info("Settings written to %s", path)
    return path
