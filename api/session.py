"""
api/session.py — Therapy Session Controller
============================================
Owns the current state of the form (uploaded image, sampled colour,
phototype, selected condition, settings) as one immutable
`SessionSnapshot` that is replaced wholesale on every action.

Recompute triggers
------------------
Settings are rebuilt from the catalog baseline by exactly two calls:
    * `process_upload(...)`    — a new photo was sampled.
    * `select_condition(...)`  — the user picked another condition.
Before any photo has been analysed the III factors are assumed.

Stale uploads
-------------
Decoding runs in a worker thread, so two quick uploads can finish out of
order.  Every upload takes a sequence number from a monotonically
increasing counter; a completion whose number is not the newest one
issued is discarded and the snapshot is left alone.

Thread safety
-------------
The counter and the snapshot are only read or replaced under `_lock`.
"""

import threading
from dataclasses import dataclass, replace

from fastapi.concurrency import run_in_threadpool

from config import DEFAULT_CONDITION, FALLBACK_PHOTOTYPE
from errors import DecodeError, EmptyRegionError
from imaging.color import ColorSample
from imaging.sampler import sample_color
from model.phototype import Phototype, estimate_from_sample
from therapy.adjuster import TreatmentSettings, compute_settings
from therapy.catalog import Condition, parse_condition
from utils.logger import get_logger

logger = get_logger("api.session")


@dataclass(frozen=True)
class SessionSnapshot:
    sequence: int = 0                       # upload that produced this state
    image_name: str | None = None
    sample: ColorSample | None = None
    phototype: Phototype | None = None
    condition: Condition = Condition(DEFAULT_CONDITION)
    settings: TreatmentSettings | None = None
    last_error: str | None = None

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "image_name": self.image_name,
            "color": self.sample.color.to_dict() if self.sample else None,
            "phototype": self.phototype.value if self.phototype else None,
            "condition": self.condition.value,
            "settings": self.settings.to_dict() if self.settings else None,
            "last_error": self.last_error,
        }


class TherapySession:
    """
    Single-user form state.

    Instantiate once per application and reuse across requests.
    """

    def __init__(self, condition: Condition | str = DEFAULT_CONDITION):
        self._lock = threading.Lock()
        self._issued = 0
        self._default_condition = parse_condition(condition)
        self._snapshot = SessionSnapshot(condition=self._default_condition)
        logger.info("TherapySession initialised (condition=%s).", self._snapshot.condition)

    # ── Public API ─────────────────────────────────────────────────────────

    @property
    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return self._snapshot

    def begin_upload(self) -> int:
        """Reserve the next sequence number; older in-flight uploads go stale."""
        with self._lock:
            self._issued += 1
            return self._issued

    def complete_upload(self, sequence: int, image_name: str | None,
                        sample: ColorSample) -> bool:
        """
        Apply a finished sample: estimate the phototype and recompute.

        Returns False (and changes nothing) if a newer upload was started.
        """
        with self._lock:
            if not self._is_current(sequence):
                return False
            phototype = estimate_from_sample(sample)
            settings = compute_settings(self._snapshot.condition, phototype)
            self._snapshot = replace(
                self._snapshot,
                sequence=sequence,
                image_name=image_name,
                sample=sample,
                phototype=phototype,
                settings=settings,
                last_error=None,
            )
        logger.info("Upload #%d applied: phototype %s.", sequence, phototype)
        return True

    def fail_upload(self, sequence: int, message: str) -> bool:
        """Record a failed upload; previous results stay in place."""
        with self._lock:
            if not self._is_current(sequence):
                return False
            self._snapshot = replace(self._snapshot, sequence=sequence, last_error=message)
        logger.error("Upload #%d failed: %s", sequence, message)
        return True

    async def process_upload(self, image_name: str | None, data: bytes) -> SessionSnapshot:
        """
        Decode + sample `data` off the event loop, then apply the result.

        Raises
        ------
        DecodeError, EmptyRegionError
            After recording the failure in the snapshot.  A failure of an
            upload that was already superseded is dropped and the current
            snapshot is returned instead.
        """
        sequence = self.begin_upload()
        logger.info("Upload #%d started (%s, %d bytes).", sequence, image_name, len(data))
        try:
            sample = await run_in_threadpool(sample_color, data)
        except (DecodeError, EmptyRegionError) as e:
            if not self.fail_upload(sequence, str(e)):
                # A newer upload owns the form now; its result stands
                return self.snapshot
            raise
        self.complete_upload(sequence, image_name, sample)
        return self.snapshot

    def select_condition(self, condition: Condition | str) -> SessionSnapshot:
        """
        Switch condition and recompute with the current phototype (III if
        no photo has been analysed yet).

        Raises
        ------
        UnknownConditionError
        """
        key = parse_condition(condition)
        with self._lock:
            phototype = self._snapshot.phototype or FALLBACK_PHOTOTYPE
            settings = compute_settings(key, phototype)
            self._snapshot = replace(self._snapshot, condition=key, settings=settings)
            snapshot = self._snapshot
        logger.info("Condition set to %s.", key)
        return snapshot

    def reset(self) -> SessionSnapshot:
        """Back to the initial state; any upload still in flight is discarded."""
        with self._lock:
            self._issued += 1
            self._snapshot = SessionSnapshot(
                sequence=self._issued, condition=self._default_condition
            )
            snapshot = self._snapshot
        logger.info("Session reset.")
        return snapshot

    # ── Private ────────────────────────────────────────────────────────────

    def _is_current(self, sequence: int) -> bool:
        if sequence != self._issued:
            logger.info(
                "Discarding stale upload #%d (newest is #%d).", sequence, self._issued
            )
            return False
        return True
