"""
therapy/adjuster.py — Phototype-adjusted treatment settings
============================================================

⚠️  DISCLAIMER: The factors below are conservative engineering
    heuristics, not a dosing protocol.  Validate clinically before use.

────────────────────────────────────────────────────────────────────────
Rule
────────────────────────────────────────────────────────────────────────
Darker phototypes get less LED intensity and less infrared time.  Each
class has a pair of multiplicative factors, both in (0, 1]:

    phototype   intensity   infrared
    I-II        1.00        1.00
    III         0.95        0.95
    IV          0.90        0.90
    V           0.80        0.80
    VI          0.75        0.75

    intensity_pct = round(baseline.intensity_pct × intensity factor)
    minutes       = max(1, round(baseline.ir_minutes × infrared factor))

"round" is half-up.  The LED colour is never altered.  Infrared is
programmed on a smart plug in whole minutes, so the duration is an
integer and never below one minute.

An unrecognised phototype uses the III factors and logs a warning
instead of failing.
────────────────────────────────────────────────────────────────────────
"""

from dataclasses import dataclass
from types import MappingProxyType

from config import ADVISORY_NOTE, FALLBACK_PHOTOTYPE, MIN_IR_MINUTES
from model.phototype import Phototype, parse_phototype
from therapy.catalog import Condition, get_baseline, parse_condition
from utils.logger import get_logger
from utils.rounding import round_half_up

logger = get_logger("therapy.adjuster")


@dataclass(frozen=True)
class AdjustmentFactors:
    intensity_factor: float
    ir_factor: float

    def __post_init__(self):
        for name in ("intensity_factor", "ir_factor"):
            v = getattr(self, name)
            if not 0.0 < v <= 1.0:
                raise ValueError(f"{name} must be in (0, 1], got {v}.")


ADJUSTMENT_FACTORS = MappingProxyType({
    Phototype.I_II: AdjustmentFactors(intensity_factor=1.0, ir_factor=1.0),
    Phototype.III:  AdjustmentFactors(intensity_factor=0.95, ir_factor=0.95),
    Phototype.IV:   AdjustmentFactors(intensity_factor=0.9, ir_factor=0.9),
    Phototype.V:    AdjustmentFactors(intensity_factor=0.8, ir_factor=0.8),
    Phototype.VI:   AdjustmentFactors(intensity_factor=0.75, ir_factor=0.75),
})


@dataclass(frozen=True)
class TreatmentSettings:
    """Final, fully-populated settings for one (condition, phototype) pair."""
    condition: Condition
    condition_label: str
    phototype: str          # one of the Phototype values
    led_color: str
    intensity_pct: int
    ir_minutes: int
    notes: str = ADVISORY_NOTE

    def to_dict(self) -> dict:
        """The exported JSON structure."""
        return {
            "disease": self.condition.value,
            "disease_label": self.condition_label,
            "phototype": self.phototype,
            "led": {
                "color": self.led_color,
                "intensity_pct": self.intensity_pct,
            },
            "infrared": {
                "minutes": self.ir_minutes,
            },
            "notes": self.notes,
        }


def resolve_phototype(phototype: "Phototype | str | None") -> Phototype:
    """Return `phototype` as a class, or class III if it is not one."""
    parsed = parse_phototype(phototype)
    if parsed is None:
        logger.warning(
            "Unrecognised phototype %r — using %s factors.", phototype, FALLBACK_PHOTOTYPE
        )
        parsed = Phototype(FALLBACK_PHOTOTYPE)
    return parsed


def factors_for(phototype: "Phototype | str | None") -> AdjustmentFactors:
    """Adjustment factors for `phototype`, falling back to class III."""
    return ADJUSTMENT_FACTORS[resolve_phototype(phototype)]


def compute_settings(
    condition: "Condition | str",
    phototype: "Phototype | str | None",
) -> TreatmentSettings:
    """
    Combine a catalog baseline with phototype factors.

    Parameters
    ----------
    condition : Condition | str   Catalog key.
    phototype : Phototype | str   One of the five classes; anything else
                                  gets the III factors.

    Returns
    -------
    TreatmentSettings
        A fallback is reported as phototype "III", identical to an
        explicit III request.

    Raises
    ------
    UnknownConditionError
        If `condition` is not in the catalog.
    """
    key = parse_condition(condition)
    base = get_baseline(key)
    resolved = resolve_phototype(phototype)
    factors = ADJUSTMENT_FACTORS[resolved]

    intensity = round_half_up(base.intensity_pct * factors.intensity_factor)
    minutes = max(MIN_IR_MINUTES, round_half_up(base.ir_minutes * factors.ir_factor))

    settings = TreatmentSettings(
        condition=key,
        condition_label=base.label,
        phototype=resolved.value,
        led_color=base.led_color,
        intensity_pct=intensity,
        ir_minutes=minutes,
    )
    logger.info(
        "Settings for %s / %s: LED %s @ %d%%, IR %d min",
        key, settings.phototype, settings.led_color, intensity, minutes,
    )
    return settings
