"""
therapy/catalog.py — Condition catalog
=======================================
Baseline light-therapy parameters per treatable condition, before any
phototype adjustment.  The table is data, fixed at import time and never
mutated.  Keys are the identifiers written into the exported JSON, so
they must not change once published (including the accent in
`acné_leve`).
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from errors import UnknownConditionError
from imaging.color import rgb_from_hex


class Condition(str, Enum):
    ULCERA_SUPERFICIAL = "ulcera_superficial"
    ACNE_LEVE = "acné_leve"
    DOLOR_MUSCULAR = "dolor_muscular"
    PIEL_SENSIBLE = "piel_sensible"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ConditionBaseline:
    label: str
    description: str
    led_color: str          # '#RRGGBB'
    intensity_pct: int      # 0–100
    ir_minutes: int         # > 0

    def __post_init__(self):
        rgb_from_hex(self.led_color)   # raises on a malformed colour
        if not 0 <= self.intensity_pct <= 100:
            raise ValueError(f"intensity_pct {self.intensity_pct} outside 0–100.")
        if self.ir_minutes < 1:
            raise ValueError(f"ir_minutes must be positive, got {self.ir_minutes}.")


CATALOG = MappingProxyType({
    Condition.ULCERA_SUPERFICIAL: ConditionBaseline(
        label="Úlcera superficial",
        description="Cicatrización, inflamación local",
        led_color="#FF7F50",    # coral
        intensity_pct=70,
        ir_minutes=10,
    ),
    Condition.ACNE_LEVE: ConditionBaseline(
        label="Acné leve",
        description="Reducir inflamación y bacterias",
        led_color="#0000FF",    # blue
        intensity_pct=60,
        ir_minutes=6,
    ),
    Condition.DOLOR_MUSCULAR: ConditionBaseline(
        label="Dolor muscular / contractura",
        description="Mejora circulación y reduce dolor",
        led_color="#FF4500",    # deep orange
        intensity_pct=80,
        ir_minutes=12,
    ),
    Condition.PIEL_SENSIBLE: ConditionBaseline(
        label="Piel sensible / enrojecida",
        description="Calmar enrojecimiento",
        led_color="#00FF7F",    # spring green
        intensity_pct=40,
        ir_minutes=5,
    ),
})


def parse_condition(key: "Condition | str") -> Condition:
    """Turn a raw key into a `Condition`, raising `UnknownConditionError`."""
    if isinstance(key, Condition):
        return key
    try:
        return Condition(key)
    except ValueError:
        raise UnknownConditionError(key) from None


def list_conditions() -> list[Condition]:
    """All condition keys, in catalog order (for building a selector)."""
    return list(CATALOG)


def get_baseline(key: "Condition | str") -> ConditionBaseline:
    """Baseline parameters for `key`."""
    condition = parse_condition(key)
    try:
        return CATALOG[condition]
    except KeyError:
        raise UnknownConditionError(key) from None
