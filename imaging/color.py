"""
imaging/color.py — Colour value types
======================================
`RGBColor` is the displayable, integer colour (with its `#RRGGBB` hex
form).  `ColorSample` is what the sampler actually measures: the float
channel means over the sample block, kept at full precision so the
phototype estimate is not skewed by display rounding.
"""

from dataclasses import dataclass

from utils.rounding import round_half_up


def hex_from_rgb(r: float, g: float, b: float) -> str:
    """
    Format three 0–255 channel values as '#RRGGBB' (uppercase, zero-padded).
    Non-integer channels are rounded half-up first.
    """
    channels = [round_half_up(v) for v in (r, g, b)]
    for v in channels:
        if not 0 <= v <= 255:
            raise ValueError(f"Channel value {v} outside 0–255.")
    return "#" + "".join(f"{v:02X}" for v in channels)


def rgb_from_hex(value: str) -> tuple[int, int, int]:
    """Parse '#RRGGBB' (case-insensitive, '#' optional) into an (r, g, b) tuple."""
    digits = value[1:] if value.startswith("#") else value
    if len(digits) != 6:
        raise ValueError(f"Expected 6 hex digits, got '{value}'.")
    try:
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
    except ValueError:
        raise ValueError(f"Invalid hex colour '{value}'.") from None


@dataclass(frozen=True)
class RGBColor:
    """An 8-bit-per-channel colour."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for name in ("r", "g", "b"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= 255:
                raise ValueError(f"RGBColor.{name} must be an int in 0–255, got {v!r}.")

    @property
    def hex(self) -> str:
        return hex_from_rgb(self.r, self.g, self.b)

    @classmethod
    def from_hex(cls, value: str) -> "RGBColor":
        return cls(*rgb_from_hex(value))

    def to_dict(self) -> dict:
        return {"r": self.r, "g": self.g, "b": self.b, "hex": self.hex}


@dataclass(frozen=True)
class ColorSample:
    """Mean colour of the sample block, at float precision."""
    mean_r: float
    mean_g: float
    mean_b: float
    pixel_count: int

    @property
    def means(self) -> tuple[float, float, float]:
        return self.mean_r, self.mean_g, self.mean_b

    @property
    def color(self) -> RGBColor:
        """Display colour: each mean rounded half-up."""
        return RGBColor(*(round_half_up(v) for v in self.means))
