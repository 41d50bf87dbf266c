"""
model/phototype.py — Skin Phototype Estimation
===============================================

⚠️  DISCLAIMER: This is a rough brightness heuristic, NOT a Fitzpatrick
    assessment.  A phone photo's colour depends on lighting, white
    balance and exposure at least as much as on skin.  The result only
    scales treatment settings conservatively and must be validated by a
    health professional.

────────────────────────────────────────────────────────────────────────
Rationale
────────────────────────────────────────────────────────────────────────
Darker skin absorbs more visible and near-infrared light, so the same LED
intensity and infrared exposure deposit more energy.  The estimator only
needs an *ordering* from lighter to darker skin, which we take from HSL
lightness of the sampled colour:

    L = (max(R, G, B) + min(R, G, B)) / 2      with channels in [0, 1]

and bucket it by descending thresholds, first match wins:

    L > 0.75  →  I-II
    L > 0.60  →  III
    L > 0.45  →  IV
    L > 0.30  →  V
    else      →  VI

Comparisons are strict, so a value exactly on a threshold falls into the
darker class.  Types I and II are not separable this way and share a class.
────────────────────────────────────────────────────────────────────────
"""

from enum import Enum

from config import PHOTOTYPE_THRESHOLDS
from imaging.color import ColorSample, RGBColor
from utils.logger import get_logger

logger = get_logger("model.phototype")


class Phototype(str, Enum):
    """Phototype classes, ordered from lightest to darkest."""
    I_II = "I-II"
    III = "III"
    IV = "IV"
    V = "V"
    VI = "VI"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """0 for the lightest class, 4 for the darkest."""
        return _ORDER.index(self)


_ORDER = list(Phototype)


def parse_phototype(value: "Phototype | str | None") -> Phototype | None:
    """Return the matching `Phototype`, or None if `value` is not one."""
    if isinstance(value, Phototype):
        return value
    try:
        return Phototype(value)
    except ValueError:
        return None


def luminance(r: float, g: float, b: float) -> float:
    """HSL lightness in [0, 1] of a colour given as 0–255 channel values."""
    channels = (r / 255.0, g / 255.0, b / 255.0)
    return (max(channels) + min(channels)) / 2.0


def classify_luminance(lum: float) -> Phototype:
    """Bucket a lightness value; total over all reals."""
    for threshold, phototype in zip(PHOTOTYPE_THRESHOLDS, _ORDER):
        if lum > threshold:
            return phototype
    return _ORDER[-1]


def estimate_phototype(r: float, g: float, b: float) -> Phototype:
    """
    Map a mean skin colour (0–255 channels, floats allowed) to a phototype.

    Returns
    -------
    Phototype
        Never raises for in-range channel values.
    """
    lum = luminance(r, g, b)
    phototype = classify_luminance(lum)
    logger.debug("Luminance %.3f → phototype %s", lum, phototype)
    return phototype


def estimate_from_sample(sample: "ColorSample | RGBColor") -> Phototype:
    """Estimate from a sampler result (full precision) or an integer colour."""
    if isinstance(sample, ColorSample):
        return estimate_phototype(*sample.means)
    return estimate_phototype(sample.r, sample.g, sample.b)
