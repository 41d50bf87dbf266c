"""
imaging/sampler.py — Photo decoding & central colour sampling
==============================================================
Turns the raw bytes of an uploaded photo into the mean colour of a block
taken from the middle of the picture:

    bytes  →  decode (OpenCV)  →  block in WORK_WIDTH coordinates
           →  matching source crop  →  shrink to block size  →  mean R, G, B

Why the centre?
---------------
The user is asked to photograph the area to be treated, so the skin is
almost always in the middle of the frame.  The block starts at 35 % of
the width/height and spans 30 % of each (never less than 20 px), which
keeps clothing, background and vignetting at the borders out of the mean.

The block is laid out on a virtual image rescaled to WORK_WIDTH, which
makes its geometry independent of the camera resolution: a 12 MP photo
and a 0.3 MP thumbnail are sampled the same way.  Only the source pixels
under the block are then cut out and area-resampled down to the block
size, so memory is bounded by the source crop whatever the aspect ratio
(a 1×20000 strip would otherwise need a 300×6000000 working image).

The block is clipped to the working image.  On very flat images (e.g. a
panorama strip) the working height can round down to zero rows, in which
case there is nothing to average and `EmptyRegionError` is raised.
"""

import math

import cv2
import numpy as np

from config import WORK_WIDTH, SAMPLE_ORIGIN_FRAC, SAMPLE_SIZE_FRAC, SAMPLE_MIN_PX
from errors import DecodeError, EmptyRegionError
from imaging.color import ColorSample
from utils.logger import get_logger
from utils.rounding import round_half_up

logger = get_logger("imaging.sampler")


def decode_image(data: bytes) -> np.ndarray:
    """
    Decode encoded image bytes (PNG, JPEG, BMP, WebP, ...) into a BGR array.

    Any alpha channel is dropped.

    Raises
    ------
    DecodeError
        If the bytes are empty or not a format OpenCV can decode.
    """
    if not data:
        raise DecodeError("Empty upload — no image data received.")

    buf = np.frombuffer(data, dtype=np.uint8)
    try:
        image = cv2.imdecode(buf, cv2.IMREAD_COLOR)
    except cv2.error as e:
        raise DecodeError(f"Image could not be decoded: {e}") from e

    if image is None or image.size == 0:
        raise DecodeError("Image could not be decoded (unsupported or corrupt file).")

    return image


def working_size(width: int, height: int) -> tuple[int, int]:
    """
    Virtual size the sample block is laid out on: fixed width, height
    following the image aspect ratio (rounded half-up).
    """
    if width <= 0 or height <= 0:
        raise DecodeError(f"Image has no pixels ({width}x{height}).")
    return WORK_WIDTH, round_half_up((height / width) * WORK_WIDTH)


def sample_rect(width: int, height: int) -> tuple[int, int, int, int]:
    """
    Central sample block for a working image of `width`×`height`.

    Returns
    -------
    x, y, w, h : int
        Top-left corner and size.  Not clipped; the block may overhang
        the bottom/right edge of very small images.
    """
    x = math.floor(width * SAMPLE_ORIGIN_FRAC)
    y = math.floor(height * SAMPLE_ORIGIN_FRAC)
    w = max(SAMPLE_MIN_PX, math.floor(width * SAMPLE_SIZE_FRAC))
    h = max(SAMPLE_MIN_PX, math.floor(height * SAMPLE_SIZE_FRAC))
    return x, y, w, h


def mean_rgb(region: np.ndarray) -> tuple[float, float, float]:
    """
    Return the unweighted mean of R, G, B over a BGR crop.

    Raises
    ------
    EmptyRegionError
        If the crop holds no pixels.
    """
    if region.size == 0:
        raise EmptyRegionError("Sample region contains no pixels.")

    # OpenCV stores BGR; swap to RGB order on the way out
    pixels = region.reshape(-1, region.shape[-1]).astype(np.float64)
    b_mean, g_mean, r_mean = pixels[:, :3].mean(axis=0)
    return float(r_mean), float(g_mean), float(b_mean)


def _source_span(start: int, stop: int, scale: float, limit: int) -> tuple[int, int]:
    """Map a working-image span to source pixels, keeping at least one pixel."""
    lo = min(limit - 1, math.floor(start * scale))
    hi = min(limit, max(lo + 1, math.ceil(stop * scale)))
    return lo, hi


def sample_image(image: np.ndarray) -> ColorSample:
    """Average the central block of a decoded BGR image."""
    src_h, src_w = image.shape[:2]
    work_w, work_h = working_size(src_w, src_h)

    if work_h <= 0:
        raise EmptyRegionError(
            f"{src_w}x{src_h} image rescales to zero rows at width {work_w}."
        )

    x, y, w, h = sample_rect(work_w, work_h)
    # Clamp to the working image; the minimum block size can overhang it
    x_max = min(work_w, x + w)
    y_max = min(work_h, y + h)
    if x_max <= x or y_max <= y:
        raise EmptyRegionError(f"Sample block is empty in {work_w}x{work_h} working image.")

    # Only the source pixels under the block are read and resized
    x0, x1 = _source_span(x, x_max, src_w / work_w, src_w)
    y0, y1 = _source_span(y, y_max, src_h / work_h, src_h)
    crop = image[y0:y1, x0:x1]

    # Shrink to the block size, never enlarge: on extreme aspect ratios the
    # block is far larger than the source pixels it covers
    out_w = min(x_max - x, crop.shape[1])
    out_h = min(y_max - y, crop.shape[0])
    region = cv2.resize(crop, (out_w, out_h), interpolation=cv2.INTER_AREA)
    region = region.reshape(out_h, out_w, -1)

    r, g, b = mean_rgb(region)
    pixel_count = out_w * out_h

    logger.debug(
        "Sampled %dx%d block at (%d, %d) of %dx%d working image "
        "from source crop (%d:%d, %d:%d).",
        x_max - x, y_max - y, x, y, work_w, work_h, x0, x1, y0, y1,
    )
    return ColorSample(mean_r=r, mean_g=g, mean_b=b, pixel_count=pixel_count)


def sample_color(data: bytes) -> ColorSample:
    """
    Full sampler contract: encoded bytes in, mean colour of the central
    block out.

    Raises
    ------
    DecodeError, EmptyRegionError
    """
    image = decode_image(data)
    sample = sample_image(image)
    logger.info(
        "Image %dx%d → mean colour %s over %d px.",
        image.shape[1], image.shape[0], sample.color.hex, sample.pixel_count,
    )
    return sample
