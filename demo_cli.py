#!/usr/bin/env python3
"""
demo_cli.py — Standalone command-line demo
============================================
Runs the full pipeline on an image file WITHOUT the FastAPI server.
Useful for quick testing, demos, and debugging.

Usage:
    python demo_cli.py photo.jpg --condition acné_leve --out exports/
    python demo_cli.py --list

⚠️  DISCLAIMER: The values are heuristics — validate clinically before use.
"""

import argparse
import logging
import sys

from config import DEFAULT_CONDITION
from errors import PhototherapyError
from export.settings_export import settings_to_json, write_settings_file
from imaging.sampler import sample_color
from model.phototype import estimate_from_sample, luminance
from therapy.adjuster import compute_settings
from therapy.catalog import CATALOG, list_conditions
from utils.logger import get_logger, set_level

logger = get_logger("demo_cli")


def pretty_print(label: str, value, unit: str = "") -> None:
    """Colourised terminal output."""
    print(f"  \033[1;36m{label:<24}\033[0m \033[1;33m{value}\033[0m {unit}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Phototherapy settings CLI demo")
    parser.add_argument("image", nargs="?", help="Photo of the area to treat")
    parser.add_argument(
        "--condition", default=DEFAULT_CONDITION,
        choices=[c.value for c in list_conditions()],
        help=f"Condition to treat (default {DEFAULT_CONDITION})",
    )
    parser.add_argument("--out", metavar="DIR", help="Also write the settings JSON into DIR")
    parser.add_argument("--list", action="store_true", help="List conditions and exit")
    parser.add_argument("--quiet", action="store_true", help="Only warnings and errors in the log")
    return parser


def list_catalog() -> None:
    print("\n  ── Conditions ──")
    for key, base in CATALOG.items():
        pretty_print(key.value, base.label,
                     f"({base.led_color}, {base.intensity_pct}%, {base.ir_minutes} min IR)")
    print()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.quiet:
        set_level(logging.WARNING)

    if args.list:
        list_catalog()
        return 0
    if not args.image:
        parser.error("an image path is required (or use --list)")

    logger.info("Sampling %s…", args.image)
    try:
        with open(args.image, "rb") as fh:
            data = fh.read()
    except OSError as e:
        print(f"  ERROR: cannot read {args.image}: {e}")
        return 1

    try:
        sample = sample_color(data)
    except PhototherapyError as e:
        print(f"  ERROR: {e}")
        return 1

    phototype = estimate_from_sample(sample)
    settings = compute_settings(args.condition, phototype)
    color = sample.color

    print("\n" + "=" * 60)
    print("  PHOTOTHERAPY SETTINGS — CLI DEMO")
    print("=" * 60)
    pretty_print("Image", args.image)
    pretty_print("Average colour", color.hex, f"(RGB {color.r}, {color.g}, {color.b})")
    pretty_print("Luminance", f"{luminance(*sample.means):.3f}")
    pretty_print("Estimated phototype", phototype.value)
    pretty_print("Condition", settings.condition_label)
    pretty_print("LED colour", settings.led_color)
    pretty_print("LED intensity", settings.intensity_pct, "%")
    pretty_print("Infrared", settings.ir_minutes, "min")
    print("\n" + settings_to_json(settings) + "\n")

    if args.out:
        path = write_settings_file(settings, args.out)
        pretty_print("Saved to", path)

    print("=" * 60)
    print("  ⚠️  DISCLAIMER: heuristic values — validate clinically before use.")
    print("=" * 60 + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
