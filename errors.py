"""
errors.py — Domain exceptions
==============================
All pipeline failures derive from `PhototherapyError`, a `ValueError`, so a
caller can catch the whole family in one place.  None of them is fatal to a
session: the user simply re-uploads or re-selects.
"""


class PhototherapyError(ValueError):
    """Base class for every error raised by the settings pipeline."""


class DecodeError(PhototherapyError):
    """The uploaded bytes could not be decoded into a raster image."""


class EmptyRegionError(PhototherapyError):
    """The sample rectangle contains zero pixels."""


class UnknownConditionError(PhototherapyError):
    """A condition key that is not part of the catalog was supplied."""

    def __init__(self, key: object):
        self.key = key
        super().__init__(f"Unknown condition '{key}'.")
