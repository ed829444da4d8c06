"""Provenance value object - where a resolved biometric value came from."""

from enum import Enum


class Provenance(str, Enum):
    """Source of a resolved field, in decreasing order of authority.

    Purely informational: calculations never look at it.
    """

    ANTHROPOMETRY = "anthropometry"
    PROFILE = "profile"
    MANUAL = "manual"
