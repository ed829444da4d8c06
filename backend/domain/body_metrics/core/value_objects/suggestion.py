"""Suggestion value object - advisory defaults offered to the caller."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Suggestion:
    """A suggested value the caller may accept or ignore.

    Suggestions are never merged into a profile or an energy result by the
    engine; the caller passes the accepted value explicitly.

    Attributes:
        field: Name of the input the suggestion is for
            (``activity_factor``, ``goal_adjustment_kcal``)
        value: Suggested value
        label: Short description of the suggested level
        source: What the suggestion was derived from
            (``exercise_frequency``, ``goal_type``)
    """

    field: str
    value: Union[float, int]
    label: str
    source: str
