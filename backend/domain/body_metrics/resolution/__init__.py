"""Input resolution for body metrics calculations."""

from .data_source_resolver import DataSourceResolver, age_on, usable_number
from .records import AnthropometryRecord, ManualEntry, ProfileRecord

__all__ = [
    "DataSourceResolver",
    "AnthropometryRecord",
    "ProfileRecord",
    "ManualEntry",
    "age_on",
    "usable_number",
]
