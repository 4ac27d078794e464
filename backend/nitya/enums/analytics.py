"""
Analytics Enums

Defines the success criterion types and the intensity buckets a tracked day
falls into.
"""

from enum import Enum


class CriterionType(str, Enum):
    """
    Success criterion types.

    Decides what counts as a "tracked" day:
    - PRODUCTIVITY: a 1-10 rating was logged
    - HOURS: some time was logged against the goal
    """

    PRODUCTIVITY = "productivity"
    HOURS = "hours"


class IntensityBucket(str, Enum):
    """
    Intensity level of a tracked day.

    Productivity: high >= 7, medium 4-6, low 1-3.
    Hours: high >= 80% of the daily cap, medium 40-80%, low below 40%.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def label(self) -> str:
        """Human-readable label for display."""
        return self.value.capitalize()
