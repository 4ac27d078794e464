"""
Centralized enum definitions for the application.

Usage:
    from nitya.enums import CriterionType, IntensityBucket
"""

from nitya.enums.analytics import (
    CriterionType,
    IntensityBucket,
)

__all__ = [
    "CriterionType",
    "IntensityBucket",
]
