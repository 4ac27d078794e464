"""
Success Criteria

A success criterion decides which days count as "tracked" for a goal and
which intensity bucket (high/medium/low) a tracked day falls into. The
aggregation engine and streak detector only talk to the BaseCriterion
interface, so adding a third criterion means adding a subclass here and
registering it in CRITERIA; nothing downstream changes.

Variants:
- ProductivityCriterion: tracked when a 1-10 rating was logged
- HoursCriterion: tracked when hours were logged, bucketed against a daily cap

Usage:
    from nitya.models.criteria import HoursCriterion, parse_criterion

    criterion = HoursCriterion(max_hours_per_day=14)
    criterion.is_tracked(record)
    criterion.bucket(record)  # IntensityBucket.MEDIUM

    parse_criterion({"type": "hours", "maxHours": 8})
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Annotated, Any, Literal, Optional, TYPE_CHECKING, Union

from pydantic import Field, ValidationError

from nitya.config import settings
from nitya.enums.analytics import CriterionType, IntensityBucket
from nitya.models.base import ValueModel

if TYPE_CHECKING:
    from nitya.models.analytics import DayRecord

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 10


def score_bucket(score: Optional[int]) -> Optional[IntensityBucket]:
    """
    Bucket a productivity rating.

    Args:
        score: Rating on the 1-10 scale, or None when not logged.

    Returns:
        The bucket, or None for absent or out-of-domain ratings.
    """
    if score is None or not MIN_SCORE <= score <= MAX_SCORE:
        return None
    if score >= settings.PRODUCTIVITY_HIGH_THRESHOLD:
        return IntensityBucket.HIGH
    if score >= settings.PRODUCTIVITY_MEDIUM_THRESHOLD:
        return IntensityBucket.MEDIUM
    return IntensityBucket.LOW


def hours_bucket(hours: float, max_hours: float) -> Optional[IntensityBucket]:
    """
    Bucket logged hours by their fraction of the daily cap.

    Args:
        hours: Hours logged for the day.
        max_hours: Daily cap the goal is measured against.

    Returns:
        The bucket, or None when no hours were logged.
    """
    if hours <= 0 or max_hours <= 0:
        return None

    ratio = hours / max_hours
    if ratio >= settings.HOURS_HIGH_RATIO:
        return IntensityBucket.HIGH
    elif ratio >= settings.HOURS_MEDIUM_RATIO:
        return IntensityBucket.MEDIUM
    else:
        return IntensityBucket.LOW


def productivity_label(score: Optional[int]) -> str:
    """Display label for a rating: High, Medium, Low or "No data"."""
    bucket = score_bucket(score)
    return bucket.label if bucket else "No data"


class BaseCriterion(ValueModel, ABC):
    """Interface shared by all success criteria."""

    @property
    def criterion_type(self) -> CriterionType:
        return CriterionType(self.type)

    @abstractmethod
    def is_tracked(self, record: DayRecord) -> bool:
        """Whether the day counts as logged under this criterion."""

    @abstractmethod
    def bucket(self, record: DayRecord) -> Optional[IntensityBucket]:
        """Intensity bucket of a tracked day, None for untracked days."""

    @abstractmethod
    def rank_value(self, record: DayRecord) -> float:
        """Value used to pick the best and worst day of a range."""


class ProductivityCriterion(BaseCriterion):
    """Rating-based criterion: a day is tracked when it has a positive score."""

    type: Literal["productivity"] = "productivity"

    def is_tracked(self, record: DayRecord) -> bool:
        return record.score is not None and record.score > 0

    def bucket(self, record: DayRecord) -> Optional[IntensityBucket]:
        if not self.is_tracked(record):
            return None
        return score_bucket(record.score)

    def rank_value(self, record: DayRecord) -> float:
        return record.score or 0


class HoursCriterion(BaseCriterion):
    """Hours-based criterion measured against a daily cap of 8, 14 or 18 hours."""

    type: Literal["hours"] = "hours"
    max_hours_per_day: Literal[8, 14, 18] = 8

    def is_tracked(self, record: DayRecord) -> bool:
        return record.total_hours > 0

    def bucket(self, record: DayRecord) -> Optional[IntensityBucket]:
        return hours_bucket(record.total_hours, self.max_hours_per_day)

    def rank_value(self, record: DayRecord) -> float:
        return record.total_hours


SuccessCriterion = Annotated[
    Union[ProductivityCriterion, HoursCriterion],
    Field(discriminator="type"),
]

CRITERIA: dict[CriterionType, type[BaseCriterion]] = {
    CriterionType.PRODUCTIVITY: ProductivityCriterion,
    CriterionType.HOURS: HoursCriterion,
}


def parse_criterion(raw: Any) -> BaseCriterion:
    """
    Build a criterion from its stored representation.

    Accepts an existing criterion, a criterion type string, or a mapping such
    as {"type": "hours", "maxHours": 14}. Goals without a criterion (or with
    an unrecognised one) are measured by productivity.

    Args:
        raw: Stored criterion value.

    Returns:
        A concrete criterion instance.
    """
    if isinstance(raw, BaseCriterion):
        return raw
    if isinstance(raw, str):
        raw = {"type": raw}
    if not isinstance(raw, dict):
        return ProductivityCriterion()

    try:
        criterion_type = CriterionType(raw.get("type"))
    except ValueError:
        logger.warning(f"Unknown success criterion {raw.get('type')!r}, using productivity")
        return ProductivityCriterion()

    model = CRITERIA[criterion_type]
    fields = {k: v for k, v in raw.items() if k in model.model_fields}
    if "maxHours" in raw and "max_hours_per_day" in model.model_fields:
        fields.setdefault("max_hours_per_day", raw["maxHours"])

    try:
        return model(**fields)
    except ValidationError as e:
        logger.warning(f"Invalid {criterion_type.value} criterion {raw!r}: {e}")
        return model()
