"""
Immutable Base Models for Analytics Values

Every object the analytics engine produces is a value: it is recomputed on
each call and never mutated afterwards. These base classes pin that down in
the model configuration so a consumer cannot accidentally edit a summary
in place and so two results computed from the same inputs compare equal.

Usage:
    class Streak(ValueModel):
        length: int
        start_date: date
        end_date: date

Architecture:
    Raw log entry (dict) → projector (lenient) → ValueModel instances → caller
"""

from pydantic import BaseModel, ConfigDict


class ValueModel(BaseModel):
    """
    Base model for engine outputs.

    Features:
        - frozen=True: Instances are immutable after construction
        - extra="forbid": Unknown fields raise ValidationError
        - validate_default=True: Validates default values

    Example:
        >>> class Point(ValueModel):
        ...     x: int
        >>>
        >>> p = Point(x=1)
        >>> p.x = 2  # Raises ValidationError (frozen instance)
    """

    model_config = ConfigDict(
        frozen=True,  # Values, not entities
        extra="forbid",  # Reject unknown fields
        validate_default=True,  # Validate defaults
    )
