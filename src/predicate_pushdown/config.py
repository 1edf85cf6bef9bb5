"""PushDownSettings — evaluation policies for a push-down filter."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BetweenPolicy(str, Enum):
    """How ``between(lower, upper)`` decides whether a value matches."""

    INCLUSIVE = "inclusive"
    """``lower <= value <= upper``."""

    LEGACY_EITHER_BOUND = "legacy_either_bound"
    """``value > lower or value < upper``; kept for filters written against it."""


class NullPolicy(str, Enum):
    """What a comparison that does not accept nulls does with a null value."""

    NO_MATCH = "no_match"
    RAISE = "raise"


class PushDownSettings(BaseModel):
    """Immutable evaluation settings shared by a builder and its filter."""

    model_config = ConfigDict(frozen=True)

    between_policy: BetweenPolicy = Field(
        default=BetweenPolicy.INCLUSIVE,
        description="Matching rule for between predicates",
    )
    null_policy: NullPolicy = Field(
        default=NullPolicy.NO_MATCH,
        description="Outcome of comparing a null field value",
    )
