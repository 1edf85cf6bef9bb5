"""Shared fixtures for push-down filter tests."""

from __future__ import annotations

import pytest

from predicate_pushdown import (
    Field,
    PushDownFilterBuilder,
    PushDownSettings,
    RecordingSearchArgumentBuilder,
    RowSchema,
)
from predicate_pushdown.operators_memory import build_default_registry


def casefold_order(left: str, right: str) -> int:
    left, right = left.casefold(), right.casefold()
    return (left > right) - (left < right)


@pytest.fixture
def settings() -> PushDownSettings:
    return PushDownSettings()


@pytest.fixture
def registry(settings: PushDownSettings):
    """Default in-memory operator registry for building predicates."""
    return build_default_registry(settings)


@pytest.fixture
def schema() -> RowSchema:
    return RowSchema(
        Field(name="id"),
        Field(name="title", comparator=casefold_order),
        Field(name="pages"),
        Field(name="genre"),
        name="books",
    )


@pytest.fixture
def sarg_builder() -> RecordingSearchArgumentBuilder:
    return RecordingSearchArgumentBuilder()


@pytest.fixture
def builder(sarg_builder: RecordingSearchArgumentBuilder) -> PushDownFilterBuilder:
    return PushDownFilterBuilder(sarg_builder)
