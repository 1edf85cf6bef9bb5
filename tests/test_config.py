"""Tests for PushDownSettings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from predicate_pushdown import BetweenPolicy, NullPolicy, PushDownSettings


def test_defaults():
    settings = PushDownSettings()
    assert settings.between_policy is BetweenPolicy.INCLUSIVE
    assert settings.null_policy is NullPolicy.NO_MATCH


def test_settings_accept_string_values():
    settings = PushDownSettings(between_policy="legacy_either_bound", null_policy="raise")
    assert settings.between_policy is BetweenPolicy.LEGACY_EITHER_BOUND
    assert settings.null_policy is NullPolicy.RAISE


def test_settings_are_frozen():
    settings = PushDownSettings()
    with pytest.raises(PydanticValidationError):
        settings.null_policy = NullPolicy.RAISE  # type: ignore[misc]


def test_invalid_policy():
    with pytest.raises(PydanticValidationError):
        PushDownSettings(between_policy="exclusive")
