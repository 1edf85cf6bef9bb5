"""
Push-down filter exception hierarchy.

All exceptions inherit from ``PushDownError`` and provide ``to_dict()``
for structured error reporting.  Construction and validation errors are
fatal to the current build attempt: the builder must be discarded.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class PushDownError(Exception):
    """Base exception for all push-down filter errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ConstructionError(PushDownError):
    """The builder was used out of protocol at the point of the call."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "CONSTRUCTION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class ValidationError(PushDownError):
    """A composite predicate does not satisfy its arity invariant."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class EvaluationError(PushDownError):
    """A null field value reached a comparison that does not accept nulls."""

    def __init__(self, field: str, kind: str) -> None:
        self.field = field
        self.kind = kind
        super().__init__(
            f"Field '{field}' is null and operator '{kind}' does not accept nulls"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "EVALUATION_ERROR",
            "field": self.field,
            "operator": self.kind,
        }


class OperatorNotFoundError(PushDownError):
    """
    No in-memory operator is registered for a predicate kind.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid operators: {', '.join(sorted(valid_operators))}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }


class FieldNotFoundError(ConstructionError):
    """
    A field name is not declared by the row schema.

    Uses fuzzy matching to suggest similar declared field names.

    Example error message::

        Invalid field 'amuont' on 'orders'.
        Did you mean one of these?
          • amount

        Available fields: amount, id, status
    """

    def __init__(
        self,
        invalid_field: str,
        schema_name: str,
        available_fields: list[str],
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.schema_name = schema_name
        self.available_fields = available_fields
        self.suggestions = get_close_matches(
            invalid_field, available_fields, n=5, cutoff=cutoff
        )
        super().__init__(self._build_message(), path=invalid_field)

    def _build_message(self) -> str:
        lines = [f"Invalid field '{self.invalid_field}' on '{self.schema_name}'."]
        if self.suggestions:
            lines.append("Did you mean one of these?")
            for s in self.suggestions:
                lines.append(f"  • {s}")

        sorted_fields = sorted(self.available_fields)
        preview = ", ".join(sorted_fields[:15])
        if len(sorted_fields) > 15:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "field": self.invalid_field,
            "schema": self.schema_name,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }


class DescriptorError(PushDownError):
    """A pruning-descriptor builder was driven out of protocol."""
