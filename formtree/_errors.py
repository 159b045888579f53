# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from collections.abc import Iterable
from typing import Any, ClassVar

__all__ = (
    "FormTreeError",
    "ValidationError",
    "ItemNotFoundError",
    "ItemExistsError",
    "IDError",
    "ConfigurationError",
)


class FormTreeError(Exception):
    """Base error for form tree operations.

    ``element_ids`` names the tree nodes the failure is about, so a caller
    can point at them without parsing the message.
    """

    default_message: ClassVar[str] = "formtree error"
    status_code: ClassVar[int] = 500

    def __init__(
        self,
        message: str | None = None,
        *,
        element_ids: Iterable[str] | None = None,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message or self.default_message)
        if cause:
            self.__cause__ = cause
        self.message = message or self.default_message
        self.element_ids = tuple(element_ids or ())
        self.details = details or {}
        self.status_code = status_code or self.status_code

    def to_dict(self, *, include_cause: bool = False) -> dict[str, Any]:
        data = {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
        }
        if self.element_ids:
            data["element_ids"] = list(self.element_ids)
        if self.details:
            data["details"] = self.details
        if include_cause and self.__cause__ is not None:
            data["cause"] = repr(self.__cause__)
        return data

    def get_cause(self) -> Exception | None:
        return self.__cause__


class ValidationError(FormTreeError):
    """Exception raised when an element, patch or tree fails validation."""

    default_message = "Validation failed"
    status_code = 422

    @classmethod
    def from_value(
        cls,
        value: Any,
        *,
        expected: str | None = None,
        message: str | None = None,
        element_id: str | None = None,
        cause: Exception | None = None,
        **extra: Any,
    ):
        """Build an error describing a rejected input `value`.

        `element_id` names the node the input was meant for, if any.
        """
        details = {"value": value, "type": type(value).__name__, **extra}
        if expected:
            details["expected"] = expected
        message = message or f"Expected {expected}, got {type(value).__name__}"
        return cls(
            message,
            element_ids=[element_id] if element_id else None,
            details=details,
            cause=cause,
        )


class ItemNotFoundError(FormTreeError):
    default_message = "Item not found"
    status_code = 404


class ItemExistsError(FormTreeError):
    default_message = "Item already exists"
    status_code = 409


class IDError(FormTreeError):
    default_message = "Invalid or conflicting element id"
    status_code = 409


class ConfigurationError(FormTreeError):
    default_message = "Invalid formtree configuration"
