# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for formtree error classes."""

import pytest

from formtree._errors import (
    ConfigurationError,
    FormTreeError,
    IDError,
    ItemExistsError,
    ItemNotFoundError,
    ValidationError,
)


class TestFormTreeError:
    """Tests for base FormTreeError class."""

    def test_default_initialization(self):
        error = FormTreeError()
        assert str(error) == "formtree error"
        assert error.message == "formtree error"
        assert error.details == {}
        assert error.status_code == 500

    def test_custom_message_and_status(self):
        error = FormTreeError("Custom", status_code=400)
        assert str(error) == "Custom"
        assert error.status_code == 400

    def test_with_cause(self):
        cause = ValueError("Original error")
        error = FormTreeError("Wrapped error", cause=cause)
        assert error.get_cause() is cause
        assert error.__cause__ is cause

    def test_get_cause_no_cause(self):
        assert FormTreeError("Error").get_cause() is None

    def test_to_dict_basic(self):
        error = FormTreeError("Test error", status_code=400)
        assert error.to_dict() == {
            "error": "FormTreeError",
            "message": "Test error",
            "status_code": 400,
        }

    def test_to_dict_with_details_and_cause(self):
        error = FormTreeError(
            "Error", details={"field": "value"}, cause=ValueError("root")
        )
        result = error.to_dict(include_cause=True)
        assert result["details"] == {"field": "value"}
        assert "ValueError" in result["cause"]
        assert "cause" not in error.to_dict()

    def test_element_ids_in_to_dict(self):
        error = FormTreeError("Clash", element_ids=["b", "a"])
        assert error.element_ids == ("b", "a")
        assert error.to_dict()["element_ids"] == ["b", "a"]
        assert "element_ids" not in FormTreeError("Plain").to_dict()


class TestValidationError:
    def test_defaults(self):
        error = ValidationError()
        assert error.message == "Validation failed"
        assert error.status_code == 422

    def test_from_value(self):
        error = ValidationError.from_value(
            42, expected="mapping", message="Bad", field="patch"
        )
        assert error.message == "Bad"
        assert error.details == {
            "value": 42,
            "type": "int",
            "expected": "mapping",
            "field": "patch",
        }

    def test_from_value_names_element(self):
        error = ValidationError.from_value([], expected="mapping", element_id="e1")
        assert error.element_ids == ("e1",)
        assert error.message == "Expected mapping, got list"


class TestSubclasses:
    @pytest.mark.parametrize(
        "cls, status",
        [
            (ItemNotFoundError, 404),
            (ItemExistsError, 409),
            (IDError, 409),
            (ConfigurationError, 500),
        ],
    )
    def test_status_codes_and_inheritance(self, cls, status):
        error = cls()
        assert isinstance(error, FormTreeError)
        assert error.status_code == status
        assert error.message == cls.default_message

    def test_catchable_as_base(self):
        with pytest.raises(FormTreeError):
            raise IDError("boom")
