"""
Tests for Result types, Issue and ValidationError.
"""

import pytest

from sifter import Err, Issue, Ok, ValidationError, get_dot_path
from sifter.errors import error_message


class TestResult:
    def test_ok(self):
        r = Ok(5)
        assert r.ok
        assert r.is_ok()
        assert not r.is_err()
        assert r.unwrap() == 5

    def test_err_defaults_issue(self):
        r = Err("bad")
        assert not r.ok
        assert r.is_err()
        assert r.issues == (Issue("bad"),)

    def test_err_unwrap_raises(self):
        with pytest.raises(ValidationError, match="bad"):
            Err("bad").unwrap()

    def test_prefixed(self):
        r = Err("Expected number").prefixed("b").prefixed("a")
        assert r.error == "a: b: Expected number"
        assert r.issues[0].path == ("a", "b")
        assert r.issues[0].message == "Expected number"

    def test_prefixed_with_label(self):
        r = Err("Expected number").prefixed(1, "[1]").prefixed(0, "[0]")
        assert r.error == "[0]: [1]: Expected number"
        assert r.issues[0].path == (0, 1)


class TestIssue:
    def test_to_dict_without_path(self):
        assert Issue("m").to_dict() == {"message": "m"}

    def test_to_dict_with_path(self):
        assert Issue("m", ("a", 0)).to_dict() == {"message": "m", "path": ["a", 0]}

    def test_with_prefix(self):
        assert Issue("m", ("b",)).with_prefix("a").path == ("a", "b")


class TestValidationError:
    def test_is_value_error(self):
        assert issubclass(ValidationError, ValueError)

    def test_single_issue_message(self):
        err = ValidationError(issues=[Issue("Required", ("name",))])
        assert err.message == "Required"
        assert str(err) == "Required"

    def test_multiple_issue_summary(self):
        err = ValidationError(issues=[Issue("a"), Issue("b", ("x",))])
        assert err.message == "2 validation issues"

    def test_explicit_message_wins(self):
        err = ValidationError("name: Required", [Issue("Required", ("name",))])
        assert err.message == "name: Required"

    def test_format(self):
        err = ValidationError(
            issues=[
                Issue("Too short", ("user", "name")),
                Issue("Expected number", ("items", 0, "price")),
                Issue("Invalid"),
            ]
        )
        assert err.format() == (
            "user.name: Too short\n"
            "items[0].price: Expected number\n"
            "Invalid"
        )

    def test_flatten(self):
        err = ValidationError(
            issues=[
                Issue("Invalid"),
                Issue("Too short", ("name",)),
                Issue("Missing digit", ("name",)),
                Issue("Expected number", ("a", 1)),
            ]
        )
        assert err.flatten() == {
            "form_errors": ["Invalid"],
            "field_errors": {
                "name": ["Too short", "Missing digit"],
                "a[1]": ["Expected number"],
            },
        }

    def test_repr(self):
        assert repr(ValidationError("x")) == "ValidationError('x')"


class TestHelpers:
    def test_get_dot_path(self):
        assert get_dot_path(Issue("m")) is None
        assert get_dot_path(Issue("m", ("a", 0, "b"))) == "a[0].b"

    def test_error_message(self):
        assert error_message(ValueError("boom")) == "boom"
        assert error_message(ValueError()) == "Unknown error"
        assert error_message(ValueError(), "Transform failed") == "Transform failed"
        assert error_message(ValidationError("v")) == "v"
