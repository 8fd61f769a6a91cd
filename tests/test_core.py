"""
Tests for the validator contract: V, create_validator and to_validator.
"""

import pytest

from sifter import (
    MISSING,
    Err,
    Ok,
    SchemaKind,
    V,
    ValidationError,
    create_validator,
    get_meta,
    integer,
    number,
    string,
    to_validator,
)


def is_positive(x):
    if not isinstance(x, (int, float)) or x <= 0:
        raise ValueError("Must be positive")
    return x


class TestV:
    def test_call_returns_value(self):
        assert string("hello") == "hello"

    def test_call_raises_validation_error(self):
        with pytest.raises(ValidationError, match="Expected string"):
            string(123)

    def test_safe_returns_result(self):
        assert string.safe("x") == Ok("x")
        result = string.safe(1)
        assert isinstance(result, Err)
        assert result.error == "Expected string"

    def test_immutable(self):
        with pytest.raises(AttributeError):
            string.meta = None

    def test_tilde_standard_attribute(self):
        props = getattr(string, "~standard")
        assert props["version"] == 1
        assert props["vendor"] == "sifter"
        assert props["validate"]("a") == {"value": "a"}

    def test_missing_attribute_raises(self):
        with pytest.raises(AttributeError):
            string.nonexistent

    def test_or_builds_union(self):
        v = string | number
        assert v("a") == "a"
        assert v(1) == 1
        assert get_meta(v).type is SchemaKind.UNION

    def test_or_with_type_on_left(self):
        v = str | integer
        assert v(3) == 3
        assert v("a") == "a"

    def test_and_builds_intersect(self):
        v = number & to_validator(is_positive)
        assert v(2) == 2
        with pytest.raises(ValidationError, match="Must be positive"):
            v(-2)
        assert get_meta(v).type is SchemaKind.INTERSECT

    def test_with_message(self):
        v = number.with_message("Need a number")
        assert v.safe("x").error == "Need a number"
        assert v(3) == 3

    def test_describe_keeps_behavior(self):
        v = string.describe(description="A name", title="Name")
        assert v("a") == "a"
        assert get_meta(v).description == "A name"
        assert get_meta(v).title == "Name"
        assert get_meta(string).description is None


class TestCreateValidator:
    def test_requires_one_side(self):
        with pytest.raises(ValueError):
            create_validator()

    def test_safe_synthesized_from_check(self):
        v = create_validator(check=is_positive)
        assert v.safe(3) == Ok(3)
        result = v.safe(-1)
        assert isinstance(result, Err)
        assert result.error == "Must be positive"

    def test_check_synthesized_from_safe(self):
        v = create_validator(safe=lambda x: Ok(x) if x else Err("Falsy"))
        assert v(1) == 1
        with pytest.raises(ValidationError, match="Falsy"):
            v(0)

    def test_empty_exception_message_normalized(self):
        def boom(_):
            raise RuntimeError()

        v = create_validator(check=boom)
        assert v.safe(1).error == "Unknown error"

    def test_validation_error_issues_kept(self):
        def nested(_):
            raise ValidationError("inner", [])

        v = create_validator(check=nested)
        assert v.safe(1).error == "inner"


class TestToValidator:
    def test_passthrough(self):
        assert to_validator(string) is string

    def test_builtin_types(self):
        assert to_validator(str) is string
        assert to_validator(int) is integer
        assert to_validator(float) is number
        assert to_validator(bool)(True) is True
        assert to_validator(type(None))(None) is None
        assert to_validator(None)(None) is None

    def test_custom_class(self):
        class Point:
            pass

        v = to_validator(Point)
        p = Point()
        assert v(p) is p
        with pytest.raises(ValidationError, match="Expected Point"):
            v(1)

    def test_dict_becomes_object(self):
        v = to_validator({"name": str, "age": int})
        assert v({"name": "a", "age": 1, "x": 0}) == {"name": "a", "age": 1}
        assert get_meta(v).type is SchemaKind.OBJECT

    def test_list_becomes_array(self):
        v = to_validator([int])
        assert v([1, 2]) == [1, 2]
        with pytest.raises(ValidationError):
            v([1, "a"])

    def test_multi_item_list_becomes_array_of_union(self):
        v = to_validator([int, str])
        assert v([1, "a"]) == [1, "a"]
        with pytest.raises(ValidationError):
            v([1.5])

    def test_empty_list_rejected(self):
        with pytest.raises(ValueError):
            to_validator([])

    def test_tuple_becomes_tuple_schema(self):
        v = to_validator((str, int))
        assert v(["a", 1]) == ["a", 1]
        with pytest.raises(ValidationError, match="Expected 2 items, got 1"):
            v(["a"])

    def test_callable_wrapped(self):
        v = to_validator(is_positive)
        assert isinstance(v, V)
        assert v.safe(-3).error == "Must be positive"

    def test_foreign_object_with_safe(self):
        class Foreign:
            def __call__(self, x):
                return x

            def safe(self, x):
                return Err("nope")

        v = to_validator(Foreign())
        assert v.safe(1).error == "nope"

    def test_uncoercible(self):
        with pytest.raises(TypeError):
            to_validator(42)

    def test_missing_is_not_none(self):
        assert MISSING is not None
        assert not MISSING
        assert repr(MISSING) == "MISSING"
