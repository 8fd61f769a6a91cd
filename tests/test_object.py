"""
Tests for object schemas and shape utilities.
"""

import pytest

from sifter import (
    MISSING,
    Err,
    SchemaKind,
    ValidationError,
    extend,
    get_meta,
    integer,
    keyof,
    literal,
    loose_object,
    merge,
    nullable,
    number,
    object,
    object_with_rest,
    omit,
    optional,
    partial,
    passthrough,
    pick,
    required,
    shape_of,
    strict,
    strip,
    string,
    transform,
    variant,
)


class TestObject:
    def test_valid(self):
        user = object({"name": string, "age": number})
        assert user({"name": "Ada", "age": 36}) == {"name": "Ada", "age": 36}

    def test_unknown_keys_dropped(self):
        user = object({"name": string})
        assert user({"name": "Ada", "extra": 1}) == {"name": "Ada"}

    def test_requires_mapping(self):
        user = object({"name": string})
        assert user.safe([]).error == "Expected object"
        assert user.safe(None).error == "Expected object"

    def test_missing_key_fails(self):
        user = object({"name": string})
        result = user.safe({})
        assert result.error == "name: Expected string"
        assert result.issues[0].path == ("name",)

    def test_nested_path(self):
        v = object({"a": object({"b": number})})
        with pytest.raises(ValidationError) as exc:
            v({"a": {"b": "x"}})
        assert exc.value.message == "a: b: Expected number"
        assert exc.value.issues[0].path == ("a", "b")

    def test_first_failing_field_reported(self):
        v = object({"a": string, "b": string})
        assert v.safe({"a": 1, "b": 2}).error == "a: Expected string"

    def test_missing_optional_omitted(self):
        v = object({"name": string, "nick": optional(string)})
        out = v({"name": "Ada"})
        assert out == {"name": "Ada"}
        assert "nick" not in out

    def test_explicit_none_kept(self):
        v = object({"nick": nullable(string)})
        assert v({"nick": None}) == {"nick": None}

    def test_plain_callable_field(self):
        v = object({"n": lambda x: int(x)})
        assert v({"n": "3"}) == {"n": 3}

    def test_rejects_non_mapping_shape(self):
        with pytest.raises(TypeError):
            object([string])

    def test_metadata(self):
        meta = get_meta(object({"a": string}))
        assert meta.type is SchemaKind.OBJECT
        assert list(meta.inner) == ["a"]


class TestObjectVariants:
    def test_loose_object(self):
        v = loose_object({"name": string})
        assert v({"name": "Ada", "extra": 1}) == {"name": "Ada", "extra": 1}

    def test_loose_object_removes_missing(self):
        v = loose_object({"nick": optional(string)})
        assert v({"other": 1}) == {"other": 1}

    def test_object_with_rest(self):
        v = object_with_rest({"id": integer}, string)
        assert v({"id": 1, "a": "x"}) == {"id": 1, "a": "x"}
        result = v.safe({"id": 1, "a": 2})
        assert result.error == "a: Expected string"
        assert result.issues[0].path == ("a",)

    def test_passthrough(self):
        v = passthrough(object({"name": string}))
        assert v({"name": "Ada", "x": 1}) == {"name": "Ada", "x": 1}
        assert get_meta(v).type is SchemaKind.LOOSE_OBJECT

    def test_strict_and_strip(self):
        v = object({"name": string})
        assert strict(v) is v
        assert strip(v) is v


class TestPartialAndRequired:
    def test_partial_passes_input_through(self):
        v = partial(object({"name": string, "age": number}))
        assert v({"name": "Ada"}) == {"name": "Ada"}
        assert v({}) == {}

    def test_partial_uses_inner_output(self):
        v = partial(object({"name": string}))
        assert v({"name": "Ada", "x": 1}) == {"name": "Ada"}

    def test_partial_requires_mapping(self):
        assert partial(object({"a": string})).safe(1).error == "Expected object"

    def test_partial_metadata(self):
        meta = get_meta(partial(object({"a": string})))
        assert meta.type is SchemaKind.PARTIAL
        assert list(meta.inner) == ["a"]

    def test_required(self):
        v = required(object({"name": optional(string)}))
        assert v({"name": "Ada"}) == {"name": "Ada"}
        result = v.safe({})
        assert result.error == "name: Required"
        assert result.issues[0].path == ("name",)

    def test_required_inner_failure(self):
        v = required(object({"name": optional(string)}))
        assert v.safe({"name": 1}).error == "name: Expected string"

    def test_required_non_mapping_output(self):
        v = required(transform(object({"a": number}), lambda d: [d]))
        assert v.safe({"a": 1}).error == "Expected object"
        with pytest.raises(ValidationError, match="Expected object"):
            v({"a": 1})


class TestVariant:
    shape = variant(
        "kind",
        [
            object({"kind": literal("a"), "x": number}),
            object({"kind": literal("b"), "y": string}),
        ],
    )

    def test_matches(self):
        assert self.shape({"kind": "b", "y": "s"}) == {"kind": "b", "y": "s"}

    def test_no_match(self):
        assert self.shape.safe({"kind": "c"}).error == 'No matching variant for kind="c"'

    def test_missing_discriminant(self):
        assert self.shape.safe({}).error == "No matching variant for kind=undefined"

    def test_requires_object(self):
        assert self.shape.safe("a").error == "Expected object"

    def test_requires_options(self):
        with pytest.raises(ValueError):
            variant("kind", [])


class TestShapeUtilities:
    user = {"name": string, "age": number, "email": string}

    def test_pick(self):
        assert list(pick(self.user, ["name", "missing"])) == ["name"]

    def test_pick_from_schema(self):
        v = object(pick(object(self.user), ["age"]))
        assert v({"age": 1, "name": "x"}) == {"age": 1}

    def test_omit(self):
        assert list(omit(self.user, ["email"])) == ["name", "age"]

    def test_extend(self):
        shape = extend(self.user, {"age": string, "admin": literal(True)})
        assert list(shape) == ["name", "age", "email", "admin"]
        assert object(shape).safe({"name": "a", "age": 1, "email": "e", "admin": True}).is_err()

    def test_merge_is_extend(self):
        assert merge is extend

    def test_shape_of(self):
        assert shape_of(string) is None
        assert list(shape_of(object(self.user))) == ["name", "age", "email"]

    def test_requires_shape(self):
        with pytest.raises(TypeError):
            pick(string, ["a"])

    def test_keyof(self):
        v = keyof(self.user)
        assert v("age") == "age"
        assert v.safe("x").error == "Expected one of: name, age, email"
        assert isinstance(v.safe(1), Err)
        assert get_meta(v).constraints == {"values": ["name", "age", "email"]}


def test_missing_field_sees_sentinel():
    seen = []

    def spy(value):
        seen.append(value)
        return value

    object({"a": spy})({})
    assert seen == [MISSING]
