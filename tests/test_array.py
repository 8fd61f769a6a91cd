"""
Tests for array and tuple schemas.
"""

import pytest

from sifter import (
    SchemaKind,
    ValidationError,
    array,
    get_meta,
    loose_tuple,
    number,
    object,
    strict_tuple,
    string,
    tuple_,
    tuple_with_rest,
)


class TestArray:
    def test_valid(self):
        assert array(number)([1, 2, 3]) == [1, 2, 3]

    def test_tuple_input_gives_list(self):
        assert array(number)((1, 2)) == [1, 2]

    def test_empty(self):
        assert array(string)([]) == []

    def test_requires_sequence(self):
        assert array(number).safe("abc").error == "Expected array"
        assert array(number).safe({"a": 1}).error == "Expected array"

    def test_index_in_message(self):
        result = array(number).safe([1, "x"])
        assert result.error == "[1]: Expected number"
        assert result.issues[0].path == (1,)

    def test_nested_arrays(self):
        v = array(array(number))
        with pytest.raises(ValidationError) as exc:
            v([[1, 2], [3, "x"]])
        assert exc.value.message == "[1]: [1]: Expected number"
        assert exc.value.issues[0].path == (1, 1)

    def test_objects_in_array(self):
        v = object({"items": array(object({"id": number}))})
        result = v.safe({"items": [{"id": 1}, {"id": "2"}]})
        assert result.error == "items: [1]: id: Expected number"
        assert result.issues[0].path == ("items", 1, "id")

    def test_list_shorthand(self):
        v = object({"tags": [string]})
        assert v({"tags": ["a"]}) == {"tags": ["a"]}

    def test_metadata(self):
        meta = get_meta(array(string))
        assert meta.type is SchemaKind.ARRAY
        assert meta.inner is string


class TestTuple:
    point = tuple_(number, number)

    def test_valid(self):
        assert self.point([1, 2]) == [1, 2]
        assert self.point((1, 2)) == [1, 2]

    def test_length_checked_first(self):
        assert self.point.safe([1, 2, 3]).error == "Expected 2 items, got 3"
        assert self.point.safe(["x"]).error == "Expected 2 items, got 1"

    def test_position_failure(self):
        result = self.point.safe([1, "y"])
        assert result.error == "[1]: Expected number"
        assert result.issues[0].path == (1,)

    def test_requires_array(self):
        assert self.point.safe("ab").error == "Expected array"

    def test_strict_alias(self):
        assert strict_tuple is tuple_

    def test_requires_items(self):
        with pytest.raises(ValueError):
            tuple_()

    def test_tuple_shorthand(self):
        v = object({"pair": (string, number)})
        assert v({"pair": ["a", 1]}) == {"pair": ["a", 1]}


class TestLooseTuple:
    def test_extra_items_dropped(self):
        assert loose_tuple(string)(["a", 1, 2]) == ["a"]

    def test_too_short(self):
        assert loose_tuple(string, number).safe(["a"]).error == "Expected at least 2 items, got 1"

    def test_metadata(self):
        assert get_meta(loose_tuple(string)).constraints == {"loose": True}


class TestTupleWithRest:
    v = tuple_with_rest([string], number)

    def test_valid(self):
        assert self.v(["sum", 1, 2, 3]) == ["sum", 1, 2, 3]
        assert self.v(["sum"]) == ["sum"]

    def test_rest_failure(self):
        result = self.v.safe(["sum", 1, "x"])
        assert result.error == "[2]: Expected number"
        assert result.issues[0].path == (2,)

    def test_too_short(self):
        assert self.v.safe([]).error == "Expected at least 1 items, got 0"
