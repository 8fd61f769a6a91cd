"""
Tests for message overrides, raw checks, forwarding, item checks,
introspection and documentation metadata.
"""

import pytest

from sifter import (
    Err,
    SchemaKind,
    ValidationError,
    any_,
    array,
    brand,
    describe,
    every_item,
    fallback,
    forward,
    get_brand,
    get_default,
    get_defaults,
    get_description,
    get_examples,
    get_fallback,
    get_fallbacks,
    get_meta,
    get_title,
    gte,
    message,
    nullable,
    number,
    object,
    optional,
    partial_check,
    pipe,
    raw_check,
    raw_transform,
    readonly,
    refine,
    some_item,
    string,
    unwrap,
    with_default,
)


class TestMessage:
    def test_replaces_message(self):
        v = message(pipe(number, gte(18)), "Must be 18 or older")
        assert v(20) == 20
        assert v.safe(3).error == "Must be 18 or older"
        assert v.safe("x").error == "Must be 18 or older"

    def test_callable_message(self):
        v = message(string, lambda x: f"{x!r} is not text")
        assert v.safe(5).error == "5 is not text"


class TestRawCheck:
    def passwords_match(self, ctx):
        if ctx.input["password"] != ctx.input["confirm"]:
            ctx.add_issue("Passwords must match", path=["confirm"])
        if len(ctx.input["password"]) < 3:
            ctx.add_issue("Too short", path="password")

    def test_passes(self):
        v = raw_check(self.passwords_match)
        data = {"password": "abcd", "confirm": "abcd"}
        assert v(data) is data

    def test_reports_all_issues(self):
        v = raw_check(self.passwords_match)
        result = v.safe({"password": "ab", "confirm": "x"})
        assert result.error == "Passwords must match"
        assert [i.path for i in result.issues] == [("confirm",), ("password",)]

    def test_throwing_form_carries_issues(self):
        v = raw_check(self.passwords_match)
        with pytest.raises(ValidationError) as exc:
            v({"password": "ab", "confirm": "x"})
        assert len(exc.value.issues) == 2


class TestForward:
    def test_prefixes_issue_paths(self):
        v = forward(refine(any_, lambda d: d["a"] == d["b"], "Must match"), "b")
        result = v.safe({"a": 1, "b": 2})
        assert result.error == "Must match"
        assert result.issues[0].path == ("b",)

    def test_standard_issue_path(self):
        v = forward(refine(any_, lambda d: False, "Bad"), ["x", 0])
        out = v.standard["validate"]({})
        assert out == {"issues": [{"message": "Bad", "path": ["x", 0]}]}

    def test_success_untouched(self):
        v = forward(number, "n")
        assert v(1) == 1


class TestItemChecks:
    def test_every_item(self):
        v = pipe(array(number), every_item(lambda n: n > 0, "All items must be positive"))
        assert v([1, 2]) == [1, 2]
        assert v.safe([1, -2]).error == "All items must be positive"

    def test_every_item_default_message(self):
        assert every_item(bool).safe([0]).error == "Not all items passed validation"

    def test_some_item(self):
        v = some_item(lambda n: n > 2)
        assert v([1, 3]) == [1, 3]
        assert v.safe([1, 2]).error == "No items passed validation"


class TestIntrospection:
    def test_get_default(self):
        assert get_default(with_default(number, 5)) == 5
        assert get_default(number) is None

    def test_get_fallback(self):
        assert get_fallback(fallback(number, 1)) == 1
        assert get_fallback(number) is None

    def test_get_defaults(self):
        v = object({"a": with_default(number, 1), "b": string, "c": with_default(string, "x")})
        assert get_defaults(v) == {"a": 1, "c": "x"}
        assert get_defaults(object({"b": string})) is None
        assert get_defaults(string) is None

    def test_get_fallbacks(self):
        v = object({"a": fallback(number, 0)})
        assert get_fallbacks(v) == {"a": 0}

    def test_unwrap(self):
        assert unwrap(optional(string)) is string
        assert unwrap(nullable(number)) is number
        assert unwrap(string) is string


class TestDescribe:
    def test_describe(self):
        v = describe(string, "Email", title="E-mail", examples=["a@b.c"])
        assert get_description(v) == "Email"
        assert get_title(v) == "E-mail"
        assert get_examples(v) == ["a@b.c"]
        assert v("x") == "x"

    def test_original_untouched(self):
        describe(string, "Email")
        assert get_description(string) is None

    def test_no_metadata_defaults_to_unknown(self):
        v = describe(lambda x: x, "Anything")
        assert get_meta(v).type is SchemaKind.UNKNOWN
        assert get_description(v) == "Anything"

    def test_brand_and_readonly(self):
        v = readonly(brand(string, "Email"))
        assert get_brand(v) == "Email"
        assert get_meta(v).readonly is True
        assert v("x") == "x"

    def test_getters_without_metadata(self):
        assert get_description(lambda x: x) is None
        assert get_title(lambda x: x) is None
        assert get_examples(string) is None


def explode(_):
    raise RuntimeError("exploded")


class TestRaisingCallbacks:
    def test_message_render_exception(self):
        v = message(number, explode)
        assert v.safe("x").error == "exploded"

    def test_raw_check_exception(self):
        result = raw_check(explode).safe({})
        assert result.error == "exploded"
        with pytest.raises(ValidationError, match="exploded"):
            raw_check(explode)({})

    def test_every_item_predicate_exception(self):
        v = every_item(lambda n: n > 0)
        assert isinstance(v.safe([1, "a"]), Err)

    def test_some_item_predicate_exception(self):
        assert some_item(explode).safe([1]).error == "exploded"

    def test_item_checks_require_array(self):
        assert every_item(bool).safe(5).error == "Expected array"
        assert some_item(bool).safe(None).error == "Expected array"
        with pytest.raises(ValidationError, match="Expected array"):
            every_item(bool)(5)


class TestRawTransform:
    def split_name(self, ctx):
        first, _, last = ctx.input.partition(" ")
        if not last:
            ctx.add_issue("Expected first and last name", path="name")
        return {"first": first, "last": last}

    def test_returns_output(self):
        v = raw_transform(self.split_name)
        assert v("Ada Lovelace") == {"first": "Ada", "last": "Lovelace"}

    def test_issues(self):
        result = raw_transform(self.split_name).safe("Ada")
        assert result.error == "Expected first and last name"
        assert result.issues[0].path == ("name",)

    def test_exception(self):
        result = raw_transform(self.split_name).safe(5)
        assert isinstance(result, Err)

    def test_exception_without_message(self):
        def silent(_):
            raise ValueError()

        assert raw_transform(silent).safe(1).error == "Transform failed"


class TestPartialCheck:
    passwords = partial_check(
        [["password"], "confirm"],
        lambda d: d["password"] == d["confirm"],
        "Passwords must match",
    )

    def test_passes(self):
        data = {"password": "a", "confirm": "a"}
        assert self.passwords(data) is data

    def test_reports_each_path(self):
        result = self.passwords.safe({"password": "a", "confirm": "b"})
        assert result.error == "Passwords must match"
        assert [i.path for i in result.issues] == [("password",), ("confirm",)]

    def test_default_message(self):
        assert partial_check([], lambda d: False).safe({}).error == "Partial check failed"

    def test_exception(self):
        assert self.passwords.safe({}).error == "'password'"

    def test_in_pipe(self):
        signup = pipe(
            object({"password": string, "confirm": string}),
            self.passwords,
        )
        with pytest.raises(ValidationError) as exc:
            signup({"password": "a", "confirm": "b"})
        assert exc.value.issues[1].path == ("confirm",)
