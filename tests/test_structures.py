"""
Tests for the Array, Hash and Tuple structural validators.
"""

import logging

import pytest

from validryad import (
    Array,
    ConstructionError,
    Context,
    Eq,
    Err,
    Gt,
    Hash,
    HashV,
    Integer,
    Ok,
    OtherKeys,
    Rule,
    Tuple,
    Typed,
)

too_small = Rule("too_small", lambda x: len(x) >= 3)


class Converted:
    """Coercible type that replaces any value with the result of `convert`."""

    name = "Converted"

    def __init__(self, convert):
        self.convert = convert

    def try_coerce(self, value):
        return Ok(self.convert(value))


class TestTuple:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, Err(((("expected_type", "Array"), ()),))),
            ([1], Err(((("expected_size", 0), ()),))),
            ([], Ok([])),
        ],
        ids=["not an array", "too big", "empty array"],
    )
    def test_empty_tuple(self, value, expected):
        assert Tuple()(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, Err(((("expected_type", "Array"), ()),))),
            ([], Err(((("expected_size", 1), ()),))),
            ([1, 2], Err(((("expected_size", 1), ()),))),
            (["x"], Err(((("not_eq", 1), (0,)),))),
            ([1], Ok([1])),
        ],
        ids=["not an array", "too small", "too big", "invalid element", "valid element"],
    )
    def test_unit_tuple(self, value, expected):
        assert Tuple(Eq(1))(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ([1], Err(((("expected_size", 2), ()),))),
            ([1, "sym", 3], Err(((("expected_size", 2), ()),))),
            (["1", "sym"], Err(((("not_eq", 1), (0,)),))),
            ([1, "mys"], Err(((("not_eq", "sym"), (1,)),))),
            (
                ["sym", 1],
                Err(((("not_eq", 1), (0,)), (("not_eq", "sym"), (1,)))),
            ),
            ([1, "sym"], Ok([1, "sym"])),
            ((1, "sym"), Ok([1, "sym"])),
        ],
        ids=[
            "too small",
            "too big",
            "invalid element 0",
            "invalid element 1",
            "swapped elements",
            "valid elements",
            "python tuple",
        ],
    )
    def test_pair_tuple(self, value, expected):
        assert Tuple(Eq(1), Eq("sym"))(value) == expected

    def test_string_is_not_a_sequence(self):
        assert Tuple(Eq("a"))("a") == Err(((("expected_type", "Array"), ()),))

    def test_coerces_elements(self):
        assert Tuple(int, str)(["1", "a"]) == Ok([1, "a"])


class TestArray:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ({"a": 1}, Err(((("expected_type", "Array"), ()),))),
            ([1, 2, 3], Ok([1, 2, 3])),
            ([], Ok([])),
        ],
    )
    def test_no_validators(self, value, expected):
        assert Array()(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            (4, Err(((("expected_type", "Array"), ()),))),
            ([1, 2], Err((("too_small", ()),))),
            ([1, 2, 3], Ok([1, 2, 3])),
        ],
    )
    def test_before_only(self, value, expected):
        assert Array(before=too_small)(value) == expected

    @pytest.mark.parametrize(
        "value, path, expected",
        [
            (4, (), Err(((("expected_type", "Array"), ()),))),
            ([3, 4, 2, 5], (), Err(((("not_gt", 2), (2,)),))),
            (
                [0, "1", 4, 2],
                (),
                Err(
                    (
                        (("not_gt", 2), (0,)),
                        (("expected_type", "Integer"), (1,)),
                        (("not_gt", 2), (3,)),
                    )
                ),
            ),
            ([3, 2, 4], ("old", "path"), Err(((("not_gt", 2), ("old", "path", 1)),))),
            ([6, 4, 5, 3], (), Ok([6, 4, 5, 3])),
        ],
        ids=["non-array", "invalid element", "invalid elements", "append path", "valid elements"],
    )
    def test_each_only(self, value, path, expected):
        v = Array(each=Typed(Integer) >> Gt(2))
        assert v(value, Context(value, path)) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1, Err(((("expected_type", "Array"), ()),))),
            ([1, 2], Err((("too_small", ()),))),
            ([3, 4, 2], Err(((("not_gt", 2), (2,)),))),
            ([6, 4, 5], Ok([6, 4, 5])),
        ],
    )
    def test_before_and_each(self, value, expected):
        v = Array(before=too_small, each=Typed(Integer) >> Gt(2))
        assert v(value) == expected

    def test_each_not_run_when_before_fails(self):
        calls = []

        def record(value):
            calls.append(value)
            return True

        Array(before=too_small, each=Rule("x", record))([1, 2])
        assert calls == []

    def test_after_receives_accepted_elements(self):
        ordered = Rule("not_sorted", lambda xs: xs == sorted(xs))
        v = Array(each=int, after=ordered)
        assert v(["1", "2", "3"]) == Ok([1, 2, 3])
        assert v(["3", "1"]) == Err((("not_sorted", ()),))

    def test_after_not_run_when_elements_fail(self):
        v = Array(each=Gt(0), after=Rule("never", lambda: False))
        assert v([0]) == Err(((("not_gt", 0), (0,)),))

    def test_nested_paths(self):
        v = Array(each=Array(each=Gt(0)))
        assert v([[1], [1, 0]]) == Err(((("not_gt", 0), (1, 1)),))

    def test_element_context_value(self):
        v = Array(each=Rule("mismatch", lambda x, ctx: ctx.value() == x))
        assert v([1, 2]) == Ok([1, 2])

    def test_before_may_transform_the_list(self):
        v = Array(before=Typed(Converted(lambda xs: [*xs, 3])), each=Gt(0))
        assert v([1, 2]) == Ok([1, 2, 3])

    def test_before_producing_non_list_rejected(self):
        v = Array(before=Typed(Converted(len)), each=Gt(0))
        assert v([1, 2]) == Err(((("expected_type", "Array"), ()),))


class TestHash:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ([("a", 1)], Err(((("expected_type", "Hash"), ()),))),
            ({"a": 1}, Ok({"a": 1})),
        ],
    )
    def test_no_validators(self, value, expected):
        assert Hash()(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            (4, Err(((("expected_type", "Hash"), ()),))),
            ({"a": 1, "b": 2}, Err((("too_small", ()),))),
            ({"a": 1, "b": 2, "c": 3}, Ok({"a": 1, "b": 2, "c": 3})),
        ],
    )
    def test_before_only(self, value, expected):
        assert Hash(before=too_small)(value) == expected

    @pytest.mark.parametrize(
        "value, path, expected",
        [
            (4, (), Err(((("expected_type", "Hash"), ()),))),
            (
                {},
                (),
                Err(((("missing_key", "a"), ()), (("missing_key", "b"), ()))),
            ),
            ({"b": 2}, (), Err(((("missing_key", "a"), ()),))),
            ({"a": 2, "b": 2}, (), Err(((("not_eq", 1), ("a",)),))),
            ({"a": 2, "b": 2}, (1, 2), Err(((("not_eq", 1), (1, 2, "a")),))),
            ({"a": 1, "b": 2}, (), Ok({"a": 1, "b": 2})),
            ({"a": 1, "b": 2, "c": 3}, (), Ok({"a": 1, "b": 2, "c": 3})),
        ],
        ids=[
            "non-hash",
            "empty hash",
            "missing key",
            "invalid key",
            "append path",
            "valid keys",
            "extra key",
        ],
    )
    def test_mandatory_only(self, value, path, expected):
        v = Hash(mandatory={"a": Eq(1), "b": Eq(2)})
        assert v(value, Context(value, path)) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ({"a": 2}, Err(((("not_eq", 1), ("a",)),))),
            ({}, Ok({})),
            ({"a": 1}, Ok({"a": 1})),
            ({"a": 1, "b": 2}, Ok({"a": 1, "b": 2})),
        ],
    )
    def test_optional_only(self, value, expected):
        assert Hash(optional={"a": Eq(1)})(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ({"a": 1}, Err((("too_small", ()),))),
            ({"a": 2, "c": 3}, Err(((("not_eq", 1), ("a",)),))),
            ({"a": 1, "b": 1}, Err(((("not_eq", 2), ("b",)),))),
            ({"a": 1, "c": 3}, Ok({"a": 1, "c": 3})),
            ({"a": 1, "b": 2}, Ok({"a": 1, "b": 2})),
            ({"a": 1, "b": 2, "c": 3}, Ok({"a": 1, "b": 2, "c": 3})),
        ],
    )
    def test_all_validators(self, value, expected):
        v = Hash(
            before=Rule("too_small", lambda x: len(x) >= 2),
            mandatory={"a": Eq(1)},
            optional={"b": Eq(2)},
        )
        assert v(value) == expected

    def test_key_errors_before_missing_keys(self):
        v = Hash(mandatory={"a": Eq(1), "b": Eq(2)})
        assert v({"b": 3}) == Err(
            (
                (("not_eq", 2), ("b",)),
                (("missing_key", "a"), ()),
            )
        )

    def test_errors_follow_value_key_order(self):
        v = Hash(mandatory={"a": Eq(1), "b": Eq(2)})
        assert v({"b": 0, "a": 0}) == Err(
            (
                (("not_eq", 2), ("b",)),
                (("not_eq", 1), ("a",)),
            )
        )

    def test_trim_other_keys(self):
        v = Hash(mandatory={"a": Eq(1)}, optional={"b": Eq(2)}, other_keys="trim")
        assert v({"a": 1, "b": 2, "c": 3}) == Ok({"a": 1, "b": 2})

    def test_reject_other_keys(self):
        v = Hash(mandatory={"a": Eq(1)}, optional={"b": Eq(2)}, other_keys=OtherKeys.REJECT)
        assert v({"a": 1, "b": 2, "c": 3}) == Err(((("invalid_key", "c"), ()),))

    def test_reject_other_keys_with_other_errors(self):
        v = Hash(mandatory={"a": Eq(1), "b": Eq(2)}, other_keys="reject")
        assert v({"c": 3, "a": 0}) == Err(
            (
                (("invalid_key", "c"), ()),
                (("not_eq", 1), ("a",)),
                (("missing_key", "b"), ()),
            )
        )

    def test_keep_is_default(self):
        assert Hash(mandatory={"a": Eq(1)}).other_keys is OtherKeys.KEEP

    @pytest.mark.parametrize("policy", ["drop", None, 3])
    def test_invalid_policy(self, policy):
        with pytest.raises(ConstructionError, match="other-key"):
            Hash(other_keys=policy)

    def test_invalid_policy_on_class(self):
        with pytest.raises(ConstructionError):
            HashV(other_keys="ignore")

    def test_coerced_values_in_output(self):
        v = Hash(mandatory={"n": int}, after=Rule("empty", lambda h: h["n"] > 0))
        assert v({"n": "5"}) == Ok({"n": 5})
        assert v({"n": "0"}) == Err((("empty", ()),))

    def test_key_in_both_uses_optional_but_stays_required(self):
        v = Hash(mandatory={"a": Eq(1)}, optional={"a": Eq(2)})
        assert v({"a": 2}) == Ok({"a": 2})
        assert v({}) == Err(((("missing_key", "a"), ()),))

    def test_nested_paths(self):
        v = Hash(mandatory={"items": Array(each=Hash(mandatory={"id": Integer}))})
        value = {"items": [{"id": 1}, {}, {"id": "x"}]}
        assert v(value) == Err(
            (
                (("missing_key", "id"), ("items", 1)),
                (("expected_type", "Integer"), ("items", 2, "id")),
            )
        )

    def test_sibling_rule(self):
        matches_password = Rule(
            "mismatch", lambda x, ctx: ctx.sibling("password").value() == x
        )
        v = Hash(mandatory={"password": str, "confirm": matches_password})
        assert v({"password": "s3cret", "confirm": "s3cret"}).is_ok()
        assert v({"password": "s3cret", "confirm": "secret"}) == Err(
            (("mismatch", ("confirm",)),)
        )

    def test_before_producing_non_mapping_rejected(self):
        v = Hash(before=Typed(Converted(lambda h: list(h.items()))), mandatory={"a": Eq(1)})
        assert v({"a": 1}) == Err(((("expected_type", "Hash"), ()),))

    def test_before_may_transform_the_mapping(self):
        v = Hash(before=Typed(Converted(lambda h: {**h, "a": 1})), mandatory={"a": Eq(1)})
        assert v({}) == Ok({"a": 1})


class TestConstructionLogging:
    @pytest.mark.parametrize(
        "build",
        [
            lambda: Array(each=Gt(0)),
            lambda: Hash(mandatory={"a": Eq(1)}),
            lambda: Tuple(Eq(1), Eq("sym")),
        ],
        ids=["array", "hash", "tuple"],
    )
    def test_structures_logged_at_debug(self, build, caplog):
        caplog.set_level(logging.DEBUG, logger="validryad")
        validator = build()
        assert f"Built {validator!r}" in caplog.text
