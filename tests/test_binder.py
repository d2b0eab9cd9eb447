"""Tests for typed argument coercion and flag binding (core/binder.py)."""

from __future__ import annotations

import math

import pytest

from cliframe.core.binder import (
    bind_argument,
    bind_flags,
    coerce_argument,
    find_flag,
    flag_value,
    is_invalid_number,
)
from cliframe.core.models import ArgumentSpec, ArgumentType, FlagSpec
from cliframe.exceptions import ArgumentCoercionError


def _spec(kind: str, **overrides: object) -> ArgumentSpec:
    return ArgumentSpec(ArgumentType(kind), overrides.pop("name", "value"), **overrides)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Contract A — argument coercion
# ---------------------------------------------------------------------------

class TestBooleanCoercion:
    @pytest.mark.parametrize("raw", ["1", "true", "yes", "y"])
    def test_truthy_literals(self, raw: str) -> None:
        assert coerce_argument(raw, _spec("boolean")) is True

    @pytest.mark.parametrize("raw", ["0", "false", "no", "TRUE", "Yes", ""])
    def test_everything_else_is_false(self, raw: str) -> None:
        assert coerce_argument(raw, _spec("boolean")) is False


class TestNumericCoercion:
    def test_integer(self) -> None:
        assert coerce_argument("5000", _spec("integer")) == 5000

    def test_negative_integer(self) -> None:
        assert coerce_argument("-3", _spec("integer")) == -3

    def test_unparsable_integer_is_nan(self) -> None:
        value = coerce_argument("nope", _spec("integer"))
        assert isinstance(value, float)
        assert math.isnan(value)
        assert is_invalid_number(value)

    def test_float(self) -> None:
        assert coerce_argument("2.5", _spec("float")) == pytest.approx(2.5)

    def test_unparsable_float_is_nan(self) -> None:
        assert is_invalid_number(coerce_argument("abc", _spec("float")))

    def test_valid_number_is_not_invalid(self) -> None:
        assert not is_invalid_number(coerce_argument("7", _spec("integer")))

    @pytest.mark.parametrize("raw", ["1_000", "\u0663", "5.5", "0x10", ""])
    def test_integer_requires_ascii_digits(self, raw: str) -> None:
        assert is_invalid_number(coerce_argument(raw, _spec("integer")))

    def test_integer_surrounding_whitespace(self) -> None:
        assert coerce_argument(" 42 ", _spec("integer")) == 42

    def test_integer_over_digit_limit_is_nan(self) -> None:
        assert is_invalid_number(coerce_argument("1" * 5000, _spec("integer")))

    @pytest.mark.parametrize("raw", ["1_0.5", "\u0663.5", "1e"])
    def test_float_requires_ascii_digits(self, raw: str) -> None:
        assert is_invalid_number(coerce_argument(raw, _spec("float")))

    @pytest.mark.parametrize(("raw", "expected"), [("-.5", -0.5), ("1e3", 1000.0), ("+7.", 7.0)])
    def test_float_literal_forms(self, raw: str, expected: float) -> None:
        assert coerce_argument(raw, _spec("float")) == pytest.approx(expected)


class TestArrayCoercion:
    def test_split_on_comma(self) -> None:
        assert coerce_argument("a,b,c", _spec("array")) == ["a", "b", "c"]

    def test_no_trimming(self) -> None:
        assert coerce_argument(" a, b", _spec("array")) == [" a", " b"]

    def test_single_value(self) -> None:
        assert coerce_argument("solo", _spec("array")) == ["solo"]


class TestJsonCoercion:
    def test_valid_json(self) -> None:
        assert coerce_argument('{"a": [1, 2]}', _spec("json")) == {"a": [1, 2]}

    def test_malformed_json_returns_none(self) -> None:
        assert coerce_argument("{oops", _spec("json")) is None

    def test_malformed_json_is_reported(self) -> None:
        errors: list[ArgumentCoercionError] = []
        value = coerce_argument("{oops", _spec("json", name="cfg"), on_error=errors.append, index=2)
        assert value is None
        assert len(errors) == 1
        assert errors[0].index == 2
        assert errors[0].raw == "{oops"
        assert "cfg" in str(errors[0])

    @pytest.mark.parametrize(
        "raw",
        [
            pytest.param("1" * 5000, id="integer-over-digit-limit"),
            pytest.param("[" * 200_000, id="nesting-too-deep"),
        ],
    )
    def test_undecodable_json_is_reported(self, raw: str) -> None:
        errors: list[ArgumentCoercionError] = []
        value = coerce_argument(raw, _spec("json", name="cfg"), on_error=errors.append, index=0)
        assert value is None
        assert len(errors) == 1
        assert errors[0].index == 0
        assert "cfg" in str(errors[0])


class TestStringAndMissing:
    def test_string_is_unmodified(self) -> None:
        assert coerce_argument(" As Is ", _spec("string")) == " As Is "

    def test_no_spec_returns_none(self) -> None:
        assert coerce_argument("x", None) is None

    def test_absent_raw_returns_none(self) -> None:
        assert coerce_argument(None, _spec("integer")) is None

    def test_absent_raw_returns_declared_default(self) -> None:
        assert coerce_argument(None, _spec("integer", default=10)) == 10


class TestBindArgument:
    def test_index_lookup(self) -> None:
        specs = [_spec("string", name="a"), _spec("integer", name="b")]
        assert bind_argument(1, specs, ["x", "42"]) == 42

    def test_index_without_spec(self) -> None:
        assert bind_argument(3, [_spec("string")], ["a", "b", "c", "d"]) is None

    def test_index_without_value(self) -> None:
        assert bind_argument(0, [_spec("string")], []) is None

    def test_negative_index(self) -> None:
        assert bind_argument(-1, [_spec("string")], ["a"]) is None

    def test_bad_json_does_not_stop_other_arguments(self) -> None:
        specs = [_spec("json"), _spec("integer")]
        errors: list[ArgumentCoercionError] = []
        assert bind_argument(0, specs, ["{", "3"], on_error=errors.append) is None
        assert bind_argument(1, specs, ["{", "3"], on_error=errors.append) == 3
        assert len(errors) == 1


# ---------------------------------------------------------------------------
# Contract B — flag binding
# ---------------------------------------------------------------------------

_VERBOSE = FlagSpec("-i", "--verbose", "Enable debug output.")
_DRY_RUN = FlagSpec("-n", "--dry-run", "Do nothing.")


class TestBindFlags:
    def test_short_form(self) -> None:
        assert bind_flags([_VERBOSE], ["-i"])["verbose"] is True

    def test_long_form(self) -> None:
        assert bind_flags([_VERBOSE], ["--verbose"])["verbose"] is True

    def test_absent_flag_uses_default(self) -> None:
        assert bind_flags([_VERBOSE], [])["verbose"] is False

    def test_hyphens_become_underscores(self) -> None:
        assert bind_flags([_DRY_RUN], ["--dry-run"])["dry_run"] is True

    def test_unknown_tokens_are_ignored(self) -> None:
        values = bind_flags([_VERBOSE], ["--nope"])
        assert dict(values) == {"verbose": False}

    def test_order_independent(self) -> None:
        tokens = ["-n", "-i"]
        assert dict(bind_flags([_VERBOSE, _DRY_RUN], tokens)) == dict(
            bind_flags([_DRY_RUN, _VERBOSE], tokens)
        )

    def test_idempotent(self) -> None:
        tokens = ["-i", "x"]
        first = bind_flags([_VERBOSE, _DRY_RUN], tokens)
        second = bind_flags([_VERBOSE, _DRY_RUN], tokens)
        assert first == second

    def test_is_set(self) -> None:
        values = bind_flags([_VERBOSE, _DRY_RUN], ["-n"])
        assert values.is_set("dry_run")
        assert not values.is_set("verbose")
        assert not values.is_set("undeclared")


class TestFlagValue:
    def test_boolean_default_is_coerced(self) -> None:
        spec = FlagSpec("-x", "--extra", default="yes")
        assert flag_value(spec, []) is True

    def test_non_boolean_default_kept(self) -> None:
        spec = FlagSpec("-l", "--level", default=3, is_boolean=False)
        assert flag_value(spec, []) == 3

    def test_present_non_boolean_is_true(self) -> None:
        spec = FlagSpec("-l", "--level", default=3, is_boolean=False)
        assert flag_value(spec, ["-l"]) is True


class TestFindFlag:
    def test_first_table_wins(self) -> None:
        command_scope = [FlagSpec("-d", "--dry", "command dry")]
        app_scope = [FlagSpec("-d", "--describe", "app describe")]
        spec = find_flag("-d", command_scope, app_scope)
        assert spec is not None
        assert spec.description == "command dry"

    def test_falls_back_to_later_tables(self) -> None:
        spec = find_flag("--describe", [_VERBOSE], [FlagSpec("-d", "--describe")])
        assert spec is not None
        assert spec.identifier == "describe"

    def test_unknown_returns_none(self) -> None:
        assert find_flag("-z", [_VERBOSE]) is None
