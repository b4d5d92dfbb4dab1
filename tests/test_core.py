"""
Tests for the validator algebra in assay.core.
"""

import pytest

from assay import (
    AlternativeExhausted,
    Err,
    Ok,
    TypeMismatch,
    ValidationFailed,
    Validator,
    apply,
    both,
    chain,
    compose,
    fail,
    from_function,
    from_result,
    is_failure,
    is_success,
    map,
    map_error,
    number,
    number_range_inclusive,
    or_,
    recursive,
    run,
    run_or_throw,
    string,
    succeed,
)


def _to_int(s):
    return Ok(int(s)) if s.isdigit() else Err("not digits")


to_int = from_function(_to_int, type_hint=int)


class TestSucceedFail:
    def test_succeed_ignores_input(self):
        v = succeed(42)
        assert v("anything") == Ok(42)
        assert v(None) == Ok(42)

    def test_fail_ignores_input(self):
        v = fail("nope")
        assert v(1) == Err("nope")

    def test_from_result(self):
        assert from_result(Ok(1))("x") == Ok(1)
        assert from_result(Err("e"))("x") == Err("e")

    def test_result_predicates(self):
        assert is_success(Ok(1))
        assert not is_success(Err(1))
        assert is_failure(Err(1))


class TestMap:
    def test_map_success(self):
        v = map(number, lambda n: n * 2)
        assert v(21) == Ok(42)

    def test_map_error_passthrough(self):
        v = map(number, lambda n: n * 2)
        assert v("x") == Err(TypeMismatch("number", "x"))

    def test_map_method(self):
        assert string.map(len)("abc") == Ok(3)

    def test_map_error(self):
        v = map_error(number, lambda e: f"bad: {e.value}")
        assert v("x") == Err("bad: x")
        assert v(3) == Ok(3)


class TestApply:
    def test_both_succeed(self):
        v = apply(succeed(lambda n: n + 1), number)
        assert v(1) == Ok(2)

    def test_reports_first_failure(self):
        v = apply(fail("function failed"), fail("argument failed"))
        assert v(None) == Err("function failed")

    def test_argument_failure(self):
        v = apply(succeed(str), number)
        assert v("x") == Err(TypeMismatch("number", "x"))


class TestChain:
    def test_runs_on_same_input(self):
        seen = []

        def next_validator(a):
            return from_function(lambda o: seen.append(o) or Ok((a, o)))

        v = chain(number, next_validator)
        assert v(5) == Ok((5, 5))
        assert seen == [5]

    def test_short_circuits(self):
        calls = []

        def next_validator(a):
            calls.append(a)
            return succeed(a)

        v = chain(number, next_validator)
        assert isinstance(v("x"), Err)
        assert calls == []

    def test_dependent_refinement(self):
        v = string.chain(lambda s: succeed(s.upper()) if s else fail("empty"))
        assert v("abc") == Ok("ABC")
        assert v("") == Err("empty")


class TestOr:
    def test_left_biased(self):
        v = or_(succeed("left"), succeed("right"))
        assert v(None) == Ok("left")

    def test_either_succeeds(self):
        v = string | number
        assert v("x") == Ok("x")
        assert v(5) == Ok(5)

    def test_both_fail(self):
        result = (string | number)(True)
        assert result == Err(
            AlternativeExhausted(TypeMismatch("string", True), TypeMismatch("number", True))
        )

    def test_runs_both_branches(self):
        calls = []
        left = from_function(lambda o: calls.append("left") or Ok(o))
        right = from_function(lambda o: calls.append("right") or Ok(o))
        assert (left | right)(1) == Ok(1)
        assert calls == ["left", "right"]


class TestBoth:
    def test_pair(self):
        v = both(number, number_range_inclusive(0, 10))
        assert v(3) == Ok((3, 3))

    def test_first_failure_wins(self):
        result = (string & number)(None)
        assert result == Err(TypeMismatch("string", None))

    def test_second_failure(self):
        result = (number & number_range_inclusive(0, 10))(11)
        assert isinstance(result, Err)
        assert result.error.value == 11


class TestCompose:
    def test_pipeline(self):
        v = compose(string, to_int) >> number_range_inclusive(0, 255)
        assert v("200") == Ok(200)

    def test_first_stage_error(self):
        v = string >> to_int
        assert v(5) == Err(TypeMismatch("string", 5))

    def test_second_stage_error(self):
        v = string >> to_int
        assert v("abc") == Err("not digits")

    def test_third_stage_error(self):
        v = string >> to_int >> number_range_inclusive(0, 255)
        result = v("300")
        assert isinstance(result, Err)
        assert result.error.message == "300 is not in range [0,255]"


class TestRecursive:
    def test_construction_does_not_call_thunk(self):
        calls = []

        def body():
            calls.append(1)
            return number

        v = recursive(body)
        assert calls == []
        assert v(1) == Ok(1)
        assert v(2) == Ok(2)
        assert calls == [1, 1]

    def test_rejects_non_callable(self):
        with pytest.raises(TypeError):
            recursive(number)


class TestRun:
    def test_run(self):
        assert run(number, 1) == Ok(1)
        assert run(number, "1") == Err(TypeMismatch("number", "1"))

    def test_run_or_throw_success(self):
        assert run_or_throw(string, "ok") == "ok"

    def test_run_or_throw_keeps_structure(self):
        with pytest.raises(ValidationFailed) as exc_info:
            run_or_throw(number, "1")
        assert exc_info.value.error == TypeMismatch("number", "1")
        assert "TypeMismatch" in str(exc_info.value)

    def test_unwrap_err_raises(self):
        with pytest.raises(ValidationFailed):
            Err("boom").unwrap()

    def test_run_requires_validator(self):
        with pytest.raises(TypeError):
            run(lambda o: Ok(o), 1)


class TestValidator:
    def test_with_name(self):
        v = number.with_name("count")
        assert v.name == "count"
        assert v(1) == Ok(1)

    def test_combinators_reject_non_validators(self):
        with pytest.raises(TypeError):
            or_(number, int)
        with pytest.raises(TypeError):
            compose(str, number)

    def test_is_reusable(self):
        v = string >> to_int
        assert [v(s) for s in ("1", "2", "3")] == [Ok(1), Ok(2), Ok(3)]
        assert isinstance(v, Validator)
