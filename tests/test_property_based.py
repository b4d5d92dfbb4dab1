"""Property-based tests for the validator algebra."""

import copy

from hypothesis import given
from hypothesis import strategies as st

from assay import (
    AlternativeExhausted,
    Err,
    Ok,
    TypeMismatch,
    array_of,
    boolean,
    equal_to,
    has,
    map,
    number,
    number_range_inclusive,
    optional,
    required,
    string,
)

# JSON-like values
json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.floats(allow_nan=False) | st.text(),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=5), children, max_size=4),
    max_leaves=10,
)

json_values_with_nan = st.recursive(
    st.none() | st.booleans() | st.integers() | st.floats() | st.text(),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=5), children, max_size=4),
    max_leaves=10,
)

validators = st.sampled_from(
    [
        string,
        number,
        boolean,
        string | number,
        array_of(number),
        has({"a": required(number), "b": optional(string)}),
    ]
)

functions = st.sampled_from([str, repr, lambda x: (x,), lambda x: [x, x]])


class TestFunctorLaws:
    @given(validators, json_values)
    def test_identity(self, v, value):
        assert map(v, lambda x: x)(value) == v(value)

    @given(validators, functions, functions, json_values)
    def test_composition(self, v, f, g, value):
        assert map(map(v, f), g)(value) == map(v, lambda x: g(f(x)))(value)


class TestAlternative:
    @given(json_values)
    def test_or_succeeds_iff_either_side_does(self, value):
        result = (string | number)(value)
        if isinstance(value, str) or (
            isinstance(value, (int, float)) and not isinstance(value, bool)
        ):
            assert result == Ok(value)
        else:
            assert result == Err(
                AlternativeExhausted(
                    TypeMismatch("string", value), TypeMismatch("number", value)
                )
            )


class TestPrimitives:
    @given(st.integers(min_value=-1000, max_value=1000))
    def test_inclusive_range(self, n):
        result = number_range_inclusive(0, 255)(n)
        assert isinstance(result, Ok) == (0 <= n <= 255)

    @given(json_values_with_nan)
    def test_equal_to_self(self, value):
        assert isinstance(equal_to(value)(copy.deepcopy(value)), Ok)

    @given(st.lists(st.text(max_size=5), max_size=10))
    def test_array_of_strings_is_identity(self, items):
        assert array_of(string)(items) == Ok(items)
