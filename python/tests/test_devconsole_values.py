"""Tests for console token conversion."""

from __future__ import annotations

import pytest

from devconsole.values import (
    MalformedVector,
    Vector2,
    Vector3,
    Vector4,
    coerce_argument,
    convert_token,
    split_fields,
)


@pytest.mark.parametrize("number", [0, 7, -3, 42, 2**40, -(2**40)])
def test_integers_convert_to_int(number):
    value = convert_token(str(number))
    assert value == number
    assert type(value) is int


def test_explicit_sign_and_whitespace():
    assert convert_token("  +12 ") == 12


def test_float_forms():
    assert convert_token("1.5") == 1.5
    assert convert_token("-.25") == -0.25
    assert convert_token("1e3") == 1000.0
    assert convert_token("2.5f") == 2.5
    value = convert_token("3f")
    assert value == 3.0 and isinstance(value, float)


def test_non_numbers_fall_back_to_text():
    assert convert_token(" hello ") == "hello"
    assert convert_token("f") == "f"
    assert convert_token("1_000") == "1_000"
    assert convert_token("nan") == "nan"
    assert convert_token("-") == "-"


def test_vectors_by_arity():
    assert convert_token("[1,2]") == Vector2(1, 2)
    assert convert_token("[1, 2, 3]") == Vector3(1, 2, 3)
    assert convert_token("[1,2,3,4]") == Vector4(1, 2, 3, 4)
    assert convert_token("[0.5f, -1]") == Vector2(0.5, -1.0)


def test_vector_components_are_floats():
    vector = convert_token("[1,2]")
    assert all(isinstance(component, float) for component in vector)


@pytest.mark.parametrize("token", ["[1]", "[1,2,3,4,5]", "[]", "[a, b]", "[[1,2], 3]"])
def test_malformed_vectors(token):
    value = convert_token(token)
    assert isinstance(value, MalformedVector)
    assert not value
    assert value.text == token


def test_vector_component_from_placeholder():
    held = {"{f@1}": 4}
    assert convert_token("[{f@1}, 2]", held) == Vector2(4.0, 2.0)
    assert held == {}


def test_placeholder_lookup_consumes_entry():
    held = {"{inner@6}": 3}
    assert convert_token(" {inner@6} ", held) == 3
    assert "{inner@6}" not in held
    assert convert_token("{inner@6}", held) == "{inner@6}"


def test_split_fields_respects_nesting():
    assert split_fields("a, [1, 2], f(1, 2), 3") == ["a", "[1, 2]", "f(1, 2)", "3"]
    assert split_fields("") == []
    assert split_fields("   ") == []
    assert split_fields("1,,2") == ["1", "", "2"]


def test_coerce_argument_rules():
    assert coerce_argument(3, float) == 3.0
    assert isinstance(coerce_argument(3, float), float)
    assert coerce_argument(3, str) == "3"
    assert coerce_argument("x", "SomeForwardRef") == "x"
    assert coerce_argument(Vector2(1, 2), Vector2) == Vector2(1, 2)
    with pytest.raises(TypeError):
        coerce_argument("abc", int)
    with pytest.raises(TypeError):
        coerce_argument(1.5, int)
    with pytest.raises(TypeError):
        coerce_argument(Vector3(1, 2, 3), Vector2)
    with pytest.raises(TypeError):
        coerce_argument(MalformedVector("[1]"), Vector2)
    with pytest.raises(TypeError):
        coerce_argument(MalformedVector("[1]"), object)


def test_coerce_argument_union_annotations():
    with pytest.raises(TypeError):
        coerce_argument("abc", int | None)
    assert coerce_argument(None, int | None) is None
    assert coerce_argument(3, float | None) == 3.0
    assert isinstance(coerce_argument(3, float | None), float)
    assert coerce_argument(Vector3(1, 2, 3), Vector2 | Vector3) == Vector3(1, 2, 3)
