"""Tests for the untraced Result type."""

import pytest

from traced_result import Err, Ok, Result, UnwrapError


class TestResultQueries:
    def test_predicates(self):
        assert Ok(1).is_ok()
        assert not Ok(1).is_err()
        assert Err("e").is_err()
        assert not Err("e").is_ok()

    def test_ok_and_err_accessors(self):
        assert Ok(1).ok() == 1
        assert Ok(1).err() is None
        assert Err("e").ok() is None
        assert Err("e").err() == "e"

    def test_truthiness_matches_is_ok(self):
        assert Ok(0)
        assert not Err("e")


class TestResultUnwrap:
    def test_unwrap_returns_value(self):
        assert Ok(42).unwrap() == 42

    def test_unwrap_raises_on_err(self):
        with pytest.raises(UnwrapError, match="called unwrap on an Err value: disk full") as exc_info:
            Err("disk full").unwrap()
        assert exc_info.value.error == "disk full"

    def test_unwrap_chains_exception_payload(self):
        cause = ValueError("bad")
        with pytest.raises(UnwrapError) as exc_info:
            Err(cause).unwrap()
        assert exc_info.value.__cause__ is cause

    def test_expect_uses_message(self):
        with pytest.raises(UnwrapError, match="loading config: missing"):
            Err("missing").expect("loading config")

    def test_unwrap_err(self):
        assert Err("e").unwrap_err() == "e"
        with pytest.raises(UnwrapError, match="called unwrap_err on an Ok value"):
            Ok(1).unwrap_err()

    def test_expect_err(self):
        assert Err("e").expect_err("should fail") == "e"
        with pytest.raises(UnwrapError, match="should fail: 1"):
            Ok(1).expect_err("should fail")

    def test_unwrap_or(self):
        assert Ok(42).unwrap_or(0) == 42
        assert Err("e").unwrap_or(0) == 0

    def test_unwrap_or_else_receives_error(self):
        received = []

        def fallback(error: str) -> int:
            received.append(error)
            return len(error)

        assert Err("error").unwrap_or_else(fallback) == 5
        assert received == ["error"]
        assert Ok(1).unwrap_or_else(fallback) == 1


class TestResultCombinators:
    def test_map(self):
        assert Ok(2).map(lambda x: x * 10) == Ok(20)
        error: Result[int, str] = Err("e")
        assert error.map(lambda x: x * 10) is error

    def test_map_err(self):
        assert Err("e").map_err(str.upper) == Err("E")
        value: Result[int, str] = Ok(1)
        assert value.map_err(str.upper) is value

    def test_and_then(self):
        assert Ok(10).and_then(lambda x: Ok(x * 2)) == Ok(20)
        assert Ok(10).and_then(lambda _: Err("e")) == Err("e")
        assert Err("e").and_then(lambda x: Ok(x)) == Err("e")

    def test_and_then_requires_result_return(self):
        with pytest.raises(TypeError, match="and_then must return a Result"):
            Ok(10).and_then(lambda x: x * 2)  # type: ignore[arg-type, return-value]

    def test_or(self):
        assert (Ok(1) | Ok(2)) == Ok(1)
        assert (Err("a") | Ok(2)) == Ok(2)
        assert (Err("a") | Err("b")) == Err("b")
