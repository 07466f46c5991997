"""Unit tests for Result construction, observers and equality."""

from __future__ import annotations

import pytest

from castor.errors import ResultAccessError
from castor.failure import Failure, fail
from castor.result import Result, VoidResult, is_result, success

pytestmark = pytest.mark.unit


class TestConstruction:
    def test_default_is_success_holding_none(self) -> None:
        r: Result[None, str] = Result()

        assert r.has_value()
        assert r.value() is None

    def test_bare_value_builds_success(self) -> None:
        r: Result[int, str] = Result(5)

        assert r.has_value() is True
        assert r.value() == 5

    def test_failure_builds_failure_side(self) -> None:
        r: Result[int, str] = Result(fail("boom"))

        assert r.has_value() is False
        assert r.error() == "boom"

    def test_failure_can_hold_a_value_that_looks_like_success(self) -> None:
        r: Result[int, int] = Result(Failure(5))

        assert not r
        assert r.error() == 5

    def test_result_argument_is_copied_not_nested(self) -> None:
        src: Result[int, str] = Result(fail("boom"))

        r: Result[int, str] = Result(src)

        assert r is not src
        assert r.error() == "boom"

    def test_in_place_allows_deliberate_nesting(self) -> None:
        inner: Result[int, str] = success(1)

        outer = Result.in_place(lambda: inner)

        assert outer.value() is inner

    def test_in_place_forwards_arguments(self) -> None:
        r = Result.in_place(dict, [("a", 1)], b=2)

        assert r.value() == {"a": 1, "b": 2}

    def test_success_refuses_to_nest(self) -> None:
        with pytest.raises(TypeError, match="nest"):
            success(success(1))
        with pytest.raises(TypeError, match="nest"):
            success(fail("x"))

    def test_success_without_argument_is_void(self) -> None:
        r = success()

        assert isinstance(r, VoidResult)
        assert r.has_value()

    def test_success_none_is_not_void(self) -> None:
        r = success(None)

        assert type(r) is Result
        assert r.value() is None


class TestFromResult:
    def test_converts_live_value_only(self) -> None:
        calls: list[str] = []

        def to_str(x: int) -> str:
            calls.append("value")
            return str(x)

        def to_len(e: str) -> int:
            calls.append("error")
            return len(e)

        r = Result.from_result(success(42), value=to_str, error=to_len)

        assert r.value() == "42"
        assert calls == ["value"]

    def test_converts_live_error_only(self) -> None:
        src: Result[int, str] = Result(fail("boom"))

        r = Result.from_result(src, value=str, error=len)

        assert r.has_value() is False
        assert r.error() == 4

    def test_without_converters_is_identity(self) -> None:
        src: Result[int, str] = success(3)

        assert Result.from_result(src) == src

    def test_void_source_stays_void(self) -> None:
        r = Result.from_result(VoidResult(fail("e")), error=str.upper)

        assert isinstance(r, VoidResult)
        assert r.error() == "E"

    def test_void_source_rejects_value_converter(self) -> None:
        with pytest.raises(TypeError, match="no success payload"):
            Result.from_result(success(), value=int)

    def test_non_void_source_cannot_become_void(self) -> None:
        with pytest.raises(TypeError, match="success payload"):
            VoidResult.from_result(success(5))

    def test_void_to_void_conversion(self) -> None:
        r = VoidResult.from_result(VoidResult(fail(3)), error=str)

        assert isinstance(r, VoidResult)
        assert r.error() == "3"

    def test_rejects_non_result(self) -> None:
        with pytest.raises(TypeError):
            Result.from_result(5)  # type: ignore[arg-type]

    def test_failing_converter_propagates(self) -> None:
        with pytest.raises(ValueError):
            Result.from_result(success("x"), value=int)


class TestObservers:
    def test_bool_reports_discriminant(self) -> None:
        assert bool(success(0)) is True
        assert bool(Result(fail(0))) is False

    def test_value_on_failure_is_an_access_error(self) -> None:
        r: Result[int, str] = Result(fail("boom"))

        with pytest.raises(ResultAccessError) as exc:
            r.value()

        assert "boom" in str(exc.value)
        assert exc.value.hint

    def test_error_on_success_is_an_access_error(self) -> None:
        with pytest.raises(ResultAccessError):
            success(1).error()

    def test_value_or_and_error_or_never_raise(self) -> None:
        ok: Result[int, str] = success(1)
        bad: Result[int, str] = Result(fail("boom"))

        assert ok.value_or(9) == 1
        assert bad.value_or(9) == 9
        assert ok.error_or("fallback") == "fallback"
        assert bad.error_or("fallback") == "boom"

    def test_repr_names_the_live_side(self) -> None:
        assert repr(success(1)) == "Result(value=1)"
        assert repr(Result(fail("x"))) == "Result(error='x')"
        assert repr(success()) == "VoidResult()"
        assert repr(VoidResult(fail("x"))) == "VoidResult(error='x')"


class TestEquality:
    def test_results_compare_by_side_and_payload(self) -> None:
        assert success(1) == success(1)
        assert success(1) != success(2)
        assert Result(fail(1)) == Result(fail(1))
        assert success(1) != Result(fail(1))

    def test_result_equals_bare_value_only_on_success(self) -> None:
        assert success(5) == 5
        assert 5 == success(5)
        assert Result(fail(5)) != 5

    def test_result_equals_failure_only_on_failure(self) -> None:
        assert Result(fail("x")) == fail("x")
        assert success("x") != fail("x")

    def test_void_results(self) -> None:
        assert success() == success()
        assert success() == success(None)
        assert VoidResult(fail("e")) == Result(fail("e"))
        assert success() != VoidResult(fail("e"))

    def test_void_success_equals_any_success(self) -> None:
        assert success() == success(5)
        assert success(5) == success()
        assert success() != Result(fail(5))
        assert success() != 5

    def test_results_are_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(success(1))
        with pytest.raises(TypeError):
            hash(success())


class TestVoidResult:
    def test_value_returns_none_on_success(self) -> None:
        assert success().value() is None

    def test_value_raises_stored_exception(self) -> None:
        err = OSError("disk full")
        r: VoidResult[OSError] = VoidResult(fail(err))

        with pytest.raises(OSError) as exc:
            r.value()

        assert exc.value is err

    def test_value_wraps_non_exception_error(self) -> None:
        r: VoidResult[str] = VoidResult(fail("disk full"))

        with pytest.raises(ResultAccessError) as exc:
            r.value()

        assert exc.value.error == "disk full"

    def test_rejects_payload(self) -> None:
        with pytest.raises(TypeError):
            VoidResult(5)  # type: ignore[arg-type]

    def test_copies_another_void_result(self) -> None:
        src: VoidResult[str] = VoidResult(fail("e"))

        assert VoidResult(src) == src

    def test_emplace_switches_to_success(self) -> None:
        r: VoidResult[str] = VoidResult(fail("e"))

        r.emplace()

        assert r.has_value()

    def test_emplace_with_is_rejected(self) -> None:
        with pytest.raises(TypeError):
            success().emplace_with(int)

    def test_in_place_is_rejected(self) -> None:
        with pytest.raises(TypeError, match="no success payload"):
            VoidResult.in_place(lambda: 7)

    def test_is_a_result(self) -> None:
        assert is_result(success())
        assert not is_result(5)
