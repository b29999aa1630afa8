"""
Tests for the bounded retry helper.
"""

import asyncio

import pytest

from app.errors import ParseFailure
from app.services.retry import retry


class Flaky:
    def __init__(self, failures: int, value="ok"):
        self.failures = failures
        self.value = value
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise ParseFailure(f"attempt {self.calls}")
        return self.value


def test_success_on_first_try():
    op = Flaky(0)
    assert asyncio.run(retry(3, op)) == "ok"
    assert op.calls == 1


def test_fails_twice_then_succeeds():
    op = Flaky(2, value={"name": "John"})
    assert asyncio.run(retry(3, op)) == {"name": "John"}
    assert op.calls == 3


def test_always_failing_is_attempted_four_times():
    op = Flaky(100)
    with pytest.raises(ParseFailure) as exc:
        asyncio.run(retry(3, op))
    assert op.calls == 4
    # The last failure propagates unchanged.
    assert exc.value.error == "attempt 4"


def test_zero_budget_runs_once():
    op = Flaky(100)
    with pytest.raises(ParseFailure):
        asyncio.run(retry(0, op))
    assert op.calls == 1


def test_negative_budget_is_rejected():
    with pytest.raises(ValueError):
        asyncio.run(retry(-1, Flaky(0)))


def test_every_exception_type_is_retried():
    errors = [ConnectionError("down"), ValueError("bad"), KeyError("x")]

    async def op():
        if errors:
            raise errors.pop(0)
        return 42

    assert asyncio.run(retry(3, op)) == 42


def test_failures_are_logged(capsys):
    with pytest.raises(ParseFailure):
        asyncio.run(retry(1, Flaky(100)))
    out = capsys.readouterr().out
    assert out.count("[RETRY] Retrying due to error") == 2
