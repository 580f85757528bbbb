"""Tests for retry with backoff."""
import pytest

from app.utils.retry import backoff_delay, retry_with_backoff


def test_backoff_delay_without_jitter():
    assert backoff_delay(0, 0.5, 5.0, jitter=False) == 0.5
    assert backoff_delay(2, 0.5, 5.0, jitter=False) == 2.0
    assert backoff_delay(10, 0.5, 5.0, jitter=False) == 5.0


def test_backoff_delay_jitter_range():
    for _ in range(20):
        assert 0.5 <= backoff_delay(1, 0.5, 5.0) <= 1.0


class TestRetryWithBackoff:

    @pytest.mark.asyncio
    async def test_succeeds_after_failures(self):
        calls = []

        async def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise ConnectionError("boom")
            return "ok"

        result = await retry_with_backoff(flaky, max_attempts=3, initial_delay=0, jitter=False)

        assert result == "ok"
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_raises_last_error(self):
        async def failing():
            raise ConnectionError("down")

        with pytest.raises(ConnectionError):
            await retry_with_backoff(failing, max_attempts=2, initial_delay=0)

    @pytest.mark.asyncio
    async def test_non_retryable_error_is_raised_immediately(self):
        calls = []

        async def failing():
            calls.append(1)
            raise ValueError("bad input")

        with pytest.raises(ValueError):
            await retry_with_backoff(
                failing,
                max_attempts=3,
                initial_delay=0,
                retryable_exceptions=(ConnectionError,),
            )
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_requires_an_attempt(self):
        async def noop():
            return None

        with pytest.raises(ValueError):
            await retry_with_backoff(noop, max_attempts=0)
