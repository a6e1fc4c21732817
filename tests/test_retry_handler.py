"""Tests for the retry handler."""

from unittest.mock import MagicMock, patch

import pytest

from basic_azure_storage.exceptions import (
    GeneralExceptionDuringAzureOperationException,
    RetriedException,
    UnidentifiedAzureException,
)
from basic_azure_storage.retry_handler import AzureStorageRetryHandler
from basic_azure_storage.service_exceptions import (
    BlobNotFoundAzureException,
    InternalErrorAzureException,
    ServerBusyAzureException,
)


@pytest.fixture
def handler():
    return AzureStorageRetryHandler(max_attempts=3, base_delay_seconds=0.5)


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("basic_azure_storage.retry_handler.time.sleep") as sleep:
        yield sleep


def _busy(retry_history=()):
    return ServerBusyAzureException("req", 503, "busy", retry_history=retry_history)


class TestIsTransient:
    @pytest.mark.parametrize("exception", [
        InternalErrorAzureException("r", 500, "internal"),
        ServerBusyAzureException("r", 503, "busy"),
        UnidentifiedAzureException(),
        TimeoutError(),
    ])
    def test_transient(self, handler, exception):
        assert handler.is_transient(exception)

    @pytest.mark.parametrize("exception", [
        BlobNotFoundAzureException("r", 404, "gone"),
        ValueError("bad"),
    ])
    def test_not_transient(self, handler, exception):
        assert not handler.is_transient(exception)

    def test_general_exception_judged_by_cause(self, handler):
        assert handler.is_transient(GeneralExceptionDuringAzureOperationException("x", TimeoutError()))
        assert not handler.is_transient(GeneralExceptionDuringAzureOperationException("x", KeyError("k")))


class TestBackoff:
    def test_exponential_delay(self, handler):
        assert handler.calculate_backoff_delay(1) == 0.5
        assert handler.calculate_backoff_delay(2) == 1.0
        assert handler.calculate_backoff_delay(3) == 2.0

    def test_delay_capped(self):
        handler = AzureStorageRetryHandler(base_delay_seconds=1, max_delay_seconds=5)
        assert handler.calculate_backoff_delay(10) == 5

    def test_throttling_delay(self, handler):
        assert handler.calculate_backoff_delay(1, is_throttling=True) == 10.0

    def test_throttling_detection(self, handler):
        assert handler.is_throttling_error(_busy())
        assert handler.is_throttling_error(InternalErrorAzureException("r", 503, "unavailable"))
        assert not handler.is_throttling_error(InternalErrorAzureException("r", 500, "internal"))
        assert not handler.is_throttling_error(TimeoutError())

    def test_failure_and_success_tracking(self, handler):
        handler.handle_failure("op", _busy())
        status = handler.get_status("op")
        assert status["consecutive_failures"] == 1
        assert status["in_backoff_period"] is True

        handler.handle_success("op")
        status = handler.get_status("op")
        assert status["consecutive_failures"] == 0
        assert status["backoff_until"] is None


class TestExecute:
    def test_success_first_try(self, handler):
        operation = MagicMock(return_value="ok")
        assert handler.execute(operation, "op") == "ok"
        operation.assert_called_once_with(())

    def test_history_threaded_through_attempts(self, handler, no_sleep):
        seen = []

        def operation(retry_history):
            seen.append(retry_history)
            if len(seen) < 3:
                raise _busy(retry_history)
            return "done"

        assert handler.execute(operation, "op") == "done"
        assert [len(history) for history in seen] == [0, 1, 2]
        assert seen[2][1].retry_history == (seen[2][0],)
        assert no_sleep.call_count == 2

    def test_exhausted_raises_retried_exception(self, handler):
        def operation(retry_history):
            raise _busy(retry_history)

        with pytest.raises(RetriedException) as exc_info:
            handler.execute(operation, "op")

        retried = exc_info.value
        assert retried.count == 3
        assert str(retried) == "Exception after 3 attempts (2 retries)"
        assert isinstance(retried.final_exception, ServerBusyAzureException)
        assert retried.final_exception.retry_count == 2
        assert len(retried.retry_history) == 3
        assert handler.get_status("op")["consecutive_failures"] == 1

    def test_non_transient_raised_immediately(self, handler, no_sleep):
        operation = MagicMock(side_effect=BlobNotFoundAzureException("r", 404, "gone"))
        with pytest.raises(BlobNotFoundAzureException):
            handler.execute(operation, "op")
        assert operation.call_count == 1
        no_sleep.assert_not_called()

    def test_non_transient_after_retry_counts_earlier_attempts(self, handler):
        def operation(retry_history):
            if not retry_history:
                raise _busy(retry_history)
            raise BlobNotFoundAzureException("r", 404, "gone", retry_history=retry_history)

        with pytest.raises(BlobNotFoundAzureException) as exc_info:
            handler.execute(operation, "op")
        assert exc_info.value.retry_count == 1
        assert isinstance(exc_info.value.retry_history[0], ServerBusyAzureException)

    def test_single_attempt_reraises_original(self, handler):
        with pytest.raises(ServerBusyAzureException):
            handler.execute(MagicMock(side_effect=_busy()), "op", max_attempts=1)

    def test_invalid_max_attempts(self):
        with pytest.raises(ValueError, match="max_attempts"):
            AzureStorageRetryHandler(max_attempts=0)

    def test_waits_out_backoff_period(self, handler, no_sleep):
        handler.handle_failure("op", _busy())
        handler.execute(MagicMock(return_value=None), "op")
        assert no_sleep.call_count == 1
        assert handler.get_status("op")["consecutive_failures"] == 0


class TestWithRetry:
    def test_decorator_retries(self, handler):
        calls = MagicMock(side_effect=[UnidentifiedAzureException(), "value"])

        @handler.with_retry("decorated")
        def do_work(x):
            return calls(x)

        assert do_work(5) == "value"
        assert calls.call_count == 2
