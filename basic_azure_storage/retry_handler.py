"""Retry handling for Azure Storage operations."""

import time
from datetime import datetime, timedelta, timezone
from typing import Optional, Callable, Any, Dict, Tuple, TypedDict, TypeVar
from functools import wraps
from collections import defaultdict
from logging import Logger, getLogger

from .exceptions import (
    AzureException,
    GeneralExceptionDuringAzureOperationException,
    RetriedException,
    UnidentifiedAzureException,
)
from .service_exceptions import (
    InternalErrorAzureException,
    OperationTimedOutAzureException,
    ServerBusyAzureException,
)

T = TypeVar("T")

TRANSIENT_EXCEPTIONS = (
    InternalErrorAzureException,
    ServerBusyAzureException,
    OperationTimedOutAzureException,
    UnidentifiedAzureException,
    TimeoutError,
)


class BackoffState(TypedDict):
    """Backoff state for Azure Storage operations"""
    consecutive_failures: int
    last_failure_time: Optional[datetime]
    backoff_until: Optional[datetime]


# noinspection PyMethodMayBeStatic
class AzureStorageRetryHandler:
    """Retry handler for Azure Storage operations.

    Retries transient failures with exponential backoff and threads the
    exceptions of failed attempts into the next attempt, so the exception that
    finally escapes carries the history of the whole operation.
    """

    def __init__(self,
                 max_attempts: int = 3,
                 base_delay_seconds: float = 0.5,
                 max_delay_seconds: float = 30.0,
                 logger: Optional[Logger] = None):
        """Initialize the Azure Storage retry handler.

        Args:
            max_attempts: Maximum attempts per operation, including the first one
            base_delay_seconds: Base delay for exponential backoff
            max_delay_seconds: Maximum delay between retries
            logger: Optional logger instance
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.max_attempts = max_attempts
        self.base_delay_seconds = base_delay_seconds
        self.max_delay_seconds = max_delay_seconds
        self.logger = logger or getLogger(__name__)

        # Track backoff state for different operation types
        self.backoff_state: Dict[str, BackoffState] = defaultdict(lambda: BackoffState(
            consecutive_failures=0,
            last_failure_time=None,
            backoff_until=None
        ))

    def is_throttling_error(self, exception: BaseException) -> bool:
        """Check if an exception indicates the storage account is being throttled.

        Args:
            exception: The exception to check

        Returns:
            True if this is a throttling error
        """
        if isinstance(exception, ServerBusyAzureException):
            return True
        if isinstance(exception, AzureException):
            return exception.status_code in (429, 503)
        return False

    def is_transient(self, exception: BaseException) -> bool:
        """Check if an exception is worth retrying.

        A ``GeneralExceptionDuringAzureOperationException`` is judged by the
        exception it wraps.

        Args:
            exception: The exception to check

        Returns:
            True if the error should be retried
        """
        if isinstance(exception, GeneralExceptionDuringAzureOperationException) and exception.__cause__ is not None:
            exception = exception.__cause__

        return isinstance(exception, TRANSIENT_EXCEPTIONS)

    def calculate_backoff_delay(self, attempt: int, is_throttling: bool = False) -> float:
        """Calculate backoff delay for retry attempt.

        Args:
            attempt: Current attempt number (1-based)
            is_throttling: Whether this is due to throttling

        Returns:
            Delay in seconds
        """
        if is_throttling:
            # Longer delay for throttling errors
            return min(10.0, self.base_delay_seconds * 20)

        delay = self.base_delay_seconds * (2 ** (attempt - 1))
        return min(delay, self.max_delay_seconds)

    def handle_failure(self, operation_id: str, exception: BaseException) -> None:
        """Record an operation that failed every attempt.

        Args:
            operation_id: Identifier for the operation type
            exception: The exception that occurred
        """
        backoff_state = self.backoff_state[operation_id]
        backoff_state['consecutive_failures'] += 1
        backoff_state['last_failure_time'] = datetime.now(timezone.utc)

        is_throttling = self.is_throttling_error(exception)
        backoff_seconds = self.calculate_backoff_delay(
            backoff_state['consecutive_failures'],
            is_throttling
        )

        backoff_state['backoff_until'] = datetime.now(timezone.utc) + timedelta(seconds=backoff_seconds)

        self.logger.warning(
            f"Azure Storage failure #{backoff_state['consecutive_failures']} for {operation_id}. "
            f"Backing off for {backoff_seconds:.1f} seconds. Error: {exception}"
        )

    def handle_success(self, operation_id: str) -> None:
        """Reset the backoff state of an operation after it succeeded.

        Args:
            operation_id: Identifier for the operation type
        """
        if operation_id in self.backoff_state:
            self.backoff_state[operation_id] = BackoffState(
                consecutive_failures=0,
                last_failure_time=None,
                backoff_until=None
            )

    def check_backoff(self, operation_id: str) -> None:
        """Wait out any backoff period still in force for an operation.

        Args:
            operation_id: Identifier for the operation type
        """
        backoff_state = self.backoff_state[operation_id]
        if backoff_state['backoff_until'] is not None and datetime.now(timezone.utc) < backoff_state['backoff_until']:
            wait_time = (backoff_state['backoff_until'] - datetime.now(timezone.utc)).total_seconds()
            self.logger.info(f"In backoff period for {operation_id}. Waiting {wait_time:.1f} seconds.")
            time.sleep(wait_time)

    def execute(self,
                operation: Callable[[Tuple[BaseException, ...]], T],
                operation_id: str = "azure_storage",
                max_attempts: Optional[int] = None) -> T:
        """Run ``operation`` until it succeeds, fails permanently or runs out of attempts.

        ``operation`` receives the exceptions of the previous attempts, oldest
        first, and is expected to pass them on to the resolver so the exception
        it raises carries them as its retry history.

        A non-transient failure is re-raised as it is. Its history holds the
        attempts before it but not itself, so on attempt N its ``retry_count``
        is N - 1.

        Args:
            operation: Callable taking the retry history
            operation_id: Identifier for the operation (for backoff tracking)
            max_attempts: Override default max attempts

        Returns:
            Whatever ``operation`` returns

        Raises:
            RetriedException: If a transient error persisted through more than one attempt
            Exception: Non-transient errors, and a transient error on a single attempt
        """
        attempts = max_attempts or self.max_attempts
        retry_history: Tuple[BaseException, ...] = ()

        # Check if we're in a backoff period
        self.check_backoff(operation_id)

        for attempt in range(1, attempts + 1):
            try:
                result = operation(retry_history)
                self.handle_success(operation_id)
                return result

            except Exception as e:
                if not self.is_transient(e):
                    self.logger.debug(f"Non-transient error for {operation_id}: {e}")
                    raise

                retry_history = retry_history + (e,)

                if attempt < attempts:
                    delay = self.calculate_backoff_delay(attempt, self.is_throttling_error(e))
                    self.logger.warning(
                        f"Azure Storage attempt {attempt}/{attempts} failed for {operation_id}. "
                        f"Retrying in {delay:.1f}s. Error: {e}"
                    )
                    time.sleep(delay)
                    continue

                self.handle_failure(operation_id, e)
                self.logger.error(
                    f"All {attempts} attempts failed for Azure Storage {operation_id}. Error: {e}"
                )
                if attempt > 1:
                    raise RetriedException(e, attempt, retry_history) from e
                raise

        # unreachable, the loop either returns or raises
        raise RuntimeError(f"No attempts made for {operation_id}")

    def with_retry(self,
                   operation_id: str = "azure_storage",
                   max_attempts: Optional[int] = None) -> Callable:
        """Decorator for adding retry logic to Azure Storage operations.

        Args:
            operation_id: Identifier for the operation (for backoff tracking)
            max_attempts: Override default max attempts

        Returns:
            Decorated function with retry logic
        """
        def decorator(func: Callable) -> Callable:
            @wraps(func)
            def wrapper(*args, **kwargs) -> Any:
                return self.execute(
                    lambda retry_history: func(*args, **kwargs),
                    operation_id=operation_id,
                    max_attempts=max_attempts,
                )
            return wrapper
        return decorator

    def get_status(self, operation_id: str = "azure_storage") -> dict[str, Any]:
        """Get retry status for an operation.

        Args:
            operation_id: Operation identifier

        Returns:
            Dictionary with retry status information
        """
        backoff_state = self.backoff_state[operation_id]
        now = datetime.now(timezone.utc)

        return {
            'operation_id': operation_id,
            'consecutive_failures': backoff_state['consecutive_failures'],
            'in_backoff_period': (
                backoff_state['backoff_until'] is not None and now < backoff_state['backoff_until']
            ),
            'backoff_until': (
                backoff_state['backoff_until'].isoformat()
                if backoff_state['backoff_until'] is not None else None
            ),
            'last_failure_time': (
                backoff_state['last_failure_time'].isoformat()
                if backoff_state['last_failure_time'] is not None else None
            ),
            'max_attempts': self.max_attempts,
            'current_time': now.isoformat()
        }
