"""Base exception types for Azure Storage operations."""

from typing import Dict, Mapping, Optional, Sequence, Tuple

# HTTP 306 "Unused": there is no real status code when no response was received
NO_RESPONSE_STATUS_CODE = 306
NO_RESPONSE_REQUEST_ID = "No HTTP Response"
NO_RESPONSE_DESCRIPTION = "Unknown Azure Error, no HttpWebResponse available"


def _format_message(status_description: str, request_id: str, status_code: int,
                    details: Mapping[str, str]) -> str:
    message = f"{status_description}. Request {request_id}, Http Status: {int(status_code)}"
    if details:
        flattened = ", ".join(f"{key}={value}" for key, value in details.items())
        message += f", Details: {flattened}"
    return message


class AzureException(Exception):
    """An error response returned by the Azure Storage service.

    Every documented Azure error code has its own subclass (see
    ``basic_azure_storage.service_exceptions``) so callers can catch the
    specific failure they care about.

    Attributes:
        request_id: The ``x-ms-request-id`` of the failed request
        status_code: HTTP status code of the response
        status_description: Human readable error message from the service
        details: Additional error details supplied by the service
        retry_history: Exceptions raised by earlier attempts of the same operation, oldest first
        retry_count: Number of earlier attempts, ``len(retry_history)`` at construction time
    """

    def __init__(self,
                 request_id: str,
                 status_code: int,
                 status_description: str,
                 details: Optional[Mapping[str, str]] = None,
                 base_exception: Optional[BaseException] = None,
                 retry_history: Sequence[BaseException] = ()):
        """Initialize the exception.

        Args:
            request_id: Request id reported by the service
            status_code: HTTP status code
            status_description: Human readable error message
            details: Optional additional details from the error response
            base_exception: The transport exception this error was parsed from
            retry_history: Exceptions from previous attempts at the same operation
        """
        self.request_id = request_id
        self.status_code = int(status_code)
        self.status_description = status_description
        self.details: Dict[str, str] = dict(details or {})
        self.retry_history: Tuple[BaseException, ...] = tuple(retry_history)
        self.retry_count = len(self.retry_history)
        super().__init__(_format_message(status_description, request_id, self.status_code, self.details))
        if base_exception is not None:
            self.__cause__ = base_exception

    @classmethod
    def wrap(cls, previous: "AzureException") -> "AzureException":
        """Build a new exception of this type carrying everything from ``previous``.

        The request id, status, description, details and retry history are kept
        as they are, so the retry count of the result matches ``previous``.
        """
        wrapped = cls.__new__(cls)
        AzureException.__init__(
            wrapped,
            previous.request_id,
            previous.status_code,
            previous.status_description,
            previous.details,
            previous,
            previous.retry_history,
        )
        return wrapped

    def history_with_self(self) -> Tuple[BaseException, ...]:
        """Return the retry history to hand to the next attempt of this operation."""
        return self.retry_history + (self,)


class UnrecognizedAzureException(AzureException):
    """The service returned an error whose code and message are not known."""

    def __init__(self,
                 request_id: str,
                 status_code: int,
                 status_description: str,
                 details: Optional[Mapping[str, str]] = None,
                 base_exception: Optional[BaseException] = None,
                 retry_history: Sequence[BaseException] = ()):
        super().__init__(
            request_id,
            status_code,
            f"Unrecognized error '{status_description}'",
            details,
            base_exception,
            retry_history,
        )


class UnidentifiedAzureException(AzureException):
    """The request failed before any HTTP response was received."""

    def __init__(self,
                 base_exception: Optional[BaseException] = None,
                 retry_history: Sequence[BaseException] = ()):
        super().__init__(
            NO_RESPONSE_REQUEST_ID,
            NO_RESPONSE_STATUS_CODE,
            NO_RESPONSE_DESCRIPTION,
            {},
            base_exception,
            retry_history,
        )


class RetriedException(Exception):
    """A transient failure that persisted through every retry attempt."""

    def __init__(self,
                 final_exception: BaseException,
                 count: int,
                 retry_history: Sequence[BaseException] = ()):
        super().__init__(f"Exception after {count} attempts ({count - 1} retries)")
        self.count = count
        self.retry_history: Tuple[BaseException, ...] = tuple(retry_history)
        self.__cause__ = final_exception

    @property
    def final_exception(self) -> Optional[BaseException]:
        return self.__cause__


class GeneralExceptionDuringAzureOperationException(Exception):
    """A non-Azure exception escaped while an Azure Storage call was running."""

    def __init__(self, message: str, inner_exception: BaseException):
        super().__init__(message)
        self.__cause__ = inner_exception


class StorageConfigError(ValueError):
    """Invalid or missing storage configuration."""
