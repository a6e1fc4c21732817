"""Resolve Azure Storage error responses into typed exceptions."""

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Sequence, Tuple, Type

from azure.core.exceptions import AzureError

from .exceptions import (
    AzureException,
    GeneralExceptionDuringAzureOperationException,
    UnidentifiedAzureException,
    UnrecognizedAzureException,
)
from .service_exceptions import (
    BLOB_ERROR_ENTRIES,
    COMMON_ERROR_ENTRIES,
    LEASE_ERROR_ENTRIES,
    QUEUE_ERROR_ENTRIES,
    TABLE_ERROR_ENTRIES,
)

ErrorEntry = Tuple[Type[AzureException], str, str]

REQUEST_ID_HEADER = "x-ms-request-id"
ERROR_CODE_HEADER = "x-ms-error-code"

# Lines the storage SDK adds to an error message that are not service details
_MESSAGE_METADATA_KEYS = frozenset({"requestid", "time", "errorcode", "content"})


class StorageServiceType(Enum):
    """The storage service a request was sent to."""
    COMMON = "common"
    BLOB = "blob"
    QUEUE = "queue"
    TABLE = "table"


@dataclass(frozen=True)
class ErrorTable:
    """Lookup tables from error code and from error description to exception type."""
    name: str
    codes: Mapping[str, Type[AzureException]]
    descriptions: Mapping[str, Type[AzureException]]

    @classmethod
    def from_entries(cls, name: str, *entry_groups: Iterable[ErrorEntry]) -> "ErrorTable":
        """Build a table from groups of ``(exception type, error code, description)`` entries.

        Earlier groups take precedence when a code or description appears twice.
        """
        codes: Dict[str, Type[AzureException]] = {}
        descriptions: Dict[str, Type[AzureException]] = {}
        for group in entry_groups:
            for exception_type, error_code, description in group:
                codes.setdefault(error_code, exception_type)
                descriptions.setdefault(description, exception_type)
        return cls(name, MappingProxyType(codes), MappingProxyType(descriptions))

    def lookup(self, error_code: Optional[str], status_description: Optional[str]) -> Optional[Type[AzureException]]:
        """Find the exception type for an error, checking the code before the description."""
        if error_code and error_code in self.codes:
            return self.codes[error_code]
        if status_description and status_description in self.descriptions:
            return self.descriptions[status_description]
        return None


COMMON_ERRORS = ErrorTable.from_entries("common", COMMON_ERROR_ENTRIES)
QUEUE_ERRORS = ErrorTable.from_entries("queue", QUEUE_ERROR_ENTRIES, COMMON_ERROR_ENTRIES)
BLOB_ERRORS = ErrorTable.from_entries("blob", BLOB_ERROR_ENTRIES, COMMON_ERROR_ENTRIES)
TABLE_ERRORS = ErrorTable.from_entries("table", TABLE_ERROR_ENTRIES, COMMON_ERROR_ENTRIES)
CONTAINER_LEASE_ERRORS = ErrorTable.from_entries("container_lease", LEASE_ERROR_ENTRIES, COMMON_ERROR_ENTRIES)

_SERVICE_TABLES = {
    StorageServiceType.COMMON: COMMON_ERRORS,
    StorageServiceType.QUEUE: QUEUE_ERRORS,
    StorageServiceType.BLOB: BLOB_ERRORS,
    StorageServiceType.TABLE: TABLE_ERRORS,
}


def table_for(service_type: StorageServiceType) -> ErrorTable:
    """Return the error table used for responses from ``service_type``."""
    return _SERVICE_TABLES[service_type]


def resolve(request_id: str,
            status_code: int,
            error_code: Optional[str],
            status_description: str,
            transport_exception: Optional[BaseException] = None,
            details: Optional[Mapping[str, str]] = None,
            retry_history: Sequence[BaseException] = (),
            table: ErrorTable = COMMON_ERRORS) -> AzureException:
    """Map an Azure error response onto its exception type.

    The error code is tried first, then the human readable description, and
    anything that matches neither becomes an ``UnrecognizedAzureException``.
    This never raises; the caller decides what to do with the result.

    Args:
        request_id: Request id reported by the service
        status_code: HTTP status code of the response
        error_code: Error code from the response body, if any
        status_description: Error message from the response
        transport_exception: The exception raised by the transport for this response
        details: Additional error details from the response body
        retry_history: Exceptions raised by earlier attempts of the same operation
        table: Error table of the service the request was sent to

    Returns:
        The exception instance describing the error
    """
    request_id = request_id or ""
    status_code = status_code or 0
    status_description = status_description or ""

    exception_type = table.lookup(error_code, status_description)
    if exception_type is None:
        return UnrecognizedAzureException(
            request_id, status_code, status_description, details, transport_exception, retry_history
        )
    return exception_type(request_id, status_code, status_description, details, transport_exception, retry_history)


def resolve_unidentified(transport_exception: Optional[BaseException],
                         retry_history: Sequence[BaseException] = ()) -> UnidentifiedAzureException:
    """Build the exception for a request that never received an HTTP response."""
    return UnidentifiedAzureException(transport_exception, retry_history)


def _error_code_of(error: AzureError, headers: Mapping[str, str]) -> Optional[str]:
    error_code: Any = getattr(error, "error_code", None) or headers.get(ERROR_CODE_HEADER)
    if error_code is None:
        return None
    # the storage SDK reports codes as StorageErrorCode enum members
    return str(getattr(error_code, "value", error_code))


def _split_message(message: str) -> Tuple[str, Dict[str, str]]:
    """Split an SDK error message into the service description and extra details."""
    lines = [line.strip() for line in message.splitlines() if line.strip()]
    if not lines:
        return "", {}

    details: Dict[str, str] = {}
    for line in lines[1:]:
        key, separator, value = line.partition(":")
        if not separator or key.strip().lower() in _MESSAGE_METADATA_KEYS:
            continue
        details[key.strip()] = value.strip()
    return lines[0], details


def resolve_http_error(error: AzureError,
                       service_type: StorageServiceType = StorageServiceType.COMMON,
                       retry_history: Sequence[BaseException] = (),
                       code_overrides: Optional[Mapping[str, str]] = None,
                       table: Optional[ErrorTable] = None) -> AzureException:
    """Resolve an exception raised by the Azure SDK into an ``AzureException``.

    Args:
        error: The SDK exception
        service_type: Service the failed request was sent to
        retry_history: Exceptions raised by earlier attempts of the same operation
        code_overrides: Replacement error codes for responses known to carry the wrong code
        table: Error table to use instead of the one for ``service_type``

    Returns:
        The resolved exception, ``UnidentifiedAzureException`` if there was no response
    """
    response = getattr(error, "response", None)
    if response is None:
        return resolve_unidentified(error, retry_history)

    headers: Mapping[str, str] = getattr(response, "headers", None) or {}
    request_id = headers.get(REQUEST_ID_HEADER, "")
    status_code = getattr(error, "status_code", None) or getattr(response, "status_code", None) or 0

    error_code = _error_code_of(error, headers)
    if code_overrides and error_code in code_overrides:
        error_code = code_overrides[error_code]

    message = getattr(error, "message", None) or str(error)
    status_description, details = _split_message(message)
    if not status_description:
        status_description = getattr(error, "reason", None) or getattr(response, "reason", None) or ""

    return resolve(
        request_id,
        status_code,
        error_code,
        status_description,
        transport_exception=error,
        details=details,
        retry_history=retry_history,
        table=table or table_for(service_type),
    )


@contextmanager
def translate_errors(service_type: StorageServiceType = StorageServiceType.COMMON,
                     retry_history: Sequence[BaseException] = (),
                     code_overrides: Optional[Mapping[str, str]] = None,
                     table: Optional[ErrorTable] = None) -> Iterator[None]:
    """Re-raise exceptions from the wrapped Azure SDK calls as ``AzureException``.

    Args:
        service_type: Service the wrapped calls talk to
        retry_history: Exceptions raised by earlier attempts of the same operation
        code_overrides: Replacement error codes for responses known to carry the wrong code
        table: Error table to use instead of the one for ``service_type``

    Raises:
        AzureException: For any Azure SDK error raised inside the block
        GeneralExceptionDuringAzureOperationException: For any other exception
    """
    try:
        yield
    except AzureException:
        raise
    except AzureError as error:
        raise resolve_http_error(error, service_type, retry_history, code_overrides, table) from error
    except Exception as error:
        raise GeneralExceptionDuringAzureOperationException(
            "Azure service request received an exception without a valid Http Response to parse", error
        ) from error
