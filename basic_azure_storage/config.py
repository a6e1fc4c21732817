"""Settings for connecting to Azure Storage and maintaining leases."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import StorageConfigError

CONNECTION_STRING_ENV = "AZURE_STORAGE_CONNECTION_STRING"
LEASE_DURATION_ENV = "BASIC_AZURE_STORAGE_LEASE_DURATION"
RENEWAL_FRACTION_ENV = "BASIC_AZURE_STORAGE_LEASE_RENEWAL_FRACTION"
MAX_FAILURES_ENV = "BASIC_AZURE_STORAGE_LEASE_MAX_CONSECUTIVE_FAILURES"

DEVELOPMENT_STORAGE = "UseDevelopmentStorage=true"
DEVELOPMENT_STORAGE_CONNECTION_STRING = (
    "DefaultEndpointsProtocol=http;AccountName=devstoreaccount1;"
    "AccountKey=Eby8vdM02xNOcqFlqUwJPLlmEtlCDXJ1OUzFT50uSRZ6IFsuFq2UVErCz4I6tq/K1SZFPTOtr/KBHBeksoGMGw==;"
    "BlobEndpoint=http://127.0.0.1:10000/devstoreaccount1;"
    "QueueEndpoint=http://127.0.0.1:10001/devstoreaccount1;"
    "TableEndpoint=http://127.0.0.1:10002/devstoreaccount1;"
)

# -1 is an infinite lease, otherwise the service accepts 15 to 60 seconds
INFINITE_LEASE_DURATION = -1
MIN_LEASE_DURATION = 15
MAX_LEASE_DURATION = 60


def validate_lease_duration(lease_duration: int) -> int:
    """Check a lease duration against the range the service accepts."""
    if lease_duration != INFINITE_LEASE_DURATION and not (MIN_LEASE_DURATION <= lease_duration <= MAX_LEASE_DURATION):
        raise ValueError(
            f"lease_duration must be {INFINITE_LEASE_DURATION} or between "
            f"{MIN_LEASE_DURATION} and {MAX_LEASE_DURATION} seconds, got {lease_duration}"
        )
    return lease_duration


@dataclass(frozen=True)
class StorageSettings:
    """Connection settings for a storage account."""
    connection_string: str

    def __post_init__(self) -> None:
        if not self.connection_string:
            raise StorageConfigError("connection_string cannot be empty")
        if self.connection_string == DEVELOPMENT_STORAGE:
            object.__setattr__(self, "connection_string", DEVELOPMENT_STORAGE_CONNECTION_STRING)

    @property
    def is_development_storage(self) -> bool:
        return self.connection_string == DEVELOPMENT_STORAGE_CONNECTION_STRING

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "StorageSettings":
        """Read the connection string from ``AZURE_STORAGE_CONNECTION_STRING``."""
        environ = os.environ if environ is None else environ
        connection_string = environ.get(CONNECTION_STRING_ENV)
        if not connection_string:
            raise StorageConfigError(f"Environment variable '{CONNECTION_STRING_ENV}' is not set")
        return cls(connection_string)


@dataclass(frozen=True)
class LeaseSettings:
    """How a lease maintainer keeps its lease alive.

    Attributes:
        lease_duration: Lease duration in seconds
        renewal_fraction: Fraction of the lease duration between renewals
        max_consecutive_failures: Stop renewing after this many failed renewals in a row, None to never stop
    """
    lease_duration: int = 60
    renewal_fraction: float = 0.5
    max_consecutive_failures: Optional[int] = None

    def __post_init__(self) -> None:
        if not 0 < self.renewal_fraction < 1:
            raise StorageConfigError("renewal_fraction must be between 0 and 1 (exclusive)")
        if self.max_consecutive_failures is not None and self.max_consecutive_failures < 1:
            raise StorageConfigError("max_consecutive_failures must be at least 1")
        if self.lease_duration <= 0:
            raise StorageConfigError("lease_duration must be a positive number of seconds")

    @property
    def renewal_interval(self) -> float:
        """Seconds between two renewals."""
        return self.lease_duration * self.renewal_fraction

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "LeaseSettings":
        """Read lease settings from ``BASIC_AZURE_STORAGE_LEASE_*`` variables, using defaults for missing ones."""
        environ = os.environ if environ is None else environ
        defaults = cls()
        try:
            lease_duration = int(environ.get(LEASE_DURATION_ENV, defaults.lease_duration))
            renewal_fraction = float(environ.get(RENEWAL_FRACTION_ENV, defaults.renewal_fraction))
            max_failures = environ.get(MAX_FAILURES_ENV)
            max_consecutive_failures = int(max_failures) if max_failures else None
        except ValueError as e:
            raise StorageConfigError(f"Invalid lease setting in environment: {e}") from e
        return cls(
            lease_duration=lease_duration,
            renewal_fraction=renewal_fraction,
            max_consecutive_failures=max_consecutive_failures,
        )
