"""Keep a blob lease alive in the background until it is released."""

import threading
import uuid
from concurrent.futures import Future
from datetime import datetime, timedelta, timezone
from enum import Enum
from logging import Logger, getLogger
from typing import Callable, Optional, Protocol

from .config import LeaseSettings
from .service_exceptions import (
    BlobNotFoundAzureException,
    ContainerNotFoundAzureException,
    LeaseAlreadyBrokenAzureException,
    LeaseIdMismatchWithBlobOperationAzureException,
    LeaseIdMismatchWithLeaseOperationAzureException,
    LeaseIsBrokenAndCannotBeRenewedAzureException,
    LeaseLostAzureException,
    LeaseNotPresentWithBlobOperationAzureException,
    LeaseNotPresentWithLeaseOperationAzureException,
)

_logger = getLogger(__name__)

# Renewal failures meaning the lease is gone for good; renewing again cannot succeed
LEASE_GONE_EXCEPTIONS = (
    LeaseIsBrokenAndCannotBeRenewedAzureException,
    LeaseAlreadyBrokenAzureException,
    LeaseLostAzureException,
    LeaseNotPresentWithLeaseOperationAzureException,
    LeaseIdMismatchWithLeaseOperationAzureException,
    LeaseNotPresentWithBlobOperationAzureException,
    LeaseIdMismatchWithBlobOperationAzureException,
    BlobNotFoundAzureException,
    ContainerNotFoundAzureException,
)

DEFAULT_RENEWAL_FRACTION = 0.5


class BlobLeaseOperations(Protocol):
    """The blob lease calls a maintainer needs, as provided by ``StorageService``."""

    def lease_blob_acquire(self, container_name: str, blob_name: str, lease_duration: int,
                           proposed_lease_id: Optional[str] = None) -> str: ...

    def lease_blob_renew(self, container_name: str, blob_name: str, lease_id: str) -> None: ...

    def lease_blob_release(self, container_name: str, blob_name: str, lease_id: str) -> None: ...

    def put_block_blob(self, container_name: str, blob_name: str, data: bytes = b"") -> None: ...


class LeaseState(Enum):
    ACQUIRING = "acquiring"
    ACTIVE = "active"
    STOPPED = "stopped"
    FAILED = "failed"


RenewalFailureHandler = Callable[["BlobLeaseMaintainer", BaseException], None]


class BlobLeaseMaintainer:
    """Acquires a blob lease and renews it on a background thread.

    Renewal happens every ``lease_duration * renewal_fraction`` seconds until
    ``release`` is called. A renewal failing because the lease is gone (broken,
    lost, taken by someone else, blob deleted) stops the maintainer quietly.
    Any other renewal failure is passed to ``exception_handler``, when one was
    given, and renewal carries on.

    The maintainer is a context manager that releases the lease on exit::

        with start_maintaining(service, "locks", "job.lock", 30) as lease:
            lease.wait_until_acquired()
            ...
    """

    def __init__(self,
                 lease_operations: BlobLeaseOperations,
                 container_name: str,
                 blob_name: str,
                 lease_duration: float,
                 lease_id: Optional[str] = None,
                 exception_handler: Optional[RenewalFailureHandler] = None,
                 renewal_fraction: float = DEFAULT_RENEWAL_FRACTION,
                 max_consecutive_failures: Optional[int] = None,
                 proposed_lease_id: Optional[str] = None,
                 logger: Optional[Logger] = None):
        """Initialize the maintainer. Nothing happens until ``start`` is called.

        Args:
            lease_operations: Client performing the lease calls
            container_name: Container holding the blob
            blob_name: Blob to lease
            lease_duration: Lease duration in seconds. Only positivity is checked here; the range the
                service accepts is enforced by ``lease_operations.lease_blob_acquire``, so an out of
                range duration fails acquisition and is raised by ``wait_until_acquired``
            lease_id: Id of a lease already held, skips acquisition
            exception_handler: Called with the maintainer and the exception when a renewal fails
            renewal_fraction: Fraction of the lease duration between renewals
            max_consecutive_failures: Stop after this many failed renewals in a row, None to never stop
            proposed_lease_id: Lease id to request when acquiring, a random one by default
            logger: Optional logger instance
        """
        if not container_name or not blob_name:
            raise ValueError("Container name and blob name cannot be empty.")
        if lease_duration <= 0:
            raise ValueError("lease_duration must be a positive number of seconds")
        if not 0 < renewal_fraction < 1:
            raise ValueError("renewal_fraction must be between 0 and 1 (exclusive)")

        self.container_name = container_name
        self.blob_name = blob_name
        self.lease_duration = lease_duration
        self.lease_id = lease_id
        self.renewal_fraction = renewal_fraction
        self.max_consecutive_failures = max_consecutive_failures
        self.proposed_lease_id = proposed_lease_id
        self.logger = logger or getLogger(__name__)

        self.lease_acquired_on: Optional[datetime] = datetime.now(timezone.utc) if lease_id else None
        self.next_renewal_deadline: Optional[datetime] = None
        self.consecutive_failures = 0
        self.renewal_count = 0
        self.state = LeaseState.ACQUIRING

        self._lease_operations = lease_operations
        self._exception_handler = exception_handler
        self._lock = threading.Lock()
        # serializes start() so only one renewal thread is ever running
        self._start_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None
        self._acquired: "Future[str]" = Future()
        self._released = False
        self._lease_returned = False

    @classmethod
    def from_settings(cls,
                      lease_operations: BlobLeaseOperations,
                      container_name: str,
                      blob_name: str,
                      settings: LeaseSettings,
                      **kwargs) -> "BlobLeaseMaintainer":
        """Create a maintainer using the duration and cadence from ``settings``."""
        return cls(
            lease_operations,
            container_name,
            blob_name,
            settings.lease_duration,
            renewal_fraction=settings.renewal_fraction,
            max_consecutive_failures=settings.max_consecutive_failures,
            **kwargs,
        )

    @property
    def renewal_interval(self) -> float:
        """Seconds between two renewal attempts."""
        return self.lease_duration * self.renewal_fraction

    @property
    def is_released(self) -> bool:
        return self._released

    @property
    def is_maintaining(self) -> bool:
        """True while the background thread is alive and has not stopped."""
        with self._lock:
            thread = self._thread
            state = self.state
        return thread is not None and thread.is_alive() and state in (LeaseState.ACQUIRING, LeaseState.ACTIVE)

    def start(self) -> "BlobLeaseMaintainer":
        """Start maintaining the lease in the background, replacing any running renewal thread."""
        with self._start_lock:
            self._stop_renewals()

            with self._lock:
                if self._released:
                    raise RuntimeError(f"Lease on {self.container_name}/{self.blob_name} has already been released")
                self.state = LeaseState.ACTIVE if self.lease_id else LeaseState.ACQUIRING
                stop_event = threading.Event()
                thread = threading.Thread(
                    target=self._run,
                    args=(stop_event,),
                    name=f"lease-maintainer-{self.container_name}/{self.blob_name}",
                    daemon=True,
                )
                self._stop_event = stop_event
                self._thread = thread
                # started under the lock so release() never sees an unstarted thread
                thread.start()
        return self

    def wait_until_acquired(self, timeout: Optional[float] = None) -> str:
        """Block until the lease is held and return its id.

        Raises:
            Exception: Whatever the acquire call raised
            concurrent.futures.CancelledError: If the maintainer was released before acquiring
            concurrent.futures.TimeoutError: If ``timeout`` elapsed first
        """
        return self._acquired.result(timeout)

    def acquired_lease_id(self, timeout: Optional[float] = None) -> Optional[str]:
        """Return the lease id, waiting up to ``timeout`` for acquisition.

        Returns None if the maintainer was released before the lease was
        acquired. Acquisition errors are raised as by ``wait_until_acquired``.
        """
        if self._acquired.cancelled():
            return None
        return self.wait_until_acquired(timeout)

    def release(self, timeout: Optional[float] = None) -> None:
        """Stop renewing and release the lease.

        Releasing twice is a no-op. A failed release call is logged and
        ignored; the lease then expires on its own.

        If ``timeout`` elapses while the lease is still being acquired, this
        returns without waiting and the background thread releases the lease
        as soon as it has been acquired.

        Args:
            timeout: Maximum seconds to wait for the renewal thread to finish
        """
        with self._lock:
            if self._released:
                return
            self._released = True

        finished = self._stop_renewals(timeout)

        with self._lock:
            if self.state is not LeaseState.FAILED:
                self.state = LeaseState.STOPPED
            if self.lease_id is None and not finished:
                return
            if not self._acquired.done():
                self._acquired.cancel()
            lease_id = self._claim_lease()

        if lease_id is not None:
            self._release_lease(lease_id)

    def _claim_lease(self) -> Optional[str]:
        """Return the lease id to release, at most once. Call with ``_lock`` held."""
        if self.lease_id is None or self._lease_returned:
            return None
        self._lease_returned = True
        return self.lease_id

    def _release_lease(self, lease_id: str) -> None:
        try:
            self._lease_operations.lease_blob_release(self.container_name, self.blob_name, lease_id)
            self.logger.info(
                f"BlobLeaseMaintainer.release: Released lease {lease_id} on {self.container_name}/{self.blob_name}"
            )
        except Exception as e:
            self.logger.warning(
                f"BlobLeaseMaintainer.release: Failed to release lease {lease_id} on "
                f"{self.container_name}/{self.blob_name}, it will expire on its own: {e}"
            )

    def __enter__(self) -> "BlobLeaseMaintainer":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()

    def _stop_renewals(self, timeout: Optional[float] = None) -> bool:
        """Stop the renewal thread and wait for it. Returns False if it is still running."""
        with self._lock:
            thread, stop_event = self._thread, self._stop_event
            self._thread = None
            self._stop_event = None

        if stop_event is not None:
            stop_event.set()
        if thread is None or thread is threading.current_thread():
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _set_state(self, state: LeaseState) -> None:
        with self._lock:
            self.state = state

    def _run(self, stop_event: threading.Event) -> None:
        if self.lease_id is None and not self._acquire():
            return

        with self._lock:
            if not self._acquired.done():
                self._acquired.set_result(self.lease_id)
            released = self._released
            # release() gave up waiting for the acquisition, the lease is ours to return
            lease_id = self._claim_lease() if released else None
            if not released and not stop_event.is_set():
                self.state = LeaseState.ACTIVE

        if lease_id is not None:
            self._release_lease(lease_id)
        if released or stop_event.is_set():
            return

        self._renew_until_stopped(stop_event)

    def _acquire(self) -> bool:
        proposed_lease_id = self.proposed_lease_id or str(uuid.uuid4())
        try:
            lease_id = self._lease_operations.lease_blob_acquire(
                self.container_name, self.blob_name, self.lease_duration, proposed_lease_id
            )
        except Exception as e:
            self.logger.error(
                f"BlobLeaseMaintainer: Failed to acquire lease on {self.container_name}/{self.blob_name}: {e}"
            )
            with self._lock:
                self.state = LeaseState.FAILED
                if not self._acquired.done():
                    self._acquired.set_exception(e)
            return False

        with self._lock:
            self.lease_id = lease_id
            self.lease_acquired_on = datetime.now(timezone.utc)
        self.logger.info(
            f"BlobLeaseMaintainer: Acquired lease {lease_id} on {self.container_name}/{self.blob_name}"
        )
        return True

    def _renew_until_stopped(self, stop_event: threading.Event) -> None:
        interval = self.renewal_interval

        while True:
            with self._lock:
                self.next_renewal_deadline = datetime.now(timezone.utc) + timedelta(seconds=interval)

            if stop_event.wait(interval):
                return

            try:
                self._lease_operations.lease_blob_renew(self.container_name, self.blob_name, self.lease_id)
            except LEASE_GONE_EXCEPTIONS as e:
                self.logger.info(
                    f"BlobLeaseMaintainer: Lease {self.lease_id} on {self.container_name}/{self.blob_name} "
                    f"is gone, no longer renewing: {e}"
                )
                self._set_state(LeaseState.STOPPED)
                return
            except Exception as e:
                self.consecutive_failures += 1
                self.logger.warning(
                    f"BlobLeaseMaintainer: Renewal #{self.consecutive_failures} of lease {self.lease_id} on "
                    f"{self.container_name}/{self.blob_name} failed: {e}"
                )
                self._report_failure(e)

                if self.max_consecutive_failures is not None \
                        and self.consecutive_failures >= self.max_consecutive_failures:
                    self.logger.error(
                        f"BlobLeaseMaintainer: Giving up on lease {self.lease_id} on "
                        f"{self.container_name}/{self.blob_name} after {self.consecutive_failures} failed renewals"
                    )
                    self._set_state(LeaseState.STOPPED)
                    return
                continue

            self.consecutive_failures = 0
            self.renewal_count += 1
            self.logger.debug(
                f"BlobLeaseMaintainer: Renewed lease {self.lease_id} on {self.container_name}/{self.blob_name}"
            )

    def _report_failure(self, exception: BaseException) -> None:
        if self._exception_handler is None:
            return
        try:
            self._exception_handler(self, exception)
        except Exception:
            self.logger.exception("BlobLeaseMaintainer: Renewal failure handler raised")


def start_maintaining(lease_operations: BlobLeaseOperations,
                      container_name: str,
                      blob_name: str,
                      lease_duration: float,
                      existing_lease_id: Optional[str] = None,
                      on_renewal_failure: Optional[RenewalFailureHandler] = None,
                      renewal_fraction: float = DEFAULT_RENEWAL_FRACTION,
                      max_consecutive_failures: Optional[int] = None,
                      logger: Optional[Logger] = None) -> BlobLeaseMaintainer:
    """Acquire a lease on a blob (unless ``existing_lease_id`` is given) and keep it alive.

    Returns immediately; acquisition happens on the maintainer's background
    thread. Use ``wait_until_acquired`` to get the lease id or the acquisition error.
    """
    return BlobLeaseMaintainer(
        lease_operations,
        container_name,
        blob_name,
        lease_duration,
        lease_id=existing_lease_id,
        exception_handler=on_renewal_failure,
        renewal_fraction=renewal_fraction,
        max_consecutive_failures=max_consecutive_failures,
        logger=logger,
    ).start()


def release(maintainer: BlobLeaseMaintainer) -> None:
    """Stop maintaining and release the lease held by ``maintainer``."""
    maintainer.release()


def lease_new_or_existing_block_blob(lease_operations: BlobLeaseOperations,
                                     container_name: str,
                                     blob_name: str,
                                     lease_duration: int,
                                     proposed_lease_id: Optional[str] = None) -> str:
    """Acquire a lease on a block blob, creating an empty blob first if it does not exist.

    Returns:
        The id of the acquired lease
    """
    proposed_lease_id = proposed_lease_id or str(uuid.uuid4())
    try:
        return lease_operations.lease_blob_acquire(container_name, blob_name, lease_duration, proposed_lease_id)
    except BlobNotFoundAzureException:
        _logger.info(f"lease_new_or_existing_block_blob: Creating empty blob {container_name}/{blob_name} to lease")

    lease_operations.put_block_blob(container_name, blob_name, b"")
    return lease_operations.lease_blob_acquire(container_name, blob_name, lease_duration, proposed_lease_id)


def lease_new_or_existing_block_blob_and_maintain(lease_operations: BlobLeaseOperations,
                                                  container_name: str,
                                                  blob_name: str,
                                                  lease_duration: int,
                                                  proposed_lease_id: Optional[str] = None,
                                                  on_renewal_failure: Optional[RenewalFailureHandler] = None,
                                                  renewal_fraction: float = DEFAULT_RENEWAL_FRACTION,
                                                  max_consecutive_failures: Optional[int] = None) -> BlobLeaseMaintainer:
    """Lease a block blob (creating it if needed) and start maintaining that lease.

    Unlike ``start_maintaining`` the lease is acquired before this returns, so
    acquisition errors are raised here.
    """
    lease_id = lease_new_or_existing_block_blob(
        lease_operations, container_name, blob_name, lease_duration, proposed_lease_id
    )
    return start_maintaining(
        lease_operations,
        container_name,
        blob_name,
        lease_duration,
        existing_lease_id=lease_id,
        on_renewal_failure=on_renewal_failure,
        renewal_fraction=renewal_fraction,
        max_consecutive_failures=max_consecutive_failures,
    )
