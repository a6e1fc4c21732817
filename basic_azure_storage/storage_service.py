"""Service for interacting with Azure Storage"""
import uuid
from logging import Logger, getLogger
from typing import Callable, Mapping, Optional, Tuple, TypeVar, Union

from azure.data.tables import TableClient, TableServiceClient
from azure.storage.blob import BlobClient, BlobLeaseClient, BlobServiceClient, BlobType, ContainerClient
from azure.storage.queue import QueueClient

from .config import StorageSettings, validate_lease_duration
from .exception_resolver import CONTAINER_LEASE_ERRORS, ErrorTable, StorageServiceType, translate_errors
from .retry_handler import AzureStorageRetryHandler
from .service_exceptions import (
    ContainerAlreadyExistsAzureException,
    QueueAlreadyExistsAzureException,
    TableAlreadyExistsAzureException,
)

T = TypeVar("T")


def _require(**values: Optional[str]) -> None:
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValueError(f"{', '.join(missing)} cannot be empty.")


def _require_guid(name: str, value: Optional[str]) -> None:
    if value is None:
        return
    try:
        uuid.UUID(value)
    except (ValueError, TypeError, AttributeError) as e:
        raise ValueError(f"{name} must be a GUID, got '{value}'") from e


# noinspection PyMethodMayBeStatic
class StorageService:
    """Service for interacting with Azure Storage.

    Every SDK call goes through the exception resolver, so failures surface as
    ``AzureException`` subclasses rather than ``azure.core`` exceptions. When
    retries are enabled each attempt receives the exceptions of the attempts
    before it, and the exception that finally escapes carries that history.
    """
    def __init__(self,
                 settings: Union[StorageSettings, str],
                 retry_handler: Optional[AzureStorageRetryHandler] = None,
                 enable_retry: bool = False,
                 code_overrides: Optional[Mapping[str, str]] = None,
                 logger: Optional[Logger] = None) -> None:
        """Initialize the Storage Service

        Args:
            settings: Storage settings, or a connection string for the storage account.
            retry_handler: Optional retry handler, a default one is created when enable_retry is set
            enable_retry: Whether to retry transient failures (default: False)
            code_overrides: Error codes to replace before resolving, for responses that carry the wrong code
            logger: Optional logger instance
        """
        if isinstance(settings, str):
            settings = StorageSettings(settings)
        self.settings = settings
        self.connection_string = settings.connection_string
        self.logger = logger or getLogger(__name__)

        self.retry_handler = retry_handler
        self.enable_retry = enable_retry
        if self.enable_retry and not self.retry_handler:
            self.retry_handler = AzureStorageRetryHandler(logger=self.logger)

        self.code_overrides = dict(code_overrides or {})

    @classmethod
    def create_with_retry(cls, connection_string: str, max_retry_attempts: int = 3) -> 'StorageService':
        """
        Create a StorageService instance that retries transient failures.

        Args:
            connection_string: Azure Storage connection string
            max_retry_attempts: Maximum number of attempts per operation (default: 3)

        Returns:
            StorageService instance with retries enabled
        """
        return cls(
            settings=connection_string,
            retry_handler=AzureStorageRetryHandler(max_attempts=max_retry_attempts),
            enable_retry=True
        )

    @classmethod
    def from_environment(cls, **kwargs) -> 'StorageService':
        """Create a StorageService from the AZURE_STORAGE_CONNECTION_STRING environment variable."""
        return cls(settings=StorageSettings.from_environment(), **kwargs)

    def _call(self,
              operation_id: str,
              service_type: StorageServiceType,
              operation: Callable[[], T],
              table: Optional[ErrorTable] = None) -> T:
        """Run an SDK call with error translation, and with retries when enabled."""
        def attempt(retry_history: Tuple[BaseException, ...]) -> T:
            with translate_errors(service_type, retry_history, self.code_overrides, table):
                return operation()

        if self.retry_handler and self.enable_retry:
            return self.retry_handler.execute(attempt, operation_id=operation_id)
        return attempt(())

    def get_blob_service_client(self) -> BlobServiceClient:
        """Returns a BlobServiceClient for the storage account."""
        try:
            return BlobServiceClient.from_connection_string(conn_str=self.connection_string)
        except ValueError as e:
            self.logger.error(
                msg=f"StorageService.get_blob_service_client: Invalid storage connection string format for Blob "
                    f"Service: {e}"
            )
            raise ValueError(f"Invalid storage connection string format for Blob Service: {e}") from e

    def get_container_client(self, container_name: str) -> ContainerClient:
        """Returns a ContainerClient without creating the container."""
        return self.get_blob_service_client().get_container_client(container_name)

    def get_blob_client(self, container_name: str, blob_name: str) -> BlobClient:
        """Returns a BlobClient without creating the blob or its container."""
        return self.get_blob_service_client().get_blob_client(container=container_name, blob=blob_name)

    def create_container_if_not_exists(self, container_name: str) -> ContainerClient:
        """Get the blob storage container client, creating the container if needed.

        Args:
            container_name (str): Name of the blob storage container

        Returns:
            ContainerClient: Client for the blob storage container.
        """
        _require(container_name=container_name)
        container_client = self.get_container_client(container_name)

        try:
            self._call("container_create", StorageServiceType.BLOB, container_client.create_container)
        except ContainerAlreadyExistsAzureException:
            self.logger.info(
                msg=f"StorageService.create_container_if_not_exists: Container '{container_name}' already exists"
            )

        return container_client

    def put_block_blob(self, container_name: str, blob_name: str, data: bytes = b"") -> None:
        """Upload ``data`` as a block blob, replacing any existing blob.

        Args:
            container_name: The name of the blob container.
            blob_name: The name of the blob.
            data: Content of the blob, empty by default.
        """
        _require(container_name=container_name, blob_name=blob_name)
        blob_client = self.get_blob_client(container_name, blob_name)

        self._call(
            "blob_put",
            StorageServiceType.BLOB,
            lambda: blob_client.upload_blob(data=data, blob_type=BlobType.BLOCKBLOB, overwrite=True),
        )
        self.logger.info(
            msg=f"StorageService.put_block_blob: Uploaded {len(data)} bytes to {container_name}/{blob_name}"
        )

    def lease_blob_acquire(self,
                           container_name: str,
                           blob_name: str,
                           lease_duration: int,
                           proposed_lease_id: Optional[str] = None) -> str:
        """
        Acquire a lease on a blob.

        Args:
            container_name: The name of the blob container.
            blob_name: The name of the blob.
            lease_duration: -1 for an infinite lease, otherwise 15 to 60 seconds.
            proposed_lease_id: GUID to use as the lease id.

        Returns:
            The lease id.

        Raises:
            ValueError: If a name, the duration or the proposed lease id is invalid.
            AzureException: If the service rejected the request.
        """
        _require(container_name=container_name, blob_name=blob_name)
        validate_lease_duration(lease_duration)
        _require_guid("proposed_lease_id", proposed_lease_id)
        blob_client = self.get_blob_client(container_name, blob_name)

        lease: BlobLeaseClient = self._call(
            "blob_lease_acquire",
            StorageServiceType.BLOB,
            lambda: blob_client.acquire_lease(lease_duration=lease_duration, lease_id=proposed_lease_id),
        )
        self.logger.info(
            msg=f"StorageService.lease_blob_acquire: Acquired lease {lease.id} on {container_name}/{blob_name}"
        )
        return lease.id

    def lease_blob_renew(self, container_name: str, blob_name: str, lease_id: str) -> None:
        """Renew a lease held on a blob."""
        _require(container_name=container_name, blob_name=blob_name, lease_id=lease_id)
        _require_guid("lease_id", lease_id)
        lease = BlobLeaseClient(self.get_blob_client(container_name, blob_name), lease_id=lease_id)

        self._call("blob_lease_renew", StorageServiceType.BLOB, lease.renew)
        self.logger.debug(
            msg=f"StorageService.lease_blob_renew: Renewed lease {lease_id} on {container_name}/{blob_name}"
        )

    def lease_blob_release(self, container_name: str, blob_name: str, lease_id: str) -> None:
        """Release a lease held on a blob."""
        _require(container_name=container_name, blob_name=blob_name, lease_id=lease_id)
        _require_guid("lease_id", lease_id)
        lease = BlobLeaseClient(self.get_blob_client(container_name, blob_name), lease_id=lease_id)

        self._call("blob_lease_release", StorageServiceType.BLOB, lease.release)
        self.logger.info(
            msg=f"StorageService.lease_blob_release: Released lease {lease_id} on {container_name}/{blob_name}"
        )

    def lease_container_acquire(self,
                                container_name: str,
                                lease_duration: int = -1,
                                proposed_lease_id: Optional[str] = None) -> str:
        """
        Acquire a lease on a container.

        Args:
            container_name: The name of the blob container.
            lease_duration: -1 for an infinite lease (default), otherwise 15 to 60 seconds.
            proposed_lease_id: GUID to use as the lease id.

        Returns:
            The lease id.
        """
        _require(container_name=container_name)
        validate_lease_duration(lease_duration)
        _require_guid("proposed_lease_id", proposed_lease_id)
        container_client = self.get_container_client(container_name)

        lease: BlobLeaseClient = self._call(
            "container_lease_acquire",
            StorageServiceType.BLOB,
            lambda: container_client.acquire_lease(lease_duration=lease_duration, lease_id=proposed_lease_id),
            table=CONTAINER_LEASE_ERRORS,
        )
        self.logger.info(
            msg=f"StorageService.lease_container_acquire: Acquired lease {lease.id} on container {container_name}"
        )
        return lease.id

    def lease_container_renew(self, container_name: str, lease_id: str) -> None:
        """Renew a lease held on a container."""
        _require(container_name=container_name, lease_id=lease_id)
        _require_guid("lease_id", lease_id)
        lease = BlobLeaseClient(self.get_container_client(container_name), lease_id=lease_id)

        self._call("container_lease_renew", StorageServiceType.BLOB, lease.renew, table=CONTAINER_LEASE_ERRORS)

    def lease_container_release(self, container_name: str, lease_id: str) -> None:
        """Release a lease held on a container."""
        _require(container_name=container_name, lease_id=lease_id)
        _require_guid("lease_id", lease_id)
        lease = BlobLeaseClient(self.get_container_client(container_name), lease_id=lease_id)

        self._call("container_lease_release", StorageServiceType.BLOB, lease.release, table=CONTAINER_LEASE_ERRORS)
        self.logger.info(
            msg=f"StorageService.lease_container_release: Released lease {lease_id} on container {container_name}"
        )

    def lease_container_break(self,
                              container_name: str,
                              lease_id: Optional[str] = None,
                              lease_break_period: Optional[int] = None) -> int:
        """
        Break the lease on a container.

        Args:
            container_name: The name of the blob container.
            lease_id: Id of the lease being broken, if known.
            lease_break_period: Seconds (0 to 60) the lease stays in breaking state, None for the remaining duration.

        Returns:
            Seconds until the lease is broken.
        """
        _require(container_name=container_name)
        _require_guid("lease_id", lease_id)
        if lease_break_period is not None and not 0 <= lease_break_period <= 60:
            raise ValueError(f"lease_break_period must be between 0 and 60 seconds, got {lease_break_period}")
        lease = BlobLeaseClient(self.get_container_client(container_name), lease_id=lease_id)

        remaining: int = self._call(
            "container_lease_break",
            StorageServiceType.BLOB,
            lambda: lease.break_lease(lease_break_period=lease_break_period),
            table=CONTAINER_LEASE_ERRORS,
        )
        self.logger.info(
            msg=f"StorageService.lease_container_break: Breaking lease on container {container_name}, "
                f"{remaining}s remaining"
        )
        return remaining

    def create_queue_if_not_exists(self, queue_name: str) -> QueueClient:
        """Get the queue client, creating the queue if needed.

        Args:
            queue_name (str): Name of the queue
        Returns:
            QueueClient: Client for the queue.
        """
        _require(queue_name=queue_name)
        queue_client = QueueClient.from_connection_string(  # Create queue client
            conn_str=self.connection_string,  # Connection string
            queue_name=queue_name  # Queue name
        )

        try:
            self._call("queue_create", StorageServiceType.QUEUE, queue_client.create_queue)
        except QueueAlreadyExistsAzureException:  # If queue already exists, log info
            self.logger.info(
                msg=f"StorageService.create_queue_if_not_exists: Queue '{queue_name}' already exists"
            )

        return queue_client

    def get_table_service_client(self) -> TableServiceClient:
        """Returns an authenticated TableServiceClient instance."""
        try:
            return TableServiceClient.from_connection_string(conn_str=self.connection_string)
        except ValueError as e:
            self.logger.error(
                msg=f"StorageService.get_table_service_client: Invalid storage connection string format for Table "
                    f"Service: {e}"
            )
            raise ValueError(f"Invalid storage connection string format for Table Service: {e}") from e

    def create_table_if_not_exists(self, table_name: str) -> TableClient:
        """
        Creates a table if it does not already exist.

        Args:
            table_name: The name of the table to create.

        Returns:
            TableClient: Client for the table.
        """
        _require(table_name=table_name)
        table_service_client = self.get_table_service_client()

        try:
            self._call(
                "table_create",
                StorageServiceType.TABLE,
                lambda: table_service_client.create_table(table_name=table_name),
            )
            self.logger.info(f"StorageService.create_table_if_not_exists: Table '{table_name}' created.")
        except TableAlreadyExistsAzureException:
            self.logger.debug(f"StorageService.create_table_if_not_exists: Table '{table_name}' already exists.")

        return table_service_client.get_table_client(table_name)
