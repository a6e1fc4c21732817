"""Tests for the SDK-backed storage service."""

from unittest.mock import MagicMock, patch

import pytest
from azure.core.exceptions import HttpResponseError, ServiceRequestError
from azure.storage.blob import BlobType

from basic_azure_storage.config import StorageSettings
from basic_azure_storage.exceptions import (
    GeneralExceptionDuringAzureOperationException,
    RetriedException,
    StorageConfigError,
    UnidentifiedAzureException,
    UnrecognizedAzureException,
)
from basic_azure_storage.retry_handler import AzureStorageRetryHandler
from basic_azure_storage.service_exceptions import (
    BlobNotFoundAzureException,
    ContainerNotFoundAzureException,
    LeaseAlreadyPresentAzureException,
    QueueBeingDeletedAzureException,
    ServerBusyAzureException,
)
from basic_azure_storage.storage_service import StorageService

CONNECTION_STRING = "DefaultEndpointsProtocol=https;AccountName=acct;AccountKey=a2V5;EndpointSuffix=core.windows.net"
LEASE_ID = "0f8fad5b-d9cb-469f-a165-70867728950e"


def _http_error(status_code, message, error_code):
    response = MagicMock()
    response.status_code = status_code
    response.reason = "Error"
    response.headers = {"x-ms-request-id": "req-1", "x-ms-error-code": error_code}
    response.text.return_value = ""
    return HttpResponseError(message=message, response=response)


@pytest.fixture
def blob_service():
    with patch("basic_azure_storage.storage_service.BlobServiceClient") as client_cls:
        yield client_cls.from_connection_string.return_value


@pytest.fixture
def blob_client(blob_service):
    return blob_service.get_blob_client.return_value


@pytest.fixture
def container_client(blob_service):
    return blob_service.get_container_client.return_value


@pytest.fixture
def lease_client_cls():
    with patch("basic_azure_storage.storage_service.BlobLeaseClient") as lease_cls:
        yield lease_cls


@pytest.fixture
def service():
    return StorageService(CONNECTION_STRING)


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("basic_azure_storage.retry_handler.time.sleep") as sleep:
        yield sleep


class TestInit:
    def test_from_connection_string(self, service):
        assert service.connection_string == CONNECTION_STRING
        assert service.retry_handler is None
        assert not service.enable_retry

    def test_from_settings(self):
        service = StorageService(StorageSettings("UseDevelopmentStorage=true"))
        assert "devstoreaccount1" in service.connection_string

    def test_empty_connection_string(self):
        with pytest.raises(StorageConfigError):
            StorageService("")

    def test_enable_retry_creates_handler(self):
        service = StorageService(CONNECTION_STRING, enable_retry=True)
        assert isinstance(service.retry_handler, AzureStorageRetryHandler)

    def test_create_with_retry(self):
        service = StorageService.create_with_retry(CONNECTION_STRING, max_retry_attempts=5)
        assert service.enable_retry
        assert service.retry_handler.max_attempts == 5

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("AZURE_STORAGE_CONNECTION_STRING", CONNECTION_STRING)
        assert StorageService.from_environment().connection_string == CONNECTION_STRING

    def test_invalid_connection_string_format(self):
        with patch("basic_azure_storage.storage_service.BlobServiceClient") as client_cls:
            client_cls.from_connection_string.side_effect = ValueError("bad format")
            with pytest.raises(ValueError, match="Invalid storage connection string format for Blob Service"):
                StorageService("not a connection string").get_blob_service_client()


class TestBlobLeases:
    def test_acquire(self, service, blob_service, blob_client):
        blob_client.acquire_lease.return_value.id = LEASE_ID

        assert service.lease_blob_acquire("locks", "job.lock", 30, LEASE_ID) == LEASE_ID
        blob_service.get_blob_client.assert_called_once_with(container="locks", blob="job.lock")
        blob_client.acquire_lease.assert_called_once_with(lease_duration=30, lease_id=LEASE_ID)

    def test_acquire_infinite(self, service, blob_client):
        blob_client.acquire_lease.return_value.id = LEASE_ID
        assert service.lease_blob_acquire("locks", "job.lock", -1) == LEASE_ID
        blob_client.acquire_lease.assert_called_once_with(lease_duration=-1, lease_id=None)

    @pytest.mark.parametrize("duration", [0, 10, 61])
    def test_acquire_invalid_duration(self, service, blob_client, duration):
        with pytest.raises(ValueError, match="lease_duration"):
            service.lease_blob_acquire("locks", "job.lock", duration)
        blob_client.acquire_lease.assert_not_called()

    def test_acquire_invalid_proposed_id(self, service, blob_client):
        with pytest.raises(ValueError, match="GUID"):
            service.lease_blob_acquire("locks", "job.lock", 30, "not-a-guid")

    def test_acquire_empty_names(self, service):
        with pytest.raises(ValueError, match="container_name"):
            service.lease_blob_acquire("", "job.lock", 30)

    def test_acquire_error_resolved(self, service, blob_client):
        error = _http_error(409, "There is already a lease present.", "LeaseAlreadyPresent")
        blob_client.acquire_lease.side_effect = error

        with pytest.raises(LeaseAlreadyPresentAzureException) as exc_info:
            service.lease_blob_acquire("locks", "job.lock", 30)
        assert exc_info.value.status_code == 409
        assert exc_info.value.request_id == "req-1"
        assert exc_info.value.__cause__ is error

    def test_acquire_missing_blob(self, service, blob_client):
        blob_client.acquire_lease.side_effect = _http_error(404, "The specified blob does not exist.", "BlobNotFound")
        with pytest.raises(BlobNotFoundAzureException):
            service.lease_blob_acquire("locks", "job.lock", 30)

    def test_no_response_is_unidentified(self, service, blob_client):
        blob_client.acquire_lease.side_effect = ServiceRequestError("Connection refused")
        with pytest.raises(UnidentifiedAzureException):
            service.lease_blob_acquire("locks", "job.lock", 30)

    def test_non_azure_error_wrapped(self, service, blob_client):
        blob_client.acquire_lease.side_effect = KeyError("oops")
        with pytest.raises(GeneralExceptionDuringAzureOperationException):
            service.lease_blob_acquire("locks", "job.lock", 30)

    def test_renew(self, service, blob_client, lease_client_cls):
        service.lease_blob_renew("locks", "job.lock", LEASE_ID)
        lease_client_cls.assert_called_once_with(blob_client, lease_id=LEASE_ID)
        lease_client_cls.return_value.renew.assert_called_once_with()

    def test_renew_requires_guid(self, service, lease_client_cls):
        with pytest.raises(ValueError, match="GUID"):
            service.lease_blob_renew("locks", "job.lock", "lease")
        lease_client_cls.assert_not_called()

    def test_release(self, service, blob_client, lease_client_cls):
        service.lease_blob_release("locks", "job.lock", LEASE_ID)
        lease_client_cls.assert_called_once_with(blob_client, lease_id=LEASE_ID)
        lease_client_cls.return_value.release.assert_called_once_with()

    def test_put_block_blob(self, service, blob_client):
        service.put_block_blob("locks", "job.lock")
        blob_client.upload_blob.assert_called_once_with(data=b"", blob_type=BlobType.BLOCKBLOB, overwrite=True)

    def test_code_overrides(self, blob_client):
        service = StorageService(CONNECTION_STRING, code_overrides={"ResourceNotFound": "BlobNotFound"})
        blob_client.acquire_lease.side_effect = _http_error(404, "Resource missing", "ResourceNotFound")
        with pytest.raises(BlobNotFoundAzureException):
            service.lease_blob_acquire("locks", "job.lock", 30)


class TestContainerLeases:
    def test_acquire(self, service, container_client):
        container_client.acquire_lease.return_value.id = LEASE_ID
        assert service.lease_container_acquire("locks") == LEASE_ID
        container_client.acquire_lease.assert_called_once_with(lease_duration=-1, lease_id=None)

    def test_container_errors(self, service, container_client):
        container_client.acquire_lease.side_effect = _http_error(
            404, "The specified container does not exist.", "ContainerNotFound"
        )
        with pytest.raises(ContainerNotFoundAzureException):
            service.lease_container_acquire("locks")

    def test_blob_only_codes_are_not_container_errors(self, service, container_client):
        container_client.acquire_lease.side_effect = _http_error(
            404, "The specified blob does not exist.", "BlobNotFound"
        )
        with pytest.raises(UnrecognizedAzureException):
            service.lease_container_acquire("locks")

    def test_renew_and_release(self, service, container_client, lease_client_cls):
        service.lease_container_renew("locks", LEASE_ID)
        service.lease_container_release("locks", LEASE_ID)
        lease_client_cls.assert_called_with(container_client, lease_id=LEASE_ID)
        lease_client_cls.return_value.renew.assert_called_once_with()
        lease_client_cls.return_value.release.assert_called_once_with()

    def test_break(self, service, container_client, lease_client_cls):
        lease_client_cls.return_value.break_lease.return_value = 10
        assert service.lease_container_break("locks", lease_break_period=10) == 10
        lease_client_cls.assert_called_once_with(container_client, lease_id=None)
        lease_client_cls.return_value.break_lease.assert_called_once_with(lease_break_period=10)

    def test_break_invalid_period(self, service):
        with pytest.raises(ValueError, match="lease_break_period"):
            service.lease_container_break("locks", lease_break_period=61)


class TestCreateIfNotExists:
    def test_create_container(self, service, container_client):
        assert service.create_container_if_not_exists("locks") is container_client
        container_client.create_container.assert_called_once_with()

    def test_container_already_exists(self, service, container_client):
        container_client.create_container.side_effect = _http_error(
            409, "The specified container already exists.", "ContainerAlreadyExists"
        )
        assert service.create_container_if_not_exists("locks") is container_client

    def test_container_other_error(self, service, container_client):
        container_client.create_container.side_effect = _http_error(503, "busy", "ServerBusy")
        with pytest.raises(ServerBusyAzureException):
            service.create_container_if_not_exists("locks")

    def test_create_queue(self, service):
        with patch("basic_azure_storage.storage_service.QueueClient") as queue_cls:
            queue_client = queue_cls.from_connection_string.return_value
            assert service.create_queue_if_not_exists("jobs") is queue_client
            queue_cls.from_connection_string.assert_called_once_with(conn_str=CONNECTION_STRING, queue_name="jobs")
            queue_client.create_queue.assert_called_once_with()

    def test_queue_already_exists(self, service):
        with patch("basic_azure_storage.storage_service.QueueClient") as queue_cls:
            queue_client = queue_cls.from_connection_string.return_value
            queue_client.create_queue.side_effect = _http_error(
                409, "The specified queue already exists.", "QueueAlreadyExists"
            )
            assert service.create_queue_if_not_exists("jobs") is queue_client

    def test_queue_being_deleted(self, service):
        with patch("basic_azure_storage.storage_service.QueueClient") as queue_cls:
            queue_cls.from_connection_string.return_value.create_queue.side_effect = _http_error(
                409, "The specified queue is being deleted.", "QueueBeingDeleted"
            )
            with pytest.raises(QueueBeingDeletedAzureException):
                service.create_queue_if_not_exists("jobs")

    def test_create_table(self, service):
        with patch("basic_azure_storage.storage_service.TableServiceClient") as table_service_cls:
            table_service = table_service_cls.from_connection_string.return_value
            table_client = service.create_table_if_not_exists("runs")
            table_service.create_table.assert_called_once_with(table_name="runs")
            assert table_client is table_service.get_table_client.return_value

    def test_table_already_exists(self, service):
        with patch("basic_azure_storage.storage_service.TableServiceClient") as table_service_cls:
            table_service = table_service_cls.from_connection_string.return_value
            table_service.create_table.side_effect = _http_error(
                409, "The table specified already exists.", "TableAlreadyExists"
            )
            assert service.create_table_if_not_exists("runs") is table_service.get_table_client.return_value

    def test_empty_names(self, service):
        with pytest.raises(ValueError):
            service.create_container_if_not_exists("")
        with pytest.raises(ValueError):
            service.create_queue_if_not_exists("")
        with pytest.raises(ValueError):
            service.create_table_if_not_exists("")


class TestRetries:
    def test_transient_failure_retried(self, blob_client, lease_client_cls, no_sleep):
        service = StorageService.create_with_retry(CONNECTION_STRING)
        lease_client_cls.return_value.renew.side_effect = [_http_error(503, "busy", "ServerBusy"), None]

        service.lease_blob_renew("locks", "job.lock", LEASE_ID)
        assert lease_client_cls.return_value.renew.call_count == 2
        assert no_sleep.call_count == 1

    def test_exhausted_retries_carry_history(self, blob_client, lease_client_cls):
        service = StorageService.create_with_retry(CONNECTION_STRING, max_retry_attempts=3)
        lease_client_cls.return_value.renew.side_effect = _http_error(503, "busy", "ServerBusy")

        with pytest.raises(RetriedException) as exc_info:
            service.lease_blob_renew("locks", "job.lock", LEASE_ID)

        final = exc_info.value.final_exception
        assert isinstance(final, ServerBusyAzureException)
        assert final.retry_count == 2
        assert all(isinstance(e, ServerBusyAzureException) for e in final.retry_history)

    def test_permanent_failure_not_retried(self, blob_client):
        service = StorageService.create_with_retry(CONNECTION_STRING)
        blob_client.acquire_lease.side_effect = _http_error(404, "The specified blob does not exist.", "BlobNotFound")

        with pytest.raises(BlobNotFoundAzureException) as exc_info:
            service.lease_blob_acquire("locks", "job.lock", 30)
        assert blob_client.acquire_lease.call_count == 1
        assert exc_info.value.retry_count == 0
