"""Python classes for interacting with Azure Storage"""
from basic_azure_storage.storage_service import StorageService
from basic_azure_storage.retry_handler import AzureStorageRetryHandler
from basic_azure_storage.config import LeaseSettings, StorageSettings
from basic_azure_storage.exceptions import (
    AzureException,
    GeneralExceptionDuringAzureOperationException,
    RetriedException,
    StorageConfigError,
    UnidentifiedAzureException,
    UnrecognizedAzureException,
)
from basic_azure_storage.exception_resolver import (
    StorageServiceType,
    resolve,
    resolve_http_error,
    resolve_unidentified,
    translate_errors,
)
from basic_azure_storage.lease_maintainer import (
    BlobLeaseMaintainer,
    LeaseState,
    lease_new_or_existing_block_blob,
    lease_new_or_existing_block_blob_and_maintain,
    release,
    start_maintaining,
)

__all__ = [
    "StorageService",
    "AzureStorageRetryHandler",
    "LeaseSettings",
    "StorageSettings",
    "AzureException",
    "GeneralExceptionDuringAzureOperationException",
    "RetriedException",
    "StorageConfigError",
    "UnidentifiedAzureException",
    "UnrecognizedAzureException",
    "StorageServiceType",
    "resolve",
    "resolve_http_error",
    "resolve_unidentified",
    "translate_errors",
    "BlobLeaseMaintainer",
    "LeaseState",
    "lease_new_or_existing_block_blob",
    "lease_new_or_existing_block_blob_and_maintain",
    "release",
    "start_maintaining",
]
