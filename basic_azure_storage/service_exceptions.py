"""Exception types for the documented Azure Storage error codes.

One class per error code, grouped by the service that documents it, followed by
the ``(exception type, error code, description)`` entries the resolver builds its
lookup tables from. Descriptions are copied verbatim from the Azure Storage REST
API error code pages because the service sometimes omits the code and only the
message identifies the error.

Azure documents ``ConditionNotMet`` and ``InsufficientAccountPermissions`` more
than once with different meanings. Those entries are keyed by a disambiguated
name (``ConditionNotMetForRead`` ...), so the raw wire code is resolved through
its description.
"""

from .exceptions import AzureException


# Common REST API error codes

class ConditionNotMetForReadAzureException(AzureException):
    """ConditionNotMet (304) on a read operation."""


class MissingRequiredHeaderAzureException(AzureException):
    """MissingRequiredHeader (400)."""


class MissingRequiredXmlNodeAzureException(AzureException):
    """MissingRequiredXmlNode (400)."""


class UnsupportedHeaderAzureException(AzureException):
    """UnsupportedHeader (400)."""


class UnsupportedXmlNodeAzureException(AzureException):
    """UnsupportedXmlNode (400)."""


class InvalidHeaderValueAzureException(AzureException):
    """InvalidHeaderValue (400)."""


class InvalidXmlNodeValueAzureException(AzureException):
    """InvalidXmlNodeValue (400)."""


class MissingRequiredQueryParameterAzureException(AzureException):
    """MissingRequiredQueryParameter (400)."""


class UnsupportedQueryParameterAzureException(AzureException):
    """UnsupportedQueryParameter (400)."""


class InvalidQueryParameterValueAzureException(AzureException):
    """InvalidQueryParameterValue (400)."""


class OutOfRangeQueryParameterValueAzureException(AzureException):
    """OutOfRangeQueryParameterValue (400)."""


class RequestUrlFailedToParseAzureException(AzureException):
    """RequestUrlFailedToParse (400)."""


class InvalidUriAzureException(AzureException):
    """InvalidUri (400)."""


class InvalidHttpVerbAzureException(AzureException):
    """InvalidHttpVerb (400)."""


class EmptyMetadataKeyAzureException(AzureException):
    """EmptyMetadataKey (400)."""


class InvalidXmlDocumentAzureException(AzureException):
    """InvalidXmlDocument (400)."""


class Md5MismatchAzureException(AzureException):
    """Md5Mismatch (400)."""


class InvalidMd5AzureException(AzureException):
    """InvalidMd5 (400)."""


class OutOfRangeInputAzureException(AzureException):
    """OutOfRangeInput (400)."""


class InvalidAuthenticationInfoAzureException(AzureException):
    """InvalidAuthenticationInfo (400)."""


class InvalidInputAzureException(AzureException):
    """InvalidInput (400)."""


class InvalidMetadataAzureException(AzureException):
    """InvalidMetadata (400)."""


class MetadataTooLargeAzureException(AzureException):
    """MetadataTooLarge (400)."""


class AuthenticationFailedAzureException(AzureException):
    """AuthenticationFailed (403)."""


class InsufficientAccountPermissionsForReadAzureException(AzureException):
    """InsufficientAccountPermissions (403) for reads from the secondary location."""


class InsufficientAccountPermissionsForWriteAzureException(AzureException):
    """InsufficientAccountPermissions (403) for writes to the secondary location."""


class ResourceNotFoundAzureException(AzureException):
    """ResourceNotFound (404)."""


class AccountIsDisabledAzureException(AzureException):
    """AccountIsDisabled (403)."""


class UnsupportedHttpVerbAzureException(AzureException):
    """UnsupportedHttpVerb (405)."""


class AccountAlreadyExistsAzureException(AzureException):
    """AccountAlreadyExists (409)."""


class AccountBeingCreatedAzureException(AzureException):
    """AccountBeingCreated (409)."""


class InsufficientAccountPermissionsForExecuteAzureException(AzureException):
    """InsufficientAccountPermissions (403) for the requested operation."""


class MissingContentLengthHeaderAzureException(AzureException):
    """MissingContentLengthHeader (411)."""


class ConditionNotMetForWriteAzureException(AzureException):
    """ConditionNotMet (412) on a write operation."""


class MultipleConditionHeadersNotSupportedAzureException(AzureException):
    """MultipleConditionHeadersNotSupported (400)."""


class RequestBodyTooLargeAzureException(AzureException):
    """RequestBodyTooLarge (413)."""


class InvalidRangeAzureException(AzureException):
    """InvalidRange (416)."""


class InternalErrorAzureException(AzureException):
    """InternalError (500). Safe to retry."""


class OperationTimedOutAzureException(AzureException):
    """OperationTimedOut (500). Safe to retry."""


class ServerBusyAzureException(AzureException):
    """ServerBusy (503). The account is being throttled; retry with backoff."""


# Queue service error codes

class MessageTooLargeAzureException(AzureException):
    """MessageTooLarge (400)."""


class InvalidMarkerAzureException(AzureException):
    """InvalidMarker (400)."""


class PopReceiptMismatchAzureException(AzureException):
    """PopReceiptMismatch (400)."""


class QueueNotFoundAzureException(AzureException):
    """QueueNotFound (404)."""


class MessageNotFoundAzureException(AzureException):
    """MessageNotFound (404)."""


class QueueDisabledAzureException(AzureException):
    """QueueDisabled (409)."""


class QueueAlreadyExistsAzureException(AzureException):
    """QueueAlreadyExists (409)."""


class QueueBeingDeletedAzureException(AzureException):
    """QueueBeingDeleted (409)."""


class QueueNotEmptyAzureException(AzureException):
    """QueueNotEmpty (409)."""


# Blob service error codes

class InvalidBlobOrBlockAzureException(AzureException):
    """InvalidBlobOrBlock (400)."""


class InvalidBlockIdAzureException(AzureException):
    """InvalidBlockId (400)."""


class InvalidBlockListAzureException(AzureException):
    """InvalidBlockList (400)."""


class ContainerNotFoundAzureException(AzureException):
    """ContainerNotFound (404)."""


class BlobNotFoundAzureException(AzureException):
    """BlobNotFound (404)."""


class ContainerAlreadyExistsAzureException(AzureException):
    """ContainerAlreadyExists (409)."""


class ContainerDisabledAzureException(AzureException):
    """ContainerDisabled (409)."""


class ContainerBeingDeletedAzureException(AzureException):
    """ContainerBeingDeleted (409)."""


class BlobAlreadyExistsAzureException(AzureException):
    """BlobAlreadyExists (409)."""


class LeaseNotPresentWithBlobOperationAzureException(AzureException):
    """LeaseNotPresentWithBlobOperation (412)."""


class LeaseNotPresentWithContainerOperationAzureException(AzureException):
    """LeaseNotPresentWithContainerOperation (412)."""


class LeaseLostAzureException(AzureException):
    """LeaseLost (412). The lease named in the request has expired."""


class LeaseIdMismatchWithBlobOperationAzureException(AzureException):
    """LeaseIdMismatchWithBlobOperation (412)."""


class LeaseIdMismatchWithContainerOperationAzureException(AzureException):
    """LeaseIdMismatchWithContainerOperation (412)."""


class LeaseIdMissingAzureException(AzureException):
    """LeaseIdMissing (412)."""


class LeaseNotPresentWithLeaseOperationAzureException(AzureException):
    """LeaseNotPresentWithLeaseOperation (409)."""


class LeaseIdMismatchWithLeaseOperationAzureException(AzureException):
    """LeaseIdMismatchWithLeaseOperation (409)."""


class LeaseAlreadyPresentAzureException(AzureException):
    """LeaseAlreadyPresent (409)."""


class LeaseAlreadyBrokenAzureException(AzureException):
    """LeaseAlreadyBroken (409)."""


class LeaseIsBrokenAndCannotBeRenewedAzureException(AzureException):
    """LeaseIsBrokenAndCannotBeRenewed (409)."""


class LeaseIsBreakingAndCannotBeAcquiredAzureException(AzureException):
    """LeaseIsBreakingAndCannotBeAcquired (409)."""


class LeaseIsBreakingAndCannotBeChangedAzureException(AzureException):
    """LeaseIsBreakingAndCannotBeChanged (409)."""


class InfiniteLeaseDurationRequiredAzureException(AzureException):
    """InfiniteLeaseDurationRequired (412)."""


class SnapshotsPresentAzureException(AzureException):
    """SnapshotsPresent (409)."""


class InvalidBlobTypeAzureException(AzureException):
    """InvalidBlobType (409)."""


class InvalidVersionForPageBlobOperationAzureException(AzureException):
    """InvalidVersionForPageBlobOperation (400)."""


class InvalidPageRangeAzureException(AzureException):
    """InvalidPageRange (416)."""


class SequenceNumberConditionNotMetAzureException(AzureException):
    """SequenceNumberConditionNotMet (412)."""


class SequenceNumberIncrementTooLargeAzureException(AzureException):
    """SequenceNumberIncrementTooLarge (409)."""


class SourceConditionNotMetAzureException(AzureException):
    """SourceConditionNotMet (412)."""


class TargetConditionNotMetAzureException(AzureException):
    """TargetConditionNotMet (412)."""


class CopyAcrossAccountsNotSupportedAzureException(AzureException):
    """CopyAcrossAccountsNotSupported (400)."""


class CannotVerifyCopySourceAzureException(AzureException):
    """CannotVerifyCopySource (500)."""


class PendingCopyOperationAzureException(AzureException):
    """PendingCopyOperation (409)."""


class NoPendingCopyOperationAzureException(AzureException):
    """NoPendingCopyOperation (409)."""


class CopyIdMismatchAzureException(AzureException):
    """CopyIdMismatch (409)."""


# Table service error codes

class DuplicatePropertiesSpecifiedAzureException(AzureException):
    """DuplicatePropertiesSpecified (400)."""


class EntityAlreadyExistsAzureException(AzureException):
    """EntityAlreadyExists (409)."""


class EntityTooLargeAzureException(AzureException):
    """EntityTooLarge (400)."""


class HostInformationNotPresentAzureException(AzureException):
    """HostInformationNotPresent (400)."""


class InvalidValueTypeAzureException(AzureException):
    """InvalidValueType (400)."""


class JsonFormatNotSupportedAzureException(AzureException):
    """JsonFormatNotSupported (415)."""


class MethodNotAllowedAzureException(AzureException):
    """MethodNotAllowed (405)."""


class NotImplementedAzureException(AzureException):
    """NotImplemented (501)."""


class PropertiesNeedValueAzureException(AzureException):
    """PropertiesNeedValue (400)."""


class PropertyNameInvalidAzureException(AzureException):
    """PropertyNameInvalid (400)."""


class PropertyNameTooLongAzureException(AzureException):
    """PropertyNameTooLong (400)."""


class PropertyValueTooLargeAzureException(AzureException):
    """PropertyValueTooLarge (400)."""


class TableAlreadyExistsAzureException(AzureException):
    """TableAlreadyExists (409)."""


class TableBeingDeletedAzureException(AzureException):
    """TableBeingDeleted (409)."""


class TableNotFoundAzureException(AzureException):
    """TableNotFound (404)."""


class TooManyPropertiesAzureException(AzureException):
    """TooManyProperties (400)."""


class UpdateConditionNotSatisfiedAzureException(AzureException):
    """UpdateConditionNotSatisfied (412)."""


class XMethodIncorrectCountAzureException(AzureException):
    """XMethodIncorrectCount (400)."""


class XMethodIncorrectValueAzureException(AzureException):
    """XMethodIncorrectValue (400)."""


class XMethodNotUsingPostAzureException(AzureException):
    """XMethodNotUsingPost (400)."""


COMMON_ERROR_ENTRIES = (
    (ConditionNotMetForReadAzureException, "ConditionNotMetForRead",
     "The condition specified in the conditional header(s) was not met for a read operation."),
    (MissingRequiredHeaderAzureException, "MissingRequiredHeader",
     "A required HTTP header was not specified."),
    (MissingRequiredXmlNodeAzureException, "MissingRequiredXmlNode",
     "A required XML node was not specified in the request body."),
    (UnsupportedHeaderAzureException, "UnsupportedHeader",
     "One of the HTTP headers specified in the request is not supported."),
    (UnsupportedXmlNodeAzureException, "UnsupportedXmlNode",
     "One of the XML nodes specified in the request body is not supported."),
    (InvalidHeaderValueAzureException, "InvalidHeaderValue",
     "The value provided for one of the HTTP headers was not in the correct format."),
    (InvalidXmlNodeValueAzureException, "InvalidXmlNodeValue",
     "The value provided for one of the XML nodes in the request body was not in the correct format."),
    (MissingRequiredQueryParameterAzureException, "MissingRequiredQueryParameter",
     "A required query parameter was not specified for this request."),
    (UnsupportedQueryParameterAzureException, "UnsupportedQueryParameter",
     "One of the query parameters specified in the request URI is not supported."),
    (InvalidQueryParameterValueAzureException, "InvalidQueryParameterValue",
     "An invalid value was specified for one of the query parameters in the request URI."),
    (OutOfRangeQueryParameterValueAzureException, "OutOfRangeQueryParameterValue",
     "A query parameter specified in the request URI is outside the permissible range."),
    (RequestUrlFailedToParseAzureException, "RequestUrlFailedToParse",
     "The url in the request could not be parsed."),
    (InvalidUriAzureException, "InvalidUri",
     "The requested URI does not represent any resource on the server."),
    (InvalidHttpVerbAzureException, "InvalidHttpVerb",
     "The HTTP verb specified was not recognized by the server."),
    (EmptyMetadataKeyAzureException, "EmptyMetadataKey",
     "The key for one of the metadata key-value pairs is empty."),
    (InvalidXmlDocumentAzureException, "InvalidXmlDocument",
     "The specified XML is not syntactically valid."),
    (Md5MismatchAzureException, "Md5Mismatch",
     "The MD5 value specified in the request did not match the MD5 value calculated by the server."),
    (InvalidMd5AzureException, "InvalidMd5",
     "The MD5 value specified in the request is invalid. The MD5 value must be 128 bits and Base64-encoded."),
    (OutOfRangeInputAzureException, "OutOfRangeInput",
     "One of the request inputs is out of range."),
    (InvalidAuthenticationInfoAzureException, "InvalidAuthenticationInfo",
     "The authentication information was not provided in the correct format. "
     "Verify the value of Authorization header."),
    (InvalidInputAzureException, "InvalidInput",
     "One of the request inputs is not valid."),
    (InvalidMetadataAzureException, "InvalidMetadata",
     "The specified metadata is invalid. It includes characters that are not permitted."),
    (MetadataTooLargeAzureException, "MetadataTooLarge",
     "The size of the specified metadata exceeds the maximum size permitted."),
    (AuthenticationFailedAzureException, "AuthenticationFailed",
     "Server failed to authenticate the request. "
     "Make sure the value of the Authorization header is formed correctly including the signature."),
    (InsufficientAccountPermissionsForReadAzureException, "InsufficientAccountPermissionsForRead",
     "Read-access geo-redundant replication is not enabled for the account."),
    (InsufficientAccountPermissionsForWriteAzureException, "InsufficientAccountPermissionsForWrite",
     "Write operations to the secondary location are not allowed."),
    (ResourceNotFoundAzureException, "ResourceNotFound",
     "The specified resource does not exist."),
    (AccountIsDisabledAzureException, "AccountIsDisabled",
     "The specified account is disabled."),
    (UnsupportedHttpVerbAzureException, "UnsupportedHttpVerb",
     "The resource doesn't support the specified HTTP verb."),
    (AccountAlreadyExistsAzureException, "AccountAlreadyExists",
     "The specified account already exists."),
    (AccountBeingCreatedAzureException, "AccountBeingCreated",
     "The specified account is in the process of being created."),
    (InsufficientAccountPermissionsForExecuteAzureException, "InsufficientAccountPermissionsForExecute",
     "The account being accessed does not have sufficient permissions to execute this operation."),
    (MissingContentLengthHeaderAzureException, "MissingContentLengthHeader",
     "The Content-Length header was not specified."),
    (ConditionNotMetForWriteAzureException, "ConditionNotMetForWrite",
     "The condition specified in the conditional header(s) was not met for a write operation."),
    (MultipleConditionHeadersNotSupportedAzureException, "MultipleConditionHeadersNotSupported",
     "Multiple condition headers are not supported."),
    (RequestBodyTooLargeAzureException, "RequestBodyTooLarge",
     "The size of the request body exceeds the maximum size permitted."),
    (InvalidRangeAzureException, "InvalidRange",
     "The range specified is invalid for the current size of the resource."),
    (InternalErrorAzureException, "InternalError",
     "The server encountered an internal error. Please retry the request."),
    (OperationTimedOutAzureException, "OperationTimedOut",
     "The operation could not be completed within the permitted time."),
    (ServerBusyAzureException, "ServerBusy",
     "The server is currently unable to receive requests. Please retry your request."),
)

QUEUE_ERROR_ENTRIES = (
    (MessageTooLargeAzureException, "MessageTooLarge",
     "The message exceeds the maximum allowed size."),
    (InvalidMarkerAzureException, "InvalidMarker",
     "The specified marker is invalid."),
    (PopReceiptMismatchAzureException, "PopReceiptMismatch",
     "The specified pop receipt did not match the pop receipt for a dequeued message."),
    (QueueNotFoundAzureException, "QueueNotFound",
     "The specified queue does not exist."),
    (MessageNotFoundAzureException, "MessageNotFound",
     "The specified message does not exist."),
    (QueueDisabledAzureException, "QueueDisabled",
     "The specified queue has been disabled by the administrator."),
    (QueueAlreadyExistsAzureException, "QueueAlreadyExists",
     "The specified queue already exists."),
    (QueueBeingDeletedAzureException, "QueueBeingDeleted",
     "The specified queue is being deleted."),
    (QueueNotEmptyAzureException, "QueueNotEmpty",
     "The specified queue is not empty."),
)

# Lease related blob entries, shared by the blob table and the container lease table
LEASE_ERROR_ENTRIES = (
    (ContainerNotFoundAzureException, "ContainerNotFound",
     "The specified container does not exist."),
    (ContainerBeingDeletedAzureException, "ContainerBeingDeleted",
     "The specified container is being deleted."),
    (LeaseNotPresentWithContainerOperationAzureException, "LeaseNotPresentWithContainerOperation",
     "There is currently no lease on the container."),
    (LeaseLostAzureException, "LeaseLost",
     "A lease ID was specified, but the lease for the blob/container has expired."),
    (LeaseIdMismatchWithContainerOperationAzureException, "LeaseIdMismatchWithContainerOperation",
     "The lease ID specified did not match the lease ID for the container."),
    (LeaseIdMissingAzureException, "LeaseIdMissing",
     "There is currently a lease on the blob/container and no lease ID was specified in the request."),
    (LeaseNotPresentWithLeaseOperationAzureException, "LeaseNotPresentWithLeaseOperation",
     "There is currently no lease on the blob/container."),
    (LeaseIdMismatchWithLeaseOperationAzureException, "LeaseIdMismatchWithLeaseOperation",
     "The lease ID specified did not match the lease ID for the blob/container."),
    (LeaseAlreadyPresentAzureException, "LeaseAlreadyPresent",
     "There is already a lease present."),
    (LeaseAlreadyBrokenAzureException, "LeaseAlreadyBroken",
     "The lease has already been broken and cannot be broken again."),
    (LeaseIsBrokenAndCannotBeRenewedAzureException, "LeaseIsBrokenAndCannotBeRenewed",
     "The lease ID matched, but the lease has been broken explicitly and cannot be renewed."),
    (LeaseIsBreakingAndCannotBeAcquiredAzureException, "LeaseIsBreakingAndCannotBeAcquired",
     "The lease ID matched, but the lease is currently in breaking state and cannot be acquired "
     "until it is broken."),
    # misspelled in older versions of the error code documentation
    (LeaseIsBreakingAndCannotBeAcquiredAzureException, "LeaseIsBreakingAndCannotBeAquired",
     "The lease ID matched, but the lease is currently in breaking state and cannot be acquired "
     "until it is broken."),
    (LeaseIsBreakingAndCannotBeChangedAzureException, "LeaseIsBreakingAndCannotBeChanged",
     "The lease ID matched, but the lease is currently in breaking state and cannot be changed."),
    (InfiniteLeaseDurationRequiredAzureException, "InfiniteLeaseDurationRequired",
     "The lease ID matched, but the specified lease must be an infinite-duration lease."),
)

BLOB_ERROR_ENTRIES = (
    (InvalidBlobOrBlockAzureException, "InvalidBlobOrBlock",
     "The specified blob or block content is invalid."),
    (InvalidBlockIdAzureException, "InvalidBlockId",
     "The specified block ID is invalid. The block ID must be Base64-encoded."),
    (InvalidBlockListAzureException, "InvalidBlockList",
     "The specified block list is invalid."),
    (BlobNotFoundAzureException, "BlobNotFound",
     "The specified blob does not exist."),
    (ContainerAlreadyExistsAzureException, "ContainerAlreadyExists",
     "The specified container already exists."),
    (ContainerDisabledAzureException, "ContainerDisabled",
     "The specified container has been disabled by the administrator."),
    (BlobAlreadyExistsAzureException, "BlobAlreadyExists",
     "The specified blob already exists."),
    (LeaseNotPresentWithBlobOperationAzureException, "LeaseNotPresentWithBlobOperation",
     "There is currently no lease on the blob."),
    (LeaseIdMismatchWithBlobOperationAzureException, "LeaseIdMismatchWithBlobOperation",
     "The lease ID specified did not match the lease ID for the blob."),
    (SnapshotsPresentAzureException, "SnapshotsPresent",
     "This operation is not permitted because the blob has snapshots."),
    (InvalidBlobTypeAzureException, "InvalidBlobType",
     "The blob type is invalid for this operation."),
    (InvalidVersionForPageBlobOperationAzureException, "InvalidVersionForPageBlobOperation",
     "All operations on page blobs require at least version 2009-09-19."),
    (InvalidPageRangeAzureException, "InvalidPageRange",
     "The page range specified is invalid."),
    (SequenceNumberConditionNotMetAzureException, "SequenceNumberConditionNotMet",
     "The sequence number condition specified was not met."),
    (SequenceNumberIncrementTooLargeAzureException, "SequenceNumberIncrementTooLarge",
     "The sequence number increment cannot be performed because it would result in overflow "
     "of the sequence number."),
    (SourceConditionNotMetAzureException, "SourceConditionNotMet",
     "The source condition specified using HTTP conditional header(s) is not met."),
    (TargetConditionNotMetAzureException, "TargetConditionNotMet",
     "The target condition specified using HTTP conditional header(s) is not met."),
    (CopyAcrossAccountsNotSupportedAzureException, "CopyAcrossAccountsNotSupported",
     "The copy source account and destination account must be the same."),
    (CannotVerifyCopySourceAzureException, "CannotVerifyCopySource",
     "Could not verify the copy source within the specified time. "
     "Examine the HTTP status code and message for more information about the failure."),
    (PendingCopyOperationAzureException, "PendingCopyOperation",
     "There is currently a pending copy operation."),
    (NoPendingCopyOperationAzureException, "NoPendingCopyOperation",
     "There is currently no pending copy operation."),
    (CopyIdMismatchAzureException, "CopyIdMismatch",
     "The specified copy ID did not match the copy ID for the pending copy operation."),
) + LEASE_ERROR_ENTRIES

TABLE_ERROR_ENTRIES = (
    (DuplicatePropertiesSpecifiedAzureException, "DuplicatePropertiesSpecified",
     "A property is specified more than one time."),
    (EntityAlreadyExistsAzureException, "EntityAlreadyExists",
     "The specified entity already exists."),
    (EntityTooLargeAzureException, "EntityTooLarge",
     "The entity is larger than the maximum size permitted."),
    (HostInformationNotPresentAzureException, "HostInformationNotPresent",
     "The required host information is not present in the request. "
     "You must send a non-empty Host header or include the absolute URI in the request line."),
    (InvalidValueTypeAzureException, "InvalidValueType",
     "The value specified is invalid."),
    (JsonFormatNotSupportedAzureException, "JsonFormatNotSupported",
     "JSON format is not supported."),
    (MethodNotAllowedAzureException, "MethodNotAllowed",
     "The requested method is not allowed on the specified resource."),
    (NotImplementedAzureException, "NotImplemented",
     "The requested operation is not implemented on the specified resource."),
    (PropertiesNeedValueAzureException, "PropertiesNeedValue",
     "Values have not been specified for all properties in the entity."),
    (PropertyNameInvalidAzureException, "PropertyNameInvalid",
     "The property name is invalid."),
    (PropertyNameTooLongAzureException, "PropertyNameTooLong",
     "The property name exceeds the maximum allowed length."),
    (PropertyValueTooLargeAzureException, "PropertyValueTooLarge",
     "The property value is larger than the maximum size permitted."),
    (TableAlreadyExistsAzureException, "TableAlreadyExists",
     "The table specified already exists."),
    (TableBeingDeletedAzureException, "TableBeingDeleted",
     "The specified table is being deleted."),
    (TableNotFoundAzureException, "TableNotFound",
     "The table specified does not exist."),
    (TooManyPropertiesAzureException, "TooManyProperties",
     "The entity contains more properties than allowed."),
    (UpdateConditionNotSatisfiedAzureException, "UpdateConditionNotSatisfied",
     "The update condition specified in the request was not satisfied."),
    (XMethodIncorrectCountAzureException, "XMethodIncorrectCount",
     "More than one X-HTTP-Method is specified."),
    (XMethodIncorrectValueAzureException, "XMethodIncorrectValue",
     "The specified X-HTTP-Method is invalid."),
    (XMethodNotUsingPostAzureException, "XMethodNotUsingPost",
     "The request uses X-HTTP-Method with an HTTP verb other than POST."),
)
