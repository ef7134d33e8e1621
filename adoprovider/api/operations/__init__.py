from typing import Optional, Protocol, TypedDict

OperationId = str


class OperationStatus(str):
    notSet = "notSet"
    queued = "queued"
    inProgress = "inProgress"
    cancelled = "cancelled"
    succeeded = "succeeded"
    failed = "failed"


class OperationReference(TypedDict, total=False):
    id: OperationId
    status: Optional[str]
    url: Optional[str]
    pluginId: Optional[str]


class Operation(OperationReference, total=False):
    detailedMessage: Optional[str]
    resultMessage: Optional[str]


class OperationsClient(Protocol):
    """Client of the Azure DevOps operations area, used to track asynchronous (queued) operations."""

    def get_operation(self, operation_id: OperationId) -> Operation:
        ...
