"""
Tracking of asynchronous (queued) Azure DevOps operations.

Some Azure DevOps calls, most prominently the creation of a project, do not act immediately. They return an
operation reference instead, whose status has to be polled until the service reports a terminal state.
"""
import logging
import time
from typing import Callable, Optional

from pydantic import Field
from pydantic.dataclasses import dataclass

from adoprovider import config
from adoprovider.api import CommonServiceException
from adoprovider.api.core import ProjectId, TeamProject
from adoprovider.api.operations import Operation, OperationId, OperationsClient, OperationStatus
from adoprovider.clients import AggregatedClient

LOG = logging.getLogger(__name__)

SUCCESS_STATUSES = frozenset({OperationStatus.succeeded})
FAILURE_STATUSES = frozenset({OperationStatus.failed, OperationStatus.cancelled})

Sleep = Callable[[float], None]


class OperationFailedException(CommonServiceException):
    """The operation reached a terminal state other than ``succeeded``."""

    def __init__(self, operation_id: OperationId, status: str, detail: str = None):
        self.operation_id = operation_id
        self.status = status
        message = f"Operation {operation_id} finished with status '{status}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__("OperationFailed", message, status_code=500)


class OperationTimeoutException(CommonServiceException):
    """The operation was still running when the polling budget was used up."""

    def __init__(self, operation_id: OperationId, status: Optional[str], attempts: int):
        self.operation_id = operation_id
        self.status = status
        self.attempts = attempts
        super().__init__(
            "OperationTimeout",
            f"Operation {operation_id} did not complete in time "
            f"(status '{status}' after {attempts} status queries)",
            status_code=504,
        )


@dataclass
class PollingPolicy:
    """
    Controls how often and how long an operation is polled.

    The delay after the n-th status query is ``interval * backoff_multiplier ** (n - 1)``, capped at
    ``max_interval``. With the default multiplier of 1 every delay equals ``interval``.
    """

    max_attempts: int = Field(
        config.PROJECT_CREATE_MAX_POLLS, title="Maximum number of status queries", gt=0
    )
    interval: float = Field(
        config.PROJECT_CREATE_POLL_INTERVAL, title="Delay after the first status query", ge=0
    )
    backoff_multiplier: float = Field(1.0, title="Multiply the delay by this factor each query", ge=1)
    max_interval: float = Field(60.0, title="Maximum delay in seconds", ge=0)

    @classmethod
    def from_config(cls) -> "PollingPolicy":
        return cls(
            max_attempts=config.PROJECT_CREATE_MAX_POLLS,
            interval=config.PROJECT_CREATE_POLL_INTERVAL,
        )

    def delay(self, attempt: int) -> float:
        return min(self.interval * self.backoff_multiplier ** (attempt - 1), self.max_interval)

    def is_success(self, status: Optional[str]) -> bool:
        return status in SUCCESS_STATUSES

    def is_failure(self, status: Optional[str]) -> bool:
        return status in FAILURE_STATUSES

    def is_terminal(self, status: Optional[str]) -> bool:
        return self.is_success(status) or self.is_failure(status)


class OperationPoller:
    """
    Polls a single operation until it is terminal. Status queries are issued one after the other, errors raised
    by the operations client are never retried.
    """

    def __init__(
        self,
        operations_client: OperationsClient,
        policy: PollingPolicy = None,
        sleep: Sleep = time.sleep,
    ):
        self.operations_client = operations_client
        self.policy = policy or PollingPolicy.from_config()
        self.sleep = sleep

    def wait(self, operation_id: OperationId) -> Operation:
        """
        Wait for the given operation to succeed.

        :param operation_id: the id of the operation reference returned by the queueing call
        :return: the last operation record, with status ``succeeded``
        :raises OperationFailedException: if the operation failed or was cancelled
        :raises OperationTimeoutException: if the operation is not terminal after ``max_attempts`` queries
        """
        status = None
        for attempt in range(1, self.policy.max_attempts + 1):
            operation = self.operations_client.get_operation(operation_id)
            status = operation.get("status")
            LOG.debug(
                "Operation %s has status '%s' (query %d of %d)",
                operation_id,
                status,
                attempt,
                self.policy.max_attempts,
            )

            if self.policy.is_success(status):
                return operation

            if self.policy.is_failure(status):
                LOG.warning("Operation %s finished with status '%s'", operation_id, status)
                raise OperationFailedException(
                    operation_id, status, operation.get("resultMessage")
                )

            if attempt < self.policy.max_attempts:
                self.sleep(self.policy.delay(attempt))

        LOG.warning(
            "Operation %s did not complete after %d status queries",
            operation_id,
            self.policy.max_attempts,
        )
        raise OperationTimeoutException(operation_id, status, self.policy.max_attempts)


def create_project_with_polling(
    client: AggregatedClient,
    project: TeamProject,
    policy: PollingPolicy = None,
    sleep: Sleep = time.sleep,
) -> TeamProject:
    """
    Queues the creation of the given project and waits for the operation to succeed.

    An error of the queueing call is raised unchanged, no status query is made in that case.

    :return: the created project as reported by the service, including its capabilities
    """
    reference = client.core.queue_create_project(project)
    LOG.debug("Queued creation of project '%s' as operation %s", project["name"], reference["id"])

    OperationPoller(client.operations, policy, sleep).wait(reference["id"])

    # the operation record does not carry the project id, the name is unique however
    created = client.core.get_project_by_name(
        project["name"], include_capabilities=True, include_history=False
    )
    LOG.info("Created project '%s' with id %s", project["name"], created["id"])
    return created


def create_with_polling(
    client: AggregatedClient,
    project: TeamProject,
    policy: PollingPolicy = None,
    sleep: Sleep = time.sleep,
) -> ProjectId:
    """
    Like ``create_project_with_polling``, but only returns the id the service assigned to the new project.
    """
    return create_project_with_polling(client, project, policy, sleep)["id"]
