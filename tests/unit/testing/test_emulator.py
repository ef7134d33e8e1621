import pytest

from adoprovider.api import CommonServiceException, ResourceNotFoundException
from adoprovider.api.core import Process, ProjectNotFoundException, TeamProject
from adoprovider.api.operations import OperationStatus
from adoprovider.testing.emulator import (
    DEFAULT_PROCESSES,
    ProjectAlreadyExistsException,
    create_local_client,
)

AGILE_ID = DEFAULT_PROCESSES[0]["id"]


def project_to_create(name: str = "Proj1", process_id: str = AGILE_ID) -> TeamProject:
    return TeamProject(
        name=name,
        description="d",
        visibility="private",
        capabilities={
            "versioncontrol": {"sourceControlType": "Git"},
            "processTemplate": {"templateTypeId": process_id},
        },
    )


def test_create_progresses_through_statuses(local_client):
    reference = local_client.core.queue_create_project(project_to_create())
    assert reference["status"] == OperationStatus.notSet

    statuses = [local_client.operations.get_operation(reference["id"])["status"] for _ in range(4)]

    assert statuses == [
        OperationStatus.queued,
        OperationStatus.inProgress,
        OperationStatus.succeeded,
        OperationStatus.succeeded,
    ]
    project = local_client.core.get_project_by_name("Proj1")
    assert project["id"]
    assert project["state"] == "wellFormed"


def test_project_is_not_visible_before_success(local_client):
    reference = local_client.core.queue_create_project(project_to_create())
    local_client.operations.get_operation(reference["id"])

    with pytest.raises(ProjectNotFoundException):
        local_client.core.get_project_by_name("Proj1")


def test_failed_create_does_not_create_project():
    client = create_local_client(create_statuses=(OperationStatus.failed,))
    reference = client.core.queue_create_project(project_to_create())

    assert client.operations.get_operation(reference["id"])["status"] == OperationStatus.failed
    with pytest.raises(ProjectNotFoundException):
        client.core.get_project_by_name("Proj1")

    # the name is free again once the operation failed
    client.core.queue_create_project(project_to_create())


def test_duplicate_name_is_rejected(local_client):
    local_client.core.queue_create_project(project_to_create())

    with pytest.raises(ProjectAlreadyExistsException) as e:
        local_client.core.queue_create_project(project_to_create())

    assert e.value.status_code == 409


def test_unknown_process_is_rejected(local_client):
    with pytest.raises(CommonServiceException) as e:
        local_client.core.queue_create_project(project_to_create(process_id="unknown"))

    assert e.value.code == "ProcessTemplateNotFoundException"


def test_capabilities_are_only_included_on_request(local_client):
    reference = local_client.core.queue_create_project(project_to_create())
    for _ in range(3):
        local_client.operations.get_operation(reference["id"])
    project_id = local_client.core.get_project_by_name("Proj1")["id"]

    assert "capabilities" not in local_client.core.get_project_by_id(project_id)
    project = local_client.core.get_project_by_id(project_id, include_capabilities=True)
    assert project["capabilities"]["processTemplate"]["templateTypeId"] == AGILE_ID


def test_processes():
    client = create_local_client(processes=[Process(id="T1", name="Custom")])

    assert client.core.get_processes() == [Process(id="T1", name="Custom")]
    assert client.core.get_process_by_id("T1")["name"] == "Custom"
    with pytest.raises(ResourceNotFoundException):
        client.core.get_process_by_id(AGILE_ID)


def test_unknown_operation(local_client):
    with pytest.raises(ResourceNotFoundException):
        local_client.operations.get_operation("unknown")


def test_finished_operations_are_pruned():
    client = create_local_client(max_finished_operations=1)
    first = client.core.queue_create_project(project_to_create("Proj1"))
    for _ in range(3):
        client.operations.get_operation(first["id"])
    second = client.core.queue_create_project(project_to_create("Proj2"))

    # the first operation stays queryable while the second one is running
    assert client.operations.get_operation(first["id"])["status"] == OperationStatus.succeeded

    for _ in range(3):
        client.operations.get_operation(second["id"])

    with pytest.raises(ResourceNotFoundException):
        client.operations.get_operation(first["id"])
    assert client.operations.get_operation(second["id"])["status"] == OperationStatus.succeeded
    assert len(client.core.store.operations) == 1
