"""
Mapping between the declared configuration of a project and its Azure DevOps representation.

The service keeps the version control type and the process template of a project in a nested capability map,
and references the process template by id while the configuration names it. ``expand_project`` and
``flatten_project`` convert between ``ProjectProperties`` and ``ProjectDescriptor``, which holds both capabilities
as plain fields. Only ``serialize_project`` and ``deserialize_project`` know the shape of the capability map.
"""
from dataclasses import dataclass
from typing import Optional

from adoprovider.api import (
    InvalidParameterValueException,
    ResourceNotFoundException,
    ServiceException,
)
from adoprovider.api.core import (
    PROJECT_VISIBILITY_VALUES,
    SOURCE_CONTROL_TYPE_VALUES,
    CoreClient,
    ProcessId,
    ProjectId,
    TeamProject,
)
from adoprovider.constants import (
    CAPABILITY_KEY_SOURCE_CONTROL_TYPE,
    CAPABILITY_KEY_TEMPLATE_TYPE_ID,
    CAPABILITY_PROCESS_TEMPLATE,
    CAPABILITY_VERSION_CONTROL,
)


class ReferenceNotFoundException(ServiceException):
    """A name or id referenced by a project could not be resolved."""

    code: str = "ReferenceNotFound"
    sender_fault: bool = True
    status_code: int = 404

    def __init__(self, kind: str, attribute: str, value: Optional[str]):
        self.kind = kind
        self.attribute = attribute
        self.value = value
        super().__init__(f"No {kind} found with {attribute} '{value}'")


@dataclass
class ProjectProperties:
    project_name: str
    description: Optional[str] = None
    visibility: Optional[str] = None
    version_control: Optional[str] = None
    work_item_template: Optional[str] = None


@dataclass
class ProjectDescriptor:
    name: str
    description: Optional[str] = None
    visibility: Optional[str] = None
    version_control: Optional[str] = None
    process_template_id: Optional[ProcessId] = None
    id: Optional[ProjectId] = None


def expand_project(properties: ProjectProperties, core: CoreClient) -> ProjectDescriptor:
    """
    Builds the descriptor of the project declared by the given properties.

    :raises InvalidParameterValueException: if the visibility or version control value is not supported
    :raises ReferenceNotFoundException: if no process template has the declared work item template name
    """
    if properties.visibility not in PROJECT_VISIBILITY_VALUES:
        raise InvalidParameterValueException(
            f"Invalid visibility '{properties.visibility}', "
            f"expected one of {', '.join(PROJECT_VISIBILITY_VALUES)}"
        )
    if properties.version_control not in SOURCE_CONTROL_TYPE_VALUES:
        raise InvalidParameterValueException(
            f"Invalid version control '{properties.version_control}', "
            f"expected one of {', '.join(SOURCE_CONTROL_TYPE_VALUES)}"
        )

    return ProjectDescriptor(
        name=properties.project_name,
        description=properties.description,
        visibility=properties.visibility,
        version_control=properties.version_control,
        process_template_id=lookup_process_id(core, properties.work_item_template),
    )


def flatten_project(descriptor: ProjectDescriptor, core: CoreClient) -> ProjectProperties:
    """
    Inverse of ``expand_project``.

    :raises ReferenceNotFoundException: if the process template of the project is unknown to the service
    """
    return ProjectProperties(
        project_name=descriptor.name,
        description=descriptor.description,
        visibility=descriptor.visibility,
        version_control=descriptor.version_control,
        work_item_template=lookup_process_name(core, descriptor.process_template_id),
    )


def lookup_process_id(core: CoreClient, process_name: str) -> ProcessId:
    # exact match, process names are case sensitive
    for process in core.get_processes():
        if process.get("name") == process_name:
            return process["id"]
    raise ReferenceNotFoundException("process template", "name", process_name)


def lookup_process_name(core: CoreClient, process_id: Optional[ProcessId]) -> str:
    if not process_id:
        raise ReferenceNotFoundException("process template", "id", process_id)
    try:
        process = core.get_process_by_id(process_id)
    except ResourceNotFoundException as e:
        raise ReferenceNotFoundException("process template", "id", process_id) from e
    if not process:
        raise ReferenceNotFoundException("process template", "id", process_id)
    return process["name"]


def serialize_project(descriptor: ProjectDescriptor) -> TeamProject:
    project = TeamProject(
        name=descriptor.name,
        description=descriptor.description,
        visibility=descriptor.visibility,
        capabilities={
            CAPABILITY_VERSION_CONTROL: {
                CAPABILITY_KEY_SOURCE_CONTROL_TYPE: descriptor.version_control,
            },
            CAPABILITY_PROCESS_TEMPLATE: {
                CAPABILITY_KEY_TEMPLATE_TYPE_ID: descriptor.process_template_id,
            },
        },
    )
    if descriptor.id:
        project["id"] = descriptor.id
    return project


def deserialize_project(project: TeamProject) -> ProjectDescriptor:
    capabilities = project.get("capabilities") or {}
    version_control = capabilities.get(CAPABILITY_VERSION_CONTROL) or {}
    process_template = capabilities.get(CAPABILITY_PROCESS_TEMPLATE) or {}
    return ProjectDescriptor(
        id=project.get("id"),
        name=project.get("name"),
        description=project.get("description"),
        visibility=project.get("visibility"),
        version_control=version_control.get(CAPABILITY_KEY_SOURCE_CONTROL_TYPE),
        process_template_id=process_template.get(CAPABILITY_KEY_TEMPLATE_TYPE_ID),
    )
