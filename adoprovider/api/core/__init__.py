from typing import Dict, List, Optional, Protocol, TypedDict

from adoprovider.api import ResourceNotFoundException
from adoprovider.api.operations import OperationReference

ProjectId = str
ProjectName = str
ProcessId = str
CapabilityGroup = str
Capabilities = Dict[CapabilityGroup, Dict[str, str]]


class ProjectVisibility(str):
    private = "private"
    public = "public"


class SourceControlType(str):
    Git = "Git"
    Tfvc = "Tfvc"


class ProjectState(str):
    new = "new"
    createPending = "createPending"
    wellFormed = "wellFormed"
    deleting = "deleting"
    deleted = "deleted"


PROJECT_VISIBILITY_VALUES = (ProjectVisibility.private, ProjectVisibility.public)
SOURCE_CONTROL_TYPE_VALUES = (SourceControlType.Git, SourceControlType.Tfvc)


class ProjectNotFoundException(ResourceNotFoundException):
    """The project does not exist, or was deleted."""

    code: str = "ProjectDoesNotExistWithNameException"


class TeamProject(TypedDict, total=False):
    id: Optional[ProjectId]
    name: Optional[ProjectName]
    description: Optional[str]
    visibility: Optional[str]
    capabilities: Optional[Capabilities]
    # derived by the service, never sent on write
    state: Optional[str]
    revision: Optional[int]
    url: Optional[str]


class Process(TypedDict, total=False):
    id: ProcessId
    name: str
    description: Optional[str]
    isDefault: Optional[bool]
    type: Optional[str]


ProcessList = List[Process]


class CoreClient(Protocol):
    """
    Client of the Azure DevOps core area. Implementations raise a ``ServiceException`` (or a transport error of
    their own) on failure, and ``ProjectNotFoundException`` if a project lookup has no match.
    """

    def queue_create_project(self, project_to_create: TeamProject) -> OperationReference:
        ...

    def get_project_by_id(
        self, project_id: ProjectId, include_capabilities: bool = False, include_history: bool = False
    ) -> TeamProject:
        ...

    def get_project_by_name(
        self,
        project_name: ProjectName,
        include_capabilities: bool = False,
        include_history: bool = False,
    ) -> TeamProject:
        ...

    def get_processes(self) -> ProcessList:
        ...

    def get_process_by_id(self, process_id: ProcessId) -> Process:
        ...

    def update_project(
        self, project_id: ProjectId, project_update: TeamProject
    ) -> OperationReference:
        ...

    def queue_delete_project(self, project_id: ProjectId) -> OperationReference:
        ...
