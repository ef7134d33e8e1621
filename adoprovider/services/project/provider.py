import dataclasses
import logging
import time
from dataclasses import dataclass
from typing import NamedTuple, Optional

from adoprovider.api import InvalidParameterValueException
from adoprovider.api.core import CoreClient, ProcessId, ProjectId, ProjectNotFoundException
from adoprovider.constants import (
    DEFAULT_PROJECT_VERSION_CONTROL,
    DEFAULT_PROJECT_VISIBILITY,
    DEFAULT_PROJECT_WORK_ITEM_TEMPLATE,
    PROJECT_RESOURCE_TYPE,
)
from adoprovider.services.operations import PollingPolicy, Sleep, create_project_with_polling
from adoprovider.services.project.mapper import (
    ProjectDescriptor,
    ProjectProperties,
    deserialize_project,
    expand_project,
    flatten_project,
    serialize_project,
)
from adoprovider.services.resource_provider import (
    NotUpdatableException,
    OperationStatus,
    ProgressEvent,
    ResourceProvider,
    ResourceRequest,
)

LOG = logging.getLogger(__name__)


@dataclass
class ProjectAllProperties(ProjectProperties):
    # computed by the service
    id: Optional[ProjectId] = None
    process_template_id: Optional[ProcessId] = None


class ProjectQuery(NamedTuple):
    key: str
    by_id: bool


def resolve_project_query(project_id: Optional[str], project_name: Optional[str]) -> ProjectQuery:
    """
    The id is preferred for lookups, as it is the only key known for sure once a project was created. The name is
    used if no id is known yet, e.g. when importing an existing project.
    """
    if project_id:
        return ProjectQuery(key=project_id, by_id=True)
    if project_name:
        return ProjectQuery(key=project_name, by_id=False)
    raise InvalidParameterValueException("Either the id or the name of a project is required")


def read_project(
    core: CoreClient, project_id: Optional[str], project_name: Optional[str]
) -> ProjectDescriptor:
    """
    Reads a project, including its capabilities.

    :raises ProjectNotFoundException: if the project does not exist
    """
    query = resolve_project_query(project_id, project_name)
    if query.by_id:
        project = core.get_project_by_id(
            query.key, include_capabilities=True, include_history=False
        )
    else:
        project = core.get_project_by_name(
            query.key, include_capabilities=True, include_history=False
        )

    if not project:
        raise ProjectNotFoundException(f"Project {query.key} does not exist")
    return deserialize_project(project)


def with_defaults(properties: ProjectProperties) -> ProjectProperties:
    return dataclasses.replace(
        properties,
        description=properties.description if properties.description is not None else "",
        visibility=properties.visibility or DEFAULT_PROJECT_VISIBILITY,
        version_control=properties.version_control or DEFAULT_PROJECT_VERSION_CONTROL,
        work_item_template=properties.work_item_template or DEFAULT_PROJECT_WORK_ITEM_TEMPLATE,
    )


def declared_properties(model: ProjectAllProperties) -> ProjectProperties:
    return ProjectProperties(
        project_name=model.project_name,
        description=model.description,
        visibility=model.visibility,
        version_control=model.version_control,
        work_item_template=model.work_item_template,
    )


class ProjectResourceProvider(ResourceProvider[ProjectAllProperties]):
    TYPE = PROJECT_RESOURCE_TYPE

    def __init__(self, polling_policy: PollingPolicy = None, sleep: Sleep = time.sleep):
        self.polling_policy = polling_policy
        self.sleep = sleep

    def create(
        self,
        request: ResourceRequest[ProjectAllProperties],
    ) -> ProgressEvent[ProjectAllProperties]:
        """
        Create a new project and wait until the service reports it as created.

        Token scopes required:
          - vso.project_manage
        """
        model = request.desired_state
        core = request.client.core

        descriptor = expand_project(with_defaults(declared_properties(model)), core)
        created = create_project_with_polling(
            request.client,
            serialize_project(descriptor),
            self.polling_policy or PollingPolicy.from_config(),
            self.sleep,
        )

        return ProgressEvent(
            status=OperationStatus.SUCCESS,
            resource_model=self._to_model(core, deserialize_project(created)),
        )

    def read(
        self,
        request: ResourceRequest[ProjectAllProperties],
    ) -> ProgressEvent[ProjectAllProperties]:
        model = request.desired_state
        return ProgressEvent(
            status=OperationStatus.SUCCESS,
            resource_model=self._read_model(request.client.core, model.id, model.project_name),
        )

    def update(
        self,
        request: ResourceRequest[ProjectAllProperties],
    ) -> ProgressEvent[ProjectAllProperties]:
        """
        Update the description, visibility and capabilities of a project. A project is renamed by replacing it.
        """
        model = request.desired_state
        previous = request.previous_state
        core = request.client.core

        project_id = model.id or (previous.id if previous else None)
        if not project_id:
            raise InvalidParameterValueException("The id of the project to update is required")

        current = read_project(core, project_id, None)
        if current.name != model.project_name:
            raise NotUpdatableException(
                f"Project {project_id} cannot be renamed from '{current.name}' "
                f"to '{model.project_name}' in place"
            )

        descriptor = expand_project(with_defaults(declared_properties(model)), core)
        descriptor.id = project_id
        project_update = serialize_project(descriptor)
        # the name is only changed by recreating the project
        project_update.pop("name", None)
        core.update_project(project_id, project_update)
        LOG.debug("Updated project %s", project_id)

        return ProgressEvent(
            status=OperationStatus.SUCCESS,
            resource_model=self._read_model(core, project_id, None),
        )

    def delete(
        self,
        request: ResourceRequest[ProjectAllProperties],
    ) -> ProgressEvent[ProjectAllProperties]:
        model = request.desired_state
        if not model.id:
            raise InvalidParameterValueException("The id of the project to delete is required")

        request.client.core.queue_delete_project(model.id)
        LOG.debug("Queued deletion of project %s", model.id)
        return ProgressEvent(status=OperationStatus.SUCCESS, resource_model=model)

    def _read_model(
        self, core: CoreClient, project_id: Optional[str], project_name: Optional[str]
    ) -> ProjectAllProperties:
        return self._to_model(core, read_project(core, project_id, project_name))

    @staticmethod
    def _to_model(core: CoreClient, descriptor: ProjectDescriptor) -> ProjectAllProperties:
        properties = flatten_project(descriptor, core)
        return ProjectAllProperties(
            **dataclasses.asdict(properties),
            id=descriptor.id,
            process_template_id=descriptor.process_template_id,
        )
