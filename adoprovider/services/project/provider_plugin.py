from typing import Optional, Type

from adoprovider.constants import PROJECT_RESOURCE_TYPE
from adoprovider.services.resource_provider import ResourceProvider, ResourceProviderPlugin


class ProjectResourceProviderPlugin(ResourceProviderPlugin):
    name = PROJECT_RESOURCE_TYPE

    def __init__(self):
        self.factory: Optional[Type[ResourceProvider]] = None

    def load(self):
        from adoprovider.services.project.provider import ProjectResourceProvider

        self.factory = ProjectResourceProvider
