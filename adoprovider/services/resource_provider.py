from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from enum import Enum, auto
from logging import Logger
from typing import Generic, Optional, Type, TypeVar

from plux import Plugin, PluginManager

from adoprovider import config
from adoprovider.api import ResourceNotFoundException, ServiceException
from adoprovider.clients import AggregatedClient

LOG = logging.getLogger(__name__)

Properties = TypeVar("Properties")


class OperationStatus(Enum):
    PENDING = auto()
    IN_PROGRESS = auto()
    SUCCESS = auto()
    FAILED = auto()


class HandlerErrorCode(str):
    NotUpdatable = "NotUpdatable"
    NotFound = "NotFound"


class NotUpdatableException(ServiceException):
    """The requested change can only be applied by replacing the resource."""

    code: str = HandlerErrorCode.NotUpdatable
    sender_fault: bool = True
    status_code: int = 400


@dataclass
class ProgressEvent(Generic[Properties]):
    status: OperationStatus
    resource_model: Properties

    message: str = ""
    error_code: Optional[str] = None


@dataclass
class ResourceRequest(Generic[Properties]):
    client: AggregatedClient
    request_token: str
    action: str

    desired_state: Properties

    logical_resource_id: str
    resource_type: str

    logger: Logger

    previous_state: Optional[Properties] = None


class ResourceProviderPlugin(Plugin):
    """
    Base class for resource provider plugins.
    """

    namespace = "adoprovider.resource_providers"


class ResourceProvider(Generic[Properties]):
    """
    This provides a base class onto which resource-type specific providers are built.
    """

    TYPE: str

    def create(self, request: ResourceRequest[Properties]) -> ProgressEvent[Properties]:
        raise NotImplementedError

    def read(self, request: ResourceRequest[Properties]) -> ProgressEvent[Properties]:
        raise NotImplementedError

    def update(self, request: ResourceRequest[Properties]) -> ProgressEvent[Properties]:
        raise NotImplementedError

    def delete(self, request: ResourceRequest[Properties]) -> ProgressEvent[Properties]:
        raise NotImplementedError


class NoResourceProvider(Exception):
    pass


class ResourceProviderExecutor:
    """
    Entry point for a reconciliation driver: dispatches an action on a resource type to the provider registered
    for it.
    """

    def __init__(
        self,
        *,
        client: AggregatedClient,
        providers: dict[str, ResourceProvider] = None,
    ):
        self.client = client
        self.providers = providers or {}

    def execute_action(
        self,
        resource_type: str,
        action: str,
        desired_state: Properties,
        previous_state: Optional[Properties] = None,
        logical_resource_id: str = "",
    ) -> ProgressEvent[Properties]:
        """
        Run the given action. Supported actions are ``Add``, ``Modify``, ``Remove`` and ``Read``.

        A resource which no longer exists on ``Read`` is reported as a failed event with error code ``NotFound``,
        so the driver can drop it from its state. Any other error is raised.
        """
        resource_provider = self.load_resource_provider(resource_type)
        request = ResourceRequest(
            client=self.client,
            request_token=str(uuid.uuid4()),
            action=action,
            desired_state=desired_state,
            previous_state=previous_state,
            logical_resource_id=logical_resource_id,
            resource_type=resource_type,
            logger=LOG,
        )
        LOG.debug(
            'Running action "%s" for resource type "%s" id "%s"',
            action,
            resource_type,
            logical_resource_id,
        )

        try:
            match action:
                case "Add":
                    return resource_provider.create(request)
                case "Modify":
                    return resource_provider.update(request)
                case "Remove":
                    return resource_provider.delete(request)
                case "Read":
                    try:
                        return resource_provider.read(request)
                    except ResourceNotFoundException as e:
                        LOG.info(
                            'Resource "%s" of type "%s" no longer exists: %s',
                            logical_resource_id,
                            resource_type,
                            e.message,
                        )
                        return ProgressEvent(
                            status=OperationStatus.FAILED,
                            resource_model=desired_state,
                            message=e.message,
                            error_code=HandlerErrorCode.NotFound,
                        )
                case _:
                    raise NotImplementedError(action)
        except Exception:
            log_method = LOG.warning
            if config.ADO_VERBOSE_ERRORS:
                log_method = LOG.exception
            log_method(
                'Action "%s" failed for resource type "%s" id "%s"',
                action,
                resource_type,
                logical_resource_id,
            )
            raise

    def load_resource_provider(self, resource_type: str) -> ResourceProvider:
        if resource_type in self.providers:
            return self.providers[resource_type]

        try:
            plugin = plugin_manager.load(resource_type)
            factory: Type[ResourceProvider] = plugin.factory
            return factory()
        except Exception:
            LOG.warning(
                "Failed to load resource type %s as a ResourceProvider.",
                resource_type,
                exc_info=LOG.isEnabledFor(logging.DEBUG),
            )
            raise NoResourceProvider(resource_type)


plugin_manager = PluginManager(ResourceProviderPlugin.namespace)
