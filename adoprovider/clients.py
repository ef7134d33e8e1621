from dataclasses import dataclass

from adoprovider.api.core import CoreClient
from adoprovider.api.operations import OperationsClient


@dataclass
class AggregatedClient:
    """
    Bundles the clients of the Azure DevOps areas a resource provider talks to. Transport and authentication are
    the concern of the individual clients, an instance is handed to each provider as-is.
    """

    core: CoreClient
    operations: OperationsClient
