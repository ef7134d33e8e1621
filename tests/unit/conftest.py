import pytest

from adoprovider.clients import AggregatedClient
from adoprovider.testing.emulator import create_local_client


@pytest.fixture
def sleeps() -> list[float]:
    """Records the delays requested by a poller, pass ``sleeps.append`` instead of ``time.sleep``."""
    return []


@pytest.fixture
def local_client() -> AggregatedClient:
    return create_local_client()
