"""
Pytest fixtures for the POPSigner SDK tests.
"""
import pytest

from popsigner_sdk._rate_limited_log import reset_rate_limited_log
from tests.test_helpers import create_test_client, RecordingTransport


@pytest.fixture(autouse=True)
def _reset_rate_limited_log():
    """Each test starts with no suppressed warnings."""
    reset_rate_limited_log()
    yield
    reset_rate_limited_log()


@pytest.fixture
def client():
    """Client pointed at the requests_mock test host"""
    with create_test_client() as c:
        yield c


@pytest.fixture
def recording_transport():
    """Transport spy with an empty response queue"""
    return RecordingTransport()


@pytest.fixture
def spy_client(recording_transport):
    """Client whose transport records calls instead of sending them"""
    return create_test_client(transport=recording_transport)
