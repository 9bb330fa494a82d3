"""
Tests for deployment status polling.
"""
import threading
import time
from unittest.mock import MagicMock

import pytest

from popsigner_sdk.exceptions import APIError
from popsigner_sdk.models import Deployment, DeploymentStatus
from popsigner_sdk.poller import DeploymentPoller
from tests.test_helpers import TEST_DEPLOYMENT_ID, deployment_payload, url

DEPLOYMENT_PATH = f"/v1/deployments/{TEST_DEPLOYMENT_ID}"


def _snapshot(status, stage=None):
    return Deployment.model_validate(deployment_payload(status=status, current_stage=stage))


class FakeDeployments:
    """Returns queued snapshots in order; exceptions are raised."""

    def __init__(self, *snapshots):
        self.snapshots = list(snapshots)
        self.calls = 0

    def get(self, deployment_id):
        self.calls += 1
        item = self.snapshots.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class RecordingWait:
    def __init__(self, on_wait=None):
        self.intervals = []
        self.on_wait = on_wait

    def __call__(self, seconds):
        self.intervals.append(seconds)
        if self.on_wait is not None:
            return self.on_wait()
        return False


def test_polls_until_completed():
    deployments = FakeDeployments(
        _snapshot("pending"), _snapshot("running", "deploy_contracts"), _snapshot("completed"),
    )
    wait = RecordingWait()

    statuses = [d.status for d in DeploymentPoller(deployments, TEST_DEPLOYMENT_ID, wait=wait)]

    assert statuses == [DeploymentStatus.PENDING, DeploymentStatus.RUNNING, DeploymentStatus.COMPLETED]
    assert deployments.calls == 3
    assert wait.intervals == [2.0, 2.0]


def test_failed_first_fetch_stops_immediately():
    deployments = FakeDeployments(_snapshot("failed"))
    wait = RecordingWait()
    poller = DeploymentPoller(deployments, TEST_DEPLOYMENT_ID, wait=wait)

    last = poller.run()

    assert last.status is DeploymentStatus.FAILED
    assert deployments.calls == 1
    assert poller.fetch_count == 1
    assert wait.intervals == []


def test_paused_is_not_terminal():
    deployments = FakeDeployments(_snapshot("paused"), _snapshot("running"), _snapshot("completed"))
    wait = RecordingWait()

    last = DeploymentPoller(deployments, TEST_DEPLOYMENT_ID, wait=wait).run()

    assert last.status is DeploymentStatus.COMPLETED
    assert len(wait.intervals) == 2


def test_watch_false_fetches_once():
    deployments = FakeDeployments(_snapshot("running"))
    wait = RecordingWait()

    snapshots = list(DeploymentPoller(deployments, TEST_DEPLOYMENT_ID, watch=False, wait=wait))

    assert len(snapshots) == 1
    assert deployments.calls == 1
    assert wait.intervals == []


def test_custom_interval():
    deployments = FakeDeployments(_snapshot("running"), _snapshot("completed"))
    wait = RecordingWait()

    DeploymentPoller(deployments, TEST_DEPLOYMENT_ID, interval=0.25, wait=wait).run()

    assert wait.intervals == [0.25]


def test_negative_interval_is_rejected():
    with pytest.raises(ValueError, match="interval"):
        DeploymentPoller(FakeDeployments(), TEST_DEPLOYMENT_ID, interval=-1)


def test_stop_during_wait():
    deployments = FakeDeployments(_snapshot("running"), _snapshot("running"))
    poller = DeploymentPoller(deployments, TEST_DEPLOYMENT_ID, wait=lambda s: True)

    snapshots = list(poller)

    assert len(snapshots) == 1
    assert deployments.calls == 1


def test_stop_from_callback():
    deployments = FakeDeployments(_snapshot("pending"), _snapshot("running"), _snapshot("running"))
    wait = RecordingWait()
    poller = DeploymentPoller(deployments, TEST_DEPLOYMENT_ID, wait=wait)

    def callback(deployment):
        if deployment.status is DeploymentStatus.RUNNING:
            poller.stop()

    last = poller.run(callback)

    assert last.status is DeploymentStatus.RUNNING
    assert deployments.calls == 2
    assert len(wait.intervals) == 1
    assert poller.stopped


def test_stop_before_iterating():
    deployments = FakeDeployments(_snapshot("pending"))
    poller = DeploymentPoller(deployments, TEST_DEPLOYMENT_ID, wait=RecordingWait())
    poller.stop()
    poller.stop()

    assert poller.run() is None
    assert deployments.calls == 0


def test_fetch_error_propagates():
    error = APIError("upstream unavailable", http_status=503)
    deployments = FakeDeployments(_snapshot("running"), error)
    wait = RecordingWait()
    poller = DeploymentPoller(deployments, TEST_DEPLOYMENT_ID, wait=wait)

    with pytest.raises(APIError) as excinfo:
        poller.run()

    assert excinfo.value is error
    assert poller.last.status is DeploymentStatus.RUNNING
    assert deployments.calls == 2


def test_default_wait_is_interrupted_by_stop():
    """A stop from another thread ends a long wait promptly"""
    deployments = FakeDeployments(_snapshot("running"), _snapshot("running"))
    poller = DeploymentPoller(deployments, TEST_DEPLOYMENT_ID, interval=30)

    timer = threading.Timer(0.1, poller.stop)
    timer.start()
    started = time.monotonic()
    try:
        snapshots = list(poller)
    finally:
        timer.cancel()

    assert time.monotonic() - started < 5
    assert len(snapshots) == 1
    assert deployments.calls == 1


def test_wait_callable_is_mockable():
    deployments = FakeDeployments(_snapshot("running"), _snapshot("completed"))
    wait = MagicMock(return_value=False)

    DeploymentPoller(deployments, TEST_DEPLOYMENT_ID, interval=2, wait=wait).run()

    wait.assert_called_once_with(2)


def test_watch_through_client(client, requests_mock):
    requests_mock.get(url(DEPLOYMENT_PATH), [
        {"json": {"data": deployment_payload(status="pending")}},
        {"json": {"data": deployment_payload(status="running", current_stage="deploy_contracts")}},
        {"json": {"data": deployment_payload(status="completed")}},
    ])
    wait = RecordingWait()
    seen = []

    last = client.watch_deployment(TEST_DEPLOYMENT_ID, wait=wait).run(seen.append)

    assert last.status is DeploymentStatus.COMPLETED
    assert [d.current_stage for d in seen] == [None, "deploy_contracts", None]
    assert requests_mock.call_count == 3
    assert wait.intervals == [2.0, 2.0]


def test_watch_through_client_fetch_error(client, requests_mock):
    requests_mock.get(url(DEPLOYMENT_PATH), [
        {"json": {"data": deployment_payload(status="running")}},
        {"json": {"error": {"code": "not_found", "message": "deployment not found"}}, "status_code": 404},
    ])

    poller = client.watch_deployment(TEST_DEPLOYMENT_ID, wait=RecordingWait())

    with pytest.raises(APIError) as excinfo:
        poller.run()

    assert excinfo.value.is_not_found
    assert poller.fetch_count == 2
