"""
Deployment accessor: create and start chain deployments, and read their
artifacts and on-chain transactions.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError
from ..models import (
    Deployment, DeploymentStatus, Stack, CreateDeploymentRequest, StartDeploymentResult,
    Artifact, Transaction,
)
from .._validation import require_segment, require_choice
from ..poller import DeploymentPoller
from ._base import Resource

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0


class DeploymentsResource(Resource):
    """Operations on ``/v1/deployments``."""

    @staticmethod
    def _path(deployment_id: Any, *parts: str) -> str:
        path = f"/v1/deployments/{require_segment(deployment_id, 'deployment_id')}"
        for part in parts:
            path += f"/{part}"
        return path

    def create(self, chain_id: int, stack: Any, config: Dict[str, Any]) -> Deployment:
        """
        Create a deployment in the ``pending`` state.

        Args:
            chain_id: Chain ID of the new rollup, must be positive
            stack: ``"opstack"`` or ``"nitro"``
            config: Stack-specific deployment configuration

        Returns:
            The created deployment

        Raises:
            ValidationError: If chain_id, stack or config is invalid
            APIError: If the server rejects the deployment (e.g. chain_id in use)
        """
        try:
            request = CreateDeploymentRequest(
                chain_id=chain_id,
                stack=require_choice(stack, Stack, "stack"),
                config=config,
            )
        except PydanticValidationError as e:
            raise ValidationError(f"invalid deployment request: {e}") from e

        path = "/v1/deployments"
        payload = self._transport.request("POST", path, body=request.model_dump(mode="json"))
        deployment = self._one(Deployment, payload, path)
        logger.info(f"Created deployment {deployment.id} for chain {deployment.chain_id}")
        return deployment

    def get(self, deployment_id: Any) -> Deployment:
        path = self._path(deployment_id)
        return self._one(Deployment, self._transport.request("GET", path), path)

    def list(self, status: Optional[Any] = None) -> List[Deployment]:
        """
        List deployments, optionally only those in ``status``.
        """
        params = {
            "status": require_choice(status, DeploymentStatus, "status").value if status is not None else None,
        }
        path = "/v1/deployments"
        payload = self._transport.request("GET", path, params=params)
        return self._many(Deployment, self._data(payload, path), path)

    def start(self, deployment_id: Any) -> StartDeploymentResult:
        """
        Start a pending deployment or resume a paused one.

        The server runs the deployment asynchronously; use :meth:`watch` to
        follow its progress.
        """
        path = self._path(deployment_id, "start")
        payload = self._transport.request("POST", path)
        if payload is None:
            return StartDeploymentResult(status="started")
        result = self._one(StartDeploymentResult, payload, path)
        logger.info(f"Started deployment {deployment_id}")
        return result

    def list_artifacts(self, deployment_id: Any) -> List[Artifact]:
        path = self._path(deployment_id, "artifacts")
        data = self._data(self._transport.request("GET", path), path)
        return self._many(Artifact, data.get("artifacts") if isinstance(data, dict) else data, path)

    def get_artifact(self, deployment_id: Any, artifact_type: Any) -> Artifact:
        """
        Fetch one artifact by type (e.g. ``"genesis"``). Artifact types are an
        open set; unknown types are passed through.
        """
        artifact_type = getattr(artifact_type, "value", artifact_type)
        path = self._path(deployment_id, "artifacts", require_segment(artifact_type, "artifact_type"))
        return self._one(Artifact, self._transport.request("GET", path), path)

    def list_transactions(self, deployment_id: Any) -> List[Transaction]:
        path = self._path(deployment_id, "transactions")
        payload = self._transport.request("GET", path)
        return self._many(Transaction, self._data(payload, path), path)

    def download_bundle(self, deployment_id: Any) -> bytes:
        """
        Download every artifact of a deployment as a ``.tar.gz`` archive.

        Returns:
            The archive bytes, unmodified
        """
        path = self._path(deployment_id, "bundle")
        return self._transport.request_raw("GET", path)

    def watch(
        self,
        deployment_id: Any,
        interval: float = DEFAULT_POLL_INTERVAL,
        watch: bool = True,
        wait: Optional[Callable[[float], bool]] = None
    ) -> DeploymentPoller:
        """
        Poll a deployment until it reaches a terminal state.

        Args:
            deployment_id: Deployment to follow
            interval: Seconds between fetches
            watch: When False, fetch exactly once
            wait: Optional ``wait(seconds) -> bool`` used between fetches

        Returns:
            An iterator of deployment snapshots
        """
        return DeploymentPoller(self, deployment_id, interval=interval, watch=watch, wait=wait)
