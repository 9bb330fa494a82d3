"""
PopSignerClient - Main client for the POPSigner API.
"""
import logging
from typing import Any, Callable, Iterable, Optional

from .batch import BatchSigner, BatchSignOutcome, SignRequestLike
from .config import ClientConfig
from .http_transport import HTTPTransport
from .poller import DeploymentPoller
from .resources import (
    KeysResource, NamespacesResource, OrganizationsResource,
    DeploymentsResource, SigningResource, DEFAULT_POLL_INTERVAL,
)
from .transport import Transport


class PopSignerClient:
    """
    Client for the POPSigner key-management and chain-deployment API.

    The client exposes one accessor per resource:

    - ``keys``: create, import, export, list and delete keys
    - ``namespaces`` / ``organizations``: key partitions and their owners
    - ``deployments``: chain deployments, artifacts and transactions
    - ``signing`` / ``batch``: single and batched signatures

    Configuration is fixed at construction; create a new client to change
    it. A client holds no per-call state, so one instance may be shared
    between threads.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the PopSignerClient

        Args:
            api_key: Bearer credential (required unless ``config`` is given)
            base_url: API root URL (defaults to https://api.popsigner.com)
            timeout: Request timeout in seconds (default 30)
            config: Fully resolved configuration; mutually exclusive with the
                individual settings above
            transport: Custom transport, mainly for tests
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If both ``config`` and individual settings are given,
                or the settings are invalid
        """
        if config is not None and any(v is not None for v in (api_key, base_url, timeout)):
            raise ValueError("Pass either config or api_key/base_url/timeout, not both")

        if config is None:
            overrides = {"base_url": base_url, "timeout": timeout}
            config = ClientConfig(
                api_key=api_key or "",
                **{k: v for k, v in overrides.items() if v is not None}
            )

        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.transport = transport or HTTPTransport(config)

        self.keys = KeysResource(self.transport)
        self.namespaces = NamespacesResource(self.transport)
        self.organizations = OrganizationsResource(self.transport)
        self.deployments = DeploymentsResource(self.transport)
        self.signing = SigningResource(self.transport)
        self.batch = BatchSigner(self.signing)

        self.logger.debug(f"Initialized PopSignerClient for {config.base_url}")

    @classmethod
    def from_env(cls, **overrides: Any) -> "PopSignerClient":
        """Build a client from ``POPSIGNER_*`` environment variables."""
        transport = overrides.pop("transport", None)
        return cls(config=ClientConfig.from_env(**overrides), transport=transport)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def sign_batch(self, requests: Iterable[SignRequestLike]) -> BatchSignOutcome:
        """
        Sign many payloads in one round trip.

        See :meth:`BatchSigner.sign`.
        """
        return self.batch.sign(requests)

    def watch_deployment(
        self,
        deployment_id: Any,
        interval: float = DEFAULT_POLL_INTERVAL,
        watch: bool = True,
        wait: Optional[Callable[[float], bool]] = None
    ) -> DeploymentPoller:
        """
        Follow a deployment until it completes or fails.

        See :meth:`DeploymentsResource.watch`.
        """
        return self.deployments.watch(deployment_id, interval=interval, watch=watch, wait=wait)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "PopSignerClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
