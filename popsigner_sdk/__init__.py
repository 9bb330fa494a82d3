"""
POPSigner SDK - Python client for the POPSigner key-management and
chain-deployment API.
"""
from .version import __version__
from .client import PopSignerClient
from .config import ClientConfig, DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .batch import BatchSigner, BatchSignOutcome
from .poller import DeploymentPoller
from .transport import Transport
from .http_transport import HTTPTransport
from .models import (
    Key, ExportedKey, Namespace, Organization,
    SignRequest, SignResponse, BatchSignResult, BatchSignResponse,
    Deployment, DeploymentStatus, Stack, Artifact, ArtifactType, Transaction,
    StartDeploymentResult,
)
from .exceptions import (
    PopSignerError, ValidationError, APIError, APIConnectionError,
    APITimeoutError, ResponseDecodeError,
)

__all__ = [
    "PopSignerClient",
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "BatchSigner",
    "BatchSignOutcome",
    "DeploymentPoller",
    "Transport",
    "HTTPTransport",
    "Key",
    "ExportedKey",
    "Namespace",
    "Organization",
    "SignRequest",
    "SignResponse",
    "BatchSignResult",
    "BatchSignResponse",
    "Deployment",
    "DeploymentStatus",
    "Stack",
    "Artifact",
    "ArtifactType",
    "Transaction",
    "StartDeploymentResult",
    "PopSignerError",
    "ValidationError",
    "APIError",
    "APIConnectionError",
    "APITimeoutError",
    "ResponseDecodeError",
    "__version__",
]
