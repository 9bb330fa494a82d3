"""
Data models for the POPSigner SDK.

Server payloads are read-only projections: the client never mutates a model
after receiving it. Unknown fields are ignored so newer servers keep working
with older clients.
"""
import base64
import binascii
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Optional, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class Stack(str, Enum):
    """Rollup stack of a chain deployment."""
    OPSTACK = "opstack"
    NITRO = "nitro"


class DeploymentStatus(str, Enum):
    """
    Lifecycle state of a deployment.

    pending -> running -> completed | failed. ``paused`` is only reachable
    from ``running`` and goes back to ``running`` when the deployment is
    started again.
    """
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    PAUSED = "paused"

    @property
    def is_terminal(self) -> bool:
        return self in (DeploymentStatus.COMPLETED, DeploymentStatus.FAILED)

    @property
    def is_resumable(self) -> bool:
        return self in (DeploymentStatus.PENDING, DeploymentStatus.PAUSED)


class ArtifactType(str, Enum):
    """Known artifact types. The server may produce others."""
    GENESIS = "genesis"
    ROLLUP_CONFIG = "rollup_config"
    STATE = "state"
    CHAIN_INFO = "chain_info"
    NODE_CONFIG = "node_config"
    CORE_CONTRACTS = "core_contracts"

    @staticmethod
    def filename_for(artifact_type: str) -> str:
        """Conventional file name for an artifact type."""
        name = getattr(artifact_type, "value", artifact_type)
        return _ARTIFACT_FILENAMES.get(name, f"{name}.json")


_ARTIFACT_FILENAMES = {
    "genesis": "genesis.json",
    "rollup_config": "rollup.json",
    "state": "state.json",
    "chain_info": "chain-info.json",
    "node_config": "node-config.json",
    "core_contracts": "core-contracts.json",
}


class Key(_APIModel):
    """A cryptographic key held by the service"""
    id: UUID
    namespace_id: UUID
    name: str
    public_key: str
    address: str
    algorithm: str
    exportable: bool = False
    metadata: Optional[Dict[str, str]] = None
    network_type: Optional[str] = None
    version: int = Field(default=1, ge=1)
    created_at: datetime


class ExportedKey(_APIModel):
    """Private key material returned by an export. Not redacted."""
    private_key: str = Field(repr=False)
    warning: str = ""


class Organization(_APIModel):
    id: UUID
    name: str
    plan: str
    created_at: datetime
    updated_at: datetime


class Namespace(_APIModel):
    """Logical partition of keys within an organization"""
    id: UUID
    org_id: UUID
    name: str
    description: Optional[str] = None
    created_at: datetime


class SignRequest(_APIModel):
    """
    A single signing request.

    ``data`` is the base64 encoding of the bytes to sign. Use
    :meth:`from_bytes` or :meth:`from_hex` to build one from raw input.
    """
    key_id: UUID
    data: str
    prehashed: bool = False

    @field_validator("data")
    @classmethod
    def _check_data(cls, value: str) -> str:
        if not value:
            raise ValueError("data must not be empty")
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("data must be base64-encoded")
        return value

    @classmethod
    def from_bytes(cls, key_id: Any, raw: bytes, prehashed: bool = False) -> "SignRequest":
        return cls(key_id=key_id, data=base64.b64encode(raw).decode("ascii"), prehashed=prehashed)

    @classmethod
    def from_hex(cls, key_id: Any, hex_data: str, prehashed: bool = False) -> "SignRequest":
        """Build a request from hex input (e.g. a transaction hash), with or without 0x."""
        if hex_data.startswith(("0x", "0X")):
            hex_data = hex_data[2:]
        try:
            raw = bytes.fromhex(hex_data)
        except ValueError as e:
            raise ValueError(f"invalid hex data: {e}")
        return cls.from_bytes(key_id, raw, prehashed=prehashed)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"key_id": str(self.key_id), "data": self.data}
        if self.prehashed:
            payload["prehashed"] = True
        return payload


class SignResponse(_APIModel):
    key_id: UUID
    signature: str
    public_key: str
    key_version: int


class BatchSignResult(_APIModel):
    """
    Outcome of one item in a batch sign call.

    Exactly one of ``signature`` and ``error`` is set.
    """
    key_id: UUID
    signature: Optional[str] = None
    public_key: Optional[str] = None
    key_version: Optional[int] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _one_outcome(self) -> "BatchSignResult":
        if bool(self.signature) == bool(self.error):
            raise ValueError("exactly one of signature or error must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchSignResponse(_APIModel):
    signatures: List[BatchSignResult] = Field(default_factory=list)
    count: int = 0


class Deployment(_APIModel):
    """A chain deployment and its current progress"""
    id: str
    chain_id: int
    stack: Stack
    status: DeploymentStatus
    current_stage: Optional[str] = None
    error: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


class CreateDeploymentRequest(_APIModel):
    chain_id: int = Field(gt=0)
    stack: Stack
    config: Dict[str, Any]

    @field_validator("config")
    @classmethod
    def _check_config(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        if not value:
            raise ValueError("config must not be empty")
        return value


class StartDeploymentResult(_APIModel):
    status: str = ""
    message: str = ""


class Artifact(_APIModel):
    """
    A deployment output document. Once produced for a type it never changes.
    """
    type: str = Field(alias="artifact_type")
    content: Any = None
    created_at: Optional[datetime] = None

    @property
    def filename(self) -> str:
        return ArtifactType.filename_for(self.type)


class Transaction(_APIModel):
    """On-chain transaction recorded for a deployment stage"""
    id: Optional[UUID] = None
    deployment_id: Optional[str] = None
    stage: str
    tx_hash: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
