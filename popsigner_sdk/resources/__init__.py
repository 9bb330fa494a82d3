"""
Typed accessors for each API resource.
"""
from .keys import KeysResource, MAX_BATCH_KEYS
from .organizations import OrganizationsResource, NamespacesResource
from .deployments import DeploymentsResource, DEFAULT_POLL_INTERVAL
from .signing import SigningResource

__all__ = [
    "KeysResource",
    "OrganizationsResource",
    "NamespacesResource",
    "DeploymentsResource",
    "SigningResource",
    "MAX_BATCH_KEYS",
    "DEFAULT_POLL_INTERVAL",
]
