"""
Key accessor: create, list, import, export and delete signing keys.
"""
import logging
from typing import Any, Dict, List, Optional

from ..models import Key, ExportedKey
from .._validation import require_uuid, require_text, require_range
from ._base import Resource

logger = logging.getLogger(__name__)

# Client-side guard against oversized batch creations
MAX_BATCH_KEYS = 100


class KeysResource(Resource):
    """Operations on ``/v1/keys``."""

    def list(self, namespace_id: Optional[Any] = None, network: Optional[str] = None) -> List[Key]:
        """
        List keys, optionally filtered.

        Args:
            namespace_id: Only keys in this namespace
            network: Only keys for this network type

        Returns:
            List of keys (possibly empty)
        """
        params = {
            "namespace_id": str(require_uuid(namespace_id, "namespace_id")) if namespace_id is not None else None,
            "network": network,
        }
        path = "/v1/keys"
        payload = self._transport.request("GET", path, params=params)
        return self._many(Key, self._data(payload, path), path)

    def get(self, key_id: Any) -> Key:
        path = f"/v1/keys/{require_uuid(key_id, 'key_id')}"
        return self._one(Key, self._transport.request("GET", path), path)

    def create(
        self,
        name: str,
        namespace_id: Any,
        algorithm: Optional[str] = None,
        exportable: bool = False,
        metadata: Optional[Dict[str, str]] = None,
        network_type: Optional[str] = None
    ) -> Key:
        """
        Create a key.

        Optional fields are only sent when supplied so the server defaults
        (e.g. the algorithm) apply otherwise.

        Args:
            name: Key name, unique within the namespace
            namespace_id: Namespace that will own the key
            algorithm: Key algorithm, server default if omitted
            exportable: Whether the private key may later be exported
            metadata: Free-form string labels
            network_type: Network the key is intended for

        Returns:
            The created key

        Raises:
            ValidationError: If name or namespace_id is invalid
            APIError: If the server rejects the request
        """
        body: Dict[str, Any] = {
            "name": require_text(name, "name"),
            "namespace_id": str(require_uuid(namespace_id, "namespace_id")),
            "exportable": bool(exportable),
        }
        if algorithm:
            body["algorithm"] = algorithm
        if metadata:
            body["metadata"] = dict(metadata)
        if network_type:
            body["network_type"] = network_type

        path = "/v1/keys"
        key = self._one(Key, self._transport.request("POST", path, body=body), path)
        logger.info(f"Created key {key.id} in namespace {key.namespace_id}")
        return key

    def create_batch(
        self,
        prefix: str,
        count: int,
        namespace_id: Any,
        exportable: bool = False
    ) -> List[Key]:
        """
        Create ``count`` keys named ``<prefix>-<n>`` in one request.

        Raises:
            ValidationError: If count is outside 1..100 or arguments are malformed
        """
        body = {
            "prefix": require_text(prefix, "prefix"),
            "count": require_range(count, 1, MAX_BATCH_KEYS, "count"),
            "namespace_id": str(require_uuid(namespace_id, "namespace_id")),
            "exportable": bool(exportable),
        }
        path = "/v1/keys/batch"
        data = self._data(self._transport.request("POST", path, body=body), path)
        keys = self._many(Key, data.get("keys") if isinstance(data, dict) else None, path)
        logger.info(f"Created {len(keys)} keys with prefix {prefix!r}")
        return keys

    def delete(self, key_id: Any) -> None:
        path = f"/v1/keys/{require_uuid(key_id, 'key_id')}"
        self._transport.request("DELETE", path)
        logger.info(f"Deleted key {key_id}")

    def import_key(
        self,
        name: str,
        namespace_id: Any,
        private_key: str,
        exportable: bool = False
    ) -> Key:
        """
        Import existing private key material.

        Args:
            name: Key name
            namespace_id: Namespace that will own the key
            private_key: Base64-encoded private key
            exportable: Whether the key may be exported again

        Returns:
            The imported key
        """
        body = {
            "name": require_text(name, "name"),
            "namespace_id": str(require_uuid(namespace_id, "namespace_id")),
            "private_key": require_text(private_key, "private_key"),
            "exportable": bool(exportable),
        }
        path = "/v1/keys/import"
        key = self._one(Key, self._transport.request("POST", path, body=body), path)
        logger.info(f"Imported key {key.id}")
        return key

    def export(self, key_id: Any) -> ExportedKey:
        """
        Export a key's private material. The result is returned as-is;
        deciding how (or whether) to display it is up to the caller.
        """
        path = f"/v1/keys/{require_uuid(key_id, 'key_id')}/export"
        return self._one(ExportedKey, self._transport.request("POST", path), path)
