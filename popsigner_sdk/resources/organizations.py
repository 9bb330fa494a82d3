"""
Organization and namespace accessors.
"""
import logging
from typing import Any, List, Optional

from ..exceptions import ValidationError
from ..models import Organization, Namespace
from .._rate_limited_log import rate_limited_log
from .._validation import require_uuid, require_text
from ._base import Resource

logger = logging.getLogger(__name__)


class OrganizationsResource(Resource):
    """Operations on ``/v1/organizations``."""

    def list(self) -> List[Organization]:
        path = "/v1/organizations"
        payload = self._transport.request("GET", path)
        return self._many(Organization, self._data(payload, path), path)

    def get(self, org_id: Any) -> Organization:
        path = f"/v1/organizations/{require_uuid(org_id, 'org_id')}"
        return self._one(Organization, self._transport.request("GET", path), path)

    def resolve_default(self) -> Organization:
        """
        Pick the organization to use when none was given explicitly.

        This is the first organization the server lists. When the credential
        can see more than one, the choice is ambiguous and a warning is
        logged; callers that care should pass an explicit org id instead.

        Raises:
            ValidationError: If the credential has no organizations
        """
        orgs = self.list()
        if not orgs:
            raise ValidationError("no organizations found")

        chosen = orgs[0]
        if len(orgs) > 1:
            rate_limited_log(
                f"{len(orgs)} organizations available; defaulting to the first "
                f"({chosen.name}, {chosen.id}). Pass an explicit org_id to choose.",
                level="warning",
                logger_instance=logger,
            )
        return chosen


class NamespacesResource(Resource):
    """Operations on ``/v1/organizations/{org_id}/namespaces``."""

    @staticmethod
    def _base(org_id: Any) -> str:
        return f"/v1/organizations/{require_uuid(org_id, 'org_id')}/namespaces"

    def list(self, org_id: Any) -> List[Namespace]:
        path = self._base(org_id)
        payload = self._transport.request("GET", path)
        return self._many(Namespace, self._data(payload, path), path)

    def get(self, org_id: Any, namespace_id: Any) -> Namespace:
        path = f"{self._base(org_id)}/{require_uuid(namespace_id, 'namespace_id')}"
        return self._one(Namespace, self._transport.request("GET", path), path)

    def create(self, org_id: Any, name: str, description: Optional[str] = None) -> Namespace:
        """
        Create a namespace in an organization.

        Args:
            org_id: Owning organization
            name: Namespace name
            description: Optional description, omitted from the request when empty

        Returns:
            The created namespace
        """
        path = self._base(org_id)
        body = {"name": require_text(name, "name")}
        if description:
            body["description"] = description

        namespace = self._one(Namespace, self._transport.request("POST", path, body=body), path)
        logger.info(f"Created namespace {namespace.id} ({namespace.name})")
        return namespace

    def delete(self, org_id: Any, namespace_id: Any) -> None:
        """
        Delete a namespace. The server also invalidates every key it owns.
        """
        path = f"{self._base(org_id)}/{require_uuid(namespace_id, 'namespace_id')}"
        self._transport.request("DELETE", path)
        logger.info(f"Deleted namespace {namespace_id}")
