"""
Signing accessor.
"""
import logging
from typing import Any, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError, ResponseDecodeError
from ..models import SignRequest, SignResponse, BatchSignResult, BatchSignResponse
from ._base import Resource

logger = logging.getLogger(__name__)

MALFORMED_RESULT_ERROR = "malformed result from server"


class SigningResource(Resource):
    """Operations on ``/v1/sign``."""

    def sign(self, key_id: Any, data: str, prehashed: bool = False) -> SignResponse:
        """
        Sign data with one key.

        Args:
            key_id: Key to sign with
            data: Base64-encoded bytes to sign
            prehashed: True if ``data`` is already a digest

        Returns:
            The signature and the key version that produced it

        Raises:
            ValidationError: If key_id or data is malformed
            APIError: If signing is rejected (unknown key, etc.)
        """
        try:
            request = SignRequest(key_id=key_id, data=data, prehashed=prehashed)
        except PydanticValidationError as e:
            raise ValidationError(f"invalid sign request: {e}") from e

        path = "/v1/sign"
        return self._one(SignResponse, self._transport.request("POST", path, body=request.to_payload()), path)

    def sign_batch(self, requests: Sequence[SignRequest]) -> BatchSignResponse:
        """
        Submit already-validated requests in a single call and return the
        server's results in server order. Items are decoded one by one, so a
        malformed item only affects its own key. Most callers want
        :class:`~popsigner_sdk.batch.BatchSigner`, which correlates the
        results back to the requests.
        """
        path = "/v1/sign/batch"
        body = {"requests": [r.to_payload() for r in requests]}
        data = self._data(self._transport.request("POST", path, body=body), path)
        if not isinstance(data, dict):
            raise ResponseDecodeError(f"unexpected response from {path}: expected an object")

        items = data.get("signatures") or []
        if not isinstance(items, list):
            raise ResponseDecodeError(f"unexpected response from {path}: signatures is not a list")

        results = []
        for index, item in enumerate(items):
            result = self._batch_result(index, item)
            if result is not None:
                results.append(result)

        count = data.get("count")
        return BatchSignResponse(
            signatures=results,
            count=count if isinstance(count, int) and not isinstance(count, bool) else len(items),
        )

    @staticmethod
    def _batch_result(index: int, item: Any) -> Optional[BatchSignResult]:
        """
        Decode one batch item. A malformed item becomes an error result for
        its key; an item without a usable key id cannot be correlated and is
        dropped.
        """
        try:
            return BatchSignResult.model_validate(item)
        except PydanticValidationError as e:
            logger.warning(f"Malformed batch sign result at index {index}: {e}")

        key_id = item.get("key_id") if isinstance(item, dict) else None
        try:
            return BatchSignResult(key_id=key_id, error=MALFORMED_RESULT_ERROR)
        except PydanticValidationError:
            return None
