"""
Shared plumbing for resource accessors.
"""
import logging
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..exceptions import ResponseDecodeError
from ..transport import Transport

M = TypeVar("M", bound=BaseModel)

logger = logging.getLogger(__name__)


class Resource:
    """Base class for accessors: holds the transport and decodes envelopes."""

    def __init__(self, transport: Transport):
        self._transport = transport

    @staticmethod
    def _data(payload: Any, path: str) -> Any:
        """Unwrap the ``{"data": ...}`` success envelope."""
        if not isinstance(payload, dict) or "data" not in payload:
            raise ResponseDecodeError(f"unexpected response from {path}: missing 'data'")
        return payload["data"]

    def _one(self, model: Type[M], payload: Any, path: str) -> M:
        try:
            return model.model_validate(self._data(payload, path))
        except PydanticValidationError as e:
            logger.debug(f"Could not decode {model.__name__} from {path}: {e}")
            raise ResponseDecodeError(f"invalid {model.__name__} in response from {path}: {e}") from e

    def _many(self, model: Type[M], items: Any, path: str) -> List[M]:
        if items is None:
            return []
        if not isinstance(items, list):
            raise ResponseDecodeError(f"unexpected response from {path}: expected a list")
        try:
            return [model.model_validate(item) for item in items]
        except PydanticValidationError as e:
            raise ResponseDecodeError(f"invalid {model.__name__} in response from {path}: {e}") from e
