"""
Batch signing.

The server signs every item of a batch independently and may finish them in
any order, so results are matched to requests by key id and never by
position. A failure of one item is reported on that item only; only a
failure of the whole call raises.
"""
import logging
from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, Iterable, List, Mapping, Tuple, Union
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from ._validation import require_uuid
from .models import SignRequest, BatchSignResult
from .resources.signing import SigningResource

logger = logging.getLogger(__name__)

MISSING_RESULT_ERROR = "no result returned for key"

SignRequestLike = Union[SignRequest, Mapping[str, Any]]


@dataclass(frozen=True)
class BatchSignOutcome:
    """
    Results of a batch sign call, keyed by key id.

    Attributes:
        requests: The submitted requests, in caller order
        results: Results exactly as the server returned them
        count: Count reported by the server
    """
    requests: Tuple[SignRequest, ...]
    results: Tuple[BatchSignResult, ...]
    count: int = 0
    by_key_id: Dict[UUID, List[BatchSignResult]] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        grouped: Dict[UUID, List[BatchSignResult]] = defaultdict(list)
        for result in self.results:
            grouped[result.key_id].append(result)
        object.__setattr__(self, "by_key_id", dict(grouped))

    @property
    def succeeded(self) -> List[BatchSignResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> List[BatchSignResult]:
        return [r for r in self.results if not r.ok]

    @property
    def all_succeeded(self) -> bool:
        return all(r.ok for r in self.ordered())

    def get(self, key_id: Any) -> List[BatchSignResult]:
        """All results for one key id (usually one)."""
        key_id = require_uuid(key_id, "key_id")
        return list(self.by_key_id.get(key_id, []))

    def ordered(self) -> List[BatchSignResult]:
        """
        One result per request, in request order.

        The n-th request for a key receives the n-th result the server
        returned for that key. Requests without a result get a synthetic
        error result.
        """
        pending: Dict[UUID, Deque[BatchSignResult]] = {
            key_id: deque(results) for key_id, results in self.by_key_id.items()
        }
        aligned = []
        for request in self.requests:
            queue = pending.get(request.key_id)
            if queue:
                aligned.append(queue.popleft())
            else:
                aligned.append(BatchSignResult(key_id=request.key_id, error=MISSING_RESULT_ERROR))
        return aligned

    @property
    def unmatched(self) -> List[BatchSignResult]:
        """Results the server returned beyond what was requested for their key."""
        requested: Dict[UUID, int] = defaultdict(int)
        for request in self.requests:
            requested[request.key_id] += 1
        extra = []
        for key_id, results in self.by_key_id.items():
            extra.extend(results[requested.get(key_id, 0):])
        return extra


def coerce_sign_requests(requests: Iterable[SignRequestLike]) -> Tuple[SignRequest, ...]:
    """
    Validate batch input locally.

    Raises:
        ValidationError: If the batch is empty or an item is malformed; the
            message names the offending index
    """
    coerced = []
    for index, item in enumerate(requests):
        if isinstance(item, SignRequest):
            coerced.append(item)
            continue
        try:
            coerced.append(SignRequest.model_validate(item))
        except PydanticValidationError as e:
            raise ValidationError(f"request {index}: {e}") from e

    if not coerced:
        raise ValidationError("at least one sign request is required")
    return tuple(coerced)


class BatchSigner:
    """
    Sends N sign requests in one round trip and correlates the results.
    """

    def __init__(self, signing: SigningResource):
        self._signing = signing

    def sign(self, requests: Iterable[SignRequestLike]) -> BatchSignOutcome:
        """
        Sign every request in one call.

        Args:
            requests: SignRequest objects, or mappings with key_id/data/prehashed

        Returns:
            BatchSignOutcome with per-item success or error

        Raises:
            ValidationError: If any request is malformed (nothing is sent)
            APIError: If the call as a whole fails
        """
        submitted = coerce_sign_requests(requests)
        response = self._signing.sign_batch(submitted)

        outcome = BatchSignOutcome(
            requests=submitted,
            results=tuple(response.signatures),
            count=response.count,
        )

        failed = outcome.failed
        logger.info(
            f"Batch sign: {len(submitted)} requested, "
            f"{len(outcome.succeeded)} signed, {len(failed)} failed"
        )
        if len(outcome.results) != len(submitted):
            logger.warning(
                f"Batch sign returned {len(outcome.results)} results for {len(submitted)} requests"
            )
        for result in failed:
            logger.debug(f"Batch sign failed for key {result.key_id}: {result.error}")
        return outcome
