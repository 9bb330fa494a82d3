"""
Transport layer for the POPSigner API.

This module defines the interface every transport implements. The resource
accessors only talk to a :class:`Transport`, which keeps them independent of
the HTTP library and lets tests substitute a recording fake.
"""
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, Mapping


class Transport(ABC):
    """
    Abstract base class for transport implementations.

    A transport performs exactly one authenticated exchange per call and
    never retries. Failures are reported as
    :class:`~popsigner_sdk.exceptions.APIError` (or a subclass).
    """

    @abstractmethod
    def request(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        params: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """
        Send a JSON request and decode the JSON response.

        Args:
            method: HTTP verb
            path: Path below the base URL, starting with ``/v1/``
            body: JSON-serialisable request body, or None for no body
            params: Query parameters; entries whose value is None are dropped

        Returns:
            The decoded JSON document, or None when the response body is empty

        Raises:
            APIError: If the request cannot be built, sent, or is rejected
        """
        pass

    @abstractmethod
    def request_raw(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None
    ) -> bytes:
        """
        Send a request and return the undecoded response body.

        Raises:
            APIError: If the request cannot be sent or is rejected
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close any open connections or resources."""
        pass


def clean_params(params: Optional[Mapping[str, Any]]) -> Optional[Dict[str, str]]:
    """
    Drop absent query parameters.

    ``None`` means "no filter" and is removed; an empty string is a real
    value and is kept.
    """
    if not params:
        return None
    cleaned = {}
    for name, value in params.items():
        if value is None:
            continue
        cleaned[name] = getattr(value, "value", value)
    return cleaned or None
