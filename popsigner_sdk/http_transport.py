"""
requests-based transport for the POPSigner API.
"""
import json
import logging
import time
from typing import Optional, Dict, Any, Mapping, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import ClientConfig
from .exceptions import APIError, APIConnectionError, APITimeoutError, ResponseDecodeError
from .transport import Transport, clean_params

# Configure logger
logger = logging.getLogger(__name__)

# Longest response excerpt embedded in a synthetic error message
_MAX_ERROR_BODY = 512


class HTTPTransport(Transport):
    """
    HTTPS+JSON transport built on a ``requests.Session``.

    A session the transport creates itself is configured with zero retries,
    so every logical call makes at most one network attempt. Configuration is read-only after
    construction; concurrent calls do not share per-call state.
    """

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        """
        Initialize the transport.

        Args:
            config: Resolved client configuration
            session: Optional pre-built session (mainly for tests). It is used
                as-is; its adapters and retry settings are left untouched.
        """
        self.config = config
        if session is None:
            session = requests.Session()
            # Retrying belongs to the caller
            no_retries = Retry(total=0, raise_on_status=False)
            session.mount("http://", HTTPAdapter(max_retries=no_retries))
            session.mount("https://", HTTPAdapter(max_retries=no_retries))
        self.session = session

        logger.debug(f"Initialized HTTP transport for {config.base_url}")

    def _headers(self, with_body: bool = False, accept_json: bool = True) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "User-Agent": self.config.user_agent,
        }
        if accept_json:
            headers["Accept"] = "application/json"
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    def request(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        params: Optional[Mapping[str, Any]] = None
    ) -> Any:
        data = None
        if body is not None:
            try:
                data = json.dumps(body)
            except (TypeError, ValueError) as e:
                raise APIError(
                    f"failed to marshal request: {e}", code="request_error", http_status=0
                ) from e

        response, body_bytes = self._send(
            method, path, params=params, data=data,
            headers=self._headers(with_body=data is not None)
        )

        if not body_bytes:
            return None

        try:
            return json.loads(body_bytes)
        except ValueError as e:
            raise ResponseDecodeError(
                f"failed to parse response: {e}", http_status=response.status_code
            ) from e

    def request_raw(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None
    ) -> bytes:
        _, body_bytes = self._send(
            method, path, params=params, data=None,
            headers=self._headers(accept_json=False)
        )
        return body_bytes

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]],
        data: Optional[str],
        headers: Dict[str, str]
    ) -> Tuple[requests.Response, bytes]:
        """
        Perform one HTTP exchange and classify failures.

        Returns:
            The response and its body, for status codes below 400

        Raises:
            APIError: For request construction failures (status 0) and
                error responses (status >= 400)
            APIConnectionError: For network failures
            APITimeoutError: When the request times out
        """
        url = f"{self.config.base_url}{path}"
        started = time.monotonic()

        try:
            response = self.session.request(
                method,
                url,
                params=clean_params(params),
                data=data,
                headers=headers,
                timeout=self.config.timeout,
            )
        except requests.Timeout as e:
            logger.error(f"{method} {path} timed out after {self.config.timeout}s")
            raise APITimeoutError(f"request timed out: {e}") from e
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema, requests.exceptions.URLRequired) as e:
            raise APIError(
                f"failed to create request: {e}", code="request_error", http_status=0
            ) from e
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise APIConnectionError(f"request failed: {e}") from e

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.debug(f"{method} {path} -> {response.status_code} ({elapsed_ms:.0f} ms)")

        body_bytes = response.content or b""
        if response.status_code >= 400:
            raise self._error_from_response(response.status_code, body_bytes)

        return response, body_bytes

    @staticmethod
    def _error_from_response(status: int, body_bytes: bytes) -> APIError:
        """
        Decode an ``{"error": {"code", "message"}}`` envelope.

        Falls back to a synthetic error built from the raw status and body
        text when the envelope cannot be decoded.
        """
        try:
            envelope = json.loads(body_bytes)
            error = envelope["error"]
            message = error["message"]
            code = error.get("code")
            if not isinstance(message, str):
                raise TypeError("error.message is not a string")
        except (ValueError, KeyError, TypeError, AttributeError):
            text = body_bytes.decode("utf-8", errors="replace").strip()
            if len(text) > _MAX_ERROR_BODY:
                text = text[:_MAX_ERROR_BODY] + "..."
            return APIError(f"HTTP {status}: {text}", http_status=status)

        return APIError(message, code=code if isinstance(code, str) else None, http_status=status)

    def close(self) -> None:
        self.session.close()
