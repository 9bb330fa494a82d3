"""
Tests for single-item signing.
"""
from uuid import UUID

import pytest

from popsigner_sdk.exceptions import APIError, ValidationError
from tests.test_helpers import TEST_KEY_ID, url


def _sign_response(**overrides):
    payload = {
        "key_id": TEST_KEY_ID,
        "signature": "c2lnbmF0dXJl",
        "public_key": "02a1633cafcc01ebfb6d78e39f687a1f0995c62fc95f51ead10a02ee0be551b5dc",
        "key_version": 1,
    }
    payload.update(overrides)
    return payload


def test_sign(client, requests_mock):
    requests_mock.post(url("/v1/sign"), json={"data": _sign_response()})

    response = client.signing.sign(TEST_KEY_ID, "eA==")

    assert response.key_id == UUID(TEST_KEY_ID)
    assert response.signature == "c2lnbmF0dXJl"
    assert response.key_version == 1
    assert requests_mock.last_request.json() == {"key_id": TEST_KEY_ID, "data": "eA=="}


def test_sign_prehashed(client, requests_mock):
    requests_mock.post(url("/v1/sign"), json={"data": _sign_response(key_version=3)})

    response = client.signing.sign(TEST_KEY_ID, "eA==", prehashed=True)

    assert requests_mock.last_request.json()["prehashed"] is True
    assert response.key_version == 3


@pytest.mark.parametrize("key_id, data", [
    ("not-a-uuid", "eA=="),
    (TEST_KEY_ID, ""),
    (TEST_KEY_ID, "not base64!"),
])
def test_invalid_input_is_rejected_locally(client, requests_mock, key_id, data):
    with pytest.raises(ValidationError):
        client.signing.sign(key_id, data)
    assert requests_mock.call_count == 0


def test_unknown_key(client, requests_mock):
    requests_mock.post(
        url("/v1/sign"),
        json={"error": {"code": "not_found", "message": "key not found"}},
        status_code=404,
    )

    with pytest.raises(APIError) as excinfo:
        client.signing.sign(TEST_KEY_ID, "eA==")

    assert excinfo.value.is_not_found
