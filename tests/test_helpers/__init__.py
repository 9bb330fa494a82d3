from .client_creator import (
    create_test_client,
    url,
    key_payload,
    org_payload,
    namespace_payload,
    deployment_payload,
    RecordingTransport,
    TEST_BASE_URL,
    TEST_API_KEY,
    TEST_ORG_ID,
    TEST_NAMESPACE_ID,
    TEST_KEY_ID,
    TEST_KEY_ID_B,
    TEST_DEPLOYMENT_ID,
    TEST_TIMESTAMP,
)
