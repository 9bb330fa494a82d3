#!/usr/bin/env python3
"""
Simple example of using the POPSigner SDK.
"""
import os

from popsigner_sdk import PopSignerClient, SignRequest, APIError


def main():
    """
    Demonstrate basic usage of the PopSignerClient.

    This example shows how to:
    1. Initialize the client from the environment
    2. Pick a namespace and create two keys
    3. Sign with both keys in one batch call
    """
    if not os.environ.get("POPSIGNER_API_KEY"):
        print("ERROR: POPSIGNER_API_KEY environment variable is required")
        return

    with PopSignerClient.from_env() as client:
        try:
            org = client.organizations.resolve_default()
            namespaces = client.namespaces.list(org.id)
            if not namespaces:
                print(f"Organization {org.name} has no namespaces; create one first")
                return
            namespace = namespaces[0]
            print(f"Using namespace {namespace.name} ({namespace.id})")

            keys = client.keys.create_batch("example", 2, namespace.id)
            for key in keys:
                print(f"Created {key.name}: {key.address}")

            outcome = client.sign_batch([
                SignRequest.from_bytes(key.id, f"hello from {key.name}".encode())
                for key in keys
            ])
            for request, result in zip(outcome.requests, outcome.ordered()):
                if result.ok:
                    print(f"{request.key_id}: {result.signature}")
                else:
                    print(f"{request.key_id}: failed ({result.error})")

        except APIError as e:
            print(f"Request failed: {e} (HTTP {e.http_status})")


if __name__ == "__main__":
    main()
