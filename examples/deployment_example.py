#!/usr/bin/env python3
"""
Example of creating a chain deployment and watching it finish.
"""
import json
import logging
import os
import pathlib
import sys

from popsigner_sdk import PopSignerClient, APIError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    """
    Create an OP Stack deployment, start it, follow its progress and save
    the resulting artifacts.

    Set DEPLOYMENT_ID to watch an existing deployment instead.
    """
    output_dir = pathlib.Path(os.environ.get("OUTPUT_DIR", "./artifacts"))

    with PopSignerClient.from_env() as client:
        try:
            deployment_id = os.environ.get("DEPLOYMENT_ID")
            if not deployment_id:
                deployment = client.deployments.create(
                    chain_id=int(os.environ.get("CHAIN_ID", "42069")),
                    stack="opstack",
                    config={"l1_rpc": os.environ.get("L1_RPC", "https://rpc.sepolia.org")},
                )
                deployment_id = deployment.id
                client.deployments.start(deployment_id)
                print(f"Started deployment {deployment_id}")

            def show(d):
                print(f"[{d.status.value}] {d.current_stage or ''}")

            final = client.watch_deployment(deployment_id).run(show)
            if final is None or final.status.value != "completed":
                print(f"Deployment did not complete: {final.error if final else 'stopped'}")
                return 1

            output_dir.mkdir(parents=True, exist_ok=True)
            for artifact in client.deployments.list_artifacts(deployment_id):
                target = output_dir / artifact.filename
                target.write_text(json.dumps(artifact.content, indent=2))
                print(f"Wrote {target}")

            bundle = client.deployments.download_bundle(deployment_id)
            (output_dir / "bundle.tar.gz").write_bytes(bundle)

        except KeyboardInterrupt:
            print("Stopped watching; the deployment keeps running on the server")
        except APIError as e:
            logger.error(f"Deployment request failed: {e}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
