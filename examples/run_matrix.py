from __future__ import annotations
import os
import sys
import time
from testlab import (
    DeviceSpecification,
    GoogleCredential,
    TestLabClient,
    TestLabError,
    gcs_path,
    tool_results_executions,
)

# Polling and terminal-state handling belong to the caller, not the client
TERMINAL_STATES = {"FINISHED", "ERROR", "INVALID", "UNSUPPORTED_ENVIRONMENT", "INCOMPATIBLE_ENVIRONMENT", "INCOMPATIBLE_ARCHITECTURE", "CANCELLED"}
POLL_INTERVAL_SEC = 10


def main() -> int:
    project_id = os.environ["TESTLAB_PROJECT"]
    tests_zip = os.environ["TESTLAB_TESTS_ZIP"]  # gs:// path of the uploaded XCTest bundle
    client = TestLabClient(GoogleCredential(os.getenv("TESTLAB_KEY_FILE")))

    devices = [
        DeviceSpecification(model_id="iphone13", os_version_id="15.7", locale="en_US", orientation="portrait"),
        DeviceSpecification(model_id="iphone8", os_version_id="16.6", locale="en_US", orientation="landscape"),
    ]

    try:
        bucket = client.get_default_bucket(project_id)
        result_path = gcs_path(bucket, f"run-{int(time.time())}")
        matrix_id = client.start_job(
            project_id, tests_zip, result_path, devices, timeout_sec=900,
            client_metadata={"ci": os.getenv("CI_NAME", "local")},
        )
        print(f"Submitted {matrix_id}, results in {result_path}")

        while True:
            result = client.get_matrix_results(project_id, matrix_id)
            state = result.get("state", "UNKNOWN")
            print(f"{matrix_id}: {state}")
            if state in TERMINAL_STATES:
                break
            time.sleep(POLL_INTERVAL_SEC)

        for history_id, execution_id in tool_results_executions(result):
            steps = client.get_execution_steps(project_id, history_id, execution_id)
            for step in steps.get("steps", []):
                print(f"  {step.get('name')}: {step.get('outcome', {}).get('summary')}")
    except TestLabError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    return 0 if result.get("outcomeSummary", "SUCCESS") == "SUCCESS" else 1


if __name__ == "__main__":
    raise SystemExit(main())
