"""
testlab - Firebase Test Lab job client

Submits iOS XCTest runs to Firebase Test Lab, polls their test matrices and
lists Tool Results execution steps for artifact discovery.

Usage:
    from testlab import GoogleCredential, TestLabClient, DeviceSpecification, gcs_path

    client = TestLabClient(GoogleCredential("key.json"))
    bucket = client.get_default_bucket("my-project")
    matrix_id = client.start_job(
        "my-project",
        "gs://my-bucket/app/tests.zip",
        gcs_path(bucket, "run-1"),
        [DeviceSpecification(model_id="iphone13", os_version_id="15.0",
                             locale="en", orientation="portrait")],
        timeout_sec=600,
    )
    result = client.get_matrix_results("my-project", matrix_id)
"""

__version__ = "0.1.0"

from .core.client import (
    DeviceSpecification,
    ErrorKind,
    GoogleCredential,
    TestLabClient,
    TestLabConfig,
    TestLabError,
    TestLabRemoteError,
    TestLabTransportError,
    gcs_path,
    tool_results_executions,
)

__all__ = [
    "__version__",
    "DeviceSpecification",
    "ErrorKind",
    "GoogleCredential",
    "TestLabClient",
    "TestLabConfig",
    "TestLabError",
    "TestLabRemoteError",
    "TestLabTransportError",
    "gcs_path",
    "tool_results_executions",
]
