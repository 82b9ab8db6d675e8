"""
Test Lab client package for submitting test matrices and reading their results.
"""

from .exceptions import ErrorKind, TestLabError, TestLabRemoteError, TestLabTransportError
from .config import TestLabConfig
from .credentials import CredentialProvider, GoogleCredential, RequestSigner, ScopedSigner
from .models import DeviceSpecification, TestMatrixRequest, gcs_path, tool_results_executions
from .client import TestLabClient

__all__ = [
    'ErrorKind', 'TestLabError', 'TestLabRemoteError', 'TestLabTransportError',
    'TestLabConfig', 'TestLabClient',
    'CredentialProvider', 'GoogleCredential', 'RequestSigner', 'ScopedSigner',
    'DeviceSpecification', 'TestMatrixRequest', 'gcs_path', 'tool_results_executions',
]
