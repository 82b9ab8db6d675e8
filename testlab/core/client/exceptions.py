"""Custom exceptions for the Test Lab client."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure classes surfaced by every client operation."""

    TRANSPORT = "transport"
    REMOTE_REJECTION = "remote_rejection"


class TestLabError(Exception):
    """Base exception for Test Lab API errors."""

    __test__ = False

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
    ):
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(self.message)


class TestLabTransportError(TestLabError):
    """The request never produced an HTTP response (DNS, TLS, timeout, refused)."""

    def __init__(self, message: str):
        super().__init__(message, kind=ErrorKind.TRANSPORT)


class TestLabRemoteError(TestLabError):
    """The service answered with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(
            message,
            kind=ErrorKind.REMOTE_REJECTION,
            status_code=status_code,
            response_text=response_text,
        )
