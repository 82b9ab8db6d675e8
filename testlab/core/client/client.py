"""Client for the Firebase Test Lab and Tool Results APIs.

# Sections
1) Imports
2) Formatting utilities (terminal logger)
3) Client class (public API):
   - bucket settings (init_default_bucket, get_default_bucket)
   - job submission (start_job)
   - results (get_matrix_results, get_execution_steps)
"""

import logging
import os
import sys
from collections.abc import Mapping
from typing import Any, List, Optional

import google.auth.exceptions
import requests
from pydantic import ValidationError

from testlab.core.client import endpoints
from testlab.core.client.config import TestLabConfig
from testlab.core.client.credentials import CredentialProvider
from testlab.core.client.errors import (
    iam_console_hint,
    is_authorization_error,
    summarize_error,
)
from testlab.core.client.exceptions import (
    TestLabError,
    TestLabRemoteError,
    TestLabTransportError,
)
from testlab.core.client.models import (
    DeviceLike,
    TestMatrixRequest,
    merge_client_details,
)


def _isatty(stream) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


# --- Formatting utilities --------------------------------------------------


class _BlueDotFormatter(logging.Formatter):
    """Minimal formatter that prints a small icon instead of [LEVEL].

    INFO  -> cyan •  message
    WARN  -> yellow ! message
    ERROR -> red ✗   message
    DEBUG -> dim   · message
    """

    def __init__(self, enable_color: Optional[bool] = None) -> None:
        super().__init__()
        if enable_color is None:
            enable_color = _isatty(sys.stderr) and os.getenv("NO_COLOR") is None
        self.enable_color = enable_color

    def _ansi(self, code: str, text: str) -> str:
        return f"\x1b[{code}m{text}\x1b[0m" if self.enable_color else text

    def _icon_for(self, levelno: int) -> str:
        if levelno >= logging.ERROR:
            return self._ansi("31", "✗")
        if levelno >= logging.WARNING:
            return self._ansi("33", "!")
        if levelno <= logging.DEBUG:
            return self._ansi("90", "·")
        return self._ansi("36", "•")

    def format(self, record: logging.LogRecord) -> str:
        icon = self._icon_for(record.levelno)
        msg = record.getMessage()
        return f"{icon} {msg}"


# --- Client ----------------------------------------------------------------


class TestLabClient:
    """Client for submitting test matrices and reading back their results.

    Every public method issues a single HTTP request (get_default_bucket
    issues two on a cache miss) and raises a ``TestLabError`` subclass on
    failure. Nothing is retried.

    The default bucket name is cached on the instance once it has been read.
    Concurrent first lookups may both hit the service; initialization is
    idempotent remotely and the last write wins.
    """

    __test__ = False

    def __init__(
        self,
        credential: CredentialProvider,
        config: Optional[TestLabConfig] = None,
    ):
        self.config = config or TestLabConfig()
        self.logger = logging.getLogger(__name__)
        if not self.logger.handlers:
            handler = logging.StreamHandler(stream=sys.stderr)
            handler.setFormatter(_BlueDotFormatter())
            self.logger.addHandler(handler)
        self.logger.setLevel(logging.INFO)

        self.config.validate()
        self._auth = credential.get_google_credential(list(endpoints.TESTLAB_OAUTH_SCOPES))
        self._default_bucket: Optional[str] = None

    # --- Transport ---------------------------------------------------------

    def _timeouts(self) -> tuple:
        return (self.config.connect_timeout, self.config.timeout)

    def _send(
        self,
        method: str,
        url: str,
        *,
        failure: str,
        project_id: Optional[str] = None,
        json_body: Optional[Mapping[str, Any]] = None,
    ) -> requests.Response:
        """Issue one signed request.

        Signing may refresh the access token over the network, so it shares
        the request's failure handling: unreachable endpoints become
        TestLabTransportError and a token endpoint that refuses the
        credential becomes TestLabRemoteError.
        """
        self.logger.info("%s %s", method, url)
        try:
            headers = self._auth.apply(self.config.get_headers(project_id))
            return requests.request(
                method,
                url,
                headers=headers,
                json=dict(json_body) if json_body is not None else None,
                timeout=self._timeouts(),
            )
        except (requests.exceptions.RequestException, google.auth.exceptions.TransportError) as e:
            msg = f"{failure}, type: {type(e).__name__}, message: {e}"
            self.logger.error("%s", msg)
            raise TestLabTransportError(msg) from e
        except google.auth.exceptions.RefreshError as e:
            msg = f"Failed to refresh Google credential, type: {type(e).__name__}, message: {e}"
            self.logger.error("%s", msg)
            raise TestLabRemoteError(message=msg) from e

    def _raise_for_status(
        self, response: requests.Response, failure: str, project_id: str
    ) -> None:
        """Classify a non-200 response; authorization failures get the IAM console link."""
        if response.status_code == 200:
            return
        self.logger.error("%s (HTTP %d)", failure, response.status_code)
        summary = summarize_error(response.text)
        message = summary
        if is_authorization_error(summary):
            hint = iam_console_hint(project_id)
            self.logger.error("%s", hint)
            message = f"{summary}\n{hint}"
        raise TestLabRemoteError(
            message=message,
            status_code=response.status_code,
            response_text=response.text,
        )

    def _parse_json(self, response: requests.Response, failure: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TestLabRemoteError(
                message=f"{failure}: response was not valid JSON",
                status_code=response.status_code,
                response_text=response.text,
            ) from e

    # --- Bucket settings ---------------------------------------------------

    def init_default_bucket(self, project_id: str) -> None:
        """Ask Tool Results to create the project's default bucket.

        Safe to repeat; the response is not inspected.
        """
        url = endpoints.build_url(
            self.config.tool_results_url,
            endpoints.TOOLRESULTS_INITIALIZE_SETTINGS_API_V3,
            {"project": project_id},
        )
        self._send(
            "POST",
            url,
            failure="Network error when initializing Firebase Test Lab",
        )

    def get_default_bucket(self, project_id: str) -> str:
        """Return the project's default results bucket, initializing it if needed.

        The name is cached after the first successful read; later calls make
        no network requests.

        Raises:
          TestLabTransportError: If either request fails to complete.
          TestLabRemoteError: If the settings read is rejected. Authorization
            failures carry a link to the project's IAM console.
        """
        if self._default_bucket is not None:
            return self._default_bucket

        self.init_default_bucket(project_id)
        url = endpoints.build_url(
            self.config.tool_results_url,
            endpoints.TOOLRESULTS_GET_SETTINGS_API_V3,
            {"project": project_id},
        )
        response = self._send(
            "GET",
            url,
            failure="Network error when obtaining Firebase Test Lab default GCS bucket",
        )
        failure = "Failed to obtain default bucket for Firebase Test Lab"
        self._raise_for_status(response, failure, project_id)
        settings = self._parse_json(response, failure)
        bucket = settings.get("defaultBucket") if isinstance(settings, Mapping) else None
        if not bucket:
            raise TestLabRemoteError(
                message=f"{failure}: settings did not include defaultBucket",
                status_code=response.status_code,
                response_text=response.text,
            )
        self._default_bucket = bucket
        return bucket

    # --- Job submission ----------------------------------------------------

    def start_job(
        self,
        project_id: str,
        app_path: str,
        result_path: str,
        devices: List[DeviceLike],
        timeout_sec: int,
        client_metadata: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Create a test matrix and return the id the service assigned to it.

        ``client_metadata`` is sent as client info details, with ``version``
        always set to ``config.client_version``.
        """
        try:
            body = TestMatrixRequest.build(
                project_id=project_id,
                app_path=app_path,
                result_path=result_path,
                devices=devices,
                timeout_sec=timeout_sec,
                client_name=self.config.client_name,
                client_details=merge_client_details(client_metadata, self.config.client_version),
            )
        except ValidationError as e:
            msg = f"Failed to build Firebase Test Lab request, message: {e}"
            self.logger.error("%s", msg)
            raise TestLabError(msg) from e
        url = endpoints.build_url(
            self.config.testing_url, endpoints.FTL_CREATE_API, {"project": project_id}
        )
        response = self._send(
            "POST",
            url,
            failure="Network error when initializing Firebase Test Lab",
            project_id=project_id,
            json_body=body.to_jsonable(),
        )
        failure = "Failed to start Firebase Test Lab jobs"
        self._raise_for_status(response, failure, project_id)
        created = self._parse_json(response, failure)
        matrix_id = created.get("testMatrixId") if isinstance(created, Mapping) else None
        if not matrix_id:
            raise TestLabRemoteError(
                message=f"{failure}: response did not include testMatrixId",
                status_code=response.status_code,
                response_text=response.text,
            )
        self.logger.info("Created test matrix %s", matrix_id)
        return matrix_id

    # --- Results -----------------------------------------------------------

    def get_matrix_results(self, project_id: str, matrix_id: str) -> dict[str, Any]:
        """Fetch the current state of a test matrix.

        Returns the service's document as-is. Callers poll by calling this
        again; results are never cached.
        """
        url = endpoints.build_url(
            self.config.testing_url,
            endpoints.FTL_RESULTS_API,
            {"project": project_id, "matrix": matrix_id},
        )
        response = self._send(
            "GET",
            url,
            failure="Network error when attempting to get test results",
        )
        failure = "Failed to obtain test results"
        self._raise_for_status(response, failure, project_id)
        return self._parse_json(response, failure)

    def get_execution_steps(
        self, project_id: str, history_id: str, execution_id: str
    ) -> dict[str, Any]:
        """List the steps of a Tool Results execution (artifact metadata)."""
        url = endpoints.build_url(
            self.config.tool_results_url,
            endpoints.TOOLRESULTS_LIST_EXECUTION_STEP_API_V3,
            {"project": project_id, "history_id": history_id, "execution_id": execution_id},
        )
        response = self._send(
            "GET",
            url,
            failure="Failed to obtain the metadata of test artifacts",
        )
        failure = "Failed to obtain the metadata of test artifacts"
        self._raise_for_status(response, failure, project_id)
        return self._parse_json(response, failure)
