"""Helpers for summarizing Google API error payloads."""

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional

logger = logging.getLogger(__name__)

_NOT_AUTHORIZED = "Not Authorized for project"
_IAM_CONSOLE_URL = "https://console.cloud.google.com/iam-admin/iam?project={project}"


def _error_object(payload: Any) -> Optional[Mapping[str, Any]]:
    if not isinstance(payload, Mapping):
        return None
    err = payload.get("error")
    return err if isinstance(err, Mapping) else None


def summarize_error(body: Optional[str]) -> str:
    """Return a one-line summary of a Google API error body.

    Bodies shaped like ``{"error": {"code": 403, "status": "PERMISSION_DENIED",
    "message": "..."}}`` are reduced to ``"PERMISSION_DENIED (403): ..."``.
    Anything else is returned unchanged.
    """
    text = body or ""
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("Unable to parse error message: %s, message: %s", type(e).__name__, e)
        return text

    err = _error_object(payload)
    if err is None or not err.get("message"):
        return text

    message = str(err["message"])
    status = err.get("status")
    code = err.get("code")
    if status and code is not None:
        return f"{status} ({code}): {message}"
    if status or code is not None:
        return f"{status or code}: {message}"
    return message


def is_authorization_error(summary: str) -> bool:
    return _NOT_AUTHORIZED in (summary or "")


def iam_console_hint(project_id: str) -> str:
    return (
        "Please make sure that the account associated with your Google credential is the "
        "project editor or owner. You can do this at the Google Developer Console "
        + _IAM_CONSOLE_URL.format(project=project_id)
    )
