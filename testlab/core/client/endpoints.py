"""Resource path templates for the Tool Results and Testing APIs.

Templates use ``{name}`` placeholders. Two template families exist: the
``TOOLRESULTS_*`` paths are served from the tool results host and the
``FTL_*`` paths from the testing host.
"""

from collections.abc import Mapping

TOOLRESULTS_GET_SETTINGS_API_V3 = "/toolresults/v1beta3/projects/{project}/settings"
TOOLRESULTS_INITIALIZE_SETTINGS_API_V3 = "/toolresults/v1beta3/projects/{project}:initializeSettings"
TOOLRESULTS_LIST_EXECUTION_STEP_API_V3 = (
    "/toolresults/v1beta3/projects/{project}/histories/{history_id}/executions/{execution_id}/steps"
)

FTL_CREATE_API = "/v1/projects/{project}/testMatrices"
FTL_RESULTS_API = "/v1/projects/{project}/testMatrices/{matrix}"

TESTLAB_OAUTH_SCOPES = ("https://www.googleapis.com/auth/cloud-platform",)


def resolve_path(template: str, values: Mapping[str, str]) -> str:
    """Substitute every ``{name}`` occurrence for each supplied name.

    Placeholders without a value are left in place.
    """
    path = template
    for name, value in values.items():
        path = path.replace("{" + name + "}", str(value))
    return path


def build_url(base_url: str, template: str, values: Mapping[str, str]) -> str:
    return f"{(base_url or '').rstrip('/')}{resolve_path(template, values)}"
