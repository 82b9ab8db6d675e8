"""Configuration classes for the Test Lab client."""

import os
from typing import Dict, Optional
from dataclasses import dataclass, field
from dotenv import load_dotenv

from testlab import __version__
from .exceptions import TestLabError

load_dotenv()


@dataclass
class TestLabConfig:
    """Configuration class for Test Lab client settings."""

    __test__ = False

    tool_results_url: Optional[str] = None
    testing_url: Optional[str] = None
    # Applied to every request as (connect_timeout, timeout)
    timeout: int = 15
    connect_timeout: int = 5
    client_name: Optional[str] = None
    client_version: str = field(default=__version__)

    def __post_init__(self):
        if self.tool_results_url is None:
            self.tool_results_url = os.getenv('TESTLAB_TOOL_RESULTS_URL', 'https://www.googleapis.com')
        if self.testing_url is None:
            self.testing_url = os.getenv('TESTLAB_TESTING_URL', 'https://testing.googleapis.com')
        if self.client_name is None:
            self.client_name = os.getenv('TESTLAB_CLIENT_NAME', 'testlab-client')

    def get_headers(self, project_id: Optional[str] = None) -> Dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        if project_id:
            headers['X-Goog-User-Project'] = project_id
        return headers

    def validate(self) -> bool:
        if not self.tool_results_url or not self.testing_url:
            raise TestLabError("Both the tool results and testing service URLs must be set.")
        return True
