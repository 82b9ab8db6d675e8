"""Tests for TestLabConfig defaults and environment overrides."""

import pytest

from testlab import __version__
from testlab.core.client.config import TestLabConfig
from testlab.core.client.exceptions import TestLabError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("TESTLAB_TOOL_RESULTS_URL", "TESTLAB_TESTING_URL", "TESTLAB_CLIENT_NAME"):
        monkeypatch.delenv(name, raising=False)


class TestTestLabConfig:
    def test_defaults(self):
        config = TestLabConfig()
        assert config.tool_results_url == "https://www.googleapis.com"
        assert config.testing_url == "https://testing.googleapis.com"
        assert config.timeout == 15
        assert config.connect_timeout == 5
        assert config.client_name == "testlab-client"
        assert config.client_version == __version__

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TESTLAB_TOOL_RESULTS_URL", "http://localhost:9000")
        monkeypatch.setenv("TESTLAB_TESTING_URL", "http://localhost:9001")
        monkeypatch.setenv("TESTLAB_CLIENT_NAME", "ci-runner")
        config = TestLabConfig()
        assert config.tool_results_url == "http://localhost:9000"
        assert config.testing_url == "http://localhost:9001"
        assert config.client_name == "ci-runner"

    def test_explicit_values_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("TESTLAB_CLIENT_NAME", "ci-runner")
        assert TestLabConfig(client_name="explicit").client_name == "explicit"

    def test_headers(self):
        config = TestLabConfig()
        assert config.get_headers() == {"Content-Type": "application/json"}
        assert config.get_headers("p1") == {
            "Content-Type": "application/json",
            "X-Goog-User-Project": "p1",
        }

    def test_validate(self):
        assert TestLabConfig().validate() is True
        with pytest.raises(TestLabError):
            TestLabConfig(testing_url="").validate()
