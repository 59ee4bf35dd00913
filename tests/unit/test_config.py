"""Tests for ClientConfig."""

from dataclasses import replace

import pytest

from openjustice._config import DEFAULT_API_URL, DEFAULT_MODEL, ClientConfig
from openjustice._exceptions import ConfigurationError

ENV = {
    "OPENJUSTICE_API_KEY": "env-key",
    "OPENJUSTICE_DIALOG_FLOW_ID": "env-flow",
    "OPENJUSTICE_CONVERSATION_ID": "env-conv",
}


class TestFromEnv:
    def test_reads_environment(self):
        config = ClientConfig.from_env(ENV)
        assert config.api_key == "env-key"
        assert config.dialog_flow_id == "env-flow"
        assert config.conversation_id == "env-conv"

    def test_defaults(self):
        config = ClientConfig.from_env({})
        assert config.api_url == DEFAULT_API_URL == "https://api.staging.openjustice.ai"
        assert config.model == DEFAULT_MODEL
        assert config.api_key is None

    def test_overrides_win(self):
        config = ClientConfig.from_env(ENV, api_key="flag-key", api_url="https://other")
        assert config.api_key == "flag-key"
        assert config.api_url == "https://other"
        assert config.dialog_flow_id == "env-flow"

    def test_none_overrides_ignored(self):
        config = ClientConfig.from_env(ENV, api_key=None)
        assert config.api_key == "env-key"

    def test_empty_variables_ignored(self):
        config = ClientConfig.from_env({**ENV, "OPENJUSTICE_API_URL": ""})
        assert config.api_url == DEFAULT_API_URL

    def test_process_environment(self, monkeypatch):
        monkeypatch.setenv("OPENJUSTICE_API_KEY", "from-os")
        assert ClientConfig.from_env().api_key == "from-os"

    def test_with_overrides(self):
        config = ClientConfig.from_env(ENV).with_overrides(conversation_id="c2", api_key=None)
        assert config.conversation_id == "c2"
        assert config.api_key == "env-key"


class TestValidate:
    def test_complete_config_valid(self, config):
        config.validate()

    @pytest.mark.parametrize(
        ("field", "variable"),
        [
            ("api_key", "OPENJUSTICE_API_KEY"),
            ("api_url", "OPENJUSTICE_API_URL"),
            ("dialog_flow_id", "OPENJUSTICE_DIALOG_FLOW_ID"),
            ("conversation_id", "OPENJUSTICE_CONVERSATION_ID"),
        ],
    )
    def test_missing_setting(self, config, field, variable):
        with pytest.raises(ConfigurationError) as exc_info:
            replace(config, **{field: ""}).validate()
        assert variable in exc_info.value.message
