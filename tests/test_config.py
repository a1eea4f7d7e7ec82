"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml

from sshdeck.config import (
    AppConfig,
    apply_feature_flags,
    build_config,
    env_overrides,
    load_config,
)


class TestLoadConfig:
    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path / "config.yaml") == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == {}

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- one\n- two\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)


class TestEnvOverrides:
    def test_known_variables(self):
        env = {
            "GG_HOME": "/opt/sshdeck",
            "GG_LOG_LEVEL": "debug",
            "SSH_CONFIG_FILE_PATH": "/etc/ssh/ssh_config",
            "UNRELATED": "x",
        }
        assert env_overrides(env) == {
            "app_home": "/opt/sshdeck",
            "log_level": "debug",
            "ssh_config_file_path": "/etc/ssh/ssh_config",
        }

    def test_empty_values_ignored(self):
        assert env_overrides({"GG_HOME": ""}) == {}


class TestFeatureFlags:
    def test_enable(self):
        assert apply_feature_flags({}, enable="ssh_config") == {"ssh_config_enabled": True}

    def test_disable(self):
        assert apply_feature_flags({}, disable="ssh_config") == {"ssh_config_enabled": False}

    def test_unsupported(self):
        with pytest.raises(ValueError, match="Unsupported feature"):
            apply_feature_flags({}, enable="telnet")


class TestBuildConfig:
    def test_defaults(self, tmp_path):
        config = build_config(cli_overrides={"app_home": str(tmp_path)}, environ={})

        assert config.app_home == str(tmp_path)
        assert config.log_level == "info"
        assert config.ssh_config_enabled is True
        assert config.ssh_config_file_path.endswith(str(Path(".ssh") / "config"))
        assert config.hosts_path == tmp_path / "hosts.yaml"
        assert config.log_path == tmp_path / "sshdeck.log"

    def test_config_file(self, tmp_path):
        (tmp_path / "config.yaml").write_text(
            yaml.safe_dump({"log_level": "debug", "ssh_config_enabled": False})
        )

        config = build_config(cli_overrides={"app_home": str(tmp_path)}, environ={})

        assert config.log_level == "debug"
        assert config.ssh_config_enabled is False

    def test_precedence(self, tmp_path):
        (tmp_path / "config.yaml").write_text(
            yaml.safe_dump({"ssh_config_file_path": "/from/file", "log_level": "debug"})
        )
        environ = {"GG_HOME": str(tmp_path), "SSH_CONFIG_FILE_PATH": "/from/env"}

        config = build_config(environ=environ)
        assert config.app_home == str(tmp_path)
        assert config.ssh_config_file_path == "/from/env"
        assert config.log_level == "debug"

        config = build_config(cli_overrides={"ssh_config_file_path": "/from/cli"}, environ=environ)
        assert config.ssh_config_file_path == "/from/cli"

    def test_feature_flag_overrides_file(self, tmp_path):
        (tmp_path / "config.yaml").write_text("ssh_config_enabled: false\n")

        config = build_config(
            cli_overrides={"app_home": str(tmp_path)},
            environ={},
            enable_feature="ssh_config",
        )

        assert config.ssh_config_enabled is True

    def test_log_level_normalized(self, tmp_path):
        config = build_config(environ={"GG_HOME": str(tmp_path), "GG_LOG_LEVEL": "DEBUG"})
        assert config.log_level == "debug"

    def test_invalid_log_level(self, tmp_path):
        with pytest.raises(ValueError):
            build_config(cli_overrides={"app_home": str(tmp_path), "log_level": "verbose"}, environ={})

    def test_home_expanded(self):
        config = AppConfig(app_home="~/sshdeck-test")
        assert not config.app_home.startswith("~")


class TestDescribe:
    def test_hides_ssh_path_when_disabled(self, tmp_path):
        config = AppConfig(app_home=str(tmp_path), ssh_config_enabled=False)
        summary = config.describe()

        assert summary["SSH config enabled"] == "false"
        assert "SSH config path" not in summary
