"""
Tests for monohooks tool configuration and logging setup.
"""

import logging
from pathlib import Path

import pytest

from monohooks.cli import main
from monohooks.configs import (
    DEFAULT_CONFIG_YAML,
    IGNORE_FILENAME,
    RuntimeSettings,
    create_default_config,
    get_config_path,
    get_full_config,
    get_logger,
    get_timeout,
    load_ignore_patterns,
    load_yaml_config,
    setup_logging,
)
from monohooks.exceptions import ConfigurationError


def write_config(content: str) -> Path:
    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestYamlConfig:
    """Tests for config.yaml loading and creation."""

    def test_missing_file_is_empty(self):
        assert load_yaml_config() == {}

    def test_create_default_config(self):
        assert create_default_config() is True
        assert create_default_config() is False
        assert get_config_path().read_text() == DEFAULT_CONFIG_YAML

    def test_load_explicit_path(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("debug: true\nmanifest:\n  key: hooks\n")
        assert load_yaml_config(path) == {"debug": True, "manifest": {"key": "hooks"}}

    def test_invalid_yaml(self):
        write_config("manifest: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_yaml_config()

    def test_non_mapping(self):
        write_config("- one\n- two\n")
        with pytest.raises(ConfigurationError):
            load_yaml_config()


class TestFullConfig:
    """Tests for get_full_config."""

    def test_defaults(self):
        settings = get_full_config()

        assert settings == RuntimeSettings()
        assert settings.manifest_filename == "package.json"
        assert settings.config_key == "monohooks"
        assert settings.git_timeout == 10
        assert settings.git_diff_timeout == 30

    def test_default_template_matches_defaults(self):
        create_default_config()
        assert get_full_config() == RuntimeSettings()

    def test_yaml_values(self):
        write_config(
            "manifest:\n"
            "  filename: hooks.yaml\n"
            "  key: hooks\n"
            "discovery:\n"
            "  exclude_dirs: [vendor, '*.tmp']\n"
            "timeouts:\n"
            "  git_command: 5\n"
            "debug: true\n"
        )

        settings = get_full_config()

        assert settings.manifest_filename == "hooks.yaml"
        assert settings.config_key == "hooks"
        assert settings.exclude_dirs == ["vendor", "*.tmp"]
        assert settings.git_timeout == 5.0
        assert settings.git_diff_timeout == 30
        assert settings.debug is True

    def test_environment_overrides_yaml(self, monkeypatch):
        write_config("manifest:\n  key: hooks\ndebug: true\n")
        monkeypatch.setenv("MONOHOOKS_CONFIG_KEY", "npm-git-hooks")
        monkeypatch.setenv("MONOHOOKS_MANIFEST", "project.yml")
        monkeypatch.setenv("MONOHOOKS_DEBUG", "false")

        settings = get_full_config()

        assert settings.config_key == "npm-git-hooks"
        assert settings.manifest_filename == "project.yml"
        assert settings.debug is False

    def test_explicit_path(self, temp_dir: Path):
        path = temp_dir / "custom.yaml"
        path.write_text("manifest:\n  key: custom\n")

        assert get_full_config(path).config_key == "custom"

    def test_unsupported_manifest(self, monkeypatch):
        monkeypatch.setenv("MONOHOOKS_MANIFEST", "Cargo.toml")
        with pytest.raises(ConfigurationError):
            get_full_config()

    def test_exclude_dirs_must_be_list(self):
        write_config("discovery:\n  exclude_dirs: vendor\n")
        with pytest.raises(ConfigurationError):
            get_full_config()

    @pytest.mark.parametrize(
        "content",
        [
            "manifest: package.json\n",
            "discovery: [vendor]\n",
            "timeouts: 10\n",
        ],
    )
    def test_sections_must_be_mappings(self, content):
        write_config(content)
        with pytest.raises(ConfigurationError):
            get_full_config()

    def test_scalar_section_exits_cleanly(self):
        write_config("manifest: package.json\n")
        assert main(["list"]) == 1

    def test_timeout_must_be_number(self):
        write_config("timeouts:\n  git_command: soon\n")
        with pytest.raises(ConfigurationError):
            get_full_config()


class TestConstants:
    """Tests for timeout lookup."""

    def test_get_timeout(self):
        assert get_timeout("git_diff") == 30
        assert get_timeout("unknown") == 10
        assert get_timeout("unknown", 3) == 3


class TestIgnorePatterns:
    """Tests for load_ignore_patterns."""

    def test_defaults_included(self, temp_dir: Path):
        patterns = load_ignore_patterns(str(temp_dir))
        assert "node_modules" in patterns
        assert ".git" in patterns

    def test_extra_and_file_patterns(self, temp_dir: Path):
        (temp_dir / IGNORE_FILENAME).write_text("# comment\n\nbuild/\ndist\n")

        patterns = load_ignore_patterns(str(temp_dir), ["vendor/"])

        assert {"vendor", "build", "dist"} <= patterns
        assert "# comment" not in patterns

    def test_ignore_file_disabled(self, temp_dir: Path):
        (temp_dir / IGNORE_FILENAME).write_text("build\n")
        assert "build" not in load_ignore_patterns(str(temp_dir), use_ignore_file=False)


class TestLogging:
    """Tests for setup_logging."""

    def test_levels(self):
        assert setup_logging(debug=False).level == logging.INFO
        assert setup_logging(debug=True).level == logging.DEBUG

    def test_debug_from_environment(self, monkeypatch):
        monkeypatch.setenv("MONOHOOKS_DEBUG", "1")
        assert setup_logging().level == logging.DEBUG

    def test_handlers_not_duplicated(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_log_file(self, temp_dir: Path):
        log_file = temp_dir / "logs" / "monohooks.log"
        logger = setup_logging(log_file=str(log_file))

        get_logger("test").info("hello from test")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "hello from test" in content
        assert "[monohooks.test]" in content
