"""Unit tests for workflow configuration."""

from pathlib import Path

import pytest

from amendment_engine.config.workflow_config import (
    FALLBACK_FRAMEWORK_VERSION,
    WorkflowConfig,
    resolve_framework_version,
)

ENV_KEYS = (
    "AMENDMENT_DATA_DIR",
    "AMENDMENT_FRAMEWORK_VERSION",
    "AMENDMENT_VERSION_FILE",
    "AMENDMENT_VOTERS_FILE",
    "AMENDMENT_MAX_UPDATE_ATTEMPTS",
    "AMENDMENT_ENVIRONMENT",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Start every test without AMENDMENT_* variables and outside the repo."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    """Default configuration."""

    def test_defaults(self) -> None:
        config = WorkflowConfig.from_environment()
        assert config.data_dir == Path("governance")
        assert config.proposals_dir == Path("governance") / "amendment-proposals"
        assert config.history_path == Path("governance") / "amendment-history.json"
        assert config.framework_version == FALLBACK_FRAMEWORK_VERSION
        assert config.voters_file is None
        assert config.max_update_attempts == 3
        assert config.environment == "production"


class TestEnvironmentOverrides:
    """Environment variable overrides."""

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("AMENDMENT_DATA_DIR", str(tmp_path / "gov"))
        monkeypatch.setenv("AMENDMENT_FRAMEWORK_VERSION", "2.0.0")
        monkeypatch.setenv("AMENDMENT_VOTERS_FILE", "voters.json")
        monkeypatch.setenv("AMENDMENT_MAX_UPDATE_ATTEMPTS", "5")
        monkeypatch.setenv("AMENDMENT_ENVIRONMENT", "development")

        config = WorkflowConfig.from_environment()

        assert config.data_dir == tmp_path / "gov"
        assert config.framework_version == "2.0.0"
        assert config.voters_file == Path("voters.json")
        assert config.max_update_attempts == 5
        assert config.environment == "development"

    def test_invalid_integer_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AMENDMENT_MAX_UPDATE_ATTEMPTS", "many")
        assert WorkflowConfig.from_environment().max_update_attempts == 3

    def test_version_file_is_read(self, tmp_path: Path) -> None:
        (tmp_path / "VERSION").write_text("1.4.2\n", encoding="utf-8")
        assert WorkflowConfig.from_environment().framework_version == "1.4.2"


class TestResolveFrameworkVersion:
    """resolve_framework_version() precedence."""

    def test_explicit_wins(self, tmp_path: Path) -> None:
        version_file = tmp_path / "VERSION"
        version_file.write_text("1.0.0", encoding="utf-8")
        assert resolve_framework_version("3.0.0", version_file) == "3.0.0"

    def test_missing_file_falls_back(self, tmp_path: Path) -> None:
        assert resolve_framework_version(None, tmp_path / "nope") == FALLBACK_FRAMEWORK_VERSION

    def test_empty_file_falls_back(self, tmp_path: Path) -> None:
        version_file = tmp_path / "VERSION"
        version_file.write_text("  \n", encoding="utf-8")
        assert resolve_framework_version(None, version_file) == FALLBACK_FRAMEWORK_VERSION


class TestValidation:
    """__post_init__ validation."""

    def test_rejects_zero_attempts(self) -> None:
        with pytest.raises(ValueError, match="max_update_attempts"):
            WorkflowConfig(max_update_attempts=0)

    def test_rejects_blank_version(self) -> None:
        with pytest.raises(ValueError, match="framework_version"):
            WorkflowConfig(framework_version=" ")
