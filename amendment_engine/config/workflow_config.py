"""Amendment workflow configuration.

This module defines where governance records live, which framework version
new proposals record, and how persistent compare-and-swap conflicts are
handled, with environment variable overrides.

Environment Variables:
- AMENDMENT_DATA_DIR: Governance data directory (default: ./governance)
- AMENDMENT_FRAMEWORK_VERSION: Framework version recorded on new proposals
- AMENDMENT_VERSION_FILE: File holding the framework version (default: VERSION)
- AMENDMENT_VOTERS_FILE: Optional JSON voter roster (voter id -> role)
- AMENDMENT_MAX_UPDATE_ATTEMPTS: CAS attempts per operation (default: 3)
- AMENDMENT_ENVIRONMENT: production (JSON logs) or development (default: production)

Layout under the data directory:
    amendment-proposals/<proposal_id>.json
    amendment-history.json
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from structlog import get_logger

logger = get_logger()

DEFAULT_DATA_DIR = "governance"
DEFAULT_VERSION_FILE = "VERSION"
FALLBACK_FRAMEWORK_VERSION = "1.1.0-beta"
PROPOSALS_DIRNAME = "amendment-proposals"
HISTORY_FILENAME = "amendment-history.json"


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_optional_env(key: str) -> str | None:
    value = os.environ.get(key, "").strip()
    return value or None


def resolve_framework_version(
    explicit: str | None, version_file: Path | None
) -> str:
    """Pick the framework version recorded on new proposals.

    An explicit value wins, then the first line of the version file, then
    the fallback version.
    """
    if explicit:
        return explicit
    if version_file is not None:
        try:
            text = version_file.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            text = ""
        except OSError as exc:
            logger.warning(
                "framework_version_file_unreadable",
                path=str(version_file),
                error=str(exc),
            )
            text = ""
        if text:
            return text.splitlines()[0].strip()
    return FALLBACK_FRAMEWORK_VERSION


@dataclass(frozen=True)
class WorkflowConfig:
    """Configuration for the amendment workflow.

    Attributes:
        data_dir: Root of the governance records.
        framework_version: Version recorded on every new proposal.
        voters_file: JSON roster for the voter registry, if any.
        max_update_attempts: Compare-and-swap attempts before a conflict
            propagates to the caller. Default: 3.
        environment: "production" for JSON logs, anything else for console.
    """

    data_dir: Path = Path(DEFAULT_DATA_DIR)
    framework_version: str = FALLBACK_FRAMEWORK_VERSION
    voters_file: Path | None = None
    max_update_attempts: int = 3
    environment: str = "production"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_update_attempts < 1:
            raise ValueError(
                f"max_update_attempts must be at least 1, got {self.max_update_attempts}"
            )
        if not self.framework_version.strip():
            raise ValueError("framework_version must not be empty")

    @property
    def proposals_dir(self) -> Path:
        """Directory holding one JSON document per proposal."""
        return self.data_dir / PROPOSALS_DIRNAME

    @property
    def history_path(self) -> Path:
        """JSON file holding the amendment history log."""
        return self.data_dir / HISTORY_FILENAME

    @classmethod
    def from_environment(cls) -> WorkflowConfig:
        """Create config from environment variables with defaults.

        Returns:
            WorkflowConfig with values from environment or defaults.
        """
        version_file = Path(
            os.environ.get("AMENDMENT_VERSION_FILE", DEFAULT_VERSION_FILE)
        )
        voters_file = _get_optional_env("AMENDMENT_VOTERS_FILE")
        return cls(
            data_dir=Path(os.environ.get("AMENDMENT_DATA_DIR", DEFAULT_DATA_DIR)),
            framework_version=resolve_framework_version(
                _get_optional_env("AMENDMENT_FRAMEWORK_VERSION"), version_file
            ),
            voters_file=Path(voters_file) if voters_file else None,
            max_update_attempts=_get_int_env("AMENDMENT_MAX_UPDATE_ATTEMPTS", 3),
            environment=os.environ.get("AMENDMENT_ENVIRONMENT", "production"),
        )


# Default config (no environment lookups)
DEFAULT_WORKFLOW_CONFIG = WorkflowConfig()
