"""Configuration module for the amendment engine.

Available Configurations:
- WorkflowConfig: Data locations, framework version and CAS retry bound
"""

from amendment_engine.config.workflow_config import (
    DEFAULT_WORKFLOW_CONFIG,
    FALLBACK_FRAMEWORK_VERSION,
    WorkflowConfig,
    resolve_framework_version,
)

__all__ = [
    "WorkflowConfig",
    "DEFAULT_WORKFLOW_CONFIG",
    "FALLBACK_FRAMEWORK_VERSION",
    "resolve_framework_version",
]
