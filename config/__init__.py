"""
Harness Configuration Package.

This package resolves the settings shared by the browser, wait and API
components of the harness.
"""

from config.manager import EnvironmentManager, env_manager
from config.types import (
    HarnessSettings,
    EnvironmentVariables,
)

# Re-export the singleton instance for easy access
env = env_manager

__all__ = [
    "EnvironmentManager",
    "env_manager",
    "env",
    "HarnessSettings",
    "EnvironmentVariables",
]
