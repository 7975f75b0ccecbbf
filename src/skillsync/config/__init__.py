"""
Configuration module for skillsync.

Exports the main components for convenient imports.
"""

from .defaults import SKILLS_DIR, SOURCES_DIR, VENDOR_DIR
from .loader import load_config
from .schema import (
    AppConfig,
    LoggingConfig,
    Project,
    Registry,
    VendorConfig,
    WorkspaceConfig,
)

__all__ = [
    "load_config",
    "AppConfig",
    "LoggingConfig",
    "Project",
    "Registry",
    "SKILLS_DIR",
    "SOURCES_DIR",
    "VENDOR_DIR",
    "VendorConfig",
    "WorkspaceConfig",
]
