"""
Submodule operations: init, sync and check.

Each operation receives the registry, the workspace root and a git
executor explicitly.
"""

from .checker import CheckError, CheckReport, UpdateInfo, check_updates
from .initializer import InitReport, init_submodules
from .outcomes import OperationError, OperationReport, Outcome, OutcomeStatus
from .syncer import SyncError, SyncRecord, SyncReport, sync_skills

__all__ = [
    "CheckError",
    "CheckReport",
    "InitReport",
    "OperationError",
    "OperationReport",
    "Outcome",
    "OutcomeStatus",
    "SyncError",
    "SyncRecord",
    "SyncReport",
    "UpdateInfo",
    "check_updates",
    "init_submodules",
    "sync_skills",
]
