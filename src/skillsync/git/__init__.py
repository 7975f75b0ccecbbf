"""
Git integration -- command execution and submodule manifest inspection.
"""

from .executor import ExecutionError, GitExecutor
from .submodules import GITMODULES_FILE, is_registered

__all__ = [
    "ExecutionError",
    "GITMODULES_FILE",
    "GitExecutor",
    "is_registered",
]
