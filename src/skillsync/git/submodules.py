"""Read-only checks against the `.gitmodules` manifest."""

from pathlib import Path

GITMODULES_FILE = ".gitmodules"


def is_registered(workspace_root: str | Path, path: str) -> bool:
    """Return True if `path` is already declared as a submodule.

    The manifest is matched on its `path = <path>` lines; a missing
    `.gitmodules` means nothing is registered yet.
    """
    manifest = Path(workspace_root) / GITMODULES_FILE
    if not manifest.exists():
        return False
    content = manifest.read_text(encoding="utf-8")
    return any(line.strip() == f"path = {path}" for line in content.splitlines())
