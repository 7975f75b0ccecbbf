"""
Syncer -- Pulls submodules and publishes vendor skills into skills/.

For every (source, output) pair of every vendor, skills/<output> is
removed and rebuilt from vendor/<name>/skills/<source>, then receives the
vendor's license as LICENSE.md and a SYNC.md provenance record.

Only the global `git submodule update` is fatal. Missing checkouts,
missing skill folders and copy errors are recorded per item.
"""

import shutil
from contextlib import nullcontext
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path

import structlog

from ..config.defaults import SKILLS_DIR, VENDOR_DIR
from ..config.schema import Registry
from ..git import ExecutionError, GitExecutor
from ..logging import HumanLog
from ..ui import Prompter
from .outcomes import OperationError, OperationReport, Outcome

logger = structlog.get_logger()

__all__ = [
    "LICENSE_NAMES",
    "SyncError",
    "SyncRecord",
    "SyncReport",
    "sync_skills",
]

LICENSE_NAMES = ["LICENSE", "LICENSE.md", "LICENSE.txt", "license", "license.md", "license.txt"]
LICENSE_OUTPUT = "LICENSE.md"
SYNC_RECORD_NAME = "SYNC.md"


class SyncError(OperationError):
    """The submodule update failed; nothing was synced."""


@dataclass(frozen=True)
class SyncRecord:
    """Provenance of a published skill folder."""

    source_path: str
    git_sha: str | None
    synced: date

    def render(self) -> str:
        return (
            "# Sync Info\n"
            "\n"
            f"- **Source:** `{self.source_path}`\n"
            f"- **Git SHA:** `{self.git_sha or ''}`\n"
            f"- **Synced:** {self.synced.isoformat()}\n"
        )


@dataclass
class SyncReport(OperationReport):
    """Outcome of sync: one Outcome per skill pair or skipped vendor."""

    @property
    def synced(self) -> list[str]:
        return [o.item for o in self.succeeded]


def sync_skills(
    registry: Registry,
    workspace_root: str | Path,
    executor: GitExecutor,
    prompter: Prompter | None = None,
    today: date | None = None,
) -> SyncReport:
    """Update all submodules, then copy vendor skills into skills/.

    Args:
        registry: Configured vendors (sources are only updated, not copied).
        workspace_root: Root of the parent repository.
        executor: Git executor bound to the workspace root.
        prompter: Optional, only used for the spinner during the update.
        today: Date written to SYNC.md. Defaults to the current UTC date.

    Raises:
        SyncError: If `git submodule update --remote --merge` fails.
    """
    root = Path(workspace_root)
    today = today or datetime.now(timezone.utc).date()
    hlog = HumanLog(logger)

    try:
        with prompter.status("Updating submodules...") if prompter else nullcontext():
            executor.run(["submodule", "update", "--remote", "--merge"])
    except ExecutionError as e:
        raise SyncError(f"Failed to update submodules: {e}") from e
    hlog.submodules_updated()

    report = SyncReport()
    for vendor_name, config in registry.vendors.items():
        vendor_path = root / VENDOR_DIR / vendor_name
        vendor_skills = vendor_path / SKILLS_DIR

        if not vendor_path.exists():
            hlog.emit("sync.vendor_missing", vendor=vendor_name)
            report.add(Outcome.skipped(vendor_name, "vendor submodule not found"))
            continue

        if not vendor_skills.is_dir():
            hlog.emit("sync.skills_dir_missing", vendor=vendor_name)
            report.add(Outcome.skipped(vendor_name, "no skills directory"))
            continue

        for source_name, output_name in config.skills.items():
            report.add(
                _sync_skill(
                    vendor_name, vendor_path, source_name, root / SKILLS_DIR, output_name,
                    executor, today, hlog,
                )
            )

    hlog.sync_complete(
        synced=len(report.succeeded),
        skipped=len(report.skipped),
        failed=len(report.failed),
    )
    return report


def _sync_skill(
    vendor_name: str,
    vendor_path: Path,
    source_name: str,
    skills_root: Path,
    output_name: str,
    executor: GitExecutor,
    today: date,
    hlog: HumanLog,
) -> Outcome:
    source_rel = f"{VENDOR_DIR}/{vendor_name}/{SKILLS_DIR}/{source_name}"
    item = f"{source_rel} → {output_name}"
    source_path = vendor_path / SKILLS_DIR / source_name
    output_path = skills_root / output_name

    if not source_path.is_dir():
        hlog.emit("sync.skill_missing", path=source_rel)
        return Outcome.skipped(item, "skill not found")

    if not _is_direct_child(skills_root, output_path):
        reason = f"output '{output_name}' is not a folder directly under {SKILLS_DIR}/"
        hlog.emit("sync.skill_failed", source=source_rel, error=reason)
        return Outcome.failed(item, reason)

    try:
        remove_path(output_path)
        output_path.mkdir(parents=True)

        copied = copy_files(source_path, output_path)
        license_file = copy_license(vendor_path, output_path)

        record = SyncRecord(
            source_path=source_rel,
            git_sha=executor.head_sha(vendor_path),
            synced=today,
        )
        (output_path / SYNC_RECORD_NAME).write_text(record.render(), encoding="utf-8")
    except OSError as e:
        hlog.emit("sync.skill_failed", source=source_rel, error=str(e))
        return Outcome.failed(item, str(e))

    logger.debug(
        "sync.files_copied",
        source=source_rel,
        files=copied,
        license=license_file.name if license_file else None,
        sha=record.git_sha,
    )
    hlog.skill_synced(vendor_name, source_name, output_name)
    return Outcome.success(item)


def _is_direct_child(parent: Path, path: Path) -> bool:
    # Symlinks at path itself are not followed; it is removed, not its target
    if path.name in ("", ".", ".."):
        return False
    return path.parent.resolve() == parent.resolve()


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree. A missing path is a no-op."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)


def copy_files(source: Path, dest: Path) -> int:
    """Copy every file under source to dest, keeping relative paths.

    Returns:
        Number of files copied.
    """
    count = 0
    for file in sorted(source.rglob("*")):
        if not file.is_file():
            continue
        target = dest / file.relative_to(source)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(file, target)
        count += 1
    return count


def copy_license(vendor_path: Path, dest: Path) -> Path | None:
    """Copy the first license found at the vendor root to dest/LICENSE.md."""
    for name in LICENSE_NAMES:
        candidate = vendor_path / name
        if candidate.is_file():
            shutil.copy2(candidate, dest / LICENSE_OUTPUT)
            return candidate
    return None
