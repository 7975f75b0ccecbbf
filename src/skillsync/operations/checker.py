"""
Update checker -- Reports how far each submodule is behind upstream.

Fetches every submodule without merging, then counts the commits between
HEAD and the upstream tracking ref of each checkout. Checkouts without a
tracking branch produce no information and are left out of the report.
"""

from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from ..config.defaults import SOURCES_DIR, VENDOR_DIR
from ..config.schema import Registry
from ..git import ExecutionError, GitExecutor
from ..logging import HumanLog
from ..ui import Prompter
from .outcomes import OperationError

logger = structlog.get_logger()

__all__ = [
    "CheckError",
    "CheckReport",
    "UpdateInfo",
    "check_updates",
]


class CheckError(OperationError):
    """Fetching remote changes failed; behind counts would be stale."""


@dataclass(frozen=True)
class UpdateInfo:
    label: str
    kind: str
    behind: int


@dataclass
class CheckReport:
    updates: list[UpdateInfo] = field(default_factory=list)

    @property
    def up_to_date(self) -> bool:
        return not self.updates


def check_updates(
    registry: Registry,
    workspace_root: str | Path,
    executor: GitExecutor,
    prompter: Prompter | None = None,
) -> CheckReport:
    """Fetch all submodules and list the ones behind their upstream.

    Raises:
        CheckError: If `git submodule foreach git fetch` fails.
    """
    root = Path(workspace_root)
    hlog = HumanLog(logger)

    try:
        with prompter.status("Fetching remote changes...") if prompter else nullcontext():
            executor.run(["submodule", "foreach", "git", "fetch"])
    except ExecutionError as e:
        raise CheckError(f"Failed to fetch: {e}") from e
    hlog.fetched()

    candidates = [
        (name, "source", root / SOURCES_DIR / name) for name in registry.sources
    ] + [
        (f"{name} ({', '.join(cfg.skills.values())})", "vendor", root / VENDOR_DIR / name)
        for name, cfg in registry.vendors.items()
    ]

    report = CheckReport()
    for label, kind, path in candidates:
        if not path.exists():
            continue
        behind = executor.behind_count(path)
        logger.debug("check.behind_count", project=label, behind=behind)
        if behind is not None and behind > 0:
            report.updates.append(UpdateInfo(label=label, kind=kind, behind=behind))

    if report.up_to_date:
        hlog.up_to_date()
    else:
        hlog.updates_available(len(report.updates))
        for update in report.updates:
            hlog.behind(update.label, update.kind, update.behind)
    return report
