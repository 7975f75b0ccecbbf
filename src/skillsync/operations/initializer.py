"""
Initializer -- Registers configured projects as git submodules.

Projects already declared in .gitmodules are never added again. Every
selected project is attempted: a failure is recorded and the loop moves
on to the next one.
"""

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from ..config.schema import Project, Registry
from ..git import ExecutionError, GitExecutor, is_registered
from ..logging import HumanLog
from ..ui import Choice, Prompter
from .outcomes import OperationReport, Outcome

logger = structlog.get_logger()

__all__ = [
    "InitReport",
    "init_submodules",
]


@dataclass
class InitReport(OperationReport):
    """Outcome of init: one Outcome per selected project."""

    existing: list[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def added(self) -> list[str]:
        return [o.item for o in self.succeeded]


def init_submodules(
    registry: Registry,
    workspace_root: str | Path,
    executor: GitExecutor,
    prompter: Prompter | None = None,
    select_all: bool = False,
) -> InitReport:
    """Add every selected, not yet registered project as a submodule.

    Args:
        registry: Configured sources and vendors.
        workspace_root: Root of the parent repository.
        executor: Git executor bound to the workspace root.
        prompter: Used to let the operator pick projects. Required unless
            select_all is True.
        select_all: Select every new project without prompting.

    Returns:
        InitReport with the added/failed projects and the pre-existing ones.
    """
    root = Path(workspace_root)
    hlog = HumanLog(logger)
    log = logger.bind(operation="init")

    projects = registry.projects()
    existing = [p for p in projects if is_registered(root, p.path)]
    new = [p for p in projects if not is_registered(root, p.path)]
    report = InitReport(existing=[p.name for p in existing])
    log.info("init.partitioned", new=len(new), existing=len(existing))

    if not new:
        hlog.nothing_new()
        return report

    selected = new if select_all else _ask(new, prompter)
    if selected is None:
        hlog.cancelled()
        report.cancelled = True
        return report

    for project in selected:
        report.add(_add_submodule(project, root, executor, hlog))

    hlog.init_complete(added=len(report.succeeded), failed=len(report.failed))
    if report.existing:
        hlog.already_initialized(report.existing)
    return report


def _ask(new: list[Project], prompter: Prompter | None) -> list[Project] | None:
    if prompter is None:
        raise ValueError("A prompter is required unless select_all is set")

    by_name = {p.name: p for p in new}
    names = prompter.select_many(
        "Select projects to initialize",
        [Choice(value=p.name, label=p.label, hint=p.url) for p in new],
        initial=list(by_name),
    )
    if names is None:
        return None
    return [by_name[name] for name in names if name in by_name]


def _add_submodule(project: Project, root: Path, executor: GitExecutor, hlog: HumanLog) -> Outcome:
    hlog.adding(project.name)
    try:
        (root / project.path).parent.mkdir(parents=True, exist_ok=True)
        executor.run(["submodule", "add", project.url, project.path])
    except (ExecutionError, OSError) as e:
        hlog.submodule_failed(project.name, str(e))
        return Outcome.failed(project.name, str(e))

    hlog.submodule_added(project.name)
    return Outcome.success(project.name)
