"""
Shared fixtures: quiet logging, a scripted git executor and a scripted prompter.
"""

from contextlib import nullcontext
from pathlib import Path
from typing import Any

import pytest

from skillsync.config import LoggingConfig, Registry
from skillsync.git import ExecutionError, GitExecutor
from skillsync.logging import configure_logging


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging():
    configure_logging(LoggingConfig(), quiet=True)


class FakeExecutor(GitExecutor):
    """GitExecutor that answers from a table instead of spawning git.

    responses maps an args tuple (optionally paired with a cwd name) to the
    output string, or to an Exception instance to raise. Unknown commands
    succeed with an empty output.
    """

    def __init__(self, workspace_root: Path, responses: dict | None = None):
        super().__init__(workspace_root)
        self.responses = responses or {}
        self.calls: list[tuple[tuple[str, ...], Path]] = []

    def run(self, args: list[str], cwd: str | Path | None = None) -> str:
        workdir = Path(cwd) if cwd is not None else self.root
        key = tuple(args)
        self.calls.append((key, workdir))
        response = self.responses.get((key, workdir.name), self.responses.get(key, ""))
        if isinstance(response, Exception):
            raise response
        return response

    def commands(self) -> list[tuple[str, ...]]:
        return [args for args, _ in self.calls]


def git_failure(*args: str, stderr: str = "fatal: boom") -> ExecutionError:
    return ExecutionError(["git", *args], 128, stderr)


class ScriptedPrompter:
    """Prompter that returns pre-recorded answers and records the questions."""

    def __init__(self, select_many: Any = "all", select: Any = None):
        self._select_many = select_many
        self._select = select
        self.questions: list[tuple[str, list]] = []
        self.statuses: list[str] = []

    def select_many(self, message, choices, initial=None):
        self.questions.append((message, choices))
        if self._select_many == "all":
            return list(initial or [])
        return self._select_many

    def select(self, message, choices):
        self.questions.append((message, choices))
        return self._select

    def status(self, message):
        self.statuses.append(message)
        return nullcontext()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def demo_registry() -> Registry:
    return Registry(
        sources={"vue": "https://github.com/vuejs/docs"},
        vendors={
            "demo": {
                "source": "https://example.com/demo.git",
                "skills": {"demo-skill": "demo"},
            },
        },
    )


@pytest.fixture
def fake_executor(workspace: Path) -> FakeExecutor:
    return FakeExecutor(workspace)
