"""
Git executor -- Synchronous invocation of the git CLI.

Every call blocks until git exits (no timeout). Output is captured, never
streamed to the terminal, and returned whitespace-trimmed. Failures surface
as ExecutionError; try_run() converts them to None for queries where failure
is an expected outcome (no upstream branch, no commit yet).
"""

import subprocess
from pathlib import Path

import structlog

logger = structlog.get_logger()

__all__ = [
    "ExecutionError",
    "GitExecutor",
]


class ExecutionError(Exception):
    """A git command exited with a non-zero status or could not be started."""

    def __init__(self, command: list[str], returncode: int | None, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr or f"exit code {returncode}"
        super().__init__(f"`{' '.join(command)}` failed: {detail}")


class GitExecutor:
    """Runs git commands against a workspace."""

    def __init__(self, workspace_root: str | Path):
        self.root = Path(workspace_root)
        self.log = logger.bind(component="git_executor")

    def run(self, args: list[str], cwd: str | Path | None = None) -> str:
        """Run `git <args>` and return its trimmed stdout.

        Args:
            args: Arguments after the `git` binary (e.g.: ["rev-parse", "HEAD"]).
            cwd: Working directory. Defaults to the workspace root.

        Returns:
            stdout with surrounding whitespace removed.

        Raises:
            ExecutionError: If git is missing or exits with a non-zero code.
        """
        command = ["git", *args]
        workdir = Path(cwd) if cwd is not None else self.root
        self.log.debug("git.exec", command=" ".join(command), cwd=str(workdir))

        try:
            proc = subprocess.run(
                command,
                cwd=str(workdir),
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise ExecutionError(command, None, str(e)) from e

        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()
            self.log.debug(
                "git.exec_failed",
                command=" ".join(command),
                returncode=proc.returncode,
                stderr=stderr[:200],
            )
            raise ExecutionError(command, proc.returncode, stderr)

        return (proc.stdout or "").strip()

    def try_run(self, args: list[str], cwd: str | Path | None = None) -> str | None:
        """Like run(), but returns None instead of raising on failure."""
        try:
            return self.run(args, cwd=cwd)
        except ExecutionError:
            return None

    def head_sha(self, repo_path: str | Path) -> str | None:
        """Commit hash checked out at repo_path, or None if unresolvable."""
        return self.try_run(["rev-parse", "HEAD"], cwd=repo_path) or None

    def behind_count(self, repo_path: str | Path) -> int | None:
        """Number of upstream commits not yet in HEAD.

        Returns None when there is no tracking branch or git fails; callers
        treat that as "no update information".
        """
        output = self.try_run(["rev-list", "HEAD..@{u}", "--count"], cwd=repo_path)
        if not output:
            return None
        try:
            return int(output)
        except ValueError:
            return None
