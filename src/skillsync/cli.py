"""
Main CLI for skillsync using Click.

`skillsync init|sync|check` runs a command directly; `skillsync` alone
opens an interactive menu with the same three choices.
"""

import sys
from pathlib import Path
from typing import Any, Callable

import click
import yaml

from . import __version__
from .config import AppConfig, load_config
from .git import GitExecutor
from .logging import configure_logging
from .operations import (
    OperationError,
    OperationReport,
    check_updates,
    init_submodules,
    sync_skills,
)
from .ui import Choice, Prompter, TerminalPrompter

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_PARTIAL = 2
EXIT_CONFIG_ERROR = 3
EXIT_INTERRUPTED = 130

_MENU = [
    Choice("sync", "Sync submodules", "Pull latest and sync vendor skills"),
    Choice("init", "Init submodules", "Add new submodules"),
    Choice("check", "Check updates", "See available updates"),
]


def _print_banner(title: str, quiet: bool) -> None:
    if not quiet:
        width = 50
        label = f" skillsync · {title} "
        dashes = "─" * max(0, width - len(label))
        click.echo(f"\n─── {label}{dashes}\n", err=True)


def _prompter(ctx: click.Context) -> Prompter:
    """Prompter injected through ctx.obj, else a terminal one (created once)."""
    if ctx.obj.get("prompter") is None:
        ctx.obj["prompter"] = TerminalPrompter()
    return ctx.obj["prompter"]


def _spinner(ctx: click.Context) -> Prompter | None:
    if ctx.obj["quiet"]:
        return None
    return _prompter(ctx)


def _run_operation(ctx: click.Context, title: str, operation: Callable[[], Any]) -> None:
    """Run an operation with banner, fatal error handling and exit code."""
    quiet = ctx.obj["quiet"]
    _print_banner(title, quiet)
    try:
        result = operation()
    except OperationError as e:
        click.echo(f"\n✗ {e}", err=True)
        sys.exit(EXIT_FAILED)
    except KeyboardInterrupt:
        click.echo("\nInterrupted", err=True)
        sys.exit(EXIT_INTERRUPTED)

    if not quiet:
        click.echo("\nDone", err=True)
    if isinstance(result, OperationReport) and not result.ok:
        sys.exit(EXIT_PARTIAL)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="skillsync")
@click.option(
    "--root",
    "workspace",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository root (default: current directory)",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to the YAML registry/configuration file",
)
@click.option("-v", "--verbose", count=True, help="Technical logs (-v info, -vv debug)")
@click.option("--quiet", is_flag=True, help="Quiet mode: no progress output")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write JSON logs to this file",
)
@click.pass_context
def main(
    ctx: click.Context,
    workspace: Path | None,
    config_path: Path | None,
    verbose: int,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """skillsync - Keep vendored skills in sync with their upstream submodules.

    \b
    Commands:
      init   Add configured projects as git submodules
      sync   Update submodules and copy vendor skills into skills/
      check  Show how many commits each submodule is behind

    Without a command, an interactive menu is shown.
    """
    ctx.ensure_object(dict)
    try:
        app_config = load_config(
            config_path=config_path,
            cli_args={"workspace": workspace, "verbose": verbose, "log_file": log_file},
        )
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except (ValueError, yaml.YAMLError) as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    configure_logging(app_config.logging, quiet=quiet)

    root = app_config.workspace.root.resolve()
    ctx.obj["config"] = app_config
    ctx.obj["root"] = root
    ctx.obj["quiet"] = quiet
    if ctx.obj.get("executor") is None:
        ctx.obj["executor"] = GitExecutor(root)

    if ctx.invoked_subcommand is not None:
        return

    _print_banner("Skills Manager", quiet)
    action = _prompter(ctx).select("What would you like to do?", _MENU)
    if action is None:
        click.echo("Cancelled", err=True)
        sys.exit(EXIT_SUCCESS)

    ctx.invoke(_COMMANDS[action])


@main.command("init")
@click.option("--all", "select_all", is_flag=True, help="Add every new project without prompting")
@click.pass_context
def init_cmd(ctx: click.Context, select_all: bool) -> None:
    """Add configured projects as git submodules."""
    config: AppConfig = ctx.obj["config"]
    _run_operation(
        ctx,
        "init",
        lambda: init_submodules(
            config.registry,
            ctx.obj["root"],
            ctx.obj["executor"],
            prompter=None if select_all else _prompter(ctx),
            select_all=select_all,
        ),
    )


@main.command("sync")
@click.pass_context
def sync_cmd(ctx: click.Context) -> None:
    """Update submodules and copy vendor skills into skills/.

    Every published skill folder is rebuilt from scratch and gets the
    vendor LICENSE plus a SYNC.md with the source path, commit and date.
    """
    config: AppConfig = ctx.obj["config"]
    _run_operation(
        ctx,
        "sync",
        lambda: sync_skills(
            config.registry,
            ctx.obj["root"],
            ctx.obj["executor"],
            prompter=_spinner(ctx),
        ),
    )


@main.command("check")
@click.pass_context
def check_cmd(ctx: click.Context) -> None:
    """Fetch submodules and show how many commits each one is behind."""
    config: AppConfig = ctx.obj["config"]
    _run_operation(
        ctx,
        "check",
        lambda: check_updates(
            config.registry,
            ctx.obj["root"],
            ctx.obj["executor"],
            prompter=_spinner(ctx),
        ),
    )


_COMMANDS = {
    "init": init_cmd,
    "sync": sync_cmd,
    "check": check_cmd,
}
