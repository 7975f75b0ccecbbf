"""
Interactive prompts -- selection dialogs and a progress spinner.

Operations depend only on the Prompter protocol, so they can run headless
with a scripted implementation. TerminalPrompter backs it with
prompt_toolkit dialogs and a rich status spinner.
"""

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any, Protocol

from prompt_toolkit.shortcuts import checkboxlist_dialog, radiolist_dialog
from rich.console import Console

__all__ = [
    "Choice",
    "Prompter",
    "TerminalPrompter",
]


@dataclass(frozen=True)
class Choice:
    """An option shown to the operator."""

    value: Any
    label: str
    hint: str = ""

    def display(self) -> str:
        return f"{self.label}  ({self.hint})" if self.hint else self.label


class Prompter(Protocol):
    """Operator interaction used by the operations and the CLI menu.

    select_many() and select() return None when the operator cancels.
    """

    def select_many(
        self, message: str, choices: list[Choice], initial: list[Any] | None = None
    ) -> list[Any] | None: ...

    def select(self, message: str, choices: list[Choice]) -> Any | None: ...

    def status(self, message: str) -> AbstractContextManager: ...


class TerminalPrompter:
    """Prompter for an interactive terminal."""

    TITLE = "skillsync"

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    def select_many(
        self, message: str, choices: list[Choice], initial: list[Any] | None = None
    ) -> list[Any] | None:
        return checkboxlist_dialog(
            title=self.TITLE,
            text=message,
            values=[(c.value, c.display()) for c in choices],
            default_values=list(initial or []),
        ).run()

    def select(self, message: str, choices: list[Choice]) -> Any | None:
        return radiolist_dialog(
            title=self.TITLE,
            text=message,
            values=[(c.value, c.display()) for c in choices],
        ).run()

    def status(self, message: str) -> AbstractContextManager:
        return self.console.status(message, spinner="dots")
