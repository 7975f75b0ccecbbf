"""Operator interaction: selection dialogs and spinners."""

from .prompts import Choice, Prompter, TerminalPrompter

__all__ = [
    "Choice",
    "Prompter",
    "TerminalPrompter",
]
