"""
CLI Test Fixtures.

Scripted input and captured Rich output for the interactive shell.
"""

import io

import pytest
from rich.console import Console


class ScriptedInput:
    """Answers prompts from a fixed script; raises EOFError when it runs out."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def console() -> Console:
    """Console writing plain text to a buffer."""
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


@pytest.fixture
def output(console):
    """Return everything printed to the console so far."""
    return lambda: console.file.getvalue()


@pytest.fixture
def scripted():
    """Factory for ScriptedInput."""
    return ScriptedInput
