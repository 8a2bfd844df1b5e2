"""
prompts.py

Responsibility: Operator interaction (bump selection and the final yes/no gate).

The orchestrator only sees the `Prompter` interface so tests can script answers
instead of driving a terminal.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from releasetag.semver import BumpKind

logger = logging.getLogger(__name__)

ReadLine = Callable[[str], str]

_BUMP_CHOICES: dict[str, BumpKind] = {
    "1": BumpKind.PATCH,
    "2": BumpKind.MINOR,
    "3": BumpKind.MAJOR,
    "patch": BumpKind.PATCH,
    "minor": BumpKind.MINOR,
    "major": BumpKind.MAJOR,
}

_BUMP_MENU = "Select version bump:\n  1) patch\n  2) minor\n  3) major\n> "


class PromptError(RuntimeError):
    pass


def is_confirmation(answer: str) -> bool:
    return answer.strip().lower() == "y"


def prompt_confirm(tag_name: str, branch_name: str, *, read_line: ReadLine = input) -> bool:
    """
    Ask whether to create `tag_name` on `branch_name`.

    Only `y` (any case, surrounding whitespace ignored) confirms. If the answer
    cannot be read at all, this counts as a "no".
    """
    try:
        answer = read_line(f"Create tag '{tag_name}' on branch '{branch_name}'? [y/N] ")
    except (EOFError, OSError, KeyboardInterrupt) as e:
        logger.debug("Confirmation prompt failed, treating as declined: %r", e)
        return False
    return is_confirmation(answer)


def parse_bump_choice(answer: str) -> BumpKind | None:
    return _BUMP_CHOICES.get(answer.strip().lower())


class Prompter(ABC):
    @abstractmethod
    def select_bump(self) -> BumpKind: ...

    @abstractmethod
    def confirm(self, tag_name: str, branch_name: str) -> bool: ...


class TerminalPrompter(Prompter):
    def __init__(self, read_line: ReadLine = input, max_attempts: int = 3) -> None:
        self._read_line = read_line
        self._max_attempts = max_attempts

    def select_bump(self) -> BumpKind:
        for _ in range(self._max_attempts):
            try:
                answer = self._read_line(_BUMP_MENU)
            except (EOFError, OSError) as e:
                raise PromptError("Could not read version bump selection") from e
            kind = parse_bump_choice(answer)
            if kind is not None:
                return kind
            print(f"Unrecognised choice {answer.strip()!r}; enter 1, 2, 3, patch, minor or major.")
        raise PromptError("No valid version bump selected")

    def confirm(self, tag_name: str, branch_name: str) -> bool:
        return prompt_confirm(tag_name, branch_name, read_line=self._read_line)
