from __future__ import annotations

import pytest

from releasetag.prompts import PromptError, TerminalPrompter, parse_bump_choice, prompt_confirm
from releasetag.semver import BumpKind


def _reader(*answers: str):
    it = iter(answers)
    prompts: list[str] = []

    def read(prompt: str) -> str:
        prompts.append(prompt)
        return next(it)

    read.prompts = prompts  # type: ignore[attr-defined]
    return read


def _failing(exc: BaseException):
    def read(prompt: str) -> str:
        raise exc

    return read


@pytest.mark.parametrize("answer", ["y", "Y", "  y  ", "y\n"])
def test_confirm_accepts_y(answer: str) -> None:
    assert prompt_confirm("v1.0.0", "main", read_line=_reader(answer)) is True


@pytest.mark.parametrize("answer", ["", "yes", "n", "N", "no", "yy", "ok"])
def test_confirm_rejects_everything_else(answer: str) -> None:
    assert prompt_confirm("v1.0.0", "main", read_line=_reader(answer)) is False


@pytest.mark.parametrize("exc", [EOFError(), OSError("closed"), KeyboardInterrupt()])
def test_confirm_read_failure_is_a_no(exc: BaseException) -> None:
    assert prompt_confirm("v1.0.0", "main", read_line=_failing(exc)) is False


def test_confirm_prompt_mentions_tag_and_branch() -> None:
    read = _reader("n")
    prompt_confirm("v2.3.4", "main", read_line=read)
    assert "v2.3.4" in read.prompts[0]
    assert "main" in read.prompts[0]


def test_parse_bump_choice() -> None:
    assert parse_bump_choice("1") is BumpKind.PATCH
    assert parse_bump_choice(" Minor ") is BumpKind.MINOR
    assert parse_bump_choice("3") is BumpKind.MAJOR
    assert parse_bump_choice("huge") is None


def test_select_bump_retries_on_bad_input(capsys: pytest.CaptureFixture[str]) -> None:
    prompter = TerminalPrompter(read_line=_reader("4", "major"))
    assert prompter.select_bump() is BumpKind.MAJOR
    assert "Unrecognised choice '4'" in capsys.readouterr().out


def test_select_bump_gives_up() -> None:
    prompter = TerminalPrompter(read_line=_reader("x", "y", "z"), max_attempts=3)
    with pytest.raises(PromptError):
        prompter.select_bump()


def test_select_bump_read_failure() -> None:
    prompter = TerminalPrompter(read_line=_failing(EOFError()))
    with pytest.raises(PromptError):
        prompter.select_bump()


def test_terminal_confirm_delegates() -> None:
    assert TerminalPrompter(read_line=_reader("Y")).confirm("v1.0.0", "main") is True
