from __future__ import annotations

from dataclasses import dataclass, field

from releasetag.github_client import ReleaseInfo
from releasetag.prompts import Prompter
from releasetag.repository import RepositoryError, RepositoryStatePort, TagExistsError
from releasetag.semver import BumpKind


@dataclass
class FakeRepository(RepositoryStatePort):
    branch: str | None = "main"
    clean: bool = True
    synced: bool = True
    tags: dict[str, str] = field(default_factory=dict)
    url: str = "git@github.com:acme/widgets.git"
    fetch_error: str | None = None
    push_error: str | None = None
    head: str = "c0ffee"
    created: list[tuple[str, str]] = field(default_factory=list)
    pushed: list[str] = field(default_factory=list)
    calls: list[str] = field(default_factory=list)

    def current_branch(self) -> str:
        self.calls.append("current_branch")
        if self.branch is None:
            raise RepositoryError("HEAD is not pointing to a branch")
        return self.branch

    def is_working_tree_clean(self) -> bool:
        self.calls.append("is_working_tree_clean")
        return self.clean

    def is_synced_with_remote(self) -> bool:
        self.calls.append("is_synced_with_remote")
        if self.fetch_error:
            raise RepositoryError(self.fetch_error)
        return self.synced

    def list_tags(self) -> list[str]:
        self.calls.append("list_tags")
        return list(self.tags)

    def create_tag(self, name: str, message: str) -> None:
        self.calls.append("create_tag")
        if name in self.tags:
            raise TagExistsError(name, self.tags[name])
        self.tags[name] = self.head
        self.created.append((name, message))

    def push_tag(self, name: str) -> None:
        self.calls.append("push_tag")
        if self.push_error:
            raise RepositoryError(self.push_error)
        self.pushed.append(name)

    def remote_url(self) -> str:
        return self.url


class ScriptedPrompter(Prompter):
    def __init__(self, bump: BumpKind | None = None, answer: bool = True) -> None:
        self.bump = bump
        self.answer = answer
        self.confirm_calls: list[tuple[str, str]] = []
        self.bump_calls = 0

    def select_bump(self) -> BumpKind:
        self.bump_calls += 1
        if self.bump is None:
            raise AssertionError("select_bump should not have been called")
        return self.bump

    def confirm(self, tag_name: str, branch_name: str) -> bool:
        self.confirm_calls.append((tag_name, branch_name))
        return self.answer


class FakePublisher:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[str, str, str]] = []

    def publish_release(self, owner: str, repo: str, tag_name: str) -> ReleaseInfo:
        self.calls.append((owner, repo, tag_name))
        if self.error is not None:
            raise self.error
        return ReleaseInfo(
            tag_name=tag_name,
            name=tag_name,
            html_url=f"https://github.com/{owner}/{repo}/releases/tag/{tag_name}",
        )
