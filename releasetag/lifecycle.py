"""
lifecycle.py

Responsibility: Decide whether and how a new release tag may be created, then create it.

High-level flow (one linear pass, no retries):
1) Preconditions: on the release branch, clean working tree, in sync with remote
2) Resolve the tag: explicit name as-is, or bump the latest version tag
3) Validate the tag name and ask the operator to confirm
4) Create and push the tag
5) (Optional) Publish a GitHub release for it

Nothing is rolled back: if pushing or publishing fails, the earlier steps stay done.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Protocol

from releasetag.config import Config
from releasetag.github_client import ReleaseInfo
from releasetag.prompts import Prompter
from releasetag.renderer import render_tag_message
from releasetag.repository import RepositoryStatePort
from releasetag.semver import Version, bump, latest_of
from releasetag.tags import TAG_PREFIX, format_canonical, is_valid_tag

logger = logging.getLogger(__name__)


class PreconditionError(RuntimeError):
    pass


class LifecycleState(enum.Enum):
    CHECKING_BRANCH = "checking-branch"
    CHECKING_CLEAN = "checking-clean"
    CHECKING_SYNC = "checking-sync"
    RESOLVING_TAG = "resolving-tag"
    VALIDATING = "validating"
    CONFIRMING = "confirming"
    CREATING = "creating"
    PUSHING = "pushing"
    PUBLISHING = "publishing"
    DONE = "done"
    ABORTED = "aborted"


class ReleasePublisher(Protocol):
    def publish_release(self, owner: str, repo: str, tag_name: str) -> ReleaseInfo: ...


@dataclass(frozen=True)
class Outcome:
    state: LifecycleState
    tag: str | None = None
    release: ReleaseInfo | None = None

    @property
    def cancelled(self) -> bool:
        return self.state is LifecycleState.ABORTED


class TagLifecycle:
    def __init__(
        self,
        repo: RepositoryStatePort,
        prompter: Prompter,
        *,
        config: Config | None = None,
        publisher: ReleasePublisher | None = None,
    ) -> None:
        self._repo = repo
        self._prompter = prompter
        self._config = config or Config()
        self._publisher = publisher
        self.state = LifecycleState.CHECKING_BRANCH

    def _enter(self, state: LifecycleState) -> None:
        logger.debug("%s -> %s", self.state.value, state.value)
        self.state = state

    def _fail(self, message: str) -> PreconditionError:
        self._enter(LifecycleState.ABORTED)
        return PreconditionError(message)

    def _check_preconditions(self) -> str:
        self._enter(LifecycleState.CHECKING_BRANCH)
        branch = self._repo.current_branch()
        if branch != self._config.branch:
            raise self._fail(f"Not on '{self._config.branch}' branch")

        self._enter(LifecycleState.CHECKING_CLEAN)
        if not self._repo.is_working_tree_clean():
            raise self._fail("Working tree is not clean")

        self._enter(LifecycleState.CHECKING_SYNC)
        if not self._repo.is_synced_with_remote():
            raise self._fail("Local branch is not in sync with remote")
        return branch

    def resolve_tag(self, explicit_tag: str | None) -> str:
        self._enter(LifecycleState.RESOLVING_TAG)
        if explicit_tag is not None:
            return explicit_tag
        kind = self._prompter.select_bump()
        latest = latest_of(self._repo.list_tags()) or Version(0, 0, 0)
        new_version = bump(latest, kind)
        logger.debug("Bumping %s (%s) -> %s", latest, kind.value, new_version)
        return format_canonical(str(new_version))

    def run(self, tag: str | None = None, *, release: bool = False) -> Outcome:
        if release and self._publisher is None:
            raise ValueError("release=True requires a publisher")

        branch = self._check_preconditions()
        new_tag = self.resolve_tag(tag)

        self._enter(LifecycleState.VALIDATING)
        if not is_valid_tag(new_tag):
            raise self._fail(f"Invalid tag name '{new_tag}'")

        self._enter(LifecycleState.CONFIRMING)
        if not self._prompter.confirm(new_tag, branch):
            self._enter(LifecycleState.ABORTED)
            return Outcome(state=LifecycleState.ABORTED, tag=new_tag)

        self._enter(LifecycleState.CREATING)
        message = render_tag_message(
            self._config.tag_message,
            tag=new_tag,
            version=new_tag[len(TAG_PREFIX) :],
            branch=branch,
        )
        self._repo.create_tag(new_tag, message)

        self._enter(LifecycleState.PUSHING)
        self._repo.push_tag(new_tag)

        info: ReleaseInfo | None = None
        if release and self._publisher is not None:
            self._enter(LifecycleState.PUBLISHING)
            owner, name = self._repo.repo_owner_and_name()
            info = self._publisher.publish_release(owner, name, new_tag)

        self._enter(LifecycleState.DONE)
        return Outcome(state=LifecycleState.DONE, tag=new_tag, release=info)
