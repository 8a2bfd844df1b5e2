"""
repository.py

Responsibility: Everything the tag lifecycle needs to know about (or do to) the git repository.

- `RepositoryStatePort` is the interface the orchestrator depends on.
- `GitRepository` implements it by shelling out to `git`. Command output is
  captured, never shown, and only used to build error messages.
- `parse_remote_url` extracts (owner, name) from a GitHub-style remote URL.
"""

from __future__ import annotations

import logging
import re
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from releasetag.semver import Version, latest_of

logger = logging.getLogger(__name__)


class RepositoryError(RuntimeError):
    pass


class TagExistsError(RepositoryError):
    def __init__(self, tag_name: str, target: str) -> None:
        super().__init__(f"Tag '{tag_name}' already exists (points to {target})")
        self.tag_name = tag_name
        self.target = target


class RemoteUrlError(RepositoryError):
    pass


@dataclass(frozen=True)
class RepoState:
    current_branch: str
    is_clean: bool
    is_synced_with_remote: bool
    latest_version_tag: Version | None


_HTTPS_REMOTE = re.compile(r"^https?://(?:[^@/]+@)?[^/]+/(?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?/?$")
_SSH_URL_REMOTE = re.compile(r"^ssh://(?:[^@/]+@)?[^/]+/(?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?/?$")
_SCP_REMOTE = re.compile(r"^(?:[^@/]+@)?[^:/]+:(?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?$")


def parse_remote_url(url: str) -> tuple[str, str]:
    """
    Extract (owner, repo) from a remote URL.

    Accepted shapes:
    - https://github.com/owner/repo(.git)
    - ssh://git@github.com/owner/repo(.git)
    - git@github.com:owner/repo(.git)
    """
    candidate = url.strip()
    for pattern in (_HTTPS_REMOTE, _SSH_URL_REMOTE, _SCP_REMOTE):
        match = pattern.match(candidate)
        if match:
            return match.group("owner"), match.group("name")
    raise RemoteUrlError(f"Unrecognised remote URL: {url!r}")


class RepositoryStatePort(ABC):
    """Live view of the repository. Every call reflects current state; nothing is cached."""

    @abstractmethod
    def current_branch(self) -> str:
        """Return the checked-out branch name. Raises RepositoryError on a detached HEAD."""

    @abstractmethod
    def is_working_tree_clean(self) -> bool:
        """True iff there are no tracked modifications and no untracked files."""

    @abstractmethod
    def is_synced_with_remote(self) -> bool:
        """
        Fetch the tracking remote, then compare local and remote branch tips.

        Raises RepositoryError if the fetch itself fails.
        """

    @abstractmethod
    def list_tags(self) -> list[str]: ...

    @abstractmethod
    def create_tag(self, name: str, message: str) -> None:
        """Raises TagExistsError if `name` is already taken."""

    @abstractmethod
    def push_tag(self, name: str) -> None: ...

    @abstractmethod
    def remote_url(self) -> str: ...

    def repo_owner_and_name(self) -> tuple[str, str]:
        return parse_remote_url(self.remote_url())

    def snapshot(self) -> RepoState:
        return RepoState(
            current_branch=self.current_branch(),
            is_clean=self.is_working_tree_clean(),
            is_synced_with_remote=self.is_synced_with_remote(),
            latest_version_tag=latest_of(self.list_tags()),
        )


class GitRepository(RepositoryStatePort):
    def __init__(self, workdir: str | Path = ".", *, remote: str = "origin", sign: bool = True) -> None:
        self._workdir = Path(workdir)
        self._remote = remote
        self._sign = sign

    def _run(self, args: list[str], *, operation: str) -> str:
        """
        Run `git <args>` with output captured, raising RepositoryError on failure.
        """
        cmd = ["git", *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=str(self._workdir),
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as e:
            raise RepositoryError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip()
            msg = f"Failed to {operation}"
            if detail:
                msg = f"{msg}: {detail}"
            raise RepositoryError(msg) from e
        return result.stdout

    def _try_rev_parse(self, ref: str) -> str | None:
        try:
            return self._run(["rev-parse", "--verify", "--quiet", ref], operation=f"resolve {ref}").strip()
        except RepositoryError:
            return None

    def current_branch(self) -> str:
        try:
            return self._run(["symbolic-ref", "--quiet", "--short", "HEAD"], operation="read HEAD").strip()
        except RepositoryError as e:
            raise RepositoryError("HEAD is not pointing to a branch") from e

    def is_working_tree_clean(self) -> bool:
        status = self._run(["status", "--porcelain", "--untracked-files=normal"], operation="read working tree status")
        return not status.strip()

    def _tracking_remote(self, branch: str) -> str:
        try:
            configured = self._run(
                ["config", "--get", f"branch.{branch}.remote"],
                operation=f"read tracking remote of '{branch}'",
            ).strip()
        except RepositoryError:
            configured = ""
        # "." means the upstream is a local branch; there is nothing to fetch.
        if not configured or configured == ".":
            return self._remote
        return configured

    def is_synced_with_remote(self) -> bool:
        """
        Compare HEAD with the branch's upstream (`@{upstream}`) after fetching its remote.

        Without a configured upstream, `<remote>/<branch>` from the config is used.
        """
        branch = self.current_branch()
        remote_name = self._tracking_remote(branch)
        self._run(["fetch", remote_name], operation=f"fetch from '{remote_name}'")
        local = self._run(["rev-parse", "HEAD"], operation="resolve HEAD").strip()
        remote = self._try_rev_parse("@{upstream}")
        if not remote:
            remote_ref = f"refs/remotes/{self._remote}/{branch}"
            remote = self._run(["rev-parse", remote_ref], operation=f"resolve {self._remote}/{branch}").strip()
        logger.debug("Local tip %s, remote tip %s", local, remote)
        return local == remote

    def list_tags(self) -> list[str]:
        out = self._run(["tag", "--list"], operation="list tags")
        return [line.strip() for line in out.splitlines() if line.strip()]

    def create_tag(self, name: str, message: str) -> None:
        existing = self._try_rev_parse(f"refs/tags/{name}^{{commit}}")
        if existing:
            raise TagExistsError(name, existing)
        flag = "-s" if self._sign else "-a"
        self._run(["tag", flag, name, "-m", message], operation=f"create tag '{name}'")

    def push_tag(self, name: str) -> None:
        self._run(
            ["push", self._remote, f"refs/tags/{name}"],
            operation=f"push tag '{name}' to '{self._remote}'",
        )

    def remote_url(self) -> str:
        return self._run(["remote", "get-url", self._remote], operation=f"read URL of remote '{self._remote}'").strip()
