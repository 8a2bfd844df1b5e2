"""
cli.py

Responsibility: CLI entrypoint for releasetag.

High-level flow (single command):
1) Load `.releasetag.yaml` (optional) -> `Config`
2) (With --release) find a GitHub token up front, before anything is mutated
3) Run the tag lifecycle against the git repository in the current directory
4) Turn the outcome into output lines and an exit code

This module should orchestrate behavior but keep concerns isolated:
- Version arithmetic: `semver.py` / `tags.py`
- Git: `repository.py`
- GitHub API: `github_client.py`
- The decision sequence itself: `lifecycle.py`
"""

from __future__ import annotations

import argparse
import logging
import sys

from releasetag import __version__
from releasetag.config import ConfigError, load_config
from releasetag.github_client import GitHubClient, GitHubError, resolve_token
from releasetag.lifecycle import PreconditionError, TagLifecycle
from releasetag.prompts import PromptError, TerminalPrompter
from releasetag.renderer import RenderError
from releasetag.repository import GitRepository, RepositoryError

logger = logging.getLogger(__name__)

CLI_ERRORS = (ConfigError, GitHubError, PreconditionError, PromptError, RenderError, RepositoryError)


def run_cmd(args: argparse.Namespace) -> int:
    config = load_config(args.config)

    publisher: GitHubClient | None = None
    if args.release:
        publisher = GitHubClient(resolve_token(), api_base=config.github.api_base)

    repo = GitRepository(".", remote=config.remote, sign=config.sign)
    lifecycle = TagLifecycle(repo, TerminalPrompter(), config=config, publisher=publisher)
    outcome = lifecycle.run(args.tag, release=bool(args.release))

    if outcome.cancelled:
        print("🚫 Tag creation cancelled")
        return 0

    print(f"🚀 Created and pushed tag '{outcome.tag}'")
    if outcome.release is not None:
        print(f"📦 Published release {outcome.release.name}: {outcome.release.html_url}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="releasetag", description="Create, push and optionally publish a release tag")
    p.add_argument("tag", nargs="?", default=None, help="Explicit tag name, e.g. v1.2.3 (default: bump the latest tag)")
    p.add_argument("-r", "--release", action="store_true", help="Also publish a GitHub release for the new tag")
    p.add_argument("--config", default=None, help="Path to config file (default: .releasetag.yaml if present)")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.set_defaults(func=run_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return int(args.func(args))
    except CLI_ERRORS as e:
        logger.debug("Command failed", exc_info=True)
        print(f"❌ {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("🚫 Interrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
