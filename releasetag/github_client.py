"""
github_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads
- Figures out which token to authenticate with

Everything else (git commands, prompting, CLI behavior) should use this client.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import requests

logger = logging.getLogger(__name__)

TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


class GitHubError(RuntimeError):
    pass


@dataclass(frozen=True)
class ReleaseInfo:
    tag_name: str
    name: str
    html_url: str


def _token_from_gh_cli() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
        )
    except (FileNotFoundError, subprocess.CalledProcessError) as e:
        logger.debug("gh auth token unavailable: %r", e)
        return None
    return result.stdout.strip() or None


def resolve_token(environ: Mapping[str, str] | None = None) -> str:
    """
    Find a GitHub token: GITHUB_TOKEN, then GH_TOKEN, then `gh auth token`.
    """
    env = os.environ if environ is None else environ
    for var in TOKEN_ENV_VARS:
        token = (env.get(var) or "").strip()
        if token:
            logger.debug("Using GitHub token from %s", var)
            return token
    token = _token_from_gh_cli()
    if token:
        logger.debug("Using GitHub token from gh CLI")
        return token
    raise GitHubError("GitHub token is required (set GITHUB_TOKEN or GH_TOKEN, or run `gh auth login`)")


class GitHubClient:
    def __init__(self, token: str, api_base: str = "https://api.github.com") -> None:
        if not token.strip():
            raise GitHubError("GitHub token is required.")
        self._token = token
        self._api_base = api_base.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "releasetag",
        }

    def _request(self, method: str, path: str, *, json_body: dict[str, Any] | None = None) -> Any:
        url = f"{self._api_base}{path}"
        logger.debug("%s %s", method, url)
        try:
            r = requests.request(method, url, headers=self._headers(), json=json_body, timeout=30)
        except requests.RequestException as e:
            raise GitHubError(f"GitHub API request failed {method} {path}: {e}") from e
        if r.status_code >= 400:
            try:
                payload = r.json()
            except ValueError:
                payload = {"message": r.text}
            message = payload.get("message", payload) if isinstance(payload, dict) else payload
            raise GitHubError(f"GitHub API error {r.status_code} {method} {path}: {message}")
        if r.status_code == 204:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise GitHubError(f"GitHub API returned a non-JSON response {r.status_code} {method} {path}") from e

    def _request_object(self, method: str, path: str, *, json_body: dict[str, Any] | None = None) -> dict[str, Any]:
        data = self._request(method, path, json_body=json_body)
        if not isinstance(data, dict):
            raise GitHubError(f"GitHub API returned an unexpected payload for {method} {path}")
        return data

    def generate_release_notes(self, owner: str, repo: str, tag_name: str) -> str:
        data = self._request_object(
            "POST",
            f"/repos/{owner}/{repo}/releases/generate-notes",
            json_body={"tag_name": tag_name},
        )
        return str(data.get("body") or "")

    def create_release(self, owner: str, repo: str, tag_name: str, body: str) -> ReleaseInfo:
        """
        Create a published (non-draft, non-prerelease) release named after the tag.
        """
        path = f"/repos/{owner}/{repo}/releases"
        data = self._request_object(
            "POST",
            path,
            json_body={
                "tag_name": tag_name,
                "name": tag_name,
                "body": body,
                "draft": False,
                "prerelease": False,
            },
        )
        html_url = data.get("html_url")
        if not html_url:
            raise GitHubError(f"GitHub API response for POST {path} has no html_url")
        return ReleaseInfo(
            tag_name=data.get("tag_name") or tag_name,
            name=data.get("name") or tag_name,
            html_url=str(html_url),
        )

    def publish_release(self, owner: str, repo: str, tag_name: str) -> ReleaseInfo:
        notes = self.generate_release_notes(owner, repo, tag_name)
        return self.create_release(owner, repo, tag_name, notes)
