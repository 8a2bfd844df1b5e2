"""
releasetag package

This package implements a CLI that creates, pushes and optionally publishes
semantic-version release tags.

Key responsibilities are split across modules:
- `semver.py`: parse/compare/bump `major.minor.patch` versions
- `tags.py`: canonical `v`-prefixed tag names and their validation
- `prompts.py`: bump selection and the yes/no confirmation gate
- `repository.py`: git state checks and tag create/push (subprocess-backed)
- `github_client.py`: isolated GitHub REST API interactions (release notes / releases)
- `config.py`: optional YAML configuration
- `renderer.py`: Jinja2 rendering of the tag annotation message
- `lifecycle.py`: the check -> resolve -> confirm -> create -> push -> publish sequence
- `cli.py`: CLI entrypoint
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
