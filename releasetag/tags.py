"""
tags.py

Responsibility: Canonicalize and validate release tag names (`v<major>.<minor>.<patch>`).

`format_canonical` accepts bare versions, `is_valid_tag` does not: explicit tags
passed on the command line must already carry the `v` prefix, while computed
tags go through `format_canonical` first.
"""

from __future__ import annotations

from releasetag.semver import VersionParseError, parse

TAG_PREFIX = "v"


def format_canonical(raw_version: str) -> str:
    if raw_version.startswith(TAG_PREFIX):
        return raw_version
    return f"{TAG_PREFIX}{raw_version}"


def is_valid_tag(text: str) -> bool:
    if not text.startswith(TAG_PREFIX):
        return False
    try:
        parse(text[len(TAG_PREFIX) :])
    except VersionParseError:
        return False
    return True
