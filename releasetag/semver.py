"""
semver.py

Responsibility: Parse, compare and bump `major.minor.patch` versions.

Pure functions only; nothing here touches git, the network or the terminal.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, replace


class VersionParseError(ValueError):
    pass


class BumpKind(enum.Enum):
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


class Ordering(enum.Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True, order=True)
class Version:
    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for part in (self.major, self.minor, self.patch):
            if part < 0:
                raise VersionParseError(f"Version components must be non-negative: {self.as_tuple()}")

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse(text: str) -> Version:
    """
    Parse exactly three dot-separated non-negative integers.

    The caller is responsible for stripping a leading `v`.
    """
    parts = text.split(".")
    if len(parts) != 3:
        raise VersionParseError(f"Expected MAJOR.MINOR.PATCH, got {text!r}")
    numbers: list[int] = []
    for part in parts:
        # str.isdigit() also accepts things like superscripts; stick to ASCII.
        if not part or not (part.isascii() and part.isdigit()):
            raise VersionParseError(f"Expected MAJOR.MINOR.PATCH, got {text!r}")
        numbers.append(int(part))
    return Version(*numbers)


def compare(a: Version, b: Version) -> Ordering:
    if a.as_tuple() < b.as_tuple():
        return Ordering.LESS
    if a.as_tuple() > b.as_tuple():
        return Ordering.GREATER
    return Ordering.EQUAL


def bump(latest: Version, kind: BumpKind) -> Version:
    if kind is BumpKind.PATCH:
        return replace(latest, patch=latest.patch + 1)
    if kind is BumpKind.MINOR:
        return replace(latest, minor=latest.minor + 1, patch=0)
    if kind is BumpKind.MAJOR:
        return Version(latest.major + 1, 0, 0)
    raise ValueError(f"Unknown bump kind: {kind!r}")


def latest_of(tags: Iterable[str]) -> Version | None:
    """
    Return the highest version among `tags`, ignoring anything that does not parse.

    One leading `v` is stripped from each tag before parsing.
    """
    best: Version | None = None
    for tag in tags:
        raw = tag[1:] if tag.startswith("v") else tag
        try:
            version = parse(raw)
        except VersionParseError:
            continue
        if best is None or compare(version, best) is Ordering.GREATER:
            best = version
    return best
