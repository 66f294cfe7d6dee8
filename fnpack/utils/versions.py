"""Version comparison helpers for host framework versions."""

from __future__ import annotations

import re

_VERSION_RE = re.compile(
    r"^\s*v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:-([0-9A-Za-z.-]+))?(?:\+\S*)?\s*$"
)


def parse_version(value: str) -> tuple[int, int, int, bool]:
    """Parse ``value`` into ``(major, minor, patch, is_release)``.

    Pre-release versions (``1.18.0-beta``) sort before the matching release.
    Build metadata after ``+`` is ignored.
    """
    match = _VERSION_RE.match(value or "")
    if match is None:
        raise ValueError(f"Invalid version string: {value!r}")

    major, minor, patch, prerelease = match.groups()
    return (int(major), int(minor or 0), int(patch or 0), prerelease is None)


def version_lt(left: str, right: str) -> bool:
    """Return True when ``left`` is strictly older than ``right``."""
    return parse_version(left) < parse_version(right)
