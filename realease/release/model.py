from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

ReleaseBump = Literal["major", "minor", "patch"]

RELEASE_BUMPS: tuple[ReleaseBump, ...] = ("major", "minor", "patch")

VERSION_TOKEN = "{version}"

_REMOTE_RE = re.compile(r"([^/:]+)/([^/]+?)(?:\.git)?/?$")


@dataclass(frozen=True, slots=True)
class VersionLine:
    """The manifest line holding the version; ``line_number`` is 1-based."""

    line_number: int
    raw_text: str


@dataclass(frozen=True, slots=True)
class AttributionResult:
    commit_id: str
    line_number: int


@dataclass(frozen=True, slots=True)
class RemoteDescriptor:
    org: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.org}/{self.name}"

    def compare_url(self, branch: str) -> str:
        return f"https://github.com/{self.org}/{self.name}/compare/{branch}?expand=1"


def render_template(template: str, version: str) -> str:
    """Substitute the first ``{version}`` token; no token, no change."""
    return template.replace(VERSION_TOKEN, version, 1)


@dataclass(frozen=True, slots=True)
class ReleaseTarget:
    version: str
    branch_name: str
    tag_name: str
    commit_message: str

    @classmethod
    def render(
        cls,
        *,
        version: str,
        branch_template: str,
        tag_template: str,
        message_template: str,
    ) -> ReleaseTarget:
        return cls(
            version=version,
            branch_name=render_template(branch_template, version),
            tag_name=render_template(tag_template, version),
            commit_message=render_template(message_template, version),
        )


def parse_remote_url(url: str) -> RemoteDescriptor | None:
    """Extract org/name from the trailing ``org/repo[.git]`` of a remote URL.

    Handles ``git@github.com:org/repo.git`` and ``https://github.com/org/repo``.
    """
    m = _REMOTE_RE.search(url.strip())
    if m is None:
        return None
    return RemoteDescriptor(org=m.group(1), name=m.group(2))
