"""Line-level blame parsing.

``git blame --porcelain`` emits one header per final line. The first line of
each group carries four fields (sha, original line, final line, group size);
later lines in the same group carry three. A group is a hunk: a run of
consecutive final lines last written by the same commit.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

__all__ = [
    "NULL_COMMIT_ID",
    "BlameHunk",
    "hunk_for_line",
    "is_null_commit",
    "parse_porcelain",
]

NULL_COMMIT_ID = "0" * 40

_HEADER_RE = re.compile(r"^([0-9a-f]{40}|[0-9a-f]{64}) (\d+) (\d+)(?: (\d+))?$")


@dataclass(frozen=True, slots=True)
class BlameHunk:
    """A run of lines attributed to one commit.

    Attributes:
        commit_id: Commit that last wrote these lines
        orig_start: 1-based first line in that commit's version of the file
        final_start: 1-based first line in the blamed content
        num_lines: Number of lines in the hunk
    """

    commit_id: str
    orig_start: int
    final_start: int
    num_lines: int

    @property
    def final_end(self) -> int:
        """Last final line covered (inclusive)."""
        return self.final_start + self.num_lines - 1

    def covers(self, line_number: int) -> bool:
        return self.final_start <= line_number <= self.final_end


def is_null_commit(commit_id: str) -> bool:
    """True for blame's "Not Committed Yet" pseudo commit."""
    return set(commit_id) == {"0"}


def parse_porcelain(output: str) -> list[BlameHunk]:
    """Parse ``git blame --porcelain`` output into hunks, in final-line order."""
    hunks: list[BlameHunk] = []
    for line in output.splitlines():
        # Content lines are tab-prefixed and may look like anything
        if line.startswith("\t"):
            continue
        m = _HEADER_RE.match(line)
        if m is None or m.group(4) is None:
            continue
        hunks.append(
            BlameHunk(
                commit_id=m.group(1),
                orig_start=int(m.group(2)),
                final_start=int(m.group(3)),
                num_lines=int(m.group(4)),
            )
        )
    return hunks


def hunk_for_line(hunks: Sequence[BlameHunk], line_number: int) -> BlameHunk | None:
    """Return the hunk covering a 1-based final line, or None."""
    for hunk in hunks:
        if hunk.covers(line_number):
            return hunk
    return None
