"""Tests for git/blame.py."""

from __future__ import annotations

from realease.git.blame import (
    NULL_COMMIT_ID,
    BlameHunk,
    hunk_for_line,
    is_null_commit,
    parse_porcelain,
)

INIT = "a" * 40
BUMP = "b" * 40

PORCELAIN = f"""\
{INIT} 1 1 2
author Release Bot
author-mail <release-bot@example.com>
author-time 1700000000
author-tz +0000
committer Release Bot
committer-mail <release-bot@example.com>
committer-time 1700000000
committer-tz +0000
summary init
boundary
filename package.json
\t{{
{INIT} 2 2
\t  "name": "demo",
{BUMP} 3 3 1
author Release Bot
author-mail <release-bot@example.com>
author-time 1700000100
author-tz +0000
committer Release Bot
committer-mail <release-bot@example.com>
committer-time 1700000100
committer-tz +0000
summary Release version 1.0.1
previous {INIT} package.json
filename package.json
\t  "version": "1.0.1",
{INIT} 4 4 1
filename package.json
\t}}
"""


class TestParsePorcelain:
    def test_groups_become_hunks(self) -> None:
        hunks = parse_porcelain(PORCELAIN)
        assert hunks == [
            BlameHunk(commit_id=INIT, orig_start=1, final_start=1, num_lines=2),
            BlameHunk(commit_id=BUMP, orig_start=3, final_start=3, num_lines=1),
            BlameHunk(commit_id=INIT, orig_start=4, final_start=4, num_lines=1),
        ]

    def test_content_lines_that_look_like_headers_are_ignored(self) -> None:
        tricky = f"{INIT} 1 1 1\nfilename x\n\t{BUMP} 9 9 9\n"
        assert parse_porcelain(tricky) == [
            BlameHunk(commit_id=INIT, orig_start=1, final_start=1, num_lines=1)
        ]

    def test_empty_output(self) -> None:
        assert parse_porcelain("") == []

    def test_original_line_can_differ_from_final_line(self) -> None:
        hunks = parse_porcelain(f"{BUMP} 7 3 2\nfilename package.json\n\tx\n{BUMP} 8 4\n\ty\n")
        assert hunks == [BlameHunk(commit_id=BUMP, orig_start=7, final_start=3, num_lines=2)]
        assert hunks[0].final_end == 4


class TestHunkForLine:
    def test_line_inside_multi_line_hunk(self) -> None:
        hunk = hunk_for_line(parse_porcelain(PORCELAIN), 2)
        assert hunk is not None
        assert hunk.commit_id == INIT

    def test_version_line_resolves_to_bump_commit(self) -> None:
        hunk = hunk_for_line(parse_porcelain(PORCELAIN), 3)
        assert hunk is not None
        assert hunk.commit_id == BUMP

    def test_line_numbers_are_one_based(self) -> None:
        hunks = parse_porcelain(PORCELAIN)
        assert hunk_for_line(hunks, 0) is None
        assert hunk_for_line(hunks, 1) is not None

    def test_line_past_end(self) -> None:
        assert hunk_for_line(parse_porcelain(PORCELAIN), 5) is None


def test_null_commit() -> None:
    assert is_null_commit(NULL_COMMIT_ID)
    assert not is_null_commit(INIT)
