"""Find the commit that last wrote a manifest line."""

from __future__ import annotations

from realease.core.result import Err, Ok, Result
from realease.git.blame import hunk_for_line, is_null_commit, parse_porcelain
from realease.git.repository import Repository
from realease.release.errors import ReleaseError, git_failure
from realease.release.model import AttributionResult


def attribute_line(
    *,
    repo: Repository,
    path: str,
    line_number: int,
    contents: str,
) -> Result[AttributionResult, ReleaseError]:
    """Blame ``contents`` (the snapshot of ``path``) and attribute one line.

    Args:
        repo: Repository holding the file's history
        path: File path relative to the repository root
        line_number: 1-based line in ``contents``
        contents: The exact text the line number was computed from

    Returns:
        Ok(AttributionResult) naming the commit terminating the covering hunk
    """
    blame = repo.blame_porcelain(path, contents)
    if isinstance(blame, Err):
        return Err(git_failure(f"blaming {path}", blame.error))

    hunk = hunk_for_line(parse_porcelain(blame.value), line_number)
    if hunk is None:
        return Err(
            ReleaseError(
                kind="no_attribution_hunk",
                message=f"cannot find blame hunk where {path} changed versions",
                hint=f"no hunk covers line {line_number}",
            )
        )

    if is_null_commit(hunk.commit_id):
        return Err(
            ReleaseError(
                kind="uncommitted_version_line",
                message=f"version line {line_number} of {path} is not committed",
                hint="Commit the version change before tagging",
            )
        )

    return Ok(AttributionResult(commit_id=hunk.commit_id, line_number=line_number))
