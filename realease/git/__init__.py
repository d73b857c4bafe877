"""Git operations.

- Repository: gateway over the git CLI
- blame: porcelain parsing and hunk lookup
- credentials: push credential strategies

Usage:
    from realease.git import Repository, parse_porcelain, hunk_for_line

    repo = Repository(Path("."))
    out = repo.blame_porcelain("package.json", text).unwrap()
    hunk = hunk_for_line(parse_porcelain(out), 3)
"""

from realease.git.blame import (
    NULL_COMMIT_ID,
    BlameHunk,
    hunk_for_line,
    is_null_commit,
    parse_porcelain,
)
from realease.git.credentials import (
    CredentialError,
    CredentialStrategy,
    SshAgentCredentials,
    StaticCredentials,
)
from realease.git.repository import GitError, Repository, Signature

__all__ = [
    # Repository
    "GitError",
    "Repository",
    "Signature",
    # Blame
    "NULL_COMMIT_ID",
    "BlameHunk",
    "hunk_for_line",
    "is_null_commit",
    "parse_porcelain",
    # Credentials
    "CredentialError",
    "CredentialStrategy",
    "SshAgentCredentials",
    "StaticCredentials",
]
