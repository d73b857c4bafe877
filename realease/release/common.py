"""Steps shared by the branch-release and tag workflows."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from realease.core.result import Err, Ok, Result
from realease.git.credentials import CredentialStrategy
from realease.git.repository import Repository
from realease.output.console import ConsoleProtocol, Style
from realease.release.errors import ReleaseError, git_failure
from realease.release.model import RemoteDescriptor, parse_remote_url


@dataclass(frozen=True, slots=True)
class OpenedRepo:
    repo: Repository
    root: Path
    branch: str


def open_repository(
    *,
    path: Path,
    mainline: str,
    force: bool,
) -> Result[OpenedRepo, ReleaseError]:
    """Open the repository and refuse to release from a non-mainline branch."""
    repo = Repository(path)
    root = repo.toplevel()
    if isinstance(root, Err):
        return Err(git_failure(f"opening repository at {path}", root.error))

    branch = repo.current_branch()
    if isinstance(branch, Err):
        return Err(git_failure("getting current branch", branch.error))

    if branch.value != mainline and not force:
        return Err(
            ReleaseError(
                kind="policy_violation",
                message=f"Aborting, current branch is not {mainline}",
                hint=f"on '{branch.value}'; pass --force to release from it anyway",
            )
        )
    return Ok(OpenedRepo(repo=repo, root=root.value, branch=branch.value))


@dataclass
class BranchRestore:
    branch: str
    error: ReleaseError | None = None


@contextmanager
def restoring_branch(repo: Repository, branch: str, console: ConsoleProtocol) -> Iterator[BranchRestore]:
    """Check ``branch`` out again when the block exits, however it exits.

    A failed restore is recorded on the yielded object, never raised.
    """
    restore = BranchRestore(branch=branch)
    try:
        yield restore
    finally:
        console.info(f"Restoring branch {branch}")
        result = repo.checkout(branch)
        if isinstance(result, Err):
            restore.error = git_failure(f"restoring branch {branch}", result.error)


def resolve_remote(repo: Repository, remote: str) -> Result[tuple[str, RemoteDescriptor | None], ReleaseError]:
    """Return the remote URL and, when recognisable, its org/name."""
    url = repo.remote_url(remote)
    if isinstance(url, Err):
        return Err(git_failure(f"getting remote {remote}", url.error))
    return Ok((url.value, parse_remote_url(url.value)))


def push_ref(
    *,
    repo: Repository,
    remote: str,
    refspec: str,
    credentials: CredentialStrategy,
    console: ConsoleProtocol,
    what: str,
) -> Result[None, ReleaseError]:
    env = credentials.push_env()
    if isinstance(env, Err):
        return Err(
            ReleaseError(
                kind="credentials_unavailable",
                message=f"failed {what}: {env.error.message}",
                hint=env.error.hint,
            )
        )

    console.print(f"git push {remote} {refspec}", Style.DIM)
    pushed = repo.push(remote, refspec, env=env.value)
    if isinstance(pushed, Err):
        return Err(git_failure(what, pushed.error))
    return Ok(None)
