"""Git repository gateway.

Thin wrapper over the ``git`` CLI exposing exactly the operations the release
workflows need. Every method returns a Result; nothing here decides policy.

Usage:
    repo = Repository(Path("."))

    match repo.current_branch():
        case Ok(branch):
            print(f"Branch: {branch}")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from realease.core.result import Err, Ok, Result
from realease.platform.process import ProcessError
from realease.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = [
    "GitError",
    "Repository",
    "Signature",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message (git's stderr when available)
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class Signature:
    """Author/committer identity for release commits."""

    name: str
    email: str

    def as_env(self) -> dict[str, str]:
        return {
            "GIT_AUTHOR_NAME": self.name,
            "GIT_AUTHOR_EMAIL": self.email,
            "GIT_COMMITTER_NAME": self.name,
            "GIT_COMMITTER_EMAIL": self.email,
        }


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=error.stderr.strip() or error.stdout.strip() or fallback,
        returncode=error.returncode,
    )


class Repository:
    """Git repository gateway.

    Attributes:
        path: Path to the repository work tree
    """

    def __init__(self, path: Path) -> None:
        # git runs with both cwd and -C set to this, so it must be absolute
        self.path = path.resolve()

    def toplevel(self) -> Result[Path, GitError]:
        """Resolve the work tree root; fails if ``path`` is not inside a repository."""
        result = self._run(["rev-parse", "--show-toplevel"])
        match result:
            case Err(e):
                return Err(_git_error("rev-parse", e, f"not a git repository: {self.path}"))
            case Ok(stdout):
                return Ok(Path(stdout.strip()))

    def current_branch(self) -> Result[str, GitError]:
        """Get the checked-out branch name. A detached HEAD is an error."""
        result = self._run(["symbolic-ref", "--quiet", "--short", "HEAD"])
        match result:
            case Err(e):
                return Err(_git_error("symbolic-ref", e, "HEAD is detached"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def head_commit(self) -> Result[str, GitError]:
        return self.rev_parse("HEAD")

    def rev_parse(self, rev: str) -> Result[str, GitError]:
        """Resolve a revision to a full commit sha."""
        result = self._run(["rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}"])
        match result:
            case Err(e):
                return Err(_git_error("rev-parse", e, f"unknown revision: {rev}"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def config_value(self, key: str) -> Result[str | None, GitError]:
        """Read a config entry; an unset key is ``Ok(None)``."""
        result = self._run(["config", "--get", key])
        match result:
            case Err(e):
                # git config exits 1 when the key is missing
                if e.returncode == 1 and not e.stderr.strip():
                    return Ok(None)
                return Err(_git_error("config", e, f"failed to read {key}"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def config_bool(self, key: str) -> Result[bool, GitError]:
        """Read a boolean config entry; an unset key is ``Ok(False)``."""
        result = self._run(["config", "--type=bool", "--get", key])
        match result:
            case Err(e):
                if e.returncode == 1 and not e.stderr.strip():
                    return Ok(False)
                return Err(_git_error("config", e, f"failed to read {key}"))
            case Ok(stdout):
                return Ok(stdout.strip() == "true")

    def default_signature(self) -> Result[Signature, GitError]:
        """Identity from ``user.name`` / ``user.email``."""
        values: dict[str, str] = {}
        for key in ("user.name", "user.email"):
            result = self.config_value(key)
            if isinstance(result, Err):
                return result
            if not result.value:
                return Err(GitError(command="config", message=f"{key} is not configured"))
            values[key] = result.value
        return Ok(Signature(name=values["user.name"], email=values["user.email"]))

    def create_branch(self, name: str, start: str) -> Result[None, GitError]:
        result = self._run(["branch", name, start])
        if isinstance(result, Err):
            return Err(_git_error("branch", result.error, f"failed to create branch {name}"))
        return Ok(None)

    def checkout(self, branch: str) -> Result[None, GitError]:
        result = self._run(["checkout", branch, "--"])
        if isinstance(result, Err):
            return Err(_git_error("checkout", result.error, f"failed to checkout {branch}"))
        return Ok(None)

    def commit_files(
        self,
        paths: Sequence[str],
        message: str,
        signature: Signature,
    ) -> Result[str, GitError]:
        """Commit exactly ``paths`` on the current branch.

        Signing is disabled here; callers amend with a signature separately.

        Returns:
            Ok(sha) of the new commit
        """
        add = self._run(["add", "--", *paths])
        if isinstance(add, Err):
            return Err(_git_error("add", add.error, "failed to stage release files"))

        commit = self._run(
            [
                "-c",
                "commit.gpgsign=false",
                "commit",
                "--no-verify",
                "--quiet",
                "-m",
                message,
                "--",
                *paths,
            ],
            env=signature.as_env(),
        )
        if isinstance(commit, Err):
            return Err(_git_error("commit", commit.error, "failed to create commit"))
        return self.head_commit()

    def amend_signed(self) -> Result[None, GitError]:
        """Re-create HEAD with a cryptographic signature, keeping its content."""
        result = self._run(["commit", "--amend", "--no-verify", "--no-edit", "--quiet", "-S"])
        if isinstance(result, Err):
            return Err(_git_error("commit --amend", result.error, "failed to sign commit"))
        return Ok(None)

    def create_annotated_tag(self, name: str, target: str, message: str) -> Result[None, GitError]:
        result = self._run(["tag", "-a", name, target, "-m", message])
        if isinstance(result, Err):
            return Err(_git_error("tag", result.error, f"failed to create tag {name}"))
        return Ok(None)

    def list_refs(self) -> Result[list[str], GitError]:
        """List every reference name (``refs/heads/...``, ``refs/tags/...``)."""
        result = self._run(["for-each-ref", "--format=%(refname)"])
        match result:
            case Err(e):
                return Err(_git_error("for-each-ref", e, "failed to list references"))
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def remote_url(self, remote: str) -> Result[str, GitError]:
        result = self._run(["remote", "get-url", remote])
        match result:
            case Err(e):
                return Err(_git_error("remote get-url", e, f"no such remote: {remote}"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def push(
        self,
        remote: str,
        refspec: str,
        *,
        env: Mapping[str, str] | None = None,
    ) -> Result[None, GitError]:
        result = self._run(["push", "--porcelain", remote, refspec], env=env, network=True)
        if isinstance(result, Err):
            return Err(_git_error("push", result.error, f"failed to push {refspec}"))
        return Ok(None)

    def blame_porcelain(self, path: str, contents: str) -> Result[str, GitError]:
        """Blame ``contents`` as if it were ``path`` in the work tree.

        Blame starts at HEAD; lines that differ from HEAD are attributed to
        the all-zero "not committed yet" id.
        """
        result = self._run(
            ["blame", "--porcelain", "--contents", "-", "--", path],
            input_text=contents,
        )
        match result:
            case Err(e):
                return Err(_git_error("blame", e, f"failed to blame {path}"))
            case Ok(stdout):
                return Ok(stdout)

    def _run(
        self,
        args: list[str],
        *,
        env: Mapping[str, str] | None = None,
        network: bool = False,
        input_text: str | None = None,
    ) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        timeout = _GIT_NETWORK_TIMEOUT_SECONDS if network else _GIT_TIMEOUT_SECONDS
        full_env = {**os.environ, **env} if env else None
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            env=full_env,
            timeout=timeout,
            input_text=input_text,
        )
