"""Hosted repository API (GitHub, through the ``gh`` CLI)."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Protocol

from realease.core.result import Err, Ok, Result
from realease.platform.process import run as run_process
from realease.release.errors import ReleaseError
from realease.release.model import RemoteDescriptor

GH_TIMEOUT_SECONDS = 60.0


class RemoteRepoApi(Protocol):
    def create_tag_ref(
        self,
        *,
        remote: RemoteDescriptor,
        tag: str,
        sha: str,
    ) -> Result[None, ReleaseError]:
        """Create ``refs/tags/<tag>`` at ``sha`` on the hosted repository."""
        ...


def ensure_gh_available() -> Result[None, ReleaseError]:
    if shutil.which("gh") is None:
        return Err(
            ReleaseError(
                kind="remote_api_failed",
                message="gh: missing",
                hint="Install GitHub CLI: https://cli.github.com/",
            )
        )
    return Ok(None)


class GhRemoteRepoApi:
    """Create refs with ``gh api``, authenticated by an explicit token.

    Writes are not retried: a repeated POST would fail with "Reference
    already exists" and hide the original error.
    """

    def __init__(self, *, token: str, cwd: Path) -> None:
        self._token = token
        self._cwd = cwd

    def create_tag_ref(
        self,
        *,
        remote: RemoteDescriptor,
        tag: str,
        sha: str,
    ) -> Result[None, ReleaseError]:
        available = ensure_gh_available()
        if isinstance(available, Err):
            return available

        result = run_process(
            [
                "gh",
                "api",
                "--method",
                "POST",
                f"repos/{remote.slug}/git/refs",
                "-f",
                f"ref=refs/tags/{tag}",
                "-f",
                f"sha={sha}",
            ],
            cwd=self._cwd,
            env={**os.environ, "GH_TOKEN": self._token},
            timeout=GH_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            e = result.error
            return Err(
                ReleaseError(
                    kind="remote_api_failed",
                    message="failed creating release tag with github API",
                    hint=e.stderr.strip() or e.stdout.strip() or None,
                )
            )
        return Ok(None)
