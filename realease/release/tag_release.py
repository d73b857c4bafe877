"""Tag workflow: tag the commit that last changed the manifest version.

Tagging HEAD would tag whatever landed after the version bump; blaming the
version line pins the tag to the bump itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from realease.core.config import ReleaseConfig
from realease.core.result import Err, Ok, Result
from realease.git.credentials import CredentialStrategy
from realease.output.console import ConsoleProtocol
from realease.release.attribution import attribute_line
from realease.release.common import open_repository, push_ref, resolve_remote
from realease.release.errors import ReleaseError, git_failure
from realease.release.github import RemoteRepoApi
from realease.release.manifest import locate_version_line, read_manifest
from realease.release.model import render_template

TagStatus = Literal["exists", "created", "created_via_api"]


@dataclass(frozen=True, slots=True)
class TagRequest:
    repo_path: Path
    config: ReleaseConfig
    force: bool = False


@dataclass(frozen=True, slots=True)
class TagOutcome:
    tag: str
    status: TagStatus
    commit: str | None = None
    pushed: bool = False


def run_tag_release(
    *,
    request: TagRequest,
    console: ConsoleProtocol,
    credentials: CredentialStrategy,
    api: RemoteRepoApi | None = None,
) -> Result[TagOutcome, ReleaseError]:
    """Create (or find) the release tag for the manifest's current version.

    When ``api`` is given the tag ref is created remotely and nothing is
    created or pushed locally.
    """
    config = request.config

    opened = open_repository(path=request.repo_path, mainline=config.mainline, force=request.force)
    if isinstance(opened, Err):
        return opened
    repo = opened.value.repo

    # One read: the line scan and the blame both use this snapshot
    manifest = read_manifest(request.repo_path / config.manifest)
    if isinstance(manifest, Err):
        return manifest
    version = manifest.value.version or ""
    tag = render_template(config.tag, version)

    refs = repo.list_refs()
    if isinstance(refs, Err):
        return Err(git_failure("getting repo ref names", refs.error))
    if f"refs/tags/{tag}" in refs.value:
        console.info(f"Tag {tag} already exists")
        return Ok(TagOutcome(tag=tag, status="exists"))

    line = locate_version_line(manifest.value.text)
    if isinstance(line, Err):
        return line

    attributed = attribute_line(
        repo=repo,
        path=config.manifest,
        line_number=line.value.line_number,
        contents=manifest.value.text,
    )
    if isinstance(attributed, Err):
        return attributed
    commit = attributed.value.commit_id

    console.info(f"Creating tag {tag} at {commit[:12]}")

    if api is not None:
        remote = resolve_remote(repo, config.remote)
        if isinstance(remote, Err):
            return remote
        url, descriptor = remote.value
        if descriptor is None:
            return Err(
                ReleaseError(
                    kind="remote_api_failed",
                    message=f"cannot derive org/repo from remote {config.remote}",
                    hint=url,
                )
            )
        created = api.create_tag_ref(remote=descriptor, tag=tag, sha=commit)
        if isinstance(created, Err):
            return created
        console.success(f"Created {tag} on {descriptor.slug}")
        return Ok(TagOutcome(tag=tag, status="created_via_api", commit=commit))

    message = render_template(config.message, version)
    created_local = repo.create_annotated_tag(tag, commit, message)
    if isinstance(created_local, Err):
        return Err(git_failure("creating release tag", created_local.error))

    if not config.push:
        console.success(f"Created {tag}")
        return Ok(TagOutcome(tag=tag, status="created", commit=commit))

    console.info(f"Pushing tag {tag} to {config.remote}")
    pushed = push_ref(
        repo=repo,
        remote=config.remote,
        refspec=f"refs/tags/{tag}",
        credentials=credentials,
        console=console,
        what="pushing release tag",
    )
    if isinstance(pushed, Err):
        return pushed

    console.success(f"Created and pushed {tag}")
    return Ok(TagOutcome(tag=tag, status="created", commit=commit, pushed=True))
