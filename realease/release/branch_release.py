"""Branch-release workflow: bump, branch, commit, sign, push.

The working copy is switched to the release branch for the commit and push
steps and switched back on every exit path.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from realease.core.config import ReleaseConfig
from realease.core.result import Err, Ok, Result
from realease.git.credentials import CredentialStrategy
from realease.git.repository import Repository, Signature
from realease.output.console import ConsoleProtocol, Style
from realease.release.common import open_repository, push_ref, resolve_remote, restoring_branch
from realease.release.errors import ReleaseError, git_failure
from realease.release.manifest import read_manifest, write_manifest_version
from realease.release.model import ReleaseBump, ReleaseTarget
from realease.release.semver import next_version


@dataclass(frozen=True, slots=True)
class BranchReleaseRequest:
    repo_path: Path
    bump: ReleaseBump
    config: ReleaseConfig
    force: bool = False
    add_files: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class BranchReleaseOutcome:
    target: ReleaseTarget
    commit: str
    signed: bool
    pushed: bool
    compare_url: str | None = None


def run_branch_release(
    *,
    request: BranchReleaseRequest,
    console: ConsoleProtocol,
    credentials: CredentialStrategy,
) -> Result[BranchReleaseOutcome, ReleaseError]:
    config = request.config

    opened = open_repository(path=request.repo_path, mainline=config.mainline, force=request.force)
    if isinstance(opened, Err):
        return opened
    repo = opened.value.repo

    gpgsign = repo.config_bool("commit.gpgsign")
    if isinstance(gpgsign, Err):
        return Err(git_failure("getting commit.gpgsign value", gpgsign.error))

    signature = repo.default_signature()
    if isinstance(signature, Err):
        return Err(git_failure("reading commit identity", signature.error))

    head = repo.head_commit()
    if isinstance(head, Err):
        return Err(git_failure("getting last HEAD commit", head.error))

    manifest = read_manifest(request.repo_path / config.manifest)
    if isinstance(manifest, Err):
        return manifest

    current = manifest.value.version or ""
    version = next_version(current, request.bump)
    if version is None:
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"cannot bump version '{current}' in {config.manifest}",
                hint="Expected MAJOR.MINOR.PATCH",
            )
        )

    target = ReleaseTarget.render(
        version=version,
        branch_template=config.branch,
        tag_template=config.tag,
        message_template=config.message,
    )

    console.info(f"Updating {config.manifest} to version {version}")
    written = write_manifest_version(manifest.value, version)
    if isinstance(written, Err):
        return written

    console.info(f"Creating release branch {target.branch_name}")
    created = repo.create_branch(target.branch_name, head.value)
    if isinstance(created, Err):
        return Err(git_failure("creating release branch", created.error))

    with restoring_branch(repo, opened.value.branch, console) as restore:
        outcome = _release_on_branch(
            repo=repo,
            request=request,
            target=target,
            signature=signature.value,
            sign=gpgsign.value,
            console=console,
            credentials=credentials,
        )

    if restore.error is not None:
        if isinstance(outcome, Err):
            # The workflow error is the one returned; still surface the restore failure
            console.error(restore.error.pretty())
            return outcome
        return Err(restore.error)
    return outcome


def _release_on_branch(
    *,
    repo: Repository,
    request: BranchReleaseRequest,
    target: ReleaseTarget,
    signature: Signature,
    sign: bool,
    console: ConsoleProtocol,
    credentials: CredentialStrategy,
) -> Result[BranchReleaseOutcome, ReleaseError]:
    config = request.config

    checkout = repo.checkout(target.branch_name)
    if isinstance(checkout, Err):
        return Err(git_failure("checking out release branch", checkout.error))

    console.info(f"Creating release commit with message {target.commit_message}")
    paths = [config.manifest, *request.add_files]
    commit = repo.commit_files(paths, target.commit_message, signature)
    if isinstance(commit, Err):
        return Err(git_failure("creating release commit", commit.error))
    commit_id = commit.value

    if sign:
        # Signing needs the user's gpg/ssh signer, which only git itself drives
        console.info("Signing release commit")
        amended = repo.amend_signed()
        if isinstance(amended, Err):
            return Err(git_failure("amending the commit with signature", amended.error))
        head = repo.head_commit()
        if isinstance(head, Err):
            return Err(git_failure("getting signed commit", head.error))
        commit_id = head.value

    if not config.push:
        return Ok(BranchReleaseOutcome(target=target, commit=commit_id, signed=sign, pushed=False))

    remote = resolve_remote(repo, config.remote)
    if isinstance(remote, Err):
        return remote
    url, descriptor = remote.value

    console.info(f"Pushing branch {target.branch_name} to {config.remote}")
    pushed = push_ref(
        repo=repo,
        remote=config.remote,
        refspec=f"refs/heads/{target.branch_name}",
        credentials=credentials,
        console=console,
        what="pushing release branch",
    )
    if isinstance(pushed, Err):
        return pushed

    compare_url: str | None = None
    if descriptor is None:
        console.warning(f"cannot derive org/repo from remote URL {url}; open the PR manually")
    else:
        compare_url = descriptor.compare_url(target.branch_name)
        console.success("Release branch pushed")
        console.print(f"Open the release PR here: {compare_url}", Style.BOLD)

    return Ok(
        BranchReleaseOutcome(
            target=target,
            commit=commit_id,
            signed=sign,
            pushed=True,
            compare_url=compare_url,
        )
    )
