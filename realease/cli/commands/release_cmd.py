from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import typer

from realease.cli.commands._helpers import exit_on_error
from realease.cli.context import build_context
from realease.release.branch_release import BranchReleaseRequest, run_branch_release
from realease.release.github import GhRemoteRepoApi
from realease.release.model import ReleaseBump
from realease.release.tag_release import TagRequest, run_tag_release

_BUMP_HELP: dict[ReleaseBump, str] = {
    "major": "Create and push a release branch for the next major version.",
    "minor": "Create and push a release branch for the next minor version.",
    "patch": "Create and push a release branch for the next patch version.",
}


def bump_command(bump: ReleaseBump) -> Callable[..., None]:
    def command(
        repo: Path = typer.Option(
            Path("."), "--repo", help="Path to repository, defaults to current directory"
        ),
        force: bool = typer.Option(
            False, "--force", help="Do not complain if we're not on the mainline branch"
        ),
        remote: str | None = typer.Option(
            None, "--remote", help="Remote to push to, defaults to 'origin'"
        ),
        message: str | None = typer.Option(
            None, "--message", help="Commit message, defaults to 'Release version {version}'"
        ),
        no_push: bool = typer.Option(False, "--no-push", help="Do not push the release branch"),
        add: list[str] | None = typer.Option(
            None, "--add", help="Additional file for the release commit, may be repeated"
        ),
        branch: str | None = typer.Option(
            None, "--branch", help="Branch to create, defaults to 'release/{version}'"
        ),
    ) -> None:
        ctx = build_context(repo)
        config = ctx.config.with_overrides(
            remote=remote,
            message=message,
            branch=branch,
            push=False if no_push else None,
        )
        request = BranchReleaseRequest(
            repo_path=ctx.repo_path,
            bump=bump,
            config=config,
            force=force,
            add_files=tuple(add or ()),
        )
        result = run_branch_release(
            request=request, console=ctx.console, credentials=ctx.credentials
        )
        exit_on_error(result, ctx)

    command.__doc__ = _BUMP_HELP[bump] + (
        " The release branch includes one new commit with the updated package.json."
    )
    return command


def tag(
    repo: Path = typer.Option(
        Path("."), "--repo", help="Path to repository, defaults to current directory"
    ),
    force: bool = typer.Option(
        False, "--force", help="Do not complain if we're not on the mainline branch"
    ),
    remote: str | None = typer.Option(
        None, "--remote", help="Remote to push to, defaults to 'origin'"
    ),
    message: str | None = typer.Option(
        None, "--message", help="Tag message, defaults to 'Release version {version}'"
    ),
    no_push: bool = typer.Option(
        False, "--no-push", help="Do not push the tag (ignored when using --api)"
    ),
    tag_name: str | None = typer.Option(
        None, "--tag", help="Tag to create, defaults to 'v{version}'"
    ),
    api: str | None = typer.Option(
        None,
        "--api",
        envvar="REALEASE_API_TOKEN",
        help="Create the tag with the GitHub API using this token instead of git + ssh",
    ),
) -> None:
    """Create and push a tag for the current version.

    The tag points at the commit that last changed the version line of
    package.json. Does nothing if the tag already exists.
    """
    ctx = build_context(repo)
    config = ctx.config.with_overrides(
        remote=remote,
        message=message,
        tag=tag_name,
        push=False if no_push else None,
    )
    request = TagRequest(repo_path=ctx.repo_path, config=config, force=force)
    result = run_tag_release(
        request=request,
        console=ctx.console,
        credentials=ctx.credentials,
        api=GhRemoteRepoApi(token=api, cwd=ctx.repo_path) if api else None,
    )
    exit_on_error(result, ctx)
