from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from realease.core.config import ReleaseConfig, load_config
from realease.core.errors import ErrorCode
from realease.core.result import Err, Ok
from realease.git.credentials import CredentialStrategy, SshAgentCredentials
from realease.git.repository import Repository
from realease.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_path: Path
    config: ReleaseConfig
    console: ConsoleProtocol
    credentials: CredentialStrategy


def build_context(repo: Path) -> CLIContext:
    repo_path = repo.expanduser().resolve()
    if not repo_path.is_dir():
        typer.echo(f"error: --repo '{repo_path}' is not a directory", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    # .realease.toml lives at the work tree root, even when --repo is a subdirectory.
    # Outside a repository the workflows report the git error themselves.
    toplevel = Repository(repo_path).toplevel()
    config_root = toplevel.value if isinstance(toplevel, Ok) else repo_path

    config_result = load_config(config_root)
    if isinstance(config_result, Err):
        error = config_result.error
        where = f" ({error.path})" if error.path else ""
        typer.echo(f"error: {error.message}{where}", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    return CLIContext(
        repo_path=repo_path,
        config=config_result.value,
        console=RichConsole(),
        credentials=SshAgentCredentials(),
    )
