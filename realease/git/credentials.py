"""Push credential strategies.

``git push`` discovers credentials itself; a strategy only decides which
environment the push runs with. The default hands git the running SSH agent
and forbids interactive prompts, so a missing key fails fast instead of
hanging on a password prompt.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from realease.core.result import Err, Ok, Result

__all__ = [
    "CredentialError",
    "CredentialStrategy",
    "SshAgentCredentials",
    "StaticCredentials",
]


@dataclass(frozen=True, slots=True)
class CredentialError:
    message: str
    hint: str | None = None


class CredentialStrategy(Protocol):
    def push_env(self) -> Result[dict[str, str], CredentialError]:
        """Environment variables to add for ``git push``."""
        ...


class SshAgentCredentials:
    """Use keys held by the user's SSH agent."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def push_env(self) -> Result[dict[str, str], CredentialError]:
        sock = self._environ.get("SSH_AUTH_SOCK")
        if not sock:
            return Err(
                CredentialError(
                    message="no SSH agent available (SSH_AUTH_SOCK is not set)",
                    hint="Start ssh-agent and ssh-add your key, or use --no-push",
                )
            )

        env = {"SSH_AUTH_SOCK": sock, "GIT_TERMINAL_PROMPT": "0"}
        if "GIT_SSH_COMMAND" not in self._environ:
            env["GIT_SSH_COMMAND"] = "ssh -o BatchMode=yes"
        return Ok(env)


@dataclass(frozen=True, slots=True)
class StaticCredentials:
    """Fixed environment, for scripted pushes and tests."""

    env: dict[str, str] = field(default_factory=dict)

    def push_env(self) -> Result[dict[str, str], CredentialError]:
        return Ok(dict(self.env))
