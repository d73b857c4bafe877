"""The one place that spawns subprocesses.

``git`` and ``gh`` are both driven through :func:`run`. Failures come back as
a :class:`ProcessError` value carrying whatever the child printed; nothing is
raised, so callers decide how to word the failure.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from realease.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]

# Commands are shown abbreviated in one-line summaries
_SHOWN_ARGS = 3


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A child that exited non-zero, timed out, or never started.

    ``returncode`` is -1 when there is no real exit status.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        shown = " ".join(self.command[:_SHOWN_ARGS])
        if len(self.command) > _SHOWN_ARGS:
            shown = f"{shown} ..."
        return f"{shown} failed (exit {self.returncode})"


def _failed(cmd: list[str], returncode: int, stdout: str, stderr: str) -> Err[ProcessError]:
    return Err(ProcessError(command=tuple(cmd), returncode=returncode, stdout=stdout, stderr=stderr))


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
    input_text: str | None = None,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and return its stdout.

    ``env`` replaces the child's whole environment when given. ``input_text``
    is written to stdin (``git blame --contents -`` reads the manifest
    snapshot this way).
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            input=input_text,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return _failed(cmd, -1, partial, f"Command timed out after {timeout}s")
    except OSError as e:
        return _failed(cmd, -1, "", str(e))

    if proc.returncode == 0:
        return Ok(proc.stdout)
    return _failed(cmd, proc.returncode, proc.stdout, proc.stderr)
