"""Error types for the release workflows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from realease.git.repository import GitError

__all__ = [
    "ErrorCategory",
    "ReleaseError",
    "ReleaseErrorKind",
    "error_category",
    "git_failure",
]

ReleaseErrorKind = Literal[
    "usage",
    "policy_violation",
    "manifest_unreadable",
    "manifest_invalid",
    "version_line_missing",
    "version_line_ambiguous",
    "no_attribution_hunk",
    "uncommitted_version_line",
    "repository_failed",
    "credentials_unavailable",
    "remote_api_failed",
]

ErrorCategory = Literal[
    "UsageError",
    "PolicyViolation",
    "ManifestError",
    "HistoryAttributionError",
    "RepositoryOperationError",
    "RemoteAPIError",
]

_CATEGORIES: dict[str, ErrorCategory] = {
    "usage": "UsageError",
    "policy_violation": "PolicyViolation",
    "manifest_unreadable": "ManifestError",
    "manifest_invalid": "ManifestError",
    "version_line_missing": "ManifestError",
    "version_line_ambiguous": "ManifestError",
    "no_attribution_hunk": "HistoryAttributionError",
    "uncommitted_version_line": "HistoryAttributionError",
    "repository_failed": "RepositoryOperationError",
    "credentials_unavailable": "RepositoryOperationError",
    "remote_api_failed": "RemoteAPIError",
}


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    ``message`` names the attempted action; ``hint`` carries the underlying
    cause (usually git's stderr) or what to do about it.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    @property
    def category(self) -> ErrorCategory:
        return error_category(self.kind)

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


def error_category(kind: ReleaseErrorKind) -> ErrorCategory:
    return _CATEGORIES[kind]


def git_failure(action: str, error: GitError) -> ReleaseError:
    """Wrap a git failure with the action that was being attempted."""
    return ReleaseError(
        kind="repository_failed",
        message=f"failed {action}",
        hint=error.message,
    )
