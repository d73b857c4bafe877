"""Release workflows: branch releases and version tags."""

from realease.release.branch_release import (
    BranchReleaseOutcome,
    BranchReleaseRequest,
    run_branch_release,
)
from realease.release.errors import ReleaseError, error_category
from realease.release.model import RELEASE_BUMPS, ReleaseBump
from realease.release.tag_release import TagOutcome, TagRequest, run_tag_release

__all__ = [
    "RELEASE_BUMPS",
    "BranchReleaseOutcome",
    "BranchReleaseRequest",
    "ReleaseBump",
    "ReleaseError",
    "TagOutcome",
    "TagRequest",
    "error_category",
    "run_branch_release",
    "run_tag_release",
]
