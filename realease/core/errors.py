"""Process exit codes.

Release failures of every kind collapse onto a single non-zero code; the
printed message carries the detail.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0  # includes idempotent no-ops (tag already exists)
    FAILURE = 1  # usage errors and every failed operation
