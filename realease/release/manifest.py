"""package.json access.

The manifest is read once per invocation into a :class:`Manifest` snapshot.
The tag workflow derives both the version line number and the blamed content
from that same snapshot, so the two can never disagree.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path

from realease.core.result import Err, Ok, Result
from realease.core.structured import StrDict, as_str_dict, get_str
from realease.platform.files import atomic_write_text
from realease.release.errors import ReleaseError
from realease.release.model import VersionLine

__all__ = [
    "Manifest",
    "locate_version_line",
    "read_manifest",
    "write_manifest_version",
]

_VERSION_LINE_RE = re.compile(r'"version"\s*:\s*"[^"]+"')


@dataclass(frozen=True, slots=True)
class Manifest:
    path: Path
    text: str
    data: StrDict

    @property
    def version(self) -> str | None:
        return get_str(self.data, "version")


def locate_version_line(content: str) -> Result[VersionLine, ReleaseError]:
    """Find the single line declaring ``"version": "..."``.

    Line numbers are 1-based, matching blame output.
    """
    matches: list[VersionLine] = []
    for index, line in enumerate(content.split("\n"), start=1):
        if _VERSION_LINE_RE.search(line):
            matches.append(VersionLine(line_number=index, raw_text=line.rstrip("\r")))

    if not matches:
        return Err(
            ReleaseError(
                kind="version_line_missing",
                message="cannot find version line in manifest",
                hint='Expected a line like "version": "1.2.3"',
            )
        )
    if len(matches) > 1:
        lines = ", ".join(str(m.line_number) for m in matches)
        return Err(
            ReleaseError(
                kind="version_line_ambiguous",
                message="cannot find version line in manifest: multiple candidates",
                hint=f"lines {lines} all look like a version field",
            )
        )
    return Ok(matches[0])


def read_manifest(path: Path) -> Result[Manifest, ReleaseError]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="manifest_unreadable",
                message=f"failed reading {path.name}: {e.strerror or e}",
                hint=str(path),
            )
        )
    except UnicodeDecodeError as e:
        return Err(
            ReleaseError(
                kind="manifest_unreadable",
                message=f"{path.name} is not valid UTF-8: {e.reason}",
                hint=str(path),
            )
        )

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"invalid JSON in {path.name}: {e}",
                hint=str(path),
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"invalid JSON root in {path.name}",
                hint=str(path),
            )
        )

    manifest = Manifest(path=path, text=text, data=data)
    if manifest.version is None:
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"missing version in {path.name}",
                hint=str(path),
            )
        )
    return Ok(manifest)


def write_manifest_version(manifest: Manifest, version: str) -> Result[Manifest, ReleaseError]:
    """Rewrite the manifest with ``version``, 2-space indented."""
    data = dict(manifest.data)
    data["version"] = version
    text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    try:
        atomic_write_text(manifest.path, text, encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="manifest_unreadable",
                message=f"failed updating {manifest.path.name}: {e.strerror or e}",
                hint=str(manifest.path),
            )
        )
    return Ok(Manifest(path=manifest.path, text=text, data=data))
