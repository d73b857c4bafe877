"""Typed configuration loading.

Release defaults can be pinned per repository in a ``.realease.toml`` file at
the repository root. Command line flags always win over the file, and the file
wins over the built-in defaults.

Example ``.realease.toml``::

    remote = "upstream"
    mainline = "main"
    branch = "release/v{version}"
    push = false
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ReleaseConfig",
    "load_config",
]

CONFIG_FILE_NAME = ".realease.toml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Effective release options."""

    remote: str = "origin"
    branch: str = "release/{version}"
    tag: str = "v{version}"
    message: str = "Release version {version}"
    manifest: str = "package.json"
    mainline: str = "master"
    push: bool = True

    def with_overrides(self, **overrides: object) -> ReleaseConfig:
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)  # type: ignore[arg-type]

    @classmethod
    def from_dict(cls, data: StrDict, *, path: Path | None = None) -> Result[ReleaseConfig, ConfigError]:
        known = {f.name: f for f in fields(cls)}
        values: dict[str, object] = {}
        for key, value in data.items():
            if key not in known:
                return Err(ConfigError(f"unknown config key: {key}", path=path))
            expected = bool if key == "push" else str
            if not isinstance(value, expected):
                return Err(
                    ConfigError(
                        f"config key '{key}' must be a {expected.__name__}",
                        path=path,
                    )
                )
            if expected is str and not value.strip():
                return Err(ConfigError(f"config key '{key}' must not be empty", path=path))
            values[key] = value
        return Ok(cls(**values))  # type: ignore[arg-type]


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(repo_root: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load ``.realease.toml`` from a repository root.

    A missing file is not an error: built-in defaults are returned.
    """
    path = repo_root / CONFIG_FILE_NAME
    if not path.is_file():
        return Ok(ReleaseConfig())

    parsed = _parse_toml(path)
    if isinstance(parsed, Err):
        return parsed
    return ReleaseConfig.from_dict(parsed.value, path=path)
