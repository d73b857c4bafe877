"""Throwaway git repositories for workflow tests."""

from __future__ import annotations

import json
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

import pytest


@dataclass
class GitSandbox:
    root: Path

    def git(self, *args: str) -> str:
        proc = subprocess.run(
            ["git", *args],
            cwd=str(self.root),
            capture_output=True,
            text=True,
            check=True,
        )
        return proc.stdout.strip()

    def write(self, name: str, text: str) -> Path:
        path = self.root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def write_manifest(self, version: str, **extra: object) -> Path:
        data: dict[str, object] = {"name": "demo", "version": version, **extra}
        return self.write("package.json", json.dumps(data, indent=2) + "\n")

    def commit(self, message: str, *paths: str) -> str:
        self.git("add", "--", *(paths or (".",)))
        self.git("commit", "--quiet", "-m", message)
        return self.git("rev-parse", "HEAD")

    def add_bare_remote(self, name: str = "origin") -> Path:
        bare = self.root.parent / f"{self.root.name}-{name}.git"
        subprocess.run(
            ["git", "init", "--quiet", "--bare", str(bare)],
            capture_output=True,
            check=True,
        )
        self.git("remote", "add", name, str(bare))
        return bare


@pytest.fixture
def git_sandbox(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> GitSandbox:
    """A repository on ``master`` with an identity configured and signing off."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GIT_CONFIG_GLOBAL", raising=False)
    for var in ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE"):
        monkeypatch.delenv(var, raising=False)

    root = tmp_path / "project"
    root.mkdir()
    sandbox = GitSandbox(root=root)
    sandbox.git("init", "--quiet")
    sandbox.git("symbolic-ref", "HEAD", "refs/heads/master")
    sandbox.git("config", "user.name", "Release Bot")
    sandbox.git("config", "user.email", "release-bot@example.com")
    sandbox.git("config", "commit.gpgsign", "false")
    sandbox.git("config", "tag.gpgsign", "false")
    return sandbox
