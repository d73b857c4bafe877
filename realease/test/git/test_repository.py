"""Tests for git/repository.py."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from realease.core.result import Err, Ok, Result
from realease.git import repository as repo_mod
from realease.git.blame import hunk_for_line, is_null_commit, parse_porcelain
from realease.git.repository import Repository, Signature
from realease.platform.process import ProcessError

if TYPE_CHECKING:
    from conftest import GitSandbox


def _fake_run(responses: list[Result[str, ProcessError]], calls: list[list[str]]):
    def fake_run(
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
        input_text: str | None = None,
    ) -> Result[str, ProcessError]:
        del cwd, env, input_text
        calls.append([*cmd, f"timeout={timeout}"])
        return responses.pop(0)

    return fake_run


def _fail(returncode: int, stderr: str = "") -> Err[ProcessError]:
    return Err(ProcessError(command=("git",), returncode=returncode, stdout="", stderr=stderr))


# =============================================================================
# Unit tests (git is faked)
# =============================================================================


class TestConfigReads:
    def test_unset_bool_is_false(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        calls: list[list[str]] = []
        monkeypatch.setattr(repo_mod, "run_process", _fake_run([_fail(1)], calls))
        assert Repository(tmp_path).config_bool("commit.gpgsign") == Ok(False)

    def test_true_bool(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        calls: list[list[str]] = []
        monkeypatch.setattr(repo_mod, "run_process", _fake_run([Ok("true\n")], calls))
        assert Repository(tmp_path).config_bool("commit.gpgsign") == Ok(True)
        assert calls[0][3:7] == ["config", "--type=bool", "--get", "commit.gpgsign"]

    def test_invalid_bool_is_error(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        calls: list[list[str]] = []
        responses: list[Result[str, ProcessError]] = [
            _fail(128, "fatal: bad boolean config value 'maybe'")
        ]
        monkeypatch.setattr(repo_mod, "run_process", _fake_run(responses, calls))
        result = Repository(tmp_path).config_bool("commit.gpgsign")
        assert isinstance(result, Err)
        assert "bad boolean" in result.error.message

    def test_signature_requires_identity(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        calls: list[list[str]] = []
        monkeypatch.setattr(repo_mod, "run_process", _fake_run([Ok("Bot\n"), _fail(1)], calls))
        result = Repository(tmp_path).default_signature()
        assert isinstance(result, Err)
        assert result.error.message == "user.email is not configured"


class TestTimeouts:
    def test_push_uses_network_timeout(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        calls: list[list[str]] = []
        monkeypatch.setattr(repo_mod, "run_process", _fake_run([Ok("")], calls))
        Repository(tmp_path).push("origin", "refs/tags/v1.0.0", env={"GIT_TERMINAL_PROMPT": "0"})
        assert calls[0][-1] == "timeout=180.0"
        assert calls[0][3:] == ["push", "--porcelain", "origin", "refs/tags/v1.0.0", "timeout=180.0"]

    def test_local_commands_use_short_timeout(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        calls: list[list[str]] = []
        monkeypatch.setattr(repo_mod, "run_process", _fake_run([Ok("refs/heads/master\n")], calls))
        Repository(tmp_path).list_refs()
        assert calls[0][-1] == "timeout=30.0"


def test_git_error_falls_back_to_description(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(repo_mod, "run_process", _fake_run([_fail(1)], calls))
    result = Repository(tmp_path).rev_parse("nope")
    assert isinstance(result, Err)
    assert result.error.command == "rev-parse"
    assert result.error.message == "unknown revision: nope"


def test_signature_env() -> None:
    env = Signature(name="Bot", email="bot@example.com").as_env()
    assert env["GIT_AUTHOR_NAME"] == "Bot"
    assert env["GIT_COMMITTER_EMAIL"] == "bot@example.com"


# =============================================================================
# Against a real repository
# =============================================================================


class TestAgainstRealGit:
    def test_branch_and_head(self, git_sandbox: GitSandbox) -> None:
        git_sandbox.write_manifest("1.0.0")
        sha = git_sandbox.commit("init")
        repo = Repository(git_sandbox.root)

        assert repo.current_branch() == Ok("master")
        assert repo.head_commit() == Ok(sha)
        assert repo.toplevel() == Ok(git_sandbox.root.resolve())

    def test_not_a_repository(self, git_sandbox: GitSandbox, tmp_path: Path) -> None:
        outside = tmp_path / "elsewhere"
        outside.mkdir()
        assert isinstance(Repository(outside).toplevel(), Err)

    def test_detached_head_has_no_branch(self, git_sandbox: GitSandbox) -> None:
        git_sandbox.write_manifest("1.0.0")
        sha = git_sandbox.commit("init")
        git_sandbox.git("checkout", "--quiet", "--detach", sha)
        assert isinstance(Repository(git_sandbox.root).current_branch(), Err)

    def test_commit_files_commits_only_given_paths(self, git_sandbox: GitSandbox) -> None:
        git_sandbox.write_manifest("1.0.0")
        git_sandbox.write("README.md", "demo\n")
        base = git_sandbox.commit("init")
        git_sandbox.write_manifest("1.0.1")
        git_sandbox.write("README.md", "changed but not released\n")
        repo = Repository(git_sandbox.root)

        result = repo.commit_files(
            ["package.json"], "Release version 1.0.1", repo.default_signature().unwrap()
        )

        assert isinstance(result, Ok)
        assert git_sandbox.git("rev-parse", "HEAD~1") == base
        changed = git_sandbox.git("diff-tree", "--no-commit-id", "--name-only", "-r", "HEAD")
        assert changed.splitlines() == ["package.json"]
        assert git_sandbox.git("log", "-1", "--format=%an <%ae>") == (
            "Release Bot <release-bot@example.com>"
        )
        assert "README.md" in git_sandbox.git("status", "--porcelain")

    def test_annotated_tag_and_refs(self, git_sandbox: GitSandbox) -> None:
        git_sandbox.write_manifest("1.0.0")
        first = git_sandbox.commit("init")
        git_sandbox.write("CHANGELOG.md", "x\n")
        git_sandbox.commit("later")
        repo = Repository(git_sandbox.root)

        assert repo.create_annotated_tag("v1.0.0", first, "Release version 1.0.0") == Ok(None)

        assert "refs/tags/v1.0.0" in repo.list_refs().unwrap()
        assert git_sandbox.git("cat-file", "-t", "v1.0.0") == "tag"
        assert git_sandbox.git("rev-parse", "v1.0.0^{commit}") == first

    def test_remote_url(self, git_sandbox: GitSandbox) -> None:
        git_sandbox.git("remote", "add", "origin", "git@github.com:acme/widget.git")
        repo = Repository(git_sandbox.root)
        assert repo.remote_url("origin") == Ok("git@github.com:acme/widget.git")
        assert isinstance(repo.remote_url("upstream"), Err)

    def test_push_to_bare_remote(self, git_sandbox: GitSandbox) -> None:
        git_sandbox.write_manifest("1.0.0")
        sha = git_sandbox.commit("init")
        bare = git_sandbox.add_bare_remote()

        result = Repository(git_sandbox.root).push("origin", "refs/heads/master", env={})

        assert result == Ok(None)
        assert git_sandbox.git("--git-dir", str(bare), "rev-parse", "refs/heads/master") == sha

    def test_blame_uses_given_contents(self, git_sandbox: GitSandbox) -> None:
        git_sandbox.write_manifest("1.0.0")
        init = git_sandbox.commit("init")
        repo = Repository(git_sandbox.root)
        text = (git_sandbox.root / "package.json").read_text(encoding="utf-8")

        committed = parse_porcelain(repo.blame_porcelain("package.json", text).unwrap())
        assert {h.commit_id for h in committed} == {init}

        edited = text.replace('"1.0.0"', '"9.9.9"')
        hunks = parse_porcelain(repo.blame_porcelain("package.json", edited).unwrap())
        hunk = hunk_for_line(hunks, 3)
        assert hunk is not None
        assert is_null_commit(hunk.commit_id)
