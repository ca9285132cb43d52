"""VCS 适配器单元测试"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from vendorpin.core.exceptions import ExecutionError
from vendorpin.core.vcs import BACKENDS, BZR, GIT, HG, detect_backend, find_backend
from vendorpin.utils.shell import CommandResult, set_verbose

FAIL = CommandResult(returncode=1, stderr="unknown revision")
OK = CommandResult(returncode=0)


@pytest.mark.parametrize("backend", BACKENDS, ids=lambda b: b.name)
class TestSync:
    def test_ref_present_no_update(self, backend, fake_exec, tmp_path: Path) -> None:
        """本地已有 ref 时只检出一次，不触发 update"""
        backend.sync(tmp_path, "v1.0")
        assert fake_exec.count(list(backend.checkout_cmd)) == 1
        assert fake_exec.count(list(backend.update_cmd)) == 0
        assert fake_exec.calls[0].args == [*backend.checkout_cmd, "v1.0"]
        assert fake_exec.calls[0].cwd == str(tmp_path)

    def test_retry_after_update(self, backend, fake_exec, tmp_path: Path) -> None:
        """首次检出失败 → update → 再检出一次"""
        fake_exec.on(list(backend.checkout_cmd), FAIL, OK)
        backend.sync(tmp_path, "v2")
        assert fake_exec.commands() == [
            [*backend.checkout_cmd, "v2"],
            list(backend.update_cmd),
            [*backend.checkout_cmd, "v2"],
        ]

    def test_retry_failure_propagates(self, backend, fake_exec, tmp_path: Path) -> None:
        fake_exec.on(list(backend.checkout_cmd), FAIL, CommandResult(returncode=3, stderr="still missing"))
        with pytest.raises(ExecutionError, match="still missing") as exc:
            backend.sync(tmp_path, "v2")
        assert exc.value.returncode == 3
        assert fake_exec.count(list(backend.checkout_cmd)) == 2

    def test_update_failure_skips_retry(self, backend, fake_exec, tmp_path: Path) -> None:
        fake_exec.on(list(backend.checkout_cmd), FAIL)
        fake_exec.on(list(backend.update_cmd), CommandResult(returncode=1, stderr="network down"))
        with pytest.raises(ExecutionError, match="network down"):
            backend.sync(tmp_path, "v2")
        assert fake_exec.count(list(backend.checkout_cmd)) == 1


class TestRevision:
    def test_git_full_hash(self, fake_exec, tmp_path: Path) -> None:
        sha = "3f786850e387550fdab836ed7e6dc881de23001b"
        fake_exec.on(["git", "rev-parse"], CommandResult(returncode=0, stdout=f"  {sha}\n"))
        assert GIT.revision(tmp_path) == sha
        assert fake_exec.calls[0].capture is True

    def test_hg_strips_after_whitespace(self, fake_exec, tmp_path: Path) -> None:
        fake_exec.on(["hg", "id"], CommandResult(returncode=0, stdout="a1b2c3d4e5f6 tip\n"))
        assert HG.revision(tmp_path) == "a1b2c3d4e5f6"

    def test_bzr_leading_digits(self, fake_exec, tmp_path: Path) -> None:
        fake_exec.on(
            ["bzr", "log"],
            CommandResult(returncode=0, stdout="42: Jane Doe 2024-01-02 fix build\n"),
        )
        assert BZR.revision(tmp_path) == "42"

    def test_bzr_no_digits_returns_empty(self, fake_exec, tmp_path: Path) -> None:
        fake_exec.on(["bzr", "log"], CommandResult(returncode=0, stdout="no revisions\n"))
        assert BZR.revision(tmp_path) == ""

    def test_failure_logged_when_verbose(self, fake_exec, tmp_path: Path, caplog) -> None:
        set_verbose(True)
        fake_exec.on(["git", "rev-parse"], CommandResult(returncode=128, stderr="not a git repository"))
        with caplog.at_level(logging.ERROR, logger="vendorpin.core.vcs.base"):
            with pytest.raises(ExecutionError, match="not a git repository"):
                GIT.revision(tmp_path)
        assert any(
            r.levelno == logging.ERROR and "not a git repository" in r.getMessage()
            for r in caplog.records
        )

    def test_failure_not_logged_when_quiet(self, fake_exec, tmp_path: Path, caplog) -> None:
        """非 verbose 模式只抛出，由调用方负责报告"""
        fake_exec.on(["git", "rev-parse"], CommandResult(returncode=128, stderr="not a git repository"))
        with caplog.at_level(logging.ERROR, logger="vendorpin.core.vcs.base"):
            with pytest.raises(ExecutionError, match="not a git repository"):
                GIT.revision(tmp_path)
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]


class TestDetect:
    def test_detect_each_backend(self, tmp_path: Path, make_repo) -> None:
        for backend in BACKENDS:
            repo = make_repo(tmp_path / backend.name, backend.metadata_dir)
            assert detect_backend(repo) is backend

    def test_priority_order(self, tmp_path: Path, make_repo) -> None:
        """同时存在多种元数据时按 git > hg > bzr 选择"""
        repo = make_repo(tmp_path / "mixed", ".bzr")
        (repo / ".hg").mkdir()
        assert detect_backend(repo) is HG
        (repo / ".git").mkdir()
        assert detect_backend(repo) is GIT

    def test_metadata_must_be_directory(self, tmp_path: Path) -> None:
        """git worktree 的 .git 文件不算元数据目录"""
        (tmp_path / ".git").write_text("gitdir: elsewhere")
        assert detect_backend(tmp_path) is None

    def test_find_walks_down_target(self, tmp_path: Path, make_repo) -> None:
        make_repo(tmp_path / "example.org" / "a" / "b", ".hg")
        (tmp_path / "example.org" / "a" / "b" / "sub").mkdir()
        assert find_backend(tmp_path, "example.org/a/b/sub") is HG
        assert find_backend(tmp_path, "example.org/a") is None
