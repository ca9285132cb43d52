from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from vendorpin.utils import shell
from vendorpin.utils.shell import CommandResult


@dataclass
class Call:
    args: list[str]
    cwd: str
    capture: bool


@dataclass
class FakeExecutor:
    """记录调用并按命令前缀返回预设结果的执行器

    同一前缀的多个结果按顺序消费，最后一个结果重复使用；
    未配置的命令一律成功。
    """

    calls: list[Call] = field(default_factory=list)
    rules: list[tuple[list[str], list[CommandResult]]] = field(default_factory=list)

    def on(self, prefix: list[str], *results: CommandResult) -> None:
        self.rules.append((prefix, list(results)))

    def execute(self, cmd, *, cwd=".", env=None, capture=True) -> CommandResult:
        args = list(cmd)
        self.calls.append(Call(args=args, cwd=cwd, capture=capture))
        for prefix, results in self.rules:
            if args[: len(prefix)] == prefix:
                return results.pop(0) if len(results) > 1 else results[0]
        return CommandResult(returncode=0)

    def commands(self) -> list[list[str]]:
        return [c.args for c in self.calls]

    def count(self, prefix: list[str]) -> int:
        return sum(1 for c in self.calls if c.args[: len(prefix)] == prefix)


@pytest.fixture()
def fake_exec() -> Iterator[FakeExecutor]:
    previous = shell.get_executor()
    fake = FakeExecutor()
    shell.set_executor(fake)
    yield fake
    shell.set_executor(previous)
    shell.set_verbose(False)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """流水线会改写 GOPATH / GOBIN，测试结束后恢复；全局配置每个用例重置"""
    for key in ("GOPATH", "GOBIN", "GOOS", "GO15VENDOREXPERIMENT", "VENDORPIN_VENDOR_DIR"):
        # 先 setenv 再 delenv，确保原值（含未设置）在用例结束后被恢复
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.setattr("vendorpin.core.config._current", None)


@pytest.fixture()
def make_repo():
    """创建带 VCS 元数据目录的假仓库"""

    def _make(path: Path, metadata_dir: str = ".git") -> Path:
        (path / metadata_dir).mkdir(parents=True)
        return path

    return _make
