"""Shell 命令执行工具 — 统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，方便测试替换。
两种模式:
  - capture=True:  捕获标准输出（用于版本查询）
  - capture=False: 继承当前进程的 stdout/stderr（用于拉取、构建命令）
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Protocol

from vendorpin.core.exceptions import ExecutionError

logger = logging.getLogger(__name__)


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议 — 抽象子进程调用

    测试时可注入 mock 实现，无需 patch subprocess。
    """

    def execute(
        self,
        cmd: str | list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        capture: bool = True,
    ) -> CommandResult:
        """执行命令并返回结果"""
        ...


# =========================================================================
# 默认实现: 本地执行器
# =========================================================================

class LocalExecutor:
    """本地命令执行器（默认实现），不设置超时"""

    def execute(
        self,
        cmd: str | list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        capture: bool = True,
    ) -> CommandResult:
        args = shlex.split(cmd) if isinstance(cmd, str) else cmd
        if capture:
            r = subprocess.run(
                args, capture_output=True, text=True,
                cwd=cwd, env=env, check=False,
            )
            return CommandResult(
                returncode=r.returncode, stdout=r.stdout, stderr=r.stderr,
            )
        r = subprocess.run(args, cwd=cwd, env=env, check=False)
        return CommandResult(returncode=r.returncode)


# =========================================================================
# 全局默认执行器与 verbose 开关（可替换）
# =========================================================================

_default_executor: CommandExecutor = LocalExecutor()
_verbose = False


def get_executor() -> CommandExecutor:
    """获取全局默认命令执行器"""
    return _default_executor


def set_executor(executor: CommandExecutor) -> None:
    """替换全局默认命令执行器（用于测试）"""
    global _default_executor  # noqa: PLW0603
    _default_executor = executor


def set_verbose(enabled: bool) -> None:
    """开启后每条外部命令执行前都会连同工作目录回显"""
    global _verbose  # noqa: PLW0603
    _verbose = enabled


def is_verbose() -> bool:
    return _verbose


def _echo(args: list[str], cwd: str) -> None:
    line = "cd %s && %s"
    if _verbose:
        logger.info(line, shlex.quote(cwd), shlex.join(args))
    else:
        logger.debug(line, shlex.quote(cwd), shlex.join(args))


def _invoke(
    cmd: str | list[str], *, cwd: str, env: dict[str, str] | None,
    label: str, capture: bool,
) -> CommandResult:
    args = shlex.split(cmd) if isinstance(cmd, str) else list(cmd)
    if not args:
        raise ExecutionError(f"{label}失败: 命令为空")
    _echo(args, cwd)
    try:
        r = get_executor().execute(args, cwd=cwd, env=env, capture=capture)
    except OSError as e:
        raise ExecutionError(f"{label}失败: {args[0]}: {e}") from e
    if not r.success:
        detail = f": {r.stderr.strip()[:500]}" if r.stderr.strip() else ""
        raise ExecutionError(
            f"{label}失败 (rc={r.returncode}): {shlex.join(args)}{detail}",
            returncode=r.returncode,
        )
    return r


# =========================================================================
# 便捷函数
# =========================================================================

def run_cmd(
    cmd: str | list[str], *, cwd: str = ".",
    env: dict[str, str] | None = None,
    label: str = "cmd",
) -> CommandResult:
    """执行命令并透传输出，失败抛 ExecutionError

    Args:
        cmd: 命令字符串或参数列表
        cwd: 工作目录
        env: 环境变量（不传则继承当前进程）
        label: 日志标签
    """
    return _invoke(cmd, cwd=cwd, env=env, label=label, capture=False)


def capture_cmd(
    cmd: str | list[str], *, cwd: str = ".",
    env: dict[str, str] | None = None,
    label: str = "cmd",
) -> str:
    """执行命令并返回捕获的标准输出，失败抛 ExecutionError"""
    return _invoke(cmd, cwd=cwd, env=env, label=label, capture=True).stdout
