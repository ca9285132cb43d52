"""依赖拉取器

职责:
- 把单个依赖的源码拉取到 <vendor>/src/<target>
- 三种互斥策略，按优先级选择:
  1. command: 自定义拉取命令（按空白切分，末尾追加目标目录）
  2. private: 通过 SSH 克隆 / 拉取私有 git 仓库
  3. 默认: 工具链自带的 `go get -d`

注意: `go get -d` 总是拉取默认分支及其传递依赖，之后的锁定阶段
才把每个仓库检出到指定版本。若指定版本需要的传递依赖在默认分支上
并不存在，则不会被拉取。
"""

from __future__ import annotations

import logging
from pathlib import Path

from vendorpin.core.exceptions import ConfigError
from vendorpin.core.models import Dependency
from vendorpin.utils.shell import run_cmd

logger = logging.getLogger(__name__)


def private_remote_url(name: str) -> str:
    """host/org/repo → git@host:org/repo"""
    parts = name.split("/")
    if len(parts) != 3 or not all(parts):
        raise ConfigError(
            f"私有仓库名必须形如 host/org/repo: {name!r}"
        )
    host, org, repo = parts
    return f"git@{host}:{org}/{repo}"


class DependencyFetcher:
    """依赖拉取器"""

    def __init__(self, vendor_root: Path, go_command: str = "go") -> None:
        self.vendor_root = vendor_root
        self.go_command = go_command

    def source_dir(self, dep: Dependency) -> Path:
        return self.vendor_root / "src" / dep.target_path

    def fetch(self, dep: Dependency, args: list[str] | tuple[str, ...] = ()) -> None:
        """按策略拉取单个依赖，失败抛异常"""
        if dep.command:
            self._fetch_custom(dep)
        elif dep.private:
            self._fetch_private(dep)
        else:
            self._fetch_toolchain(dep, args)

    def _fetch_custom(self, dep: Dependency) -> None:
        srcdir = self.source_dir(dep)
        srcdir.mkdir(parents=True, exist_ok=True)
        cmd = [*dep.command.split(), str(srcdir)]
        logger.info("拉取 %s (自定义命令)", dep.name)
        run_cmd(cmd, cwd=str(self.vendor_root), label="custom fetch")

    def _fetch_private(self, dep: Dependency) -> None:
        url = private_remote_url(dep.name)
        srcdir = self.source_dir(dep)
        if srcdir.exists():
            logger.info("更新私有仓库 %s", dep.name)
            # 仅支持默认分支为 master 的仓库
            run_cmd(
                ["git", "pull", "origin", "master"],
                cwd=str(srcdir), label="git pull",
            )
            return
        srcdir.parent.mkdir(parents=True, exist_ok=True)
        logger.info("克隆私有仓库 %s <- %s", dep.name, url)
        run_cmd(
            ["git", "clone", url, str(srcdir)],
            cwd=str(self.vendor_root), label="git clone",
        )

    def _fetch_toolchain(self, dep: Dependency, args: list[str] | tuple[str, ...]) -> None:
        cmd = [self.go_command, "get", "-d"]
        if dep.insecure:
            cmd.append("-insecure")
        cmd.extend(args)
        cmd.append(dep.name)
        logger.info("下载 %s", dep.name)
        run_cmd(cmd, cwd=str(self.vendor_root), label="go get")
