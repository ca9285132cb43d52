"""VCS 适配器契约

每种后端只是一组命令模板 + 版本号提取规则，统一提供
checkout / update / revision / sync 四个操作。
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from vendorpin.core.exceptions import ExecutionError
from vendorpin.utils.shell import capture_cmd, is_verbose, run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VcsBackend:
    """单个 VCS 后端的命令描述"""

    name: str
    metadata_dir: str                 # 如 .git，用于结构探测
    checkout_cmd: tuple[str, ...]     # 末尾追加 ref
    update_cmd: tuple[str, ...]
    revision_cmd: tuple[str, ...]
    revision_pattern: str = ""        # 为空时返回完整输出

    def detect(self, directory: str | Path) -> bool:
        """目录下存在本后端的元数据目录"""
        return (Path(directory) / self.metadata_dir).is_dir()

    def checkout(self, directory: str | Path, ref: str) -> None:
        """检出本地已有的 ref，ref 不存在时抛 ExecutionError"""
        run_cmd([*self.checkout_cmd, ref], cwd=str(directory), label=f"{self.name} checkout")

    def update(self, directory: str | Path) -> None:
        """拉取新的历史，不改变当前检出的版本"""
        run_cmd(list(self.update_cmd), cwd=str(directory), label=f"{self.name} update")

    def revision(self, directory: str | Path) -> str:
        """查询当前版本号

        verbose 模式下查询失败的错误会先写入错误日志再抛出。
        """
        try:
            out = capture_cmd(
                list(self.revision_cmd), cwd=str(directory), label=f"{self.name} revision",
            )
        except ExecutionError as e:
            if is_verbose():
                logger.error("%s", e)
            raise
        rev = out.strip()
        if not self.revision_pattern:
            return rev
        m = re.search(self.revision_pattern, rev)
        return m.group(0) if m else ""

    def sync(self, directory: str | Path, ref: str) -> None:
        """锁定到 ref: 先直接检出，失败则 update 后再检出一次"""
        try:
            self.checkout(directory, ref)
            return
        except ExecutionError:
            logger.info("本地缺少 %s，先执行 %s update: %s", ref, self.name, directory)
        self.update(directory)
        self.checkout(directory, ref)
