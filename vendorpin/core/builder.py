"""依赖构建：在依赖目录下执行 go install"""

from __future__ import annotations

import logging
from pathlib import Path

from vendorpin.core.models import Dependency
from vendorpin.utils.shell import run_cmd

logger = logging.getLogger(__name__)


class DependencyBuilder:
    """构建执行器"""

    def __init__(self, vendor_root: Path, go_command: str = "go") -> None:
        self.vendor_root = vendor_root
        self.go_command = go_command

    def build(self, dep: Dependency, args: list[str] | tuple[str, ...] = ()) -> bool:
        """构建单个依赖，skipdep 时跳过并返回 False"""
        if dep.skipdep:
            logger.info("跳过构建: %s (skipdep)", dep.name)
            return False
        work_dir = self.vendor_root / "src" / dep.target_path
        run_cmd(
            [self.go_command, "install", *args],
            cwd=str(work_dir), label="go install",
        )
        logger.info("构建完成: %s", dep.name)
        return True
