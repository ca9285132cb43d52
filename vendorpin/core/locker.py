"""锁定清单生成

查询每个依赖当前检出的版本号，写出 commit 固定的清单，
之后用该清单执行 install 即可复现同一棵 vendor 树。
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

from vendorpin.core.exceptions import ExecutionError
from vendorpin.core.manifest import to_entry
from vendorpin.core.models import Dependency
from vendorpin.core.vcs import find_backend
from vendorpin.utils.yaml_io import save_yaml

logger = logging.getLogger(__name__)


class DependencyLocker:
    """锁定清单生成器

    src_root 为依赖目录所在的根（flat 布局下即 vendor 根本身）。
    """

    def __init__(self, src_root: Path) -> None:
        self.src_root = src_root

    def resolve(self, dep: Dependency) -> Dependency:
        """返回 commit 固定为当前版本的依赖，找不到 VCS 元数据时原样返回"""
        backend = find_backend(self.src_root, dep.target_path)
        if backend is None:
            logger.warning("未找到 %s 的 VCS 元数据，按原样写入锁定清单", dep.name)
            return dep
        rev = backend.revision(self.src_root / dep.target_path)
        if not rev:
            raise ExecutionError(f"无法解析 {dep.name} 的版本号 ({backend.name})")
        logger.info("  %s -> %s", dep.name, rev)
        return dataclasses.replace(dep, branch="", tag="", commit=rev)

    def lock(self, deps: list[Dependency], output: str | Path) -> list[Dependency]:
        locked = [self.resolve(d) for d in deps]
        save_yaml(output, {"dependencies": [to_entry(d) for d in locked]})
        logger.info("锁定清单已写入: %s", output)
        return locked
