"""版本锁定

对每个依赖按 branch > tag > commit 取要锁定的版本（同时设置多个时
只采用优先级最高的一个），沿目标路径探测 VCS 后端后执行 sync。
"""

from __future__ import annotations

import logging
from pathlib import Path

from vendorpin.core.exceptions import BackendNotFoundError
from vendorpin.core.models import Dependency
from vendorpin.core.vcs import backend_names, find_backend

logger = logging.getLogger(__name__)


class DependencyPinner:
    """版本锁定器"""

    def __init__(self, vendor_root: Path) -> None:
        self.vendor_root = vendor_root

    def pin(self, dep: Dependency) -> str:
        """锁定单个依赖，返回采用的 ref；未指定版本时返回空串"""
        ref = dep.requested_ref
        if not ref:
            return ""
        src_root = self.vendor_root / "src"
        backend = find_backend(src_root, dep.target_path)
        if backend is None:
            logger.warning("不知道如何检出 %s", dep.name)
            raise BackendNotFoundError(dep.name, backend_names())
        logger.info("检出 %s 的 %s (%s)", dep.target_path, ref, backend.name)
        backend.sync(src_root / dep.target_path, ref)
        return ref
