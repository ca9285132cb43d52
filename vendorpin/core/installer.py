"""依赖安装编排器

流水线（严格顺序执行，任一步失败即中止后续所有步骤）:

  1. load      加载清单，创建 vendor 根目录，导出 GOPATH / GOBIN
  2. filter    按 group / goos 过滤
  3. layout-in nested 模式下把 vendor 根转换为 vendor/src 布局
  4. clone     逐个拉取
  5. checkout  逐个锁定到指定版本
  6. build     逐个 go install（仅 install）
  7. layout-out nested 模式下还原为平铺布局（失败时同样执行）

用法:
    installer = Installer(get_config())
    installer.install(["-v"])
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from vendorpin.core.builder import DependencyBuilder
from vendorpin.core.config import Config, get_config
from vendorpin.core.fetcher import DependencyFetcher
from vendorpin.core.layout import nested_layout
from vendorpin.core.locker import DependencyLocker
from vendorpin.core.manifest import filter_dependencies, load_manifest
from vendorpin.core.models import Dependency
from vendorpin.core.pinner import DependencyPinner

logger = logging.getLogger(__name__)


class Installer:
    """fetch → pin → build 编排器"""

    def __init__(
        self,
        config: Config | None = None,
        *,
        manifest: str = "",
        groups: list[str] | tuple[str, ...] = (),
    ) -> None:
        self.config = config or get_config()
        self.manifest = manifest or self.config.manifest
        self.groups = [*self.config.groups, *groups]
        self.vendor_root = Path(self.config.vendor_dir).resolve()
        self.fetcher = DependencyFetcher(self.vendor_root, self.config.go_command)
        self.pinner = DependencyPinner(self.vendor_root)
        self.builder = DependencyBuilder(self.vendor_root, self.config.go_command)

    # ------------------------------------------------------------------
    # 1 + 2. 加载与过滤
    # ------------------------------------------------------------------

    def load(self) -> list[Dependency]:
        """加载清单并准备 vendor 根目录与搜索路径环境变量"""
        deps = load_manifest(self.manifest)
        self.vendor_root.mkdir(parents=True, exist_ok=True)
        self._export("GOPATH", str(self.vendor_root))
        self._export("GOBIN", str(self.vendor_root / "bin"))
        return deps

    def select(self, deps: list[Dependency]) -> list[Dependency]:
        return filter_dependencies(deps, groups=self.groups, goos=self.config.goos)

    @staticmethod
    def _export(key: str, value: str) -> None:
        logger.debug("export %s=%s", key, value)
        os.environ[key] = value

    # ------------------------------------------------------------------
    # 流水线入口
    # ------------------------------------------------------------------

    def populate(self, args: list[str] | tuple[str, ...] = ()) -> list[Dependency]:
        """拉取并锁定全部依赖，不构建"""
        return self._run(args, build=False)

    def install(self, args: list[str] | tuple[str, ...] = ()) -> list[Dependency]:
        """拉取、锁定并构建全部依赖"""
        return self._run(args, build=True)

    def _run(self, args: list[str] | tuple[str, ...], *, build: bool) -> list[Dependency]:
        deps = self.select(self.load())
        with nested_layout(self.vendor_root, self.config.nested_vendor):
            for dep in deps:
                self.fetcher.fetch(dep, args)
            for dep in deps:
                self.pinner.pin(dep)
            if build:
                built = sum(1 for dep in deps if self.builder.build(dep, args))
                logger.info("已构建 %d/%d 个依赖", built, len(deps))
        logger.info("完成: %d 个依赖就绪于 %s", len(deps), self.vendor_root)
        return deps

    # ------------------------------------------------------------------
    # 锁定清单
    # ------------------------------------------------------------------

    def lock(self, output: str | Path) -> list[Dependency]:
        """按 vendor 树中当前检出的版本写出锁定清单"""
        deps = load_manifest(self.manifest)
        # 运行结束后 nested 模式的依赖已平铺在 vendor 根下
        src_root = self.vendor_root if self.config.nested_vendor else self.vendor_root / "src"
        return DependencyLocker(src_root).lock(deps, output)
