"""vendor 目录布局转换

两种布局:
  - flat:   依赖目录直接位于 vendor 根下（vendor/ 目录约定）
  - nested: 依赖目录位于 vendor/src 下（GOPATH 约定）

只做 rename，不做复制；任一条目失败立即中止，不回滚已移动的条目。
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from vendorpin.core.exceptions import LayoutError

logger = logging.getLogger(__name__)

# 工具链保留的同级目录，不属于依赖
RESERVED_DIRS = frozenset({"bin", "pkg", "src"})


def _list(directory: Path) -> list[str]:
    try:
        return sorted(os.listdir(directory))
    except OSError as e:
        raise LayoutError(f"读取目录失败: {directory}: {e}") from e


def _rename(src: Path, dst: Path) -> None:
    try:
        os.rename(src, dst)
    except OSError as e:
        raise LayoutError(f"移动失败: {src} -> {dst}: {e}") from e


def flatten_in(root: str | Path) -> None:
    """flat → nested: 把 root 下除 bin/pkg/src 以外的条目移入 root/src"""
    root = Path(root)
    names = _list(root)
    src = root / "src"
    try:
        src.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise LayoutError(f"创建目录失败: {src}: {e}") from e
    moved = 0
    for name in names:
        if name in RESERVED_DIRS:
            continue
        _rename(root / name, src / name)
        moved += 1
    logger.debug("已将 %d 个条目移入 %s", moved, src)


def flatten_out(root: str | Path) -> None:
    """nested → flat: 把 root/src 下的条目移回 root，并删除空的 root/src"""
    root = Path(root)
    src = root / "src"
    for name in _list(src):
        _rename(src / name, root / name)
    leftover = _list(src)
    if leftover:
        raise LayoutError(f"{src} 移动后仍非空，拒绝删除: {leftover}")
    try:
        src.rmdir()
    except OSError as e:
        raise LayoutError(f"删除目录失败: {src}: {e}") from e
    logger.debug("已将 %s 还原为平铺布局", root)


@contextmanager
def nested_layout(root: str | Path, enabled: bool) -> Iterator[None]:
    """在 with 块内保持 nested 布局，退出时（含异常）还原为 flat

    enabled 为 False 时不做任何转换。
    """
    if not enabled:
        yield
        return
    flatten_in(root)
    try:
        yield
    finally:
        flatten_out(root)
