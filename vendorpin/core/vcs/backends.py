"""内置 VCS 后端与结构探测

后端选择完全依据目录结构（元数据目录是否存在），清单无法声明。
"""

from __future__ import annotations

from pathlib import Path

from vendorpin.core.vcs.base import VcsBackend

GIT = VcsBackend(
    name="git",
    metadata_dir=".git",
    checkout_cmd=("git", "checkout", "-q"),
    update_cmd=("git", "fetch"),
    revision_cmd=("git", "rev-parse", "HEAD"),
)

HG = VcsBackend(
    name="hg",
    metadata_dir=".hg",
    checkout_cmd=("hg", "update"),
    update_cmd=("hg", "pull"),
    revision_cmd=("hg", "id", "-i"),
    revision_pattern=r"^\S+",
)

BZR = VcsBackend(
    name="bzr",
    metadata_dir=".bzr",
    checkout_cmd=("bzr", "revert", "-r"),
    update_cmd=("bzr", "pull"),
    revision_cmd=("bzr", "log", "-r-1", "--line"),
    revision_pattern=r"^[0-9]+",
)

# 探测优先级，自上而下第一个命中者生效
BACKENDS: tuple[VcsBackend, ...] = (GIT, HG, BZR)


def backend_names() -> list[str]:
    return [b.name for b in BACKENDS]


def detect_backend(directory: str | Path) -> VcsBackend | None:
    """返回管理该目录的后端，没有则返回 None"""
    for backend in BACKENDS:
        if backend.detect(directory):
            return backend
    return None


def find_backend(root: str | Path, target: str) -> VcsBackend | None:
    """从 root 开始沿 target 逐级向下探测，返回第一个找到的后端

    对 github.com/org/repo/subpkg 这样的目标，仓库根 github.com/org/repo
    即会命中。
    """
    p = Path(root)
    for elem in target.split("/"):
        if not elem:
            continue
        p = p / elem
        backend = detect_backend(p)
        if backend is not None:
            return backend
    return None
