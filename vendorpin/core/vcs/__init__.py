"""VCS 适配层

- base.py: 适配器契约 VcsBackend
- backends.py: git / hg / bzr 三个后端及结构探测
"""

from vendorpin.core.vcs.backends import (
    BACKENDS,
    BZR,
    GIT,
    HG,
    backend_names,
    detect_backend,
    find_backend,
)
from vendorpin.core.vcs.base import VcsBackend

__all__ = [
    "VcsBackend",
    "GIT",
    "HG",
    "BZR",
    "BACKENDS",
    "backend_names",
    "detect_backend",
    "find_backend",
]
