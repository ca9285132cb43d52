"""集中配置管理

支持从 YAML 文件加载 + 环境变量覆盖 + 编程式覆盖。
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field

import yaml

from vendorpin.core.exceptions import ConfigError
from vendorpin.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".vendorpin.yml"

_PLATFORM_GOOS = {
    "linux": "linux",
    "darwin": "darwin",
    "win32": "windows",
    "cygwin": "windows",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "netbsd": "netbsd",
}


def host_goos() -> str:
    """当前目标平台: 优先 GOOS 环境变量，否则由宿主平台推导"""
    env_goos = os.environ.get("GOOS", "")
    if env_goos:
        return env_goos
    for prefix, goos in _PLATFORM_GOOS.items():
        if sys.platform.startswith(prefix):
            return goos
    return sys.platform


def nested_vendor_from_env() -> bool:
    return os.environ.get("GO15VENDOREXPERIMENT", "") == "1"


@dataclass
class Config:
    """全局配置"""

    manifest: str = "Gomfile.yml"
    vendor_dir: str = ""          # 为空时按 nested_vendor 取 _vendor 或 vendor
    nested_vendor: bool = False   # GO15VENDOREXPERIMENT 约定
    go_command: str = "go"
    groups: list[str] = field(default_factory=list)
    goos: str = ""
    verbose: bool = False

    # 放不到字段里的配置项
    extra: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.vendor_dir:
            self.vendor_dir = "vendor" if self.nested_vendor else "_vendor"
        if not self.goos:
            self.goos = host_goos()

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置并叠加环境变量，文件不存在则只用默认值"""
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigError(f"配置文件无法解析: {path}: {e}") from e
        known = {f.name for f in cls.__dataclass_fields__.values()} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        if "nested_vendor" not in matched and nested_vendor_from_env():
            matched["nested_vendor"] = True
        env_vendor = os.environ.get("VENDORPIN_VENDOR_DIR", "")
        if env_vendor:
            matched["vendor_dir"] = env_vendor
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config(nested_vendor=nested_vendor_from_env())
    return _current


def init_config(path: str = DEFAULT_CONFIG_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.debug("配置已加载: %s", path)
    return _current
