"""依赖清单加载

职责:
- 从 YAML 清单加载有序的依赖声明
- 校验每个选项的类型（类型不符直接报错，不当作未设置）
- 按 group / goos 过滤
- 将依赖声明序列化回清单条目（用于生成锁定清单）

清单格式:
    dependencies:
      - name: github.com/org/project
        tag: v1.0
        group: [test]
        goos: [linux, darwin]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from vendorpin.core.exceptions import ConfigError
from vendorpin.core.models import Dependency
from vendorpin.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

_STR_KEYS = ("target", "branch", "tag", "commit", "command")
_BOOL_KEYS = ("private", "insecure", "skipdep")
_LIST_KEYS = {"group": "groups", "goos": "goos"}


def _as_bool(name: str, key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value in ("true", "false"):
        return value == "true"
    raise ConfigError(f"依赖 {name} 的选项 {key} 必须是布尔值或 \"true\"/\"false\": {value!r}")


def _as_str(name: str, key: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    # commit: 0123456 之类会被 YAML 解析成数字，转回字符串会改变取值
    raise ConfigError(
        f"依赖 {name} 的选项 {key} 必须是字符串（数字形式的值请加引号）: {value!r}"
    )


def _as_list(name: str, key: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ConfigError(f"依赖 {name} 的选项 {key} 必须是字符串或字符串列表: {value!r}")


def parse_entry(entry: Any, index: int = 0) -> Dependency:
    """把一个清单条目转换为 Dependency"""
    if not isinstance(entry, dict):
        raise ConfigError(f"清单第 {index + 1} 项不是映射: {entry!r}")
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ConfigError(f"清单第 {index + 1} 项缺少 name")

    kwargs: dict[str, Any] = {"name": name}
    for key, value in entry.items():
        if key == "name" or value is None:
            continue
        if key in _STR_KEYS:
            kwargs[key] = _as_str(name, key, value)
        elif key in _BOOL_KEYS:
            kwargs[key] = _as_bool(name, key, value)
        elif key in _LIST_KEYS:
            kwargs[_LIST_KEYS[key]] = _as_list(name, key, value)
        else:
            logger.warning("依赖 %s 含未知选项，已忽略: %s", name, key)
    return Dependency(**kwargs)


def load_manifest(path: str | Path) -> list[Dependency]:
    """加载清单，返回保持声明顺序的依赖列表"""
    p = Path(path)
    if not p.is_file():
        raise ConfigError(f"依赖清单不存在: {p}")

    try:
        data = load_yaml(p)
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigError(f"依赖清单无法解析: {p}: {e}") from e
    entries = data.get("dependencies") or []
    if not isinstance(entries, list):
        raise ConfigError(f"{p} 中的 dependencies 必须是列表")

    deps = [parse_entry(entry, i) for i, entry in enumerate(entries)]
    logger.info("已加载 %d 个依赖: %s", len(deps), p)
    return deps


def filter_dependencies(
    deps: list[Dependency], *, groups: list[str] | tuple[str, ...], goos: str,
) -> list[Dependency]:
    """保留 group / goos 与当前环境匹配的依赖，保持原顺序"""
    kept = [d for d in deps if d.matches_groups(groups) and d.matches_goos(goos)]
    skipped = len(deps) - len(kept)
    if skipped:
        logger.info("按 group=%s goos=%s 过滤掉 %d 个依赖", list(groups), goos, skipped)
    return kept


def to_entry(dep: Dependency) -> dict[str, Any]:
    """序列化为清单条目，只输出非默认值"""
    entry: dict[str, Any] = {"name": dep.name}
    for key in _STR_KEYS:
        value = getattr(dep, key)
        if value:
            entry[key] = value
    for key in _BOOL_KEYS:
        if getattr(dep, key):
            entry[key] = True
    for key, attr in _LIST_KEYS.items():
        values = getattr(dep, attr)
        if values:
            entry[key] = list(values)
    return entry
