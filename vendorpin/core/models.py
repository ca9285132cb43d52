"""核心数据模型

Dependency: 清单中的一条依赖声明，构造后不可变。
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Dependency:
    """单个依赖声明"""

    name: str                      # 导入路径，如 github.com/org/project
    target: str = ""               # 覆盖 vendor/src 下的目标路径
    branch: str = ""
    tag: str = ""
    commit: str = ""
    command: str = ""              # 自定义拉取命令，末尾追加目标目录
    private: bool = False          # 通过 SSH 拉取私有仓库
    insecure: bool = False
    skipdep: bool = False          # 跳过构建阶段
    groups: tuple[str, ...] = ()
    goos: tuple[str, ...] = ()

    @property
    def target_path(self) -> str:
        """vendor/src 下的相对路径，未覆盖时即依赖名"""
        return self.target or self.name

    @property
    def requested_ref(self) -> str:
        """要锁定的版本，优先级 branch > tag > commit，未指定返回空串"""
        return self.branch or self.tag or self.commit

    def matches_groups(self, active_groups: list[str] | tuple[str, ...]) -> bool:
        """未声明 group 的依赖总是通过"""
        if not self.groups:
            return True
        return any(g in active_groups for g in self.groups)

    def matches_goos(self, goos: str) -> bool:
        """未声明 goos 的依赖总是通过"""
        if not self.goos:
            return True
        return goos in self.goos
