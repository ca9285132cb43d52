"""统一异常体系

所有业务异常继承 VendorError，替代散落的 ValueError / OSError。
CLI 层据此输出友好提示并以非零状态退出。
"""

from __future__ import annotations


class VendorError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(VendorError):
    """配置或清单缺失、内容无效"""

    code = "CONFIG_ERROR"


class BackendNotFoundError(VendorError):
    """请求了版本锁定，但依赖目录中找不到任何受支持的 VCS 元数据"""

    code = "BACKEND_NOT_FOUND"

    def __init__(self, dependency: str, backends: list[str]) -> None:
        super().__init__(
            f"无法为 {dependency} 检出指定版本: "
            f"目前仅支持 {'/'.join(backends)} 指定 branch/tag/commit"
        )
        self.dependency = dependency
        self.backends = backends


class ExecutionError(VendorError):
    """外部命令（VCS / 工具链）执行失败"""

    code = "EXECUTION_ERROR"

    def __init__(self, message: str, returncode: int = -1) -> None:
        super().__init__(message)
        self.returncode = returncode


class LayoutError(VendorError):
    """vendor 目录结构转换失败"""

    code = "LAYOUT_ERROR"
