"""统一异常体系

所有业务异常继承 SaajError。
Web 层根据 http_status 映射响应状态码，CLI 层捕获后输出友好提示并以 1 退出。
"""

from __future__ import annotations


class SaajError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"
    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SaajError):
    """输入数据校验失败（空名称列表、非法类别等）"""

    code = "VALIDATION_ERROR"
    http_status = 400

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class ItemNotFoundError(SaajError):
    """请求的条目在目录中不存在，一次性列出全部缺失名称"""

    code = "ITEM_NOT_FOUND"
    http_status = 404

    def __init__(self, names: list[str]) -> None:
        self.names = list(names)
        super().__init__(
            f"the following items could not be found: {', '.join(self.names)}. "
            "It may not exist in the registry. Please make sure items names are correct."
        )


class CatalogError(SaajError):
    """目录编写错误：重名、未知引用、自引用或循环依赖"""

    code = "CATALOG_ERROR"


class SourceReadError(SaajError):
    """已匹配条目的源码无法读取（目录与存储不一致）"""

    code = "SOURCE_READ_ERROR"


class ConfigError(SaajError):
    """项目配置缺失或内容无效"""

    code = "CONFIG_ERROR"


class RegistryError(SaajError):
    """远程注册表返回非成功响应或网络不可达"""

    code = "REGISTRY_ERROR"
    http_status = 502

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ExecutionError(SaajError):
    """外部命令（包管理器）执行失败"""

    code = "EXECUTION_ERROR"


class InstallError(SaajError):
    """写入条目文件或创建目录失败"""

    code = "INSTALL_ERROR"
