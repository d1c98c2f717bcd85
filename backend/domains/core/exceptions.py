"""
统一异常体系

提供业务层和基础设施层的统一错误处理，包括:
- 业务异常基类 (ApplicationError)
- 常用异常类型
- HTTP 状态码映射
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(str, Enum):
    """错误分类"""
    EXTERNAL = "external"          # 外部服务错误
    UNAVAILABLE = "unavailable"    # 资源暂时不可用
    INTERNAL = "internal"          # 内部错误


@dataclass
class ApplicationError(Exception):
    """
    应用层异常基类

    所有业务相关的异常都应继承此类。
    提供统一的错误结构，路由层据此转换为 HTTP 响应。

    使用示例:
        raise StorageWriteError("/data/notes.json", cause=exc)
    """
    code: str                                    # 错误码 (如 "STORAGE_WRITE_ERROR")
    message: str                                 # 用户可读的错误信息
    category: ErrorCategory = ErrorCategory.INTERNAL
    details: Optional[Dict[str, Any]] = None    # 附加详情
    cause: Optional[Exception] = None           # 原始异常

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    @property
    def http_status_code(self) -> int:
        """映射到 HTTP 状态码"""
        mapping = {
            ErrorCategory.EXTERNAL: 502,
            ErrorCategory.UNAVAILABLE: 503,
            ErrorCategory.INTERNAL: 500,
        }
        return mapping.get(self.category, 500)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式（用于 API 响应）"""
        result = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
        }
        if self.details:
            result["details"] = self.details
        return result


# ==================== 常用异常 ====================

class ExternalServiceError(ApplicationError):
    """外部服务错误"""
    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[Dict] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(
            code="EXTERNAL_SERVICE_ERROR",
            message=f"{service_name}: {message}",
            category=ErrorCategory.EXTERNAL,
            details=details or {"service": service_name},
            cause=cause
        )
        self.service_name = service_name


# ==================== 笔记存储异常 ====================

class StorageWriteError(ApplicationError):
    """笔记文件写入失败，本次变更未生效"""
    def __init__(self, path: Any, cause: Optional[Exception] = None):
        super().__init__(
            code="STORAGE_WRITE_ERROR",
            message=f"写入笔记文件失败: {path}",
            category=ErrorCategory.INTERNAL,
            details={"path": str(path)},
            cause=cause
        )
        self.path = path


class StorageLockError(ApplicationError):
    """获取笔记文件锁超时"""
    def __init__(self, path: Any, timeout: float):
        super().__init__(
            code="STORAGE_LOCK_TIMEOUT",
            message=f"获取笔记文件锁超时 ({timeout}s): {path}",
            category=ErrorCategory.UNAVAILABLE,
            details={"path": str(path), "timeout": timeout}
        )
        self.path = path
        self.timeout = timeout


# ==================== 导出 ====================

__all__ = [
    "ErrorCategory",
    "ApplicationError",
    "ExternalServiceError",
    "StorageWriteError",
    "StorageLockError",
]
