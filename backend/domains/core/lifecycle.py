"""
服务生命周期管理

进程内只有一个共享服务: 笔记存储 (note_store)。注册表负责在首次使用时
创建它，在应用关闭时清理，并允许测试直接替换实例。

使用示例:
    registry = register_core_services(settings.NOTES_FILE)
    store = registry.get("note_store")

    # 应用关闭时
    await registry.shutdown()
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class ServiceDefinition:
    """已注册的服务: 工厂函数 + 延迟创建的实例"""
    name: str
    factory: Callable[[], Any]
    instance: Any | None = None
    initialized: bool = False


class ServiceRegistry:
    """
    服务注册表

    - get: 首次访问时调用工厂创建实例，之后返回同一实例
    - set: 直接放入实例（测试替换）
    - reset / reset_all / shutdown: 调用实例的 close() 并标记为未创建
    """

    def __init__(self):
        self._services: dict[str, ServiceDefinition] = {}
        self._init_order: list[str] = []

    def register(self, name: str, factory: Callable[[], Any]) -> "ServiceRegistry":
        """注册服务工厂；同名服务已存在时先清理旧实例再覆盖"""
        if name in self._services:
            logger.warning("service_replaced", service=name)
            self.reset(name)

        self._services[name] = ServiceDefinition(name=name, factory=factory)
        return self

    def get(self, name: str) -> Any:
        """
        获取服务实例

        Raises:
            KeyError: 服务未注册
        """
        definition = self._services.get(name)
        if definition is None:
            raise KeyError(f"服务未注册: {name}")

        if not definition.initialized:
            definition.instance = definition.factory()
            definition.initialized = True
            self._init_order.append(name)
            logger.debug("service_initialized", service=name)

        return definition.instance

    def set(self, name: str, instance: Any) -> None:
        definition = self._services.setdefault(
            name, ServiceDefinition(name=name, factory=lambda: instance)
        )
        definition.instance = instance
        definition.initialized = True
        if name not in self._init_order:
            self._init_order.append(name)

    def reset(self, name: str) -> None:
        """清理单个服务，下次 get 时重新创建"""
        definition = self._services.get(name)
        if definition is None or not definition.initialized:
            return

        close = getattr(definition.instance, "close", None)
        if callable(close):
            try:
                close()
            except Exception as e:
                logger.warning("service_close_failed", service=name, error=str(e))

        definition.instance = None
        definition.initialized = False
        self._init_order.remove(name)

    def reset_all(self) -> None:
        """按创建顺序的逆序清理全部服务"""
        for name in reversed(self._init_order.copy()):
            self.reset(name)

    async def shutdown(self) -> None:
        logger.info("services_shutdown_started", services=self.initialized_services)
        # close() 可能做文件 IO，放到线程中执行
        await asyncio.to_thread(self.reset_all)
        logger.info("services_shutdown_finished")

    @property
    def initialized_services(self) -> list[str]:
        """已创建实例的服务名称（按创建顺序）"""
        return self._init_order.copy()

    def __contains__(self, name: str) -> bool:
        return name in self._services


# ==================== 全局注册表 ====================

_registry: ServiceRegistry | None = None


def get_service_registry() -> ServiceRegistry:
    """获取全局服务注册表"""
    global _registry
    if _registry is None:
        _registry = ServiceRegistry()
    return _registry


def reset_service_registry() -> None:
    """清理并替换全局服务注册表（用于测试）"""
    global _registry
    if _registry is not None:
        _registry.reset_all()
    _registry = ServiceRegistry()


# ==================== 服务注册 ====================

def register_core_services(notes_file: Path, lock_timeout: float = 10.0) -> ServiceRegistry:
    """
    注册笔记存储服务

    NoteStore 延迟导入，避免 domains.core 与 domains.note_hub 循环依赖。

    Args:
        notes_file: 笔记集合 JSON 文件路径
        lock_timeout: 写操作获取文件锁的超时时间（秒）
    """
    registry = get_service_registry()

    def _create_note_store():
        from domains.note_hub.core.store import NoteStore
        return NoteStore(notes_file, lock_timeout=lock_timeout)

    return registry.register("note_store", _create_note_store)
