"""Dependency injection for FastAPI routes.

使用 ServiceRegistry 统一管理服务生命周期。测试时通过
app.dependency_overrides[get_note_store] 替换存储层。
"""

from typing import TYPE_CHECKING

from domains.core import ServiceRegistry, get_service_registry, register_core_services

from app.core.config import settings

if TYPE_CHECKING:
    from domains.note_hub.core.store import NoteStore


def ensure_services_registered() -> ServiceRegistry:
    """确保服务已注册（延迟初始化）"""
    registry = get_service_registry()
    if "note_store" not in registry:
        register_core_services(
            notes_file=settings.NOTES_FILE,
            lock_timeout=settings.NOTES_LOCK_TIMEOUT,
        )
    return registry


def get_note_store() -> "NoteStore":
    """Get NoteStore singleton instance."""
    registry = ensure_services_registered()
    return registry.get("note_store")
