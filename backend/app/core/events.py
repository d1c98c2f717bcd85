"""Application lifecycle event handlers.

使用 ServiceRegistry 统一管理生命周期。
"""

from typing import Callable

from domains.core import get_service_registry
from domains.core.logging import get_logger

from app.core.deps import ensure_services_registered

logger = get_logger(__name__)


def create_start_handler() -> Callable:
    """Create startup event handler."""

    async def start_app() -> None:
        logger.info("api_starting", component="api")

        registry = ensure_services_registered()
        note_store = registry.get("note_store")
        logger.info(
            "note_store_initialized",
            component="note_store",
            path=str(note_store.path),
            exists=note_store.path.exists(),
        )

        logger.info("api_started", component="api")

    return start_app


def create_stop_handler() -> Callable:
    """Create shutdown event handler."""

    async def stop_app() -> None:
        logger.info("api_stopping", component="api")
        await get_service_registry().shutdown()
        logger.info("api_stopped", component="api")

    return stop_app
