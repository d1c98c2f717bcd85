"""Exception handling utilities for FastAPI routes.

统一异常处理，集成 domains.core 的 ApplicationError 体系。

提供:
- 异常到 HTTP 响应的自动转换
- FastAPI exception_handler 注册
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domains.core import ApplicationError
from domains.core.logging import get_logger

logger = get_logger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """
    注册 FastAPI 异常处理器

    将 ApplicationError 及其子类自动转换为 HTTP 响应。

    使用示例:
        app = FastAPI()
        register_exception_handlers(app)
    """

    @app.exception_handler(ApplicationError)
    async def application_error_handler(
        request: Request,
        exc: ApplicationError
    ) -> JSONResponse:
        """处理 ApplicationError 及其子类"""
        logger.warning(
            "application_error",
            code=exc.code,
            error=exc.message,
            details=exc.details,
            path=request.url.path,
        )

        return JSONResponse(
            status_code=exc.http_status_code,
            content={
                "success": False,
                "error": exc.message,
                "code": exc.code,
                "details": exc.details,
            }
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """全局异常处理器 - 捕获所有未处理的异常"""
        logger.exception(
            "unhandled_exception",
            error_type=type(exc).__name__,
            path=request.url.path,
            method=request.method,
        )

        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": f"Internal server error: {type(exc).__name__}",
                "detail": str(exc),
            }
        )


__all__ = [
    "register_exception_handlers",
]
