"""
结构化日志配置

提供统一的日志格式和配置，支持:
- 控制台输出（开发环境）
- JSON 格式输出（生产环境）
"""

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog


class LogFormat(str, Enum):
    """日志格式"""
    JSON = "json"
    CONSOLE = "console"


@dataclass
class LogConfig:
    """日志配置"""
    level: str = "INFO"
    format: LogFormat = LogFormat.JSON
    add_timestamp: bool = True
    service_name: str = "notes-api"

    @classmethod
    def from_env(cls, service_name: str = "notes-api") -> "LogConfig":
        """从环境变量创建配置"""
        level = os.getenv("LOG_LEVEL", "INFO").upper()
        format_str = os.getenv("LOG_FORMAT", "json").lower()

        return cls(
            level=level,
            format=LogFormat.JSON if format_str == "json" else LogFormat.CONSOLE,
            service_name=service_name,
        )


def _shared_processors(config: LogConfig) -> list:
    """structlog 与标准库日志共用的处理器链"""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if config.add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    service_name = config.service_name

    def add_service(logger, method_name, event_dict):
        event_dict.setdefault("service", service_name)
        return event_dict

    processors.append(add_service)
    return processors


def configure_logging(config: Optional[LogConfig] = None, service_name: str = "notes-api"):
    """
    配置结构化日志

    Args:
        config: 日志配置，None 则从环境变量读取
        service_name: 服务名称
    """
    if config is None:
        config = LogConfig.from_env(service_name=service_name)

    log_level = getattr(logging, config.level, logging.INFO)
    shared_processors = _shared_processors(config)

    # 使用 stdlib.BoundLogger 时，不在 structlog 配置中添加最终渲染器
    # 渲染工作由标准库 logging 的 ProcessorFormatter 完成
    structlog.configure(
        processors=[structlog.stdlib.filter_by_level]
        + shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if config.format == LogFormat.JSON:
        formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(ensure_ascii=False),
            foreign_pre_chain=shared_processors,
        )
    else:
        formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            ),
            foreign_pre_chain=shared_processors,
        )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)
    root_logger.setLevel(log_level)

    # 设置第三方库日志级别
    logging.getLogger("uvicorn").setLevel(log_level)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    获取结构化日志器

    使用示例:
        logger = get_logger(__name__)
        logger.info("note_upserted", note_id=1700000000000, inserted=True)
    """
    return structlog.get_logger(name)


def bind_request_context(request_id: str):
    """绑定请求上下文到日志"""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)


def clear_request_context():
    """清除请求上下文"""
    structlog.contextvars.clear_contextvars()
