"""
笔记领域模块

笔记集合保存在单个 JSON 文件中，文件是唯一数据源。

核心功能：
- 存储层：list / upsert / remove，写操作在文件锁内完成读-改-写
- 客户端：通过 HTTP 调用 /api/notes 的薄封装
- 展示辅助：排序、搜索、高亮（仅影响界面）
"""

from .api.client import NoteClient, TransportError
from .core.models import Note
from .core.store import NoteStore
from .services.workspace import NoteWorkspace

__all__ = [
    'Note',
    'NoteStore',
    'NoteClient',
    'TransportError',
    'NoteWorkspace',
]
