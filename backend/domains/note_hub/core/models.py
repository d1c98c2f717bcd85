"""
笔记数据模型定义

Note 是唯一的持久化实体，由客户端在创建时分配 id（通常为毫秒时间戳），
之后只能按 id 整条替换或删除。
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class Note:
    """
    笔记数据类

    Attributes:
        id: 笔记 ID（由创建方分配，集合内唯一，是更新/删除的唯一键）
        title: 笔记标题（可为空，展示时显示为 "Untitled"）
        content: 富文本内容（HTML 片段，存储层不解析也不清洗）
        updated_at: 最后保存时间（毫秒时间戳，仅用于展示排序）

    序列化时 updated_at 使用 JSON 字段名 updatedAt。
    """
    id: int
    title: str = ""
    content: str = ""
    updated_at: int = 0

    def to_dict(self) -> dict[str, Any]:
        """转换为 JSON 字典"""
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'updatedAt': self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Note':
        """
        从 JSON 字典创建笔记实例

        Raises:
            ValueError: 缺少 id/updatedAt，或字段类型不符
        """
        if not isinstance(data, dict):
            raise ValueError(f"笔记记录必须是对象: {data!r}")

        note_id = data.get('id')
        updated_at = data.get('updatedAt')
        # bool 是 int 的子类，需要单独排除
        for name, value in (('id', note_id), ('updatedAt', updated_at)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"笔记字段 {name} 必须是整数: {value!r}")

        title = data.get('title') or ''
        content = data.get('content') or ''
        if not isinstance(title, str) or not isinstance(content, str):
            raise ValueError(f"笔记 {note_id} 的 title/content 必须是字符串")

        return cls(id=note_id, title=title, content=content, updated_at=updated_at)
