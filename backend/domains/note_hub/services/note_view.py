"""
笔记展示辅助函数

界面层在 list_notes 的结果之上做的排序、搜索和高亮。
存储层和客户端都不排序，这些只影响展示。
"""

import html
import re
import time
from typing import Iterable, List, Optional

from ..core.models import Note

UNTITLED = "Untitled"


def now_ms() -> int:
    """当前毫秒时间戳"""
    return int(time.time() * 1000)


def new_note(title: str = "", content: str = "", now: Optional[int] = None) -> Note:
    """
    创建新笔记，id 与 updatedAt 都取当前毫秒时间戳

    同一毫秒内创建的两条笔记会得到相同 id，后保存的会覆盖前者。
    """
    ts = now_ms() if now is None else now
    return Note(id=ts, title=title, content=content, updated_at=ts)


def touch(note: Note, title: str, content: str, now: Optional[int] = None) -> Note:
    """编辑后生成新的完整记录（保持 id，刷新 updatedAt）"""
    return Note(
        id=note.id,
        title=title,
        content=content,
        updated_at=now_ms() if now is None else now,
    )


def sort_by_recent(notes: Iterable[Note]) -> List[Note]:
    """按 updatedAt 降序排列（稳定排序，不修改原列表）"""
    return sorted(notes, key=lambda n: n.updated_at, reverse=True)


def filter_notes(notes: Iterable[Note], term: str) -> List[Note]:
    """标题或内容包含搜索词的笔记（忽略大小写），空搜索词返回全部"""
    if not term:
        return list(notes)
    needle = term.lower()
    return [n for n in notes if needle in n.title.lower() or needle in n.content.lower()]


def highlight(text: str, term: str) -> str:
    """
    用 <mark> 包裹所有匹配的搜索词（忽略大小写）

    搜索词按字面匹配，正则元字符会被转义。
    """
    if not term:
        return text
    pattern = re.compile(f"({re.escape(term)})", re.IGNORECASE)
    return pattern.sub(r"<mark>\1</mark>", text)


def display_title(note: Note) -> str:
    """展示用标题，空标题显示为 Untitled"""
    return note.title if note.title.strip() else UNTITLED


def plain_preview(note: Note, limit: int = 120) -> str:
    """去掉标签后的内容预览"""
    text = html.unescape(re.sub(r"<[^>]+>", " ", note.content))
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."
