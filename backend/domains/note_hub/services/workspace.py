"""
笔记工作区

封装界面层的 "操作后重新拉取" 流程：保存或删除成功后重新 list_notes，
并按最近更新时间排序。操作失败时保留原列表不变，错误继续向上抛出。
"""

from typing import List, Optional

from domains.core.logging import get_logger

from ..api.client import NoteClient
from ..core.models import Note
from .note_view import filter_notes, sort_by_recent

logger = get_logger(__name__)


class NoteWorkspace:
    """界面持有的笔记列表，只信任成功的 list_notes 结果"""

    def __init__(self, client: NoteClient):
        self.client = client
        self.notes: List[Note] = []

    async def refresh(self) -> List[Note]:
        """重新拉取并按最近更新排序"""
        self.notes = sort_by_recent(await self.client.list_notes())
        return self.notes

    async def save(self, note: Note) -> List[Note]:
        await self.client.save_note(note)
        logger.debug("workspace_note_saved", note_id=note.id)
        return await self.refresh()

    async def delete(self, note_id: int) -> List[Note]:
        await self.client.delete_note(note_id)
        logger.debug("workspace_note_deleted", note_id=note_id)
        return await self.refresh()

    def get(self, note_id: int) -> Optional[Note]:
        for note in self.notes:
            if note.id == note_id:
                return note
        return None

    def search(self, term: str) -> List[Note]:
        return filter_notes(self.notes, term)
