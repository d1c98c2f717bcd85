"""Note API routes.

对应前端 utils/api 的三个调用:
- GET    /notes          获取完整笔记集合（存储顺序）
- POST   /notes          按 id 新增或整条替换笔记
- DELETE /notes?id=<id>  删除笔记，缺少 id 时返回 400

NOTE: 存储层是同步文件 IO（写操作还会等待文件锁），统一用 run_sync 包装，避免阻塞 event loop。
"""

import math
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.core.async_utils import run_sync
from app.core.deps import get_note_store
from app.schemas.common import ErrorResponse, SuccessResponse
from app.schemas.note import Note
from domains.core.logging import get_logger
from domains.note_hub.core.store import NoteStore

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=List[Note])
async def list_notes(store: NoteStore = Depends(get_note_store)):
    """获取笔记列表"""
    notes = await run_sync(store.list)
    return [Note.from_record(n) for n in notes]


@router.post(
    "",
    response_model=SuccessResponse,
    responses={500: {"model": ErrorResponse, "description": "写入笔记文件失败"}},
)
async def save_note(note: Note, store: NoteStore = Depends(get_note_store)):
    """
    保存笔记

    id 已存在时原位替换整条记录，否则追加到集合末尾。
    """
    await run_sync(store.upsert, note.to_record())
    return SuccessResponse()


@router.delete(
    "",
    response_model=SuccessResponse,
    responses={
        400: {"description": "缺少或无效的 id 参数"},
        500: {"model": ErrorResponse, "description": "写入笔记文件失败"},
    },
)
async def delete_note(
    note_id: Optional[str] = Query(None, alias="id", description="笔记 ID"),
    store: NoteStore = Depends(get_note_store),
):
    """删除笔记，id 不存在时同样返回成功"""
    parsed = _parse_note_id(note_id)
    if parsed is None:
        logger.warning("note_delete_rejected", raw_id=note_id)
        return JSONResponse(status_code=400, content={"success": False})

    await run_sync(store.remove, parsed)
    return SuccessResponse()


def _parse_note_id(raw: Optional[str]) -> Optional[int]:
    """解析 id 参数；接受整数形式的小数（如 "2.0"），其余返回 None"""
    text = (raw or "").strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value) or not value.is_integer():
        return None
    return int(value)
