"""
笔记存储层 - JSON 文件数据源

整个笔记集合保存在一个 JSON 文档中（笔记对象数组），文件即唯一数据源，
不做内存缓存。

- list: 读取完整集合；文件不存在或无法解析时视为空集合，单条无效记录跳过
- upsert: 按 id 整条替换（保持原位置），不存在则追加到末尾
- remove: 删除所有匹配 id 的记录，id 不存在时为成功的空操作

写操作在文件锁内完成整个读-改-写过程，避免并发请求互相覆盖（lost update）。
文件通过临时文件 + os.replace 原子替换，读取方不会看到写了一半的文档。
"""

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import List, Union

from domains.core.exceptions import StorageWriteError
from domains.core.logging import get_logger

from .lock import FileLock
from .models import Note

logger = get_logger(__name__)


class NoteStore:
    """
    笔记存储层

    Args:
        path: 笔记集合 JSON 文件路径
        lock_timeout: 写操作获取文件锁的超时时间（秒）
    """

    def __init__(self, path: Union[str, Path], lock_timeout: float = 10.0):
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")
        self.lock_timeout = lock_timeout

    # ==================== 基本操作 ====================

    def list(self) -> List[Note]:
        """获取完整笔记集合（按插入顺序）"""
        return self._read()

    def upsert(self, note: Note) -> bool:
        """
        新增或整条替换笔记

        Returns:
            True 表示新增，False 表示替换已有记录
        """
        with self._lock():
            notes = self._read()

            inserted = True
            for index, existing in enumerate(notes):
                if existing.id == note.id:
                    notes[index] = note
                    inserted = False
                    break
            else:
                notes.append(note)

            self._write(notes)

        logger.info("note_upserted", note_id=note.id, inserted=inserted, total=len(notes))
        return inserted

    def remove(self, note_id: int) -> int:
        """
        删除指定 id 的所有笔记

        Returns:
            删除的记录数（id 不存在时为 0，仍会写回文件）
        """
        with self._lock():
            notes = self._read()
            kept = [n for n in notes if n.id != note_id]
            self._write(kept)

        removed = len(notes) - len(kept)
        logger.info("note_removed", note_id=note_id, removed=removed, total=len(kept))
        return removed

    def close(self) -> None:
        """无常驻资源，保留以兼容服务注册表的清理流程"""

    # ==================== 文件读写 ====================

    def _lock(self) -> FileLock:
        # 每次变更使用独立的锁对象，线程之间不共享文件描述符
        return FileLock(self.lock_path, timeout=self.lock_timeout)

    def _read(self) -> List[Note]:
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise ValueError(f"顶层必须是数组，实际为 {type(data).__name__}")
        except (OSError, ValueError) as e:
            logger.warning("notes_file_unreadable", path=str(self.path), error=str(e))
            return []

        # 单条坏记录只跳过该条，其余记录保留
        notes = []
        for index, item in enumerate(data):
            try:
                notes.append(Note.from_dict(item))
            except ValueError as e:
                logger.warning("notes_record_skipped", path=str(self.path), index=index, error=str(e))
        return notes

    def _file_mode(self) -> int:
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def _write(self, notes: List[Note]) -> None:
        payload = json.dumps([n.to_dict() for n in notes], ensure_ascii=False, indent=2)
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            mode = self._file_mode()
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                # mkstemp 固定创建 0600，替换前恢复原文件权限
                os.fchmod(f.fileno(), mode)
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("notes_write_failed", path=str(self.path), error=str(e))
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageWriteError(self.path, cause=e) from e
