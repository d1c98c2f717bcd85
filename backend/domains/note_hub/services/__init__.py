"""
服务层：展示辅助与界面工作区
"""

from .note_view import (
    UNTITLED,
    display_title,
    filter_notes,
    highlight,
    new_note,
    now_ms,
    plain_preview,
    sort_by_recent,
    touch,
)
from .workspace import NoteWorkspace

__all__ = [
    'UNTITLED',
    'display_title',
    'filter_notes',
    'highlight',
    'new_note',
    'now_ms',
    'plain_preview',
    'sort_by_recent',
    'touch',
    'NoteWorkspace',
]
