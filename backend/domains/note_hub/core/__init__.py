"""
核心层：数据模型和存储
"""

from .models import Note
from .store import NoteStore

__all__ = ['Note', 'NoteStore']
