"""
接口层：HTTP 客户端
"""

from .client import NoteClient, TransportError

__all__ = ['NoteClient', 'TransportError']
