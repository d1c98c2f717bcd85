"""
文件锁机制

提供跨进程的文件锁，保证笔记文件的读-改-写不会交错。
"""

import fcntl
import logging
import os
import time
from pathlib import Path

from domains.core.exceptions import StorageLockError

logger = logging.getLogger(__name__)


class FileLock:
    """
    文件锁

    使用 fcntl.flock 实现。每次 acquire 都打开新的文件描述符，
    因此同一进程内的不同线程之间同样互斥。
    """

    def __init__(self, lock_file: Path, timeout: float = 10.0):
        """
        初始化文件锁

        Args:
            lock_file: 锁文件路径
            timeout: 获取锁的超时时间（秒）
        """
        self.lock_file = lock_file
        self.timeout = timeout
        self._fd: int | None = None

    def acquire(self, blocking: bool = True) -> bool:
        """
        获取锁

        Args:
            blocking: 是否阻塞等待锁

        Returns:
            是否成功获取锁
        """
        self.lock_file.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(str(self.lock_file), os.O_CREAT | os.O_RDWR)

        start_time = time.monotonic()
        while True:
            try:
                fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
                self._fd = fd
                return True
            except BlockingIOError:
                if not blocking or time.monotonic() - start_time > self.timeout:
                    os.close(fd)
                    return False
                time.sleep(0.01)

    def release(self) -> None:
        """释放锁"""
        if self._fd is not None:
            try:
                fcntl.flock(self._fd, fcntl.LOCK_UN)
                os.close(self._fd)
            except OSError as e:
                logger.warning(f"release_lock_error: {e}")
            finally:
                self._fd = None

    @property
    def locked(self) -> bool:
        return self._fd is not None

    def __enter__(self):
        if not self.acquire():
            raise StorageLockError(self.lock_file, self.timeout)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
