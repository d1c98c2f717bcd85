"""
笔记 HTTP 客户端

对 /api/notes 接口的薄封装，供界面层调用:
- list_notes: 获取完整笔记集合（不排序、不过滤）
- save_note: 提交整条笔记，新增还是更新由服务端决定
- delete_note: 按 id 删除笔记

客户端不持有笔记状态，也不重试。每次调用是一次请求/响应，
失败时抛出 TransportError，调用方需要重新 list_notes 获取最新状态。
"""

import logging
from typing import Any, List, Optional

import httpx

from domains.core.exceptions import ExternalServiceError

from ..core.models import Note

logger = logging.getLogger(__name__)


class TransportError(ExternalServiceError):
    """请求未完成：网络错误、超时、非 2xx 响应或响应无法解析"""
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None
    ):
        details = {"service": "notes-api"}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__("notes-api", message, details=details, cause=cause)
        self.status_code = status_code


class NoteClient:
    """
    笔记 API 客户端

    使用示例:
        async with NoteClient("http://127.0.0.1:8000") as client:
            await client.save_note(Note(id=1, title="A", content="x", updated_at=10))
            notes = await client.list_notes()

    Args:
        base_url: API 服务地址
        timeout: 请求超时时间（秒）
        api_prefix: API 路由前缀
        transport: 自定义 httpx 传输层（测试时使用 ASGITransport / MockTransport）
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        timeout: float = 10.0,
        api_prefix: str = "/api",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = f"{api_prefix.rstrip('/')}/notes"
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "NoteClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ==================== 接口 ====================

    async def list_notes(self) -> List[Note]:
        """获取完整笔记集合，按服务端存储顺序返回"""
        response = await self._request("GET")
        data = self._json(response)
        if not isinstance(data, list):
            raise TransportError(f"笔记列表格式错误: {type(data).__name__}")
        try:
            return [Note.from_dict(item) for item in data]
        except ValueError as e:
            raise TransportError(f"笔记列表格式错误: {e}", cause=e) from e

    async def save_note(self, note: Note) -> None:
        """提交整条笔记（按 id 新增或替换）"""
        response = await self._request("POST", json=note.to_dict())
        self._check_success(response)

    async def delete_note(self, note_id: int) -> None:
        """按 id 删除笔记，id 不存在时同样成功"""
        response = await self._request("DELETE", params={"id": note_id})
        self._check_success(response)

    # ==================== 内部方法 ====================

    async def _request(self, method: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, self.endpoint, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"notes api timeout: {method} {self.endpoint}")
            raise TransportError(f"{method} {self.endpoint} 超时", cause=e) from e
        except httpx.HTTPError as e:
            logger.warning(f"notes api request failed: {method} {self.endpoint}: {e}")
            raise TransportError(f"{method} {self.endpoint} 请求失败: {e}", cause=e) from e

        if not response.is_success:
            raise TransportError(
                f"{method} {self.endpoint} 返回 {response.status_code}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                "响应不是合法的 JSON",
                status_code=response.status_code,
                cause=e,
            ) from e

    def _check_success(self, response: httpx.Response) -> None:
        data = self._json(response)
        if not isinstance(data, dict) or data.get("success") is not True:
            raise TransportError(
                f"服务端未确认操作成功: {data!r}",
                status_code=response.status_code,
            )
