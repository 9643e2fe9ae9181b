import time
import uuid
from typing import Optional

import httpx

from article_console.core.config import settings
from article_console.core.exceptions import SessionNotOpenError
from article_console.core.logging import get_logger, get_request_logger

# このモジュール用のロガーを取得
logger = get_logger(__name__)


async def log_request(request: httpx.Request) -> None:
    """リクエストIDの付与と開始ログ"""
    request.headers["X-Request-ID"] = str(uuid.uuid4())
    request.extensions["start_time"] = time.time()

    request_logger = get_request_logger(request)
    request_logger.info(f"Request started: {request.method} {request.url.path}")


async def log_response(response: httpx.Response) -> None:
    """レスポンスのステータスと処理時間のログ"""
    request = response.request
    start_time = request.extensions.get("start_time", time.time())
    process_time = time.time() - start_time

    request_logger = get_request_logger(request)
    request_logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Process time: {process_time:.3f}s"
    )


class ApiSession:
    """APIクライアントのライフサイクル管理クラス"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url or settings.api_base_url
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_open(self) -> bool:
        return self._client is not None and not self._client.is_closed

    @property
    def client(self) -> httpx.AsyncClient:
        if not self.is_open:
            raise SessionNotOpenError()
        return self._client

    async def open(self) -> httpx.AsyncClient:
        """HTTPクライアントを開く"""
        if self.is_open:
            return self._client

        logger.info(f"Opening API session: {self.base_url}")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            event_hooks={"request": [log_request], "response": [log_response]}
        )
        return self._client

    async def close(self) -> None:
        """HTTPクライアントを閉じる"""
        if self._client is None:
            return
        try:
            logger.info("Closing API session...")
            await self._client.aclose()
            logger.info("API session closed successfully")
        except Exception as e:
            logger.error(f"Error closing API session: {str(e)}")
            raise
        finally:
            self._client = None

    async def __aenter__(self) -> "ApiSession":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
