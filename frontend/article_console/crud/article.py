from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from article_console.core.config import settings
from article_console.core.exceptions import (
    ArticleNotFoundError,
    InvalidParameterError,
    MalformedResponseError,
    RemoteConnectionError,
    RemoteStatusError,
    SessionNotOpenError
)
from article_console.core.logging import get_logger
from article_console.models import StatusEnum
from article_console.schemas import (
    Article,
    ArticleDetailResponse,
    ArticleDraft,
    ArticleListResponse
)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class ArticleCRUD:
    """記事APIに対するCRUD操作"""
    logger = get_logger(__name__)

    def __init__(self, article_path: Optional[str] = None, create_path: Optional[str] = None):
        self._article_path = article_path
        self._create_path = create_path

    @property
    def article_path(self) -> str:
        return self._article_path or settings.ARTICLE_PATH

    @property
    def create_path(self) -> str:
        return self._create_path or settings.ARTICLE_CREATE_PATH

    async def get_multi(
        self,
        client: httpx.AsyncClient,
        page: int = 1,
        size: Optional[int] = None,
        status: Optional[StatusEnum] = None
    ) -> ArticleListResponse:
        """記事一覧を1ページ分取得"""
        if size is None:
            size = settings.DEFAULT_PAGE_SIZE

        # パラメータ検証
        if page < 1:
            raise InvalidParameterError("page", page, "pageは1以上である必要があります")
        if size < 1 or size > settings.MAX_PAGE_SIZE:
            raise InvalidParameterError(
                "size", size, f"sizeは1以上{settings.MAX_PAGE_SIZE}以下である必要があります"
            )

        params: Dict[str, Any] = {"page": page, "size": size}
        if status is not None:
            params["status"] = status.value

        self.logger.info(f"Retrieving articles: page={page}, size={size}, status={params.get('status')}")
        response = await self._request(client, "GET", self.article_path, params=params)
        result = self._parse(response, ArticleListResponse)
        self.logger.info(
            f"Retrieved {len(result.data)} articles "
            f"(page {result.paging.page}/{result.paging.total_page}, total {result.paging.total_item})"
        )
        return result

    async def get(self, client: httpx.AsyncClient, id: str) -> Article:
        """IDで記事の詳細を取得"""
        url = self._detail_url(id)
        self.logger.info(f"Retrieving article by id: {id}")
        response = await self._request(client, "GET", url, article_id=id)
        article = self._parse(response, ArticleDetailResponse).data
        self.logger.info(f"Found article with id: {id}")
        return article

    async def create(self, client: httpx.AsyncClient, obj_in: ArticleDraft) -> Any:
        """新しい記事を作成（応答本文はそのまま返す）"""
        self.logger.info(f"Creating new article: {obj_in.title}")
        response = await self._request(client, "POST", self.create_path, json=obj_in.to_payload())
        return self._json_or_none(response)

    async def update(self, client: httpx.AsyncClient, id: str, obj_in: ArticleDraft) -> Any:
        """記事を更新（応答本文はそのまま返す）"""
        url = self._detail_url(id)
        self.logger.info(f"Updating article: {id}")
        response = await self._request(client, "PUT", url, json=obj_in.to_payload(), article_id=id)
        return self._json_or_none(response)

    async def trash(self, client: httpx.AsyncClient, id: str) -> None:
        """記事をゴミ箱へ移動（本文なしのPUT）"""
        url = self._detail_url(id)
        self.logger.info(f"Moving article to trash: {id}")
        await self._request(client, "PUT", url, article_id=id)

    def _detail_url(self, id: str) -> str:
        if id is None or not str(id).strip():
            self.logger.error("Article ID is required")
            raise InvalidParameterError("id", id, "記事IDが必要です")
        return f"{self.article_path}/{id}"

    async def _request(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        article_id: Optional[str] = None
    ) -> httpx.Response:
        # クライアント状態チェック
        if client is None or client.is_closed:
            self.logger.error("HTTP client is not open")
            raise SessionNotOpenError("HTTPクライアントが開かれていません")

        try:
            response = await client.request(method, url, params=params, json=json)
        except httpx.HTTPError as e:
            self.logger.error(f"Transport error on {method} {url}: {str(e)}")
            raise RemoteConnectionError(method, url, str(e) or type(e).__name__) from e

        if response.status_code == 404 and article_id is not None:
            self.logger.info(f"Article with id {article_id} not found")
            raise ArticleNotFoundError(article_id, method=method, url=url)
        if not response.is_success:
            self.logger.error(f"{method} {url} failed with status {response.status_code}")
            raise RemoteStatusError(method, url, response.status_code)
        return response

    def _parse(self, response: httpx.Response, schema: Type[SchemaT]) -> SchemaT:
        url = str(response.request.url)
        try:
            return schema.model_validate(response.json())
        except PydanticValidationError as e:
            self.logger.error(f"Unexpected response shape from {url}: {str(e)}")
            raise MalformedResponseError(url, str(e)) from e
        except ValueError as e:
            self.logger.error(f"Response from {url} is not valid JSON: {str(e)}")
            raise MalformedResponseError(url, "JSONとして解析できません") from e

    def _json_or_none(self, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            # 作成・更新の応答本文は利用しない
            self.logger.warning(f"Non-JSON response body from {response.request.url}")
            return None


# シングルトンインスタンス
article_crud = ArticleCRUD()
