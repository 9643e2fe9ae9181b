"""
テスト用の共通フィクスチャとセットアップ
"""
import asyncio
import json
import math
from datetime import datetime, timedelta
from typing import Any, AsyncGenerator, Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from article_console.models import StatusEnum
from article_console.schemas import Article, ArticleDraft
from article_console.state.console import ArticleConsole


# テスト用APIのベースURL
TEST_BASE_URL = "http://test/api"


class FakeArticleService:
    """テスト用のインメモリ記事API"""

    def __init__(self):
        self.articles: Dict[str, Dict[str, Any]] = {}
        self.requests: List[Dict[str, Any]] = []
        self.failures: set = set()   # "list", "detail", "create", "update", "trash"
        self.malformed: set = set()  # "list", "detail"
        self.gates: Dict[str, Tuple[asyncio.Event, asyncio.Event]] = {}
        self._next_id = 1
        self._base_date = datetime(2023, 5, 1, 9, 0, 0)
        self.app = self._build_app()

    def add(
        self,
        title: str,
        category: str = "General",
        content: str = "Body text",
        status: str = "publish",
        id: Optional[str] = None
    ) -> Dict[str, Any]:
        """記事を直接登録"""
        article_id = id or str(self._next_id)
        self._next_id = max(self._next_id, int(article_id)) + 1
        article = {
            "id": article_id,
            "title": title,
            "category": category,
            "content": content,
            "status": status,
            "created_date": (self._base_date + timedelta(days=len(self.articles))).isoformat(),
        }
        self.articles[article_id] = article
        return article

    def hold(self, key: str) -> Tuple[asyncio.Event, asyncio.Event]:
        """次の該当リクエストを保留する（到達イベント, 解放イベント）"""
        entered, release = asyncio.Event(), asyncio.Event()
        self.gates[key] = (entered, release)
        return entered, release

    def requests_for(self, method: str, path: str) -> List[Dict[str, Any]]:
        return [r for r in self.requests if r["method"] == method and r["path"] == path]

    async def _wait_gate(self, key: str) -> None:
        gate = self.gates.pop(key, None)
        if gate is not None:
            entered, release = gate
            entered.set()
            await release.wait()

    async def _record(self, request: Request) -> Optional[Dict[str, Any]]:
        raw = await request.body()
        body = json.loads(raw) if raw else None
        self.requests.append({
            "method": request.method,
            "path": request.url.path,
            "params": dict(request.query_params),
            "headers": dict(request.headers),
            "body": body,
        })
        return body

    def _build_app(self) -> FastAPI:
        app = FastAPI()
        service = self

        @app.get("/api/article")
        async def list_articles(
            request: Request,
            page: int = 1,
            size: int = 10,
            status: Optional[str] = None
        ):
            await service._record(request)
            await service._wait_gate("list")
            if "list" in service.failures:
                return JSONResponse(status_code=500, content={"detail": "boom"})
            if "list" in service.malformed:
                return PlainTextResponse("<html>gateway error</html>")

            items = sorted(service.articles.values(), key=lambda a: int(a["id"]), reverse=True)
            if status:
                items = [a for a in items if a["status"] == status]
            total_item = len(items)
            total_page = math.ceil(total_item / size)
            start = (page - 1) * size
            return {
                "data": items[start:start + size],
                "paging": {
                    "page": page,
                    "size": size,
                    "total_item": total_item,
                    "total_page": total_page,
                },
            }

        @app.get("/api/article/{article_id}")
        async def get_article(request: Request, article_id: str):
            await service._record(request)
            await service._wait_gate(f"detail:{article_id}")
            if "detail" in service.failures:
                return JSONResponse(status_code=500, content={"detail": "boom"})
            if "detail" in service.malformed:
                return {"data": {"id": article_id, "status": "archived"}}
            if article_id not in service.articles:
                return JSONResponse(status_code=404, content={"detail": "Not found"})
            return {"data": service.articles[article_id]}

        @app.post("/api/articles")
        async def create_article(request: Request):
            body = await service._record(request)
            await service._wait_gate("create")
            if "create" in service.failures:
                return JSONResponse(status_code=500, content={"detail": "boom"})
            article = service.add(**body)
            return JSONResponse(status_code=201, content=article)

        @app.put("/api/article/{article_id}")
        async def put_article(request: Request, article_id: str):
            body = await service._record(request)
            operation = "update" if body else "trash"
            if operation in service.failures:
                return JSONResponse(status_code=500, content={"detail": "boom"})
            if article_id not in service.articles:
                return JSONResponse(status_code=404, content={"detail": "Not found"})

            article = service.articles[article_id]
            if operation == "trash":
                article["status"] = "trash"
                return Response(status_code=200)
            article.update({key: body[key] for key in ("title", "category", "content", "status") if key in body})
            return article

        return app


@pytest.fixture
def fake_service() -> FakeArticleService:
    """テスト用記事API"""
    return FakeArticleService()


@pytest_asyncio.fixture
async def async_client(fake_service: FakeArticleService) -> AsyncGenerator[httpx.AsyncClient, None]:
    """テスト用記事APIに接続した非同期クライアント"""
    transport = httpx.ASGITransport(app=fake_service.app)
    async with httpx.AsyncClient(transport=transport, base_url=TEST_BASE_URL) as client:
        yield client


@pytest.fixture
def console(async_client: httpx.AsyncClient) -> ArticleConsole:
    """テスト用の画面コーディネーター"""
    return ArticleConsole(async_client, page_size=10, server_side_filter=False)


@pytest.fixture
def sample_articles(fake_service: FakeArticleService) -> List[Dict[str, Any]]:
    """公開4件・下書き3件・ゴミ箱1件"""
    articles = []
    for i in range(4):
        articles.append(fake_service.add(f"Published {i}", category="News", status="publish"))
    for i in range(3):
        articles.append(fake_service.add(f"Draft {i}", category="Notes", status="draft"))
    articles.append(fake_service.add("Old post", category="Archive", status="trash"))
    return articles


@pytest.fixture
def many_articles(fake_service: FakeArticleService) -> List[Dict[str, Any]]:
    """公開記事25件（10件ずつで3ページ）"""
    return [
        fake_service.add(f"Article {i}", category="News", content=f"Content {i}", status="publish")
        for i in range(25)
    ]


# テストデータ作成用のヘルパー関数
class TestDataFactory:
    """テストデータ作成用ファクトリー"""

    @staticmethod
    def create_draft(**kwargs) -> ArticleDraft:
        """フォーム入力データ"""
        defaults = {
            "title": "Test Article",
            "category": "General",
            "content": "Test content",
            "status": StatusEnum.draft,
        }
        defaults.update(kwargs)
        return ArticleDraft(**defaults)

    @staticmethod
    def create_article(**kwargs) -> Article:
        """記事データ"""
        defaults = {
            "id": "1",
            "title": "Test Article",
            "category": "General",
            "content": "Test content",
            "status": StatusEnum.publish,
            "created_date": datetime(2023, 5, 1, 9, 0, 0),
        }
        defaults.update(kwargs)
        return Article(**defaults)


@pytest.fixture
def test_data_factory():
    """テストデータファクトリーのフィクスチャ"""
    return TestDataFactory
