"""
記事管理画面のコーディネーター

画面状態（ConsoleState）を一つだけ保持し、ユーザー操作はすべて
名前付きの操作を通して各マネージャーに振り分ける。
"""
from typing import Any, Callable, Dict, List, Optional, Union

import httpx

from article_console.core.config import settings
from article_console.core.exceptions import InvalidParameterError
from article_console.core.logging import get_logger
from article_console.core.notifications import Notifier
from article_console.crud.article import ArticleCRUD, article_crud
from article_console.models import StatusEnum
from article_console.schemas import Article, ArticleDraft, ConsoleState, ListState
from article_console.state.listing import ArticleListManager
from article_console.state.mutations import ArticleMutationCoordinator
from article_console.state.selection import SelectionManager
from article_console.ui.view import ConsoleView, build_console_view

StateListener = Callable[[ConsoleState], None]


class ArticleConsole:
    """一覧・選択・モーダル操作をまとめる画面コーディネーター"""
    logger = get_logger(__name__)

    def __init__(
        self,
        client: httpx.AsyncClient,
        notifier: Optional[Notifier] = None,
        crud: ArticleCRUD = article_crud,
        page_size: Optional[int] = None,
        server_side_filter: Optional[bool] = None
    ):
        if page_size is None:
            page_size = settings.DEFAULT_PAGE_SIZE
        if page_size < 1 or page_size > settings.MAX_PAGE_SIZE:
            raise InvalidParameterError(
                "page_size", page_size, f"page_sizeは1以上{settings.MAX_PAGE_SIZE}以下である必要があります"
            )

        self.state = ConsoleState(listing=ListState(page_size=page_size))
        self.notifier = notifier or Notifier()
        self._listeners: List[StateListener] = []

        self.selection = SelectionManager(
            client, self.state, self.notifier, crud=crud, on_change=self._changed
        )
        self.listing = ArticleListManager(
            client,
            self.state,
            self.notifier,
            self.selection,
            crud=crud,
            on_change=self._changed,
            server_side_filter=server_side_filter
        )
        self.mutations = ArticleMutationCoordinator(
            client,
            self.state,
            self.notifier,
            self.listing,
            self.selection,
            crud=crud,
            on_change=self._changed
        )

    def subscribe(self, listener: StateListener) -> None:
        """再描画用のリスナーを登録"""
        self._listeners.append(listener)

    def view(self) -> ConsoleView:
        return build_console_view(self.state)

    def snapshot(self) -> Dict[str, Any]:
        """状態レコードをJSON互換の辞書で返す"""
        return self.state.model_dump(mode="json")

    # 一覧・ページング
    async def start(self) -> bool:
        self.logger.info("Loading initial article list")
        return await self.listing.load_page()

    async def refresh(self) -> bool:
        return await self.listing.load_page()

    async def change_tab(self, tab: Union[StatusEnum, str]) -> bool:
        return await self.listing.change_tab(tab)

    async def show_all_posts(self) -> bool:
        return await self.listing.show_all_posts()

    async def go_to_page(self, page: int) -> bool:
        return await self.listing.go_to_page(page)

    async def change_page(self, delta: int) -> bool:
        return await self.listing.change_page(delta)

    async def next_page(self) -> bool:
        return await self.listing.change_page(1)

    async def previous_page(self) -> bool:
        return await self.listing.change_page(-1)

    def visible_articles(self) -> List[Article]:
        return self.listing.visible_articles()

    # 選択・プレビュー
    async def select(self, article: Article) -> Optional[Article]:
        return await self.selection.select(article)

    def clear_selection(self) -> None:
        self.selection.clear()

    def preview_link(self) -> Optional[str]:
        return self.selection.preview_link()

    # 追加・編集・ゴミ箱
    def open_add(self) -> None:
        self.mutations.open_add()

    def update_add_draft(self, **fields: Any) -> ArticleDraft:
        return self.mutations.update_add_draft(**fields)

    def cancel_add(self) -> None:
        self.mutations.cancel_add()

    async def submit_add(self) -> bool:
        return await self.mutations.create()

    def open_edit(self, article: Article) -> None:
        self.mutations.open_edit(article)

    def update_edit_draft(self, **fields: Any) -> ArticleDraft:
        return self.mutations.update_edit_draft(**fields)

    def cancel_edit(self) -> None:
        self.mutations.cancel_edit()

    async def submit_edit(self) -> bool:
        return await self.mutations.update()

    async def trash(self, article_id: Union[str, int]) -> bool:
        return await self.mutations.trash(article_id)

    def _changed(self) -> None:
        for listener in self._listeners:
            listener(self.state)
