from typing import Callable, List, Optional, Union

import httpx

from article_console.core.config import settings
from article_console.core.exceptions import InvalidParameterError, RemoteOperationError
from article_console.core.logging import get_logger
from article_console.core.notifications import Notifier
from article_console.crud.article import ArticleCRUD, article_crud
from article_console.models import StatusEnum
from article_console.schemas import Article, ConsoleState, ListState
from article_console.state.generation import GenerationCounter
from article_console.state.selection import SelectionManager
from article_console.ui.view import filter_by_status


class ArticleListManager:
    """記事一覧・ページング・タブの状態管理"""
    logger = get_logger(__name__)

    def __init__(
        self,
        client: httpx.AsyncClient,
        state: ConsoleState,
        notifier: Notifier,
        selection: SelectionManager,
        crud: ArticleCRUD = article_crud,
        on_change: Optional[Callable[[], None]] = None,
        server_side_filter: Optional[bool] = None
    ):
        self.client = client
        self.state = state
        self.notifier = notifier
        self.selection = selection
        self.crud = crud
        self._on_change = on_change
        self.server_side_filter = (
            settings.SERVER_SIDE_STATUS_FILTER if server_side_filter is None else server_side_filter
        )
        self._generation = GenerationCounter()

    @property
    def listing(self) -> ListState:
        return self.state.listing

    def visible_articles(self) -> List[Article]:
        return filter_by_status(self.listing.articles, self.listing.active_tab)

    def is_valid_page(self, page: int) -> bool:
        return 1 <= page <= self.listing.paging.total_page

    async def load_page(self) -> bool:
        """現在のページ・タブで一覧を再取得"""
        token = self._generation.advance()
        listing = self.listing
        status = listing.active_tab if self.server_side_filter else None

        try:
            result = await self.crud.get_multi(
                self.client,
                page=listing.current_page,
                size=listing.page_size,
                status=status
            )
        except RemoteOperationError as e:
            self.logger.error(f"Error fetching articles: {e.message}")
            self.notifier.error("Failed to fetch articles")
            return False

        if not self._generation.is_current(token):
            self.logger.info(
                f"Discarding stale article list for page {listing.current_page} "
                f"({listing.active_tab.value})"
            )
            return False

        # 記事一覧とページ情報は必ず同時に置き換える
        self.state.listing = self.listing.model_copy(
            update={"articles": list(result.data), "paging": result.paging}
        )
        self._changed()

        # 件数が減って現在のページが範囲外になった場合は最終ページへ戻す
        last_page = max(result.paging.total_page, 1)
        if self.listing.current_page > last_page:
            self.logger.info(
                f"Page {self.listing.current_page} no longer exists, moving to page {last_page}"
            )
            self.state.listing = self.listing.model_copy(update={"current_page": last_page})
            self.selection.clear()
            self._changed()
            return await self.load_page()
        return True

    async def change_tab(self, tab: Union[StatusEnum, str]) -> bool:
        """タブを切り替えて1ページ目を取得"""
        try:
            tab = StatusEnum(tab)
        except ValueError as e:
            raise InvalidParameterError("tab", tab, "publish, draft, trash のいずれかである必要があります") from e

        self.logger.info(f"Switching tab to {tab.value}")
        self.state.listing = self.listing.model_copy(update={"active_tab": tab, "current_page": 1})
        self.selection.clear()
        self._changed()
        return await self.load_page()

    async def show_all_posts(self) -> bool:
        return await self.change_tab(StatusEnum.publish)

    async def go_to_page(self, page: int) -> bool:
        """指定ページへ移動（範囲外は何もしない）"""
        if not self.is_valid_page(page):
            self.logger.info(
                f"Ignoring page request {page} outside 1..{self.listing.paging.total_page}"
            )
            return False

        self.state.listing = self.listing.model_copy(update={"current_page": page})
        self.selection.clear()
        self._changed()
        return await self.load_page()

    async def change_page(self, delta: int) -> bool:
        return await self.go_to_page(self.listing.current_page + delta)

    async def reset_to_first_page(self) -> bool:
        """1ページ目に戻して再取得"""
        if self.listing.current_page != 1:
            self.state.listing = self.listing.model_copy(update={"current_page": 1})
            self.selection.clear()
            self._changed()
        return await self.load_page()

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
