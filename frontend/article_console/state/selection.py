from typing import Callable, Optional

import httpx

from article_console.core.config import settings
from article_console.core.exceptions import RemoteOperationError
from article_console.core.logging import get_logger
from article_console.core.notifications import Notifier
from article_console.crud.article import ArticleCRUD, article_crud
from article_console.schemas import Article, ConsoleState, SelectionState
from article_console.state.generation import GenerationCounter


class SelectionManager:
    """選択中の記事とプレビューの状態管理"""
    logger = get_logger(__name__)

    def __init__(
        self,
        client: httpx.AsyncClient,
        state: ConsoleState,
        notifier: Notifier,
        crud: ArticleCRUD = article_crud,
        on_change: Optional[Callable[[], None]] = None
    ):
        self.client = client
        self.state = state
        self.notifier = notifier
        self.crud = crud
        self._on_change = on_change
        self._generation = GenerationCounter()

    @property
    def selected_id(self) -> Optional[str]:
        selected = self.state.selection.selected
        return selected.id if selected else None

    async def select(self, article: Article) -> Optional[Article]:
        """記事を選択し、詳細を取得してプレビューに反映"""
        token = self._generation.advance()
        preview = self.state.selection.preview
        if preview is not None and preview.id != article.id:
            preview = None  # 別の記事のプレビューは残さない
        self.state.selection = SelectionState(selected=article, preview=preview)
        self._changed()
        return await self._fetch_detail(article.id, token)

    async def refresh_if_selected(self, article_id: str) -> Optional[Article]:
        """選択中の記事であればプレビューを再取得"""
        if self.selected_id != article_id:
            return None
        token = self._generation.advance()
        return await self._fetch_detail(article_id, token)

    def clear(self) -> None:
        """選択とプレビューを解除（取得中の詳細は破棄される）"""
        self._generation.advance()
        if self.state.selection.selected is None and self.state.selection.preview is None:
            return
        self.state.selection = SelectionState()
        self._changed()

    def preview_link(self) -> Optional[str]:
        """外部プレビュー画面のパス"""
        if self.selected_id is None:
            self.notifier.info("Please select an article first")
            return None
        return settings.PREVIEW_PATH_TEMPLATE.format(id=self.selected_id)

    async def _fetch_detail(self, article_id: str, token: int) -> Optional[Article]:
        try:
            detail = await self.crud.get(self.client, article_id)
        except RemoteOperationError as e:
            self.logger.error(f"Error fetching article detail {article_id}: {e.message}")
            self.notifier.error("Failed to fetch article details")
            return None

        if not self._generation.is_current(token):
            self.logger.info(f"Discarding stale detail response for article {article_id}")
            return None

        self.state.selection = self.state.selection.model_copy(update={"preview": detail})
        self._changed()
        return detail

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
