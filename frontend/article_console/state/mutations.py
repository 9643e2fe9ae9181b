from typing import Any, Callable, Optional, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from article_console.core.exceptions import (
    InvalidParameterError,
    MissingFieldsError,
    RemoteOperationError
)
from article_console.core.logging import get_logger
from article_console.core.notifications import Notifier
from article_console.crud.article import ArticleCRUD, article_crud
from article_console.models import ADD_STATUS_OPTIONS, EDIT_STATUS_OPTIONS
from article_console.schemas import Article, ArticleDraft, ConsoleState, ModalState
from article_console.state.listing import ArticleListManager
from article_console.state.selection import SelectionManager


ADD_MODAL = "add_modal"
EDIT_MODAL = "edit_modal"

_STATUS_OPTIONS = {
    ADD_MODAL: ADD_STATUS_OPTIONS,
    EDIT_MODAL: EDIT_STATUS_OPTIONS,
}


class ArticleMutationCoordinator:
    """記事の作成・更新・ゴミ箱移動と、その後の状態再同期"""
    logger = get_logger(__name__)

    def __init__(
        self,
        client: httpx.AsyncClient,
        state: ConsoleState,
        notifier: Notifier,
        listing: ArticleListManager,
        selection: SelectionManager,
        crud: ArticleCRUD = article_crud,
        on_change: Optional[Callable[[], None]] = None
    ):
        self.client = client
        self.state = state
        self.notifier = notifier
        self.listing = listing
        self.selection = selection
        self.crud = crud
        self._on_change = on_change

    # 追加モーダル
    def open_add(self) -> None:
        self._reset_modal(ADD_MODAL, is_open=True)

    def cancel_add(self) -> None:
        self._reset_modal(ADD_MODAL)

    def update_add_draft(self, **fields: Any) -> ArticleDraft:
        return self._update_draft(ADD_MODAL, fields)

    # 編集モーダル
    def open_edit(self, article: Article) -> None:
        """編集モーダルを開く（行の選択は変更しない）"""
        self.state.edit_modal = ModalState(
            is_open=True,
            draft=ArticleDraft.from_article(article),
            target=article,
            status_options=EDIT_STATUS_OPTIONS
        )
        self._changed()

    def cancel_edit(self) -> None:
        self._reset_modal(EDIT_MODAL)

    def update_edit_draft(self, **fields: Any) -> ArticleDraft:
        return self._update_draft(EDIT_MODAL, fields)

    async def create(self) -> bool:
        """追加モーダルの内容で記事を作成"""
        modal = self.state.add_modal
        if not self._can_submit(ADD_MODAL, modal):
            return False

        draft = modal.draft
        self._set_submitting(ADD_MODAL, True)
        try:
            await self.crud.create(self.client, draft)
        except RemoteOperationError as e:
            self.logger.error(f"Error creating article: {e.message}")
            self.notifier.error("Failed to create article")
            return False
        finally:
            self._set_submitting(ADD_MODAL, False)

        self.notifier.success("Article created successfully")
        self._reset_modal(ADD_MODAL)
        # 新しい記事は1ページ目に並ぶ前提
        await self.listing.reset_to_first_page()
        return True

    async def update(self) -> bool:
        """編集モーダルの内容で対象記事を更新"""
        modal = self.state.edit_modal
        if not self._can_submit(EDIT_MODAL, modal):
            return False
        if modal.target is None:
            self.logger.warning("Edit submitted without a target article")
            return False

        article_id = modal.target.id
        self._set_submitting(EDIT_MODAL, True)
        try:
            await self.crud.update(self.client, article_id, modal.draft)
        except RemoteOperationError as e:
            self.logger.error(f"Error updating article {article_id}: {e.message}")
            self.notifier.error("Failed to update article")
            return False
        finally:
            self._set_submitting(EDIT_MODAL, False)

        self.notifier.success("Article updated successfully")
        self._reset_modal(EDIT_MODAL)
        await self.listing.load_page()
        await self.selection.refresh_if_selected(article_id)
        return True

    async def trash(self, article_id: Union[str, int]) -> bool:
        """記事をゴミ箱へ移動（行の選択は変更しない）"""
        article_id = str(article_id)
        try:
            await self.crud.trash(self.client, article_id)
        except RemoteOperationError as e:
            self.logger.error(f"Error trashing article {article_id}: {e.message}")
            self.notifier.error("Failed to move article to trash")
            return False

        self.notifier.success("Article moved to trash")
        if self.selection.selected_id == article_id:
            self.selection.clear()
        await self.listing.load_page()
        return True

    def _can_submit(self, name: str, modal: ModalState) -> bool:
        if not modal.is_open:
            self.logger.warning(f"Submit ignored: {name} is not open")
            return False
        if modal.submitting:
            self.logger.warning(f"Submit ignored: {name} request already in flight")
            return False

        try:
            modal.draft.ensure_complete()
        except MissingFieldsError as e:
            self.logger.info(f"Submit blocked on {name}: {e.message}")
            self.notifier.error(f"Please fill in: {', '.join(e.fields)}")
            return False
        return True

    def _update_draft(self, name: str, fields: dict) -> ArticleDraft:
        modal: ModalState = getattr(self.state, name)
        if not modal.is_open:
            raise InvalidParameterError("modal", name, "モーダルが開かれていません")

        unknown = [key for key in fields if key not in ArticleDraft.model_fields]
        if unknown:
            raise InvalidParameterError("fields", unknown, "編集できない項目です")

        try:
            draft = ArticleDraft(**{**modal.draft.model_dump(), **fields})
        except PydanticValidationError as e:
            raise InvalidParameterError("fields", fields, str(e)) from e

        if draft.status not in modal.status_options:
            raise InvalidParameterError("status", draft.status.value, "このモーダルでは選択できません")

        setattr(self.state, name, modal.model_copy(update={"draft": draft}))
        self._changed()
        return draft

    def _reset_modal(self, name: str, is_open: bool = False) -> None:
        setattr(self.state, name, ModalState(is_open=is_open, status_options=_STATUS_OPTIONS[name]))
        self._changed()

    def _set_submitting(self, name: str, submitting: bool) -> None:
        modal: ModalState = getattr(self.state, name)
        setattr(self.state, name, modal.model_copy(update={"submitting": submitting}))
        self._changed()

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
