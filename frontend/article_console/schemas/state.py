from pydantic import BaseModel, Field
from typing import List, Optional, Tuple

from article_console.core.config import settings
from article_console.models.article import StatusEnum, ADD_STATUS_OPTIONS, EDIT_STATUS_OPTIONS
from article_console.schemas.article import Article, ArticleDraft, Paging


# 画面状態のスキーマ（シリアライズ可能な状態レコード）
class ListState(BaseModel):
    active_tab: StatusEnum = StatusEnum.publish
    current_page: int = Field(1, ge=1)
    page_size: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE, ge=1)
    articles: List[Article] = Field(default_factory=list)
    paging: Paging = Field(default_factory=Paging)


class SelectionState(BaseModel):
    selected: Optional[Article] = None  # 一覧で選択中の記事（ハイライト用）
    preview: Optional[Article] = None   # 詳細APIから取得したプレビュー


class ModalState(BaseModel):
    is_open: bool = False
    draft: ArticleDraft = Field(default_factory=ArticleDraft)
    target: Optional[Article] = None  # 編集対象（編集モーダルのみ）
    submitting: bool = False
    status_options: Tuple[StatusEnum, ...] = ADD_STATUS_OPTIONS


class ConsoleState(BaseModel):
    listing: ListState = Field(default_factory=ListState)
    selection: SelectionState = Field(default_factory=SelectionState)
    add_modal: ModalState = Field(
        default_factory=lambda: ModalState(status_options=ADD_STATUS_OPTIONS)
    )
    edit_modal: ModalState = Field(
        default_factory=lambda: ModalState(status_options=EDIT_STATUS_OPTIONS)
    )
