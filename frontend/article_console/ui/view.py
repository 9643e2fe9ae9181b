"""
ViewModels for the article console.

描画層が必要とするデータを、表示用の整形を済ませた状態で提供する。
描画層はこの値をそのまま表示し、ユーザー操作を ArticleConsole に渡す。
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional

from article_console.models import StatusEnum, TAB_LABELS
from article_console.schemas import Article, ConsoleState

EMPTY_TABLE_MESSAGE = "No articles found"


def filter_by_status(articles: Iterable[Article], status: StatusEnum) -> List[Article]:
    """表示対象の記事をステータスで絞り込む（取得済みページ内のみ）"""
    return [article for article in articles if article.status == status]


def format_created_date(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.date().isoformat()


@dataclass(frozen=True)
class TabView:
    status: StatusEnum
    label: str
    active: bool


@dataclass(frozen=True)
class ArticleRowView:
    id: str
    title: str
    category: str
    selected: bool


@dataclass(frozen=True)
class PaginationView:
    page: int
    total_page: int
    total_item: int
    info: str  # 例: "Page 1 of 3 (25 items)"
    previous_disabled: bool
    next_disabled: bool


@dataclass(frozen=True)
class PreviewView:
    id: str
    title: str
    category: str
    created_date: str
    body: str


@dataclass(frozen=True)
class ConsoleView:
    tabs: List[TabView] = field(default_factory=list)
    rows: List[ArticleRowView] = field(default_factory=list)
    empty_message: Optional[str] = None
    pagination: Optional[PaginationView] = None
    preview: Optional[PreviewView] = None
    with_preview: bool = False
    add_modal_open: bool = False
    edit_modal_open: bool = False


def build_console_view(state: ConsoleState) -> ConsoleView:
    listing = state.listing
    selection = state.selection
    selected_id = selection.selected.id if selection.selected else None

    tabs = [
        TabView(status=status, label=label, active=status == listing.active_tab)
        for status, label in TAB_LABELS.items()
    ]

    rows = [
        ArticleRowView(
            id=article.id,
            title=article.title,
            category=article.category,
            selected=article.id == selected_id
        )
        for article in filter_by_status(listing.articles, listing.active_tab)
    ]

    pagination = None
    paging = listing.paging
    if paging.total_page > 1:
        pagination = PaginationView(
            page=paging.page,
            total_page=paging.total_page,
            total_item=paging.total_item,
            info=f"Page {paging.page} of {paging.total_page} ({paging.total_item} items)",
            previous_disabled=listing.current_page == 1,
            next_disabled=listing.current_page == paging.total_page
        )

    # 選択中の記事の詳細が揃ったときだけプレビューを出す
    preview = None
    if (
        selection.selected is not None
        and selection.preview is not None
        and selection.preview.id == selection.selected.id
    ):
        detail = selection.preview
        preview = PreviewView(
            id=detail.id,
            title=detail.title,
            category=detail.category,
            created_date=format_created_date(detail.created_date),
            body=detail.content
        )

    return ConsoleView(
        tabs=tabs,
        rows=rows,
        empty_message=None if rows else EMPTY_TABLE_MESSAGE,
        pagination=pagination,
        preview=preview,
        with_preview=selection.selected is not None,
        add_modal_open=state.add_modal.is_open,
        edit_modal_open=state.edit_modal.is_open
    )
