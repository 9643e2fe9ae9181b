# Article schemas
from .article import (
    ArticleBase,
    ArticleDraft,
    Article,
    Paging,
    ArticleListResponse,
    ArticleDetailResponse
)

# State schemas
from .state import (
    ListState,
    SelectionState,
    ModalState,
    ConsoleState
)

__all__ = [
    # Article schemas
    "ArticleBase",
    "ArticleDraft",
    "Article",
    "Paging",
    "ArticleListResponse",
    "ArticleDetailResponse",

    # State schemas
    "ListState",
    "SelectionState",
    "ModalState",
    "ConsoleState"
]
