# モデルのインポート
from article_console.models.article import (
    StatusEnum,
    TAB_LABELS,
    ADD_STATUS_OPTIONS,
    EDIT_STATUS_OPTIONS
)

# すべてのモデルをエクスポート
__all__ = [
    "StatusEnum",
    "TAB_LABELS",
    "ADD_STATUS_OPTIONS",
    "EDIT_STATUS_OPTIONS"
]
