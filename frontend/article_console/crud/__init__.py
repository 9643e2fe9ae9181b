# CRUD操作のインポート
from article_console.crud.article import article_crud, ArticleCRUD

# すべてのCRUDをエクスポート
__all__ = [
    "article_crud",
    "ArticleCRUD"
]
