from article_console.state.console import ArticleConsole
from article_console.state.listing import ArticleListManager
from article_console.state.mutations import ArticleMutationCoordinator
from article_console.state.selection import SelectionManager

__all__ = [
    "ArticleConsole",
    "ArticleListManager",
    "ArticleMutationCoordinator",
    "SelectionManager"
]
