from contextlib import asynccontextmanager
import asyncio
from typing import AsyncIterator, Optional

from article_console.core.config import settings
from article_console.core.logging import app_logger
from article_console.remote.session import ApiSession
from article_console.state.console import ArticleConsole


@asynccontextmanager
async def lifespan(session: Optional[ApiSession] = None) -> AsyncIterator[ArticleConsole]:
    """コンソールのライフサイクルを管理"""
    session = session or ApiSession()

    # 起動の処理
    try:
        client = await session.open()
        app_logger.info(f"API session opened: {session.base_url}")
    except Exception as e:
        app_logger.error(f"Initialization failed: {str(e)}")
        raise

    console = ArticleConsole(client)
    try:
        await console.start()
        yield console  # コンソールの実行中
    finally:
        # シャットダウンの処理
        app_logger.info("Shutting down console...")
        try:
            await session.close()
        except Exception as e:
            app_logger.error(f"Error closing API session: {str(e)}")


async def main() -> None:
    async with lifespan() as console:
        view = console.view()
        listing = console.state.listing
        app_logger.info(
            f"Tab '{listing.active_tab.value}': {len(view.rows)} rows shown "
            f"(page {listing.paging.page} of {listing.paging.total_page}, "
            f"{listing.paging.total_item} items)"
        )
        for row in view.rows:
            app_logger.info(f"  [{row.id}] {row.title} / {row.category}")


if __name__ == "__main__":
    # アプリケーション起動時のログ
    app_logger.info(
        f"Starting {settings.APP_NAME} in {settings.ENVIRONMENT} mode "
        f"(Log level: {settings.LOG_LEVEL})"
    )

    asyncio.run(main())
