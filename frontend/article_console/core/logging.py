import logging
import os
import sys
from typing import Optional

import httpx

from article_console.core.config import settings


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """ルートロガーの設定（一度だけ実行）"""
    global _configured
    if _configured:
        return

    root_logger = logging.getLogger("article_console")
    root_logger.setLevel(level or settings.LOG_LEVEL)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # ファイルログが有効な場合
    if settings.LOG_TO_FILE:
        log_dir = os.path.dirname(settings.LOG_FILE_PATH)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        file_handler = logging.FileHandler(settings.LOG_FILE_PATH, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """モジュール用のロガーを取得"""
    setup_logging()
    if not name.startswith("article_console"):
        name = f"article_console.{name}"
    return logging.getLogger(name)


class RequestLoggerAdapter(logging.LoggerAdapter):
    """メッセージの先頭にリクエストIDを付与するアダプター"""

    def process(self, msg, kwargs):
        return f"[{self.extra['request_id']}] {msg}", kwargs


def get_request_logger(request: httpx.Request) -> RequestLoggerAdapter:
    """リクエストIDを付与したロガーを取得"""
    request_id = request.headers.get("X-Request-ID", "-")
    return RequestLoggerAdapter(
        get_logger("article_console.remote"),
        {"request_id": request_id}
    )


app_logger = get_logger("article_console.app")
