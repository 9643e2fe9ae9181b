from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # 環境設定
    ENVIRONMENT: Literal["development", "testing", "production"] = "development"

    # アプリケーション設定
    APP_NAME: str = "記事管理コンソール"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True

    # ロギング設定
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: str = "logs/article_console.log"

    # バックエンドAPI設定
    BACKEND_URL: str = "http://localhost:8001"
    API_PREFIX: str = "/api"
    ARTICLE_PATH: str = "/article"
    ARTICLE_CREATE_PATH: str = "/articles"  # 作成だけ複数形のパス
    REQUEST_TIMEOUT: Optional[float] = 30.0

    # ページネーション設定
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    SERVER_SIDE_STATUS_FILTER: bool = False

    # 画面設定
    PREVIEW_PATH_TEMPLATE: str = "/preview/{id}"
    NOTIFICATION_HISTORY_LIMIT: int = 50

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @property
    def api_base_url(self) -> str:
        """APIのベースURL"""
        return self.BACKEND_URL.rstrip("/") + self.API_PREFIX


settings = Settings()
