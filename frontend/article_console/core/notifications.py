"""
画面に表示する一時的な通知（トースト）の管理
"""
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Callable, Deque, List, Optional
import enum

from article_console.core.config import settings
from article_console.core.logging import get_logger


class NotificationLevel(enum.Enum):
    success = "success"
    error = "error"
    info = "info"


@dataclass(frozen=True)
class Notification:
    """ユーザーに表示する通知"""
    level: NotificationLevel
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


NotificationListener = Callable[[Notification], None]


class Notifier:
    """通知の発行と履歴の保持"""
    logger = get_logger(__name__)

    def __init__(self, history_limit: Optional[int] = None):
        self._history: Deque[Notification] = deque(
            maxlen=history_limit or settings.NOTIFICATION_HISTORY_LIMIT
        )
        self._listeners: List[NotificationListener] = []

    @property
    def history(self) -> List[Notification]:
        return list(self._history)

    @property
    def latest(self) -> Optional[Notification]:
        return self._history[-1] if self._history else None

    def subscribe(self, listener: NotificationListener) -> None:
        """通知リスナーを登録"""
        self._listeners.append(listener)

    def clear(self) -> None:
        self._history.clear()

    def success(self, message: str) -> Notification:
        return self._publish(NotificationLevel.success, message)

    def error(self, message: str) -> Notification:
        return self._publish(NotificationLevel.error, message)

    def info(self, message: str) -> Notification:
        return self._publish(NotificationLevel.info, message)

    def _publish(self, level: NotificationLevel, message: str) -> Notification:
        notification = Notification(level=level, message=message)
        self._history.append(notification)

        if level is NotificationLevel.error:
            self.logger.error(f"Notification ({level.value}): {message}")
        else:
            self.logger.info(f"Notification ({level.value}): {message}")

        for listener in self._listeners:
            listener(notification)
        return notification
