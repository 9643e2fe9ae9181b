from typing import Any, Dict, List, Optional


class ArticleConsoleException(Exception):
    """記事管理コンソールの基底例外クラス"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.details = details or {}
        self.error_code = error_code
        super().__init__(self.message)


class ValidationError(ArticleConsoleException):
    """バリデーションエラー"""
    pass


class RemoteOperationError(ArticleConsoleException):
    """リモート操作の失敗（通信エラー、非2xx応答、不正な応答を含む）"""
    pass


# 具体的な例外クラス
class RemoteStatusError(RemoteOperationError):
    """APIが2xx以外のステータスを返したエラー"""

    def __init__(
        self,
        method: str,
        url: str,
        status_code: int,
        message: Optional[str] = None,
        error_code: str = "REMOTE_STATUS_ERROR"
    ):
        message = message or f"{method} {url} がステータス {status_code} を返しました"
        details = {"method": method, "url": url, "status_code": status_code}
        super().__init__(message=message, details=details, error_code=error_code)
        self.status_code = status_code


class ArticleNotFoundError(RemoteStatusError):
    """記事が見つからないエラー"""

    def __init__(self, article_id: str, method: str = "GET", url: str = ""):
        super().__init__(
            method=method,
            url=url,
            status_code=404,
            message=f"記事ID '{article_id}' が見つかりません",
            error_code="ARTICLE_NOT_FOUND"
        )
        self.details["article_id"] = article_id


class RemoteConnectionError(RemoteOperationError):
    """APIに接続できないエラー"""

    def __init__(self, method: str, url: str, reason: str):
        message = f"{method} {url} の通信に失敗しました: {reason}"
        details = {"method": method, "url": url, "reason": reason}
        super().__init__(message=message, details=details, error_code="REMOTE_CONNECTION_ERROR")


class MalformedResponseError(RemoteOperationError):
    """APIの応答形式が不正なエラー"""

    def __init__(self, url: str, reason: str):
        message = f"{url} の応答が不正です: {reason}"
        details = {"url": url, "reason": reason}
        super().__init__(message=message, details=details, error_code="MALFORMED_RESPONSE")


class SessionNotOpenError(ArticleConsoleException):
    """HTTPセッションが開かれていないエラー"""

    def __init__(self, message: str = "HTTPセッションが開かれていません"):
        super().__init__(message=message, error_code="SESSION_NOT_OPEN")


class InvalidParameterError(ValidationError):
    """無効なパラメータエラー"""
    def __init__(self, parameter: str, value: Any, reason: str):
        message = f"パラメータ '{parameter}' の値 '{value}' が無効です: {reason}"
        details = {"parameter": parameter, "value": value, "reason": reason}
        super().__init__(message=message, details=details, error_code="INVALID_PARAMETER")


class MissingFieldsError(ValidationError):
    """必須項目の未入力エラー"""
    def __init__(self, fields: List[str]):
        message = f"必須項目が入力されていません: {', '.join(fields)}"
        details = {"fields": fields}
        super().__init__(message=message, details=details, error_code="MISSING_FIELDS")
        self.fields = fields
