class GenerationCounter:
    """非同期処理の世代トークン（古い応答の破棄に使う）"""

    def __init__(self) -> None:
        self._value = 0

    @property
    def current(self) -> int:
        return self._value

    def advance(self) -> int:
        """世代を進めて新しいトークンを返す"""
        self._value += 1
        return self._value

    def is_current(self, token: int) -> bool:
        return token == self._value
