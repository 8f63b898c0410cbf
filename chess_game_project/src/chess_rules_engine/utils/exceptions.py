"""
异常定义

走法是否合法由规则引擎以布尔值返回，不使用异常；
异常只用于格式错误的输入（越界坐标、无法解析的记法）、错误的会话操作和配置。
"""

from typing import Optional


def _describe(prefix: str, subject, reason: str = "") -> str:
    """拼接 "前缀: 对象 - 原因" 形式的错误信息"""
    message = f"{prefix}: {subject}"
    return f"{message} - {reason}" if reason else message


class ChessEngineError(Exception):
    """
    规则引擎基础异常

    error_code 默认取类属性，字符串形式为 "[错误代码] 信息"。
    """

    error_code = "CHESS_ENGINE_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class InvalidPositionError(ChessEngineError, ValueError):
    """坐标不在 8x8 棋盘内，或格子名无法解析"""

    error_code = "INVALID_POSITION"

    def __init__(self, position, reason: str = ""):
        super().__init__(_describe("无效的位置坐标", position, reason))
        self.position = position
        self.reason = reason


class InvalidMoveError(ChessEngineError):
    """走法记法无法解析"""

    error_code = "INVALID_MOVE"

    def __init__(self, move_str: str, reason: str = ""):
        super().__init__(_describe("无法解析的走法", move_str, reason))
        self.move_str = move_str
        self.reason = reason


class GameStateError(ChessEngineError):
    """会话不存在或会话配置无效"""

    error_code = "GAME_STATE_ERROR"

    def __init__(self, operation: str, reason: str = ""):
        super().__init__(_describe("游戏状态错误", operation, reason))
        self.operation = operation
        self.reason = reason


class ConfigurationError(ChessEngineError):
    """配置名称未知或配置内容无效"""

    error_code = "CONFIG_ERROR"

    def __init__(self, config_name: str, reason: str = ""):
        super().__init__(_describe("配置错误", config_name, reason))
        self.config_name = config_name
        self.reason = reason
