"""
工具模块

包含日志、异常处理和其他通用工具。
"""

from .logger import setup_logger, configure_logging, get_logger, LoggerMixin
from .exceptions import (
    ChessEngineError, InvalidPositionError, InvalidMoveError,
    GameStateError, ConfigurationError
)

__all__ = [
    'setup_logger', 'configure_logging', 'get_logger', 'LoggerMixin',
    'ChessEngineError', 'InvalidPositionError', 'InvalidMoveError',
    'GameStateError', 'ConfigurationError'
]
