"""
国际象棋规则引擎

标准国际象棋的走子规则、将军检测、将死与逼和判定，
以及在其之上的对局会话管理和随机走子AI。
"""

__version__ = "0.1.0"
__author__ = "Chess Game Team"

# 导入核心组件
from .rules_engine import ChessBoard, Move, Piece, PieceType, PieceColor, RuleEngine, GameStatus
from .game_interface import GameInterface, RandomChessAI
from .config import ConfigManager, GameConfig, AIConfig, SystemConfig
from .utils import setup_logger, get_logger, ChessEngineError

__all__ = [
    "__version__", "__author__",
    "ChessBoard", "Move", "Piece", "PieceType", "PieceColor", "RuleEngine", "GameStatus",
    "GameInterface", "RandomChessAI",
    "ConfigManager", "GameConfig", "AIConfig", "SystemConfig",
    "setup_logger", "get_logger", "ChessEngineError"
]
