"""
游戏接口模块

包含对局会话管理、随机走子AI和走法记法。
"""

from .chess_ai import RandomChessAI
from .game_interface import (
    GameInterface, GameSession, GameMode, GameResult, MoveRecord
)
from .notation import (
    PIECE_SYMBOLS, PIECE_LETTERS, get_piece_symbol, format_move, format_move_history
)

__all__ = [
    'RandomChessAI',
    'GameInterface', 'GameSession', 'GameMode', 'GameResult', 'MoveRecord',
    'PIECE_SYMBOLS', 'PIECE_LETTERS', 'get_piece_symbol', 'format_move', 'format_move_history'
]
