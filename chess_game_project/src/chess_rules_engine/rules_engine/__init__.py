"""
国际象棋规则引擎模块

包含棋盘表示、棋子走法规则、合法性验证、终局检测和走法执行。
"""

from .piece import Piece, PieceType, PieceColor
from .move import Move, MoveOutcome, Position, BOARD_SIZE, is_on_board, ensure_on_board, square_name, parse_square
from .chess_board import ChessBoard
from .movement import PieceMovementRules
from .move_executor import MoveExecutor
from .rule_engine import RuleEngine, GameStatus
from .board_validator import BoardValidator

__all__ = [
    'Piece', 'PieceType', 'PieceColor',
    'Move', 'MoveOutcome', 'Position', 'BOARD_SIZE',
    'is_on_board', 'ensure_on_board', 'square_name', 'parse_square',
    'ChessBoard', 'PieceMovementRules', 'MoveExecutor',
    'RuleEngine', 'GameStatus', 'BoardValidator'
]
