"""
棋子走法规则

按棋子类型判断一步走法在几何上是否可达，不考虑走完后己方王是否被将军。
"""

from typing import Callable, Optional

from .chess_board import ChessBoard
from .move import Position, ensure_on_board
from .piece import PieceColor, PieceType


# 检测某方王是否被将军的函数，由规则引擎注入
CheckDetector = Callable[[ChessBoard, PieceColor], bool]


class PieceMovementRules:
    """
    棋子走法规则

    can_piece_reach 只做几何判断和路径阻挡检查。王车易位需要
    "王不在将军中、不经过被攻击的格子"两项检查，这两项通过注入的
    check_detector 完成；攻击检测调用本类时关闭易位判断，
    因此不会与将军检测互相递归。
    """

    def __init__(self, check_detector: Optional[CheckDetector] = None):
        """
        初始化走法规则

        Args:
            check_detector: 判断某方王是否被将军的函数，为None时不允许易位
        """
        self.check_detector = check_detector

        # 各方兵的前进方向和起始行
        self.pawn_directions = {PieceColor.WHITE: -1, PieceColor.BLACK: 1}
        self.pawn_start_rows = {PieceColor.WHITE: 6, PieceColor.BLACK: 1}

        self.knight_offsets = {
            (2, 1), (2, -1), (-2, 1), (-2, -1),
            (1, 2), (1, -2), (-1, 2), (-1, -2)
        }

        self._dispatch = {
            PieceType.PAWN: self.can_pawn_reach,
            PieceType.ROOK: self.can_rook_reach,
            PieceType.KNIGHT: self.can_knight_reach,
            PieceType.BISHOP: self.can_bishop_reach,
            PieceType.QUEEN: self.can_queen_reach,
        }

    def can_piece_reach(self, board: ChessBoard, from_pos: Position, to_pos: Position,
                        include_castling: bool = True) -> bool:
        """
        判断起点上的棋子能否在几何上到达目标格

        Args:
            board: 棋盘状态
            from_pos: 起始位置
            to_pos: 目标位置
            include_castling: 是否把王车易位算作可达

        Returns:
            bool: 是否可达
        """
        from_pos = ensure_on_board(from_pos)
        to_pos = ensure_on_board(to_pos)

        if from_pos == to_pos:
            return False

        piece = board.piece_at(from_pos)
        if piece is None:
            return False

        # 不能吃己方棋子
        if board.is_own_piece(to_pos, piece.color):
            return False

        if piece.piece_type == PieceType.KING:
            return self.can_king_reach(board, from_pos, to_pos, include_castling)

        return self._dispatch[piece.piece_type](board, from_pos, to_pos)

    # ==================== 各棋子规则 ====================

    def can_pawn_reach(self, board: ChessBoard, from_pos: Position, to_pos: Position) -> bool:
        """兵：只能前进；首步可走两格；斜向一格只能吃子"""
        piece = board.piece_at(from_pos)
        from_row, from_col = from_pos
        to_row, to_col = to_pos
        direction = self.pawn_directions[piece.color]
        start_row = self.pawn_start_rows[piece.color]

        # 前进一格
        if to_col == from_col and to_row == from_row + direction:
            return board.is_empty(to_pos)

        # 从起始行前进两格，中间格和目标格都必须为空
        if to_col == from_col and from_row == start_row and to_row == from_row + 2 * direction:
            return board.is_empty((from_row + direction, from_col)) and board.is_empty(to_pos)

        # 斜向吃子
        if abs(to_col - from_col) == 1 and to_row == from_row + direction:
            return not board.is_empty(to_pos)

        return False

    def can_rook_reach(self, board: ChessBoard, from_pos: Position, to_pos: Position) -> bool:
        """车：同行或同列，中间无子"""
        if from_pos[0] != to_pos[0] and from_pos[1] != to_pos[1]:
            return False
        return self._is_path_clear(board, from_pos, to_pos)

    def can_knight_reach(self, board: ChessBoard, from_pos: Position, to_pos: Position) -> bool:
        """马：日字，可越子"""
        offset = (to_pos[0] - from_pos[0], to_pos[1] - from_pos[1])
        return offset in self.knight_offsets

    def can_bishop_reach(self, board: ChessBoard, from_pos: Position, to_pos: Position) -> bool:
        """象：斜线，中间无子"""
        if abs(to_pos[0] - from_pos[0]) != abs(to_pos[1] - from_pos[1]):
            return False
        return self._is_path_clear(board, from_pos, to_pos)

    def can_queen_reach(self, board: ChessBoard, from_pos: Position, to_pos: Position) -> bool:
        """后：车或象的走法"""
        return (self.can_rook_reach(board, from_pos, to_pos) or
                self.can_bishop_reach(board, from_pos, to_pos))

    def can_king_reach(self, board: ChessBoard, from_pos: Position, to_pos: Position,
                       include_castling: bool = True) -> bool:
        """王：任意方向一格，或王车易位"""
        row_diff = abs(to_pos[0] - from_pos[0])
        col_diff = abs(to_pos[1] - from_pos[1])

        if row_diff <= 1 and col_diff <= 1:
            return True

        if include_castling and row_diff == 0 and col_diff == 2:
            return self.can_castle(board, from_pos, to_pos)

        return False

    def can_castle(self, board: ChessBoard, from_pos: Position, to_pos: Position) -> bool:
        """
        王车易位条件检查

        王和对应一侧的车都未移动过，两者之间的格子全空，
        王当前不在将军中，且王经过的格子不受攻击。
        目标格是否安全由规则引擎的走后将军检查负责。

        Args:
            board: 棋盘状态
            from_pos: 王的位置
            to_pos: 王的目标位置（同一行，相距两列）

        Returns:
            bool: 是否可以易位
        """
        king = board.piece_at(from_pos)
        if king is None or king.piece_type != PieceType.KING or king.has_moved:
            return False
        if self.check_detector is None:
            return False

        row, king_col = from_pos
        is_king_side = to_pos[1] > king_col
        rook_col = 7 if is_king_side else 0

        rook = board.piece_at((row, rook_col))
        if (rook is None or rook.piece_type != PieceType.ROOK or
                rook.color != king.color or rook.has_moved):
            return False

        # 王和车之间的格子必须全部为空
        low, high = sorted((king_col, rook_col))
        for col in range(low + 1, high):
            if not board.is_empty((row, col)):
                return False

        # 王当前不能被将军
        if self.check_detector(board, king.color):
            return False

        # 王经过的格子不能受攻击：把王放到该格上检测
        step = 1 if is_king_side else -1
        transit_board = board.clone()
        transit_board.set_piece(from_pos, None)
        transit_board.set_piece((row, king_col + step), king)
        if self.check_detector(transit_board, king.color):
            return False

        return True

    # ==================== 辅助方法 ====================

    def _is_path_clear(self, board: ChessBoard, from_pos: Position, to_pos: Position) -> bool:
        """
        检查直线或斜线路径上（不含两端）是否无子

        调用方需保证两点在同一行、同一列或同一斜线上。
        """
        row_step = (to_pos[0] > from_pos[0]) - (to_pos[0] < from_pos[0])
        col_step = (to_pos[1] > from_pos[1]) - (to_pos[1] < from_pos[1])

        row, col = from_pos[0] + row_step, from_pos[1] + col_step
        while (row, col) != tuple(to_pos):
            if not board.is_empty((row, col)):
                return False
            row += row_step
            col += col_step
        return True
