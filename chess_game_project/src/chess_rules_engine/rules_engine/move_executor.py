"""
走法执行器

在棋盘副本上执行走法，处理兵的升变、王车易位时车的移动和"已移动"标记。
"""

from .chess_board import ChessBoard
from .move import BOARD_SIZE, MoveOutcome, Position, ensure_on_board
from .piece import PieceColor, PieceType, TRACKED_PIECE_TYPES
from ..utils.logger import LoggerMixin


class MoveExecutor(LoggerMixin):
    """
    走法执行器

    不做合法性校验：调用方必须先通过 RuleEngine.is_legal_move 确认走法合法。
    传入的棋盘不会被修改，结果总是新的棋盘副本。
    """

    # 各方兵的升变行
    PROMOTION_ROWS = {PieceColor.WHITE: 0, PieceColor.BLACK: BOARD_SIZE - 1}

    def apply_move(self, board: ChessBoard, from_pos: Position, to_pos: Position) -> MoveOutcome:
        """
        执行走法，返回新的棋盘状态和被吃掉的棋子

        起点为空或起点与终点相同时返回未改动的副本。

        Args:
            board: 当前棋盘状态（不会被修改）
            from_pos: 起始位置
            to_pos: 目标位置

        Returns:
            MoveOutcome: 新棋盘和被吃掉的棋子

        Raises:
            InvalidPositionError: 坐标越界
        """
        from_pos = ensure_on_board(from_pos)
        to_pos = ensure_on_board(to_pos)

        new_board = board.clone()
        piece = new_board.piece_at(from_pos)
        captured_piece = new_board.piece_at(to_pos)

        if piece is None or from_pos == to_pos:
            return MoveOutcome(resulting_board=new_board, captured_piece=None)

        # 兵、王、车记录已移动
        if piece.piece_type in TRACKED_PIECE_TYPES:
            piece = piece.moved()

        # 兵到达底线自动升变为后
        if piece.piece_type == PieceType.PAWN and to_pos[0] == self.PROMOTION_ROWS[piece.color]:
            piece = piece.promoted(PieceType.QUEEN)
            self.log_debug(f"兵升变: {to_pos}")

        # 王车易位：把车移动到王经过的格子
        if piece.piece_type == PieceType.KING and abs(to_pos[1] - from_pos[1]) == 2:
            self._relocate_castling_rook(new_board, from_pos, to_pos)

        new_board.set_piece(to_pos, piece)
        new_board.set_piece(from_pos, None)

        return MoveOutcome(resulting_board=new_board, captured_piece=captured_piece)

    def _relocate_castling_rook(self, board: ChessBoard, from_pos: Position, to_pos: Position):
        """移动易位一侧的车并标记为已移动"""
        row, king_col = from_pos
        is_king_side = to_pos[1] > king_col
        rook_col = BOARD_SIZE - 1 if is_king_side else 0
        new_rook_col = king_col + 1 if is_king_side else king_col - 1

        rook = board.remove_piece((row, rook_col))
        if rook is not None:
            board.set_piece((row, new_rook_col), rook.moved())
        self.log_debug(f"王车易位: 车 {(row, rook_col)} -> {(row, new_rook_col)}")
