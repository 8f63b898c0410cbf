"""
国际象棋规则引擎

实现走法合法性验证、将军检测和终局状态（将死、逼和）检测。
"""

from enum import Enum
from typing import List

from .chess_board import ChessBoard
from .move import BOARD_SIZE, Move, MoveOutcome, Position, ensure_on_board
from .move_executor import MoveExecutor
from .movement import PieceMovementRules
from .piece import PieceColor
from ..utils.logger import LoggerMixin


class GameStatus(Enum):
    """轮到走棋一方的局面状态"""
    ONGOING = "ongoing"        # 对局进行中
    CHECK = "check"            # 被将军
    CHECKMATE = "checkmate"    # 被将死
    STALEMATE = "stalemate"    # 逼和

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE)


class RuleEngine(LoggerMixin):
    """
    国际象棋规则引擎

    分两层判断走法：
    - can_piece_reach: 只看棋子走法和路径，不做将军检查
    - is_legal_move: 在 can_piece_reach 之上，模拟走子后检查己方王是否被将军

    攻击检测只使用第一层，从不调用 is_legal_move。
    引擎本身不保存任何对局状态，所有状态都在调用方传入的棋盘里，
    因此可以在多个线程中同时使用（每个线程使用自己的棋盘）。
    """

    def __init__(self):
        """初始化规则引擎"""
        self.movement = PieceMovementRules(check_detector=self.is_in_check)
        self.executor = MoveExecutor()

    # ==================== 几何可达性 ====================

    def can_piece_reach(self, board: ChessBoard, from_pos: Position, to_pos: Position) -> bool:
        """
        判断起点棋子能否到达目标格（不考虑走后是否被将军）

        Args:
            board: 棋盘状态
            from_pos: 起始位置
            to_pos: 目标位置

        Returns:
            bool: 是否可达
        """
        return self.movement.can_piece_reach(board, from_pos, to_pos)

    # ==================== 将军检测 ====================

    def is_square_attacked(self, board: ChessBoard, square: Position, by_color: PieceColor) -> bool:
        """
        检查指定格子是否受到某方棋子攻击

        Args:
            board: 棋盘状态
            square: 目标格子
            by_color: 攻击方颜色

        Returns:
            bool: 是否受到攻击
        """
        square = ensure_on_board(square)

        for pos, _ in board.get_all_pieces(by_color):
            # 易位不是吃子，攻击检测不考虑易位
            if self.movement.can_piece_reach(board, pos, square, include_castling=False):
                return True

        return False

    def is_in_check(self, board: ChessBoard, color: PieceColor) -> bool:
        """
        检查指定颜色的王是否被将军

        Args:
            board: 棋盘状态
            color: 王的颜色

        Returns:
            bool: 是否被将军；棋盘上没有该方的王时返回False
        """
        king_pos = board.find_king(color)
        if king_pos is None:
            return False

        return self.is_square_attacked(board, king_pos, color.opponent)

    # ==================== 合法性验证 ====================

    def is_legal_move(self, board: ChessBoard, from_pos: Position, to_pos: Position,
                      mover: PieceColor) -> bool:
        """
        验证走法是否合法

        Args:
            board: 当前棋盘状态
            from_pos: 起始位置
            to_pos: 目标位置
            mover: 走棋方

        Returns:
            bool: 是否合法

        Raises:
            InvalidPositionError: 坐标越界
        """
        from_pos = ensure_on_board(from_pos)
        to_pos = ensure_on_board(to_pos)

        # 不能原地不动
        if from_pos == to_pos:
            return False

        # 起点必须有走棋方的棋子
        piece = board.piece_at(from_pos)
        if piece is None or piece.color != mover:
            return False

        # 不能吃己方棋子
        if board.is_own_piece(to_pos, mover):
            return False

        if not self.movement.can_piece_reach(board, from_pos, to_pos):
            return False

        # 模拟走子，检查走后己方王是否被将军（易位同样需要检查）
        return not self._would_be_in_check(board, from_pos, to_pos, mover)

    def _would_be_in_check(self, board: ChessBoard, from_pos: Position, to_pos: Position,
                           mover: PieceColor) -> bool:
        """
        检查执行走法后是否会导致自己被将军

        在棋盘副本上执行，不修改原棋盘。
        """
        outcome = self.executor.apply_move(board, from_pos, to_pos)
        return self.is_in_check(outcome.resulting_board, mover)

    def get_legal_destinations(self, board: ChessBoard, from_pos: Position,
                               mover: PieceColor) -> List[Position]:
        """
        获取指定棋子所有合法的目标格（用于界面高亮）

        Args:
            board: 棋盘状态
            from_pos: 棋子位置
            mover: 走棋方

        Returns:
            List[Tuple[int, int]]: 合法目标格列表，按行优先顺序
        """
        from_pos = ensure_on_board(from_pos)
        return [
            (row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.is_legal_move(board, from_pos, (row, col), mover)
        ]

    def generate_legal_moves(self, board: ChessBoard, color: PieceColor) -> List[Move]:
        """
        生成指定颜色的所有合法走法

        遍历己方每个棋子与全部64个目标格的组合。

        Args:
            board: 当前棋盘状态
            color: 走棋方

        Returns:
            List[Move]: 合法走法列表
        """
        legal_moves = []
        for from_pos, _ in board.get_all_pieces(color):
            for to_pos in self.get_legal_destinations(board, from_pos, color):
                legal_moves.append(Move(from_pos=from_pos, to_pos=to_pos))

        self.log_debug(f"{color.display_name}共有 {len(legal_moves)} 个合法走法")
        return legal_moves

    def has_any_legal_move(self, board: ChessBoard, color: PieceColor) -> bool:
        """
        检查指定颜色是否还有任何合法走法

        找到第一个合法走法即返回。
        """
        for from_pos, _ in board.get_all_pieces(color):
            for row in range(BOARD_SIZE):
                for col in range(BOARD_SIZE):
                    if self.is_legal_move(board, from_pos, (row, col), color):
                        return True
        return False

    # ==================== 终局检测 ====================

    def is_checkmate(self, board: ChessBoard, color: PieceColor) -> bool:
        """
        检查指定颜色是否被将死

        Args:
            board: 棋盘状态
            color: 被检查的一方

        Returns:
            bool: 被将军且没有合法走法
        """
        if not self.is_in_check(board, color):
            return False
        return not self.has_any_legal_move(board, color)

    def is_stalemate(self, board: ChessBoard, color: PieceColor) -> bool:
        """
        检查指定颜色是否被逼和

        Args:
            board: 棋盘状态
            color: 被检查的一方

        Returns:
            bool: 未被将军但没有合法走法
        """
        if self.is_in_check(board, color):
            return False
        return not self.has_any_legal_move(board, color)

    def get_game_status(self, board: ChessBoard, color: PieceColor) -> GameStatus:
        """
        获取轮到走棋一方的局面状态

        Args:
            board: 棋盘状态
            color: 轮到走棋的一方

        Returns:
            GameStatus: 局面状态
        """
        in_check = self.is_in_check(board, color)
        has_moves = self.has_any_legal_move(board, color)

        if in_check and not has_moves:
            return GameStatus.CHECKMATE
        if not has_moves:
            return GameStatus.STALEMATE
        if in_check:
            return GameStatus.CHECK
        return GameStatus.ONGOING

    # ==================== 走法执行 ====================

    def apply_move(self, board: ChessBoard, from_pos: Position, to_pos: Position) -> MoveOutcome:
        """
        执行走法（不校验合法性），见 MoveExecutor.apply_move
        """
        return self.executor.apply_move(board, from_pos, to_pos)
