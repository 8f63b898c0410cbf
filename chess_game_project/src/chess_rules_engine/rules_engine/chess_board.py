"""
国际象棋棋盘数据结构

定义 8x8 棋盘的表示、基本访问操作和格式转换功能。
"""

import numpy as np
from typing import List, Optional, Tuple, Dict, Mapping

from .move import BOARD_SIZE, Position, ensure_on_board
from .piece import Piece, PieceType, PieceColor, TRACKED_PIECE_TYPES


class ChessBoard:
    """
    国际象棋棋盘类

    棋盘用两个 8x8 矩阵表示：
    - squares: 棋子编码，白方为正数，黑方为负数，0 为空格
    - moved: 对应格子上的棋子是否移动过

    第0行是黑方底线，第7行是白方底线。规则引擎把棋盘当作不可变的快照，
    只读取、从不修改传入的棋盘；set_piece/remove_piece 仅供调用方构造局面。
    """

    EMPTY = 0

    # 底线棋子排列 (a-h 列)
    BACK_RANK = [
        PieceType.ROOK, PieceType.KNIGHT, PieceType.BISHOP, PieceType.QUEEN,
        PieceType.KING, PieceType.BISHOP, PieceType.KNIGHT, PieceType.ROOK
    ]

    # 可视化时使用的棋子符号
    PIECE_SYMBOLS = {
        1: '♙', 2: '♖', 3: '♘', 4: '♗', 5: '♕', 6: '♔',
        -1: '♟', -2: '♜', -3: '♞', -4: '♝', -5: '♛', -6: '♚'
    }

    def __init__(self, setup: bool = True):
        """
        初始化棋盘

        Args:
            setup: 为True时摆出初始局面，否则为空棋盘
        """
        self.squares = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        self.moved = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=bool)

        if setup:
            self._setup_initial_position()

    def _setup_initial_position(self):
        """设置国际象棋初始局面"""
        for col, piece_type in enumerate(self.BACK_RANK):
            self.squares[0, col] = -int(piece_type)  # 黑方底线
            self.squares[7, col] = int(piece_type)   # 白方底线

        self.squares[1, :] = -int(PieceType.PAWN)
        self.squares[6, :] = int(PieceType.PAWN)
        self.moved[:, :] = False

    # ==================== 构造方法 ====================

    @classmethod
    def initial_setup(cls) -> 'ChessBoard':
        """
        创建标准初始局面

        白方底线在第7行，黑方在第0行，兵在第6/1行，所有棋子均未移动。
        """
        return cls(setup=True)

    @classmethod
    def empty(cls) -> 'ChessBoard':
        """创建空棋盘"""
        return cls(setup=False)

    @classmethod
    def from_pieces(cls, pieces: Mapping[Position, Piece]) -> 'ChessBoard':
        """
        从 {位置: 棋子} 映射创建棋盘

        Args:
            pieces: 位置到棋子的映射

        Returns:
            ChessBoard: 棋盘对象
        """
        board = cls.empty()
        for pos, piece in pieces.items():
            board.set_piece(pos, piece)
        return board

    @classmethod
    def from_matrix(cls, matrix: np.ndarray, moved: Optional[np.ndarray] = None) -> 'ChessBoard':
        """
        从矩阵创建棋盘对象

        Args:
            matrix: 8x8的棋子编码矩阵
            moved: 8x8的已移动标记矩阵，None表示全部未移动

        Returns:
            ChessBoard: 棋盘对象
        """
        matrix = np.asarray(matrix)
        if matrix.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"棋盘矩阵尺寸错误: {matrix.shape}, 应为(8, 8)")
        if np.abs(matrix).max(initial=0) > int(PieceType.KING):
            raise ValueError("棋盘矩阵包含无效的棋子编码")

        board = cls.empty()
        board.squares = matrix.astype(np.int8).copy()
        if moved is not None:
            moved = np.asarray(moved, dtype=bool)
            if moved.shape != (BOARD_SIZE, BOARD_SIZE):
                raise ValueError(f"移动标记矩阵尺寸错误: {moved.shape}, 应为(8, 8)")
            # 只保留兵、车、王的移动标记，与 set_piece 一致
            tracked = np.isin(np.abs(board.squares), [int(t) for t in TRACKED_PIECE_TYPES])
            board.moved = moved & tracked
        return board

    def to_matrix(self) -> np.ndarray:
        """
        转换为矩阵格式

        Returns:
            np.ndarray: 8x8的棋子编码矩阵副本
        """
        return self.squares.copy()

    # ==================== 读取操作 ====================

    def piece_at(self, pos: Position) -> Optional[Piece]:
        """
        获取指定位置的棋子

        Args:
            pos: 位置坐标 (行, 列)

        Returns:
            Optional[Piece]: 棋子，空格返回None

        Raises:
            InvalidPositionError: 坐标越界
        """
        row, col = ensure_on_board(pos)
        code = int(self.squares[row, col])
        if code == self.EMPTY:
            return None
        return Piece.from_code(code, bool(self.moved[row, col]))

    def is_empty(self, pos: Position) -> bool:
        """检查指定位置是否为空"""
        row, col = ensure_on_board(pos)
        return self.squares[row, col] == self.EMPTY

    def is_enemy_piece(self, pos: Position, color: PieceColor) -> bool:
        """检查指定位置是否为敌方棋子"""
        row, col = ensure_on_board(pos)
        code = self.squares[row, col]
        return code != self.EMPTY and (code > 0) != (color.value > 0)

    def is_own_piece(self, pos: Position, color: PieceColor) -> bool:
        """检查指定位置是否为己方棋子"""
        row, col = ensure_on_board(pos)
        code = self.squares[row, col]
        return code != self.EMPTY and (code > 0) == (color.value > 0)

    def find_king(self, color: PieceColor) -> Optional[Position]:
        """
        找到指定颜色的王的位置

        按行优先顺序返回第一个匹配。

        Args:
            color: 棋子颜色

        Returns:
            Optional[Tuple[int, int]]: 王的位置，如果找不到返回None
        """
        king_code = int(PieceType.KING) * color.value
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if self.squares[row, col] == king_code:
                    return (row, col)
        return None

    def get_all_pieces(self, color: Optional[PieceColor] = None) -> List[Tuple[Position, Piece]]:
        """
        获取所有棋子的位置和棋子

        Args:
            color: 指定颜色，None表示获取所有棋子

        Returns:
            List[Tuple[Tuple[int, int], Piece]]: [(位置, 棋子), ...]，按行优先顺序
        """
        pieces = []
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                code = self.squares[row, col]
                if code == self.EMPTY:
                    continue
                if color is None or (code > 0) == (color.value > 0):
                    pieces.append(((row, col), Piece.from_code(int(code), bool(self.moved[row, col]))))
        return pieces

    def count_pieces(self, color: Optional[PieceColor] = None) -> Dict[PieceType, int]:
        """
        统计棋子数量

        Returns:
            Dict[PieceType, int]: {棋子类型: 数量}
        """
        counts: Dict[PieceType, int] = {}
        for _, piece in self.get_all_pieces(color):
            counts[piece.piece_type] = counts.get(piece.piece_type, 0) + 1
        return counts

    # ==================== 构造局面用的修改操作 ====================

    def set_piece(self, pos: Position, piece: Optional[Piece]) -> None:
        """
        在指定位置放置棋子（None表示清空）

        规则引擎不会调用此方法修改调用方的棋盘，只在副本上使用。
        """
        row, col = ensure_on_board(pos)
        if piece is None:
            self.squares[row, col] = self.EMPTY
            self.moved[row, col] = False
            return
        self.squares[row, col] = piece.code
        # 只有兵、车、王需要记录是否移动过
        self.moved[row, col] = piece.has_moved and piece.piece_type in TRACKED_PIECE_TYPES

    def remove_piece(self, pos: Position) -> Optional[Piece]:
        """移除并返回指定位置的棋子"""
        piece = self.piece_at(pos)
        self.set_piece(pos, None)
        return piece

    # ==================== 实用工具方法 ====================

    def clone(self) -> 'ChessBoard':
        """
        创建完全独立的棋盘副本

        Returns:
            ChessBoard: 棋盘副本
        """
        new_board = ChessBoard.empty()
        new_board.squares = self.squares.copy()
        new_board.moved = self.moved.copy()
        return new_board

    def to_visual_string(self) -> str:
        """
        转换为可视化字符串

        Returns:
            str: 带坐标的棋盘字符串，白方在下方
        """
        lines = ["  a b c d e f g h"]
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                code = int(self.squares[row, col])
                cells.append(self.PIECE_SYMBOLS.get(code, '·'))
            rank = BOARD_SIZE - row
            lines.append(f"{rank} {' '.join(cells)} {rank}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)

    def __str__(self) -> str:
        """字符串表示"""
        return self.to_visual_string()

    def __repr__(self) -> str:
        return f"ChessBoard(pieces={len(self.get_all_pieces())})"

    def __eq__(self, other) -> bool:
        """相等性比较"""
        if not isinstance(other, ChessBoard):
            return False
        return (np.array_equal(self.squares, other.squares) and
                np.array_equal(self.moved, other.moved))

    def __hash__(self) -> int:
        """哈希值计算"""
        return hash((self.squares.tobytes(), self.moved.tobytes()))

    # ==================== 棋局验证功能 ====================

    def validate_board_state(self) -> Tuple[bool, List[str]]:
        """
        验证棋局状态的合法性

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        from .board_validator import BoardValidator
        return BoardValidator().full_validation(self)
