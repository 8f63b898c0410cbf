"""
棋子数据结构

定义棋子类型、颜色以及棋子与整数编码之间的转换。
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class PieceType(IntEnum):
    """棋子类型，数值即棋盘矩阵中的编码绝对值"""
    PAWN = 1      # 兵
    ROOK = 2      # 车
    KNIGHT = 3    # 马
    BISHOP = 4    # 象
    QUEEN = 5     # 后
    KING = 6      # 王


class PieceColor(Enum):
    """棋子颜色 (1: 白方, -1: 黑方)"""
    WHITE = 1
    BLACK = -1

    @property
    def opponent(self) -> 'PieceColor':
        """对手颜色"""
        return PieceColor.BLACK if self is PieceColor.WHITE else PieceColor.WHITE

    @property
    def display_name(self) -> str:
        return "白方" if self is PieceColor.WHITE else "黑方"


# 需要记录是否移动过的棋子（王车易位、兵的首步）
TRACKED_PIECE_TYPES = (PieceType.PAWN, PieceType.ROOK, PieceType.KING)


@dataclass(frozen=True)
class Piece:
    """
    棋子

    不可变的值对象。棋盘内部保存的是整数编码，每次读取都会生成新的
    Piece，因此不存在多个棋盘共享同一棋子实例的问题。
    """
    piece_type: PieceType
    color: PieceColor
    has_moved: bool = False

    @property
    def code(self) -> int:
        """
        棋盘矩阵中的编码

        白方为正数，黑方为负数。
        """
        return int(self.piece_type) * self.color.value

    @classmethod
    def from_code(cls, code: int, has_moved: bool = False) -> 'Piece':
        """
        从整数编码创建棋子

        Args:
            code: 非零的棋子编码
            has_moved: 是否移动过

        Returns:
            Piece: 棋子对象
        """
        if code == 0:
            raise ValueError("编码0表示空格，不是棋子")
        color = PieceColor.WHITE if code > 0 else PieceColor.BLACK
        return cls(PieceType(abs(int(code))), color, bool(has_moved))

    def moved(self) -> 'Piece':
        """返回标记为已移动的副本"""
        return Piece(self.piece_type, self.color, True)

    def promoted(self, piece_type: PieceType = PieceType.QUEEN) -> 'Piece':
        """返回升变后的副本"""
        return Piece(piece_type, self.color, self.has_moved)

    def __str__(self) -> str:
        return f"{self.color.display_name}{PIECE_NAMES[self.piece_type]}"


PIECE_NAMES = {
    PieceType.PAWN: "兵",
    PieceType.ROOK: "车",
    PieceType.KNIGHT: "马",
    PieceType.BISHOP: "象",
    PieceType.QUEEN: "后",
    PieceType.KING: "王",
}
