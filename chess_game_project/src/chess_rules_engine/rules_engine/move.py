"""
走法数据结构

定义坐标、走法以及走法执行结果的表示和转换功能。
"""

from dataclasses import dataclass
from numbers import Integral
from typing import Optional, Tuple, TYPE_CHECKING

from ..utils.exceptions import InvalidPositionError, InvalidMoveError
from .piece import Piece

if TYPE_CHECKING:
    from .chess_board import ChessBoard


BOARD_SIZE = 8

Position = Tuple[int, int]


def is_on_board(pos) -> bool:
    """
    检查坐标是否在棋盘范围内

    Args:
        pos: 位置坐标 (行, 列)

    Returns:
        bool: 是否在 [0, 7] x [0, 7] 内
    """
    try:
        row, col = pos
    except (TypeError, ValueError):
        return False
    # numpy 整数也属于 Integral；布尔值不接受
    for value in (row, col):
        if isinstance(value, bool) or not isinstance(value, Integral):
            return False
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def ensure_on_board(pos) -> Position:
    """
    校验坐标并规范化为 (int, int)

    Raises:
        InvalidPositionError: 坐标越界或格式错误
    """
    if not is_on_board(pos):
        raise InvalidPositionError(pos, "坐标必须是 0-7 范围内的 (行, 列)")
    row, col = pos
    return int(row), int(col)


def square_name(pos: Position) -> str:
    """
    坐标转换为代数记法的格子名，如 (6, 4) -> "e2"

    第0行是黑方底线（第8横线），第7行是白方底线（第1横线）。
    """
    row, col = ensure_on_board(pos)
    return f"{chr(ord('a') + col)}{BOARD_SIZE - row}"


def parse_square(name: str) -> Position:
    """
    代数记法的格子名转换为坐标，如 "e2" -> (6, 4)

    Raises:
        InvalidPositionError: 格子名无效
    """
    if not isinstance(name, str) or len(name.strip()) != 2:
        raise InvalidPositionError(name, "格子名应为两个字符，如 e2")
    file_char, rank_char = name.strip().lower()
    if not ('a' <= file_char <= 'h') or not ('1' <= rank_char <= '8'):
        raise InvalidPositionError(name, "列应为a-h，横线应为1-8")
    return BOARD_SIZE - int(rank_char), ord(file_char) - ord('a')


@dataclass(frozen=True)
class Move:
    """
    国际象棋走法类

    只包含起始位置和目标位置，每次查询时构造，不做持久化。
    """
    from_pos: Position  # 起始位置 (行, 列)
    to_pos: Position    # 目标位置 (行, 列)

    def __post_init__(self):
        """初始化后验证并规范化坐标"""
        object.__setattr__(self, 'from_pos', ensure_on_board(self.from_pos))
        object.__setattr__(self, 'to_pos', ensure_on_board(self.to_pos))

    @property
    def row_delta(self) -> int:
        return self.to_pos[0] - self.from_pos[0]

    @property
    def col_delta(self) -> int:
        return self.to_pos[1] - self.from_pos[1]

    def to_coordinate_notation(self) -> str:
        """
        转换为坐标记法

        Returns:
            str: 坐标记法字符串，如 "e2e4"
        """
        return f"{square_name(self.from_pos)}{square_name(self.to_pos)}"

    @classmethod
    def from_coordinate_notation(cls, notation: str) -> 'Move':
        """
        从坐标记法创建Move对象

        接受 "e2e4" 和 "e2-e4" 两种写法。

        Args:
            notation: 坐标记法字符串

        Returns:
            Move: Move对象
        """
        cleaned = notation.strip().replace('-', '') if isinstance(notation, str) else ''
        if len(cleaned) != 4:
            raise InvalidMoveError(str(notation), "坐标记法应为4个字符，如 e2e4")
        try:
            return cls(from_pos=parse_square(cleaned[:2]), to_pos=parse_square(cleaned[2:]))
        except InvalidPositionError as e:
            raise InvalidMoveError(notation, e.message) from e

    def __str__(self) -> str:
        return self.to_coordinate_notation()


@dataclass
class MoveOutcome:
    """
    走法执行结果

    resulting_board 总是新的棋盘副本，调用方持有的原棋盘保持不变。
    """
    resulting_board: 'ChessBoard'
    captured_piece: Optional[Piece] = None
