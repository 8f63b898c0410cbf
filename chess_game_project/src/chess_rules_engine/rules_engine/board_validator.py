"""
局面合法性检查

调用方可以自行摆放局面（残局、测试局面），规则引擎只在
"看起来像真实对局"的局面上保证结果有意义。这里的检查都只读棋盘。
"""

from typing import Callable, Dict, List, Tuple, Any

import numpy as np

from .chess_board import ChessBoard
from .move import BOARD_SIZE
from .piece import PieceColor, PieceType

MAX_PAWNS = 8
MAX_PIECES_PER_SIDE = 16

CheckResult = Tuple[bool, List[str]]


def _result(errors: List[str]) -> CheckResult:
    return not errors, errors


def _structure_errors(board: ChessBoard) -> List[str]:
    errors = []
    for label, array in (("棋盘", board.squares), ("移动标记", board.moved)):
        if array.shape != (BOARD_SIZE, BOARD_SIZE):
            errors.append(f"{label}尺寸错误: {array.shape}, 应为(8, 8)")

    if not np.issubdtype(board.squares.dtype, np.integer):
        errors.append(f"棋盘数据类型错误: {board.squares.dtype}, 应为整数")
    elif np.abs(board.squares.astype(int)).max(initial=0) > int(PieceType.KING):
        errors.append("棋盘包含无效的棋子编码")
    return errors


def _count_errors(board: ChessBoard) -> List[str]:
    # 升变使各兵种数量不固定，只约束王、兵和总数
    errors = []
    for color in PieceColor:
        counts = board.count_pieces(color)
        side = color.display_name

        kings = counts.get(PieceType.KING, 0)
        if kings != 1:
            errors.append(f"{side}王的数量错误: {kings}, 应为1")

        pawns = counts.get(PieceType.PAWN, 0)
        if pawns > MAX_PAWNS:
            errors.append(f"{side}兵数量超限: {pawns} > {MAX_PAWNS}")

        total = sum(counts.values())
        if total > MAX_PIECES_PER_SIDE:
            errors.append(f"{side}棋子总数超限: {total} > {MAX_PIECES_PER_SIDE}")
    return errors


def _position_errors(board: ChessBoard) -> List[str]:
    back_ranks = (0, BOARD_SIZE - 1)
    return [
        f"{piece}位置错误: {pos}, 兵不能位于底线"
        for pos, piece in board.get_all_pieces()
        if piece.piece_type == PieceType.PAWN and pos[0] in back_ranks
    ]


def _king_distance_errors(board: ChessBoard) -> List[str]:
    white = board.find_king(PieceColor.WHITE)
    black = board.find_king(PieceColor.BLACK)
    if white is None or black is None:
        return []
    if max(abs(white[0] - black[0]), abs(white[1] - black[1])) <= 1:
        return [f"双方王相邻: {white} 和 {black}"]
    return []


CHECKS: Dict[str, Callable[[ChessBoard], List[str]]] = {
    'structure': _structure_errors,
    'piece_counts': _count_errors,
    'piece_positions': _position_errors,
    'kings_not_adjacent': _king_distance_errors,
}


class BoardValidator:
    """局面检查器，每项检查返回 (是否合法, 错误信息列表)"""

    def validate_board_structure(self, board: ChessBoard) -> CheckResult:
        """数组尺寸、数据类型和棋子编码范围"""
        return _result(_structure_errors(board))

    def validate_piece_counts(self, board: ChessBoard) -> CheckResult:
        """每方恰好一个王，兵不超过8个，棋子不超过16个"""
        return _result(_count_errors(board))

    def validate_piece_positions(self, board: ChessBoard) -> CheckResult:
        """兵不能位于任一方底线"""
        return _result(_position_errors(board))

    def validate_kings_not_adjacent(self, board: ChessBoard) -> CheckResult:
        return _result(_king_distance_errors(board))

    def full_validation(self, board: ChessBoard) -> CheckResult:
        """依次执行全部检查，汇总错误"""
        errors: List[str] = []
        for check in CHECKS.values():
            errors.extend(check(board))
        return _result(errors)

    def get_validation_report(self, board: ChessBoard) -> Dict[str, Any]:
        """
        逐项列出检查结果

        Returns:
            {'overall_valid': bool, 'total_errors': int,
             'validations': {检查名: {'valid', 'errors', 'error_count'}}}
        """
        validations = {}
        for name, check in CHECKS.items():
            errors = check(board)
            validations[name] = {
                'valid': not errors,
                'errors': errors,
                'error_count': len(errors),
            }

        total = sum(item['error_count'] for item in validations.values())
        return {
            'overall_valid': total == 0,
            'total_errors': total,
            'validations': validations,
        }
