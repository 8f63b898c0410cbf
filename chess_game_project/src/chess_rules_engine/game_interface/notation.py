"""
走法记法和棋子符号

供界面显示走法历史和被吃棋子使用。
"""

from typing import List, Sequence

from ..rules_engine import Piece, PieceType, PieceColor, Position, square_name


PIECE_SYMBOLS = {
    PieceType.PAWN: {PieceColor.WHITE: "♙", PieceColor.BLACK: "♟"},
    PieceType.ROOK: {PieceColor.WHITE: "♖", PieceColor.BLACK: "♜"},
    PieceType.KNIGHT: {PieceColor.WHITE: "♘", PieceColor.BLACK: "♞"},
    PieceType.BISHOP: {PieceColor.WHITE: "♗", PieceColor.BLACK: "♝"},
    PieceType.QUEEN: {PieceColor.WHITE: "♕", PieceColor.BLACK: "♛"},
    PieceType.KING: {PieceColor.WHITE: "♔", PieceColor.BLACK: "♚"},
}

# 走法记录中的棋子字母，兵不加字母
PIECE_LETTERS = {
    PieceType.PAWN: "",
    PieceType.ROOK: "R",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


def get_piece_symbol(piece: Piece) -> str:
    """棋子的 Unicode 符号"""
    return PIECE_SYMBOLS[piece.piece_type][piece.color]


def format_move(piece: Piece, from_pos: Position, to_pos: Position) -> str:
    """
    格式化一步走法

    Args:
        piece: 走动的棋子（走子前的棋子，升变前为兵）
        from_pos: 起始位置
        to_pos: 目标位置

    Returns:
        str: 如 "e2-e4"、"Ng1-f3"
    """
    return f"{PIECE_LETTERS[piece.piece_type]}{square_name(from_pos)}-{square_name(to_pos)}"


def format_move_history(moves: Sequence[str]) -> List[str]:
    """
    把走法列表按回合编号成行

    Args:
        moves: 按顺序排列的走法字符串，白方先走

    Returns:
        List[str]: 如 ["1. e2-e4 e7-e5", "2. Ng1-f3"]
    """
    lines = []
    for i in range(0, len(moves), 2):
        line = f"{i // 2 + 1}. {moves[i]}"
        if i + 1 < len(moves):
            line += f" {moves[i + 1]}"
        lines.append(line)
    return lines
