"""
测试PieceMovementRules类的功能

测试各棋子的几何走法和路径阻挡。
"""

import pytest
from chess_game_project.src.chess_rules_engine.rules_engine import (
    ChessBoard, Piece, PieceType, PieceColor, PieceMovementRules
)
from chess_game_project.src.chess_rules_engine.utils import InvalidPositionError


W = PieceColor.WHITE
B = PieceColor.BLACK


def board_with(pieces):
    """用 {位置: (类型, 颜色)} 构造局面"""
    return ChessBoard.from_pieces({
        pos: Piece(piece_type, color) for pos, (piece_type, color) in pieces.items()
    })


class TestPieceMovementRules:
    """PieceMovementRules类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.rules = PieceMovementRules()
        self.board = ChessBoard.initial_setup()

    def test_basic_rejections(self):
        """测试原地不动、空起点和吃己方棋子"""
        assert not self.rules.can_piece_reach(self.board, (6, 4), (6, 4))
        assert not self.rules.can_piece_reach(self.board, (4, 4), (3, 4))
        assert not self.rules.can_piece_reach(self.board, (7, 0), (6, 0))

    def test_out_of_range_raises(self):
        """测试越界坐标"""
        with pytest.raises(InvalidPositionError):
            self.rules.can_piece_reach(self.board, (6, 4), (8, 4))
        with pytest.raises(InvalidPositionError):
            self.rules.can_piece_reach(self.board, (-1, 0), (0, 0))

    def test_pawn_moves(self):
        """测试兵的走法"""
        # 初始位置可以走一格或两格
        assert self.rules.can_piece_reach(self.board, (6, 4), (5, 4))
        assert self.rules.can_piece_reach(self.board, (6, 4), (4, 4))
        assert not self.rules.can_piece_reach(self.board, (6, 4), (3, 4))

        # 不能后退，不能横走
        board = board_with({(4, 4): (PieceType.PAWN, W)})
        assert not self.rules.can_piece_reach(board, (4, 4), (5, 4))
        assert not self.rules.can_piece_reach(board, (4, 4), (4, 5))

        # 离开起始行后不能走两格
        assert not self.rules.can_piece_reach(board, (4, 4), (2, 4))

        # 黑兵向下走
        board = board_with({(1, 3): (PieceType.PAWN, B)})
        assert self.rules.can_piece_reach(board, (1, 3), (2, 3))
        assert self.rules.can_piece_reach(board, (1, 3), (3, 3))
        assert not self.rules.can_piece_reach(board, (1, 3), (0, 3))

    def test_pawn_blocked(self):
        """测试兵被阻挡"""
        board = board_with({
            (6, 4): (PieceType.PAWN, W),
            (5, 4): (PieceType.KNIGHT, B),
        })
        # 兵不能向前吃子，前方有子时两格也不行
        assert not self.rules.can_piece_reach(board, (6, 4), (5, 4))
        assert not self.rules.can_piece_reach(board, (6, 4), (4, 4))

        board = board_with({
            (6, 4): (PieceType.PAWN, W),
            (4, 4): (PieceType.KNIGHT, B),
        })
        assert self.rules.can_piece_reach(board, (6, 4), (5, 4))
        assert not self.rules.can_piece_reach(board, (6, 4), (4, 4))

    def test_pawn_captures(self):
        """测试兵斜向吃子"""
        board = board_with({
            (4, 4): (PieceType.PAWN, W),
            (3, 5): (PieceType.ROOK, B),
        })
        assert self.rules.can_piece_reach(board, (4, 4), (3, 5))
        # 斜前方为空时不能走
        assert not self.rules.can_piece_reach(board, (4, 4), (3, 3))
        # 不能斜向后吃
        board.set_piece((5, 3), Piece(PieceType.ROOK, B))
        assert not self.rules.can_piece_reach(board, (4, 4), (5, 3))

    def test_knight_moves(self):
        """测试马的走法，可以越过棋子"""
        assert self.rules.can_piece_reach(self.board, (7, 6), (5, 5))
        assert self.rules.can_piece_reach(self.board, (7, 6), (5, 7))
        assert not self.rules.can_piece_reach(self.board, (7, 6), (6, 4))  # 己方兵
        assert not self.rules.can_piece_reach(self.board, (7, 6), (5, 6))

        board = board_with({(4, 4): (PieceType.KNIGHT, W)})
        targets = [(r, c) for r in range(8) for c in range(8)
                   if self.rules.can_piece_reach(board, (4, 4), (r, c))]
        assert len(targets) == 8

    def test_rook_moves(self):
        """测试车的走法"""
        # 初始位置被己方棋子挡住
        assert not self.rules.can_piece_reach(self.board, (7, 0), (5, 0))

        board = board_with({
            (4, 4): (PieceType.ROOK, W),
            (4, 2): (PieceType.PAWN, B),
        })
        assert self.rules.can_piece_reach(board, (4, 4), (0, 4))
        assert self.rules.can_piece_reach(board, (4, 4), (4, 7))
        assert self.rules.can_piece_reach(board, (4, 4), (4, 2))  # 吃子
        assert not self.rules.can_piece_reach(board, (4, 4), (4, 0))  # 被阻挡
        assert not self.rules.can_piece_reach(board, (4, 4), (3, 3))

    def test_bishop_moves(self):
        """测试象的走法"""
        board = board_with({
            (4, 4): (PieceType.BISHOP, W),
            (2, 6): (PieceType.PAWN, W),
        })
        assert self.rules.can_piece_reach(board, (4, 4), (1, 1))
        assert self.rules.can_piece_reach(board, (4, 4), (7, 7))
        assert not self.rules.can_piece_reach(board, (4, 4), (4, 5))
        assert not self.rules.can_piece_reach(board, (4, 4), (1, 7))  # 被己方兵阻挡

    def test_queen_moves(self):
        """测试后的走法"""
        board = board_with({(4, 4): (PieceType.QUEEN, B)})
        assert self.rules.can_piece_reach(board, (4, 4), (4, 7))
        assert self.rules.can_piece_reach(board, (4, 4), (7, 7))
        assert self.rules.can_piece_reach(board, (4, 4), (0, 4))
        assert not self.rules.can_piece_reach(board, (4, 4), (6, 5))

    def test_king_moves(self):
        """测试王的走法"""
        board = board_with({(4, 4): (PieceType.KING, W)})
        targets = [(r, c) for r in range(8) for c in range(8)
                   if self.rules.can_piece_reach(board, (4, 4), (r, c))]
        assert len(targets) == 8
        assert not self.rules.can_piece_reach(board, (4, 4), (4, 6))

    def test_castling_requires_check_detector(self):
        """测试没有将军检测函数时不允许易位"""
        board = board_with({
            (7, 4): (PieceType.KING, W),
            (7, 7): (PieceType.ROOK, W),
        })
        assert not self.rules.can_piece_reach(board, (7, 4), (7, 6))

        rules = PieceMovementRules(check_detector=lambda b, color: False)
        assert rules.can_piece_reach(board, (7, 4), (7, 6))
        # 攻击检测不考虑易位
        assert not rules.can_piece_reach(board, (7, 4), (7, 6), include_castling=False)
