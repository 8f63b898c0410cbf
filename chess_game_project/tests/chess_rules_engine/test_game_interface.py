"""
测试GameInterface类的功能

测试会话管理、轮流走棋、走法记录、人机对战和终局处理。
"""

import pytest
from chess_game_project.src.chess_rules_engine.config import AIConfig, ConfigManager, GameConfig
from chess_game_project.src.chess_rules_engine.game_interface import (
    GameInterface, GameMode, GameResult
)
from chess_game_project.src.chess_rules_engine.rules_engine import (
    ChessBoard, GameStatus, Move, Piece, PieceType, PieceColor
)
from chess_game_project.src.chess_rules_engine.utils import GameStateError


# 愚人杀: 1. f3 e5 2. g4 Qh4#
FOOLS_MATE = [
    ((6, 5), (5, 5)),
    ((1, 4), (3, 4)),
    ((6, 6), (4, 6)),
    ((0, 3), (4, 7)),
]


class TestGameInterface:
    """GameInterface类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.interface = GameInterface(ai_config=AIConfig(seed=7, think_delay=0))
        self.session_id = self.interface.create_session()

    def test_create_session(self):
        """测试创建会话"""
        session = self.interface.get_session(self.session_id)
        assert session.board == ChessBoard.initial_setup()
        assert session.current_player == PieceColor.WHITE
        assert session.mode == GameMode.HUMAN_VS_HUMAN
        assert session.status == GameStatus.ONGOING
        assert session.move_history == []
        assert session.captured_pieces == {PieceColor.WHITE: [], PieceColor.BLACK: []}

        status = self.interface.get_game_status()
        assert status['session_id'] == self.session_id
        assert status['current_player'] == 'white'
        assert not status['game_over']

    def test_make_move_alternates_turns(self):
        """测试走棋后轮换走棋方并记录走法"""
        success, message = self.interface.make_move((6, 4), (4, 4))
        assert success, message

        session = self.interface.get_session()
        assert session.current_player == PieceColor.BLACK
        assert session.move_notations == ["e2-e4"]
        assert session.move_history[0].player == PieceColor.WHITE
        assert session.move_history[0].move == Move((6, 4), (4, 4))

        success, _ = self.interface.make_move((0, 6), (2, 5))
        assert success
        assert session.current_player == PieceColor.WHITE
        assert self.interface.get_game_status()['move_history'] == ["1. e2-e4 Ng8-f6"]

    def test_illegal_move_rejected(self):
        """测试非法走法被拒绝且不轮换走棋方"""
        snapshot = self.interface.get_session().board.clone()

        success, message = self.interface.make_move((6, 4), (3, 4))
        assert not success
        assert message

        # 走对方的棋子
        success, _ = self.interface.make_move((1, 4), (3, 4))
        assert not success

        session = self.interface.get_session()
        assert session.current_player == PieceColor.WHITE
        assert session.board == snapshot
        assert session.move_history == []

    def test_out_of_range_move(self):
        """测试越界坐标返回错误信息"""
        success, message = self.interface.make_move((6, 4), (9, 4))
        assert not success
        assert "INVALID_POSITION" in message

    def test_capture_recorded_by_capturing_side(self):
        """测试被吃棋子记在吃子方名下"""
        for from_pos, to_pos in [((6, 4), (4, 4)), ((1, 3), (3, 3)), ((4, 4), (3, 3))]:
            success, message = self.interface.make_move(from_pos, to_pos)
            assert success, message

        session = self.interface.get_session()
        assert session.captured_pieces[PieceColor.WHITE] == [Piece(PieceType.PAWN, PieceColor.BLACK, True)]
        assert session.captured_pieces[PieceColor.BLACK] == []
        assert session.move_history[-1].captured_piece.piece_type == PieceType.PAWN
        assert self.interface.get_game_status()['captured_by_white'] == ["黑方兵"]

    def test_checkmate_ends_game(self):
        """测试将死后对局结束并拒绝后续走法"""
        for from_pos, to_pos in FOOLS_MATE:
            success, message = self.interface.make_move(from_pos, to_pos)
            assert success, message

        session = self.interface.get_session()
        assert session.status == GameStatus.CHECKMATE
        assert session.result == GameResult.BLACK_WIN
        assert session.winner == PieceColor.BLACK
        assert session.is_finished
        assert session.finished_at is not None

        status = self.interface.get_game_status()
        assert status['game_over']
        assert status['in_check']
        assert status['winner'] == 'black'
        assert status['move_history'] == ["1. f2-f3 e7-e5", "2. g2-g4 Qd8-h4"]

        success, message = self.interface.make_move((6, 4), (5, 4))
        assert not success
        assert "checkmate" in message
        assert self.interface.get_legal_destinations((6, 4)) == []

    def test_check_status(self):
        """测试将军状态"""
        for from_pos, to_pos in [((6, 4), (4, 4)), ((1, 5), (2, 5)), ((7, 3), (3, 7))]:
            success, message = self.interface.make_move(from_pos, to_pos)
            assert success, message

        status = self.interface.get_game_status()
        assert status['status'] == 'check'
        assert status['in_check']
        assert not status['game_over']

    def test_stalemate_session(self):
        """测试从逼和局面开始的会话"""
        board = ChessBoard.from_pieces({
            (0, 0): Piece(PieceType.KING, PieceColor.BLACK),
            (2, 1): Piece(PieceType.QUEEN, PieceColor.WHITE),
            (7, 7): Piece(PieceType.KING, PieceColor.WHITE),
        })
        session_id = self.interface.create_session(board=board, current_player=PieceColor.BLACK)
        session = self.interface.get_session(session_id)

        assert session.status == GameStatus.STALEMATE
        assert session.result == GameResult.DRAW
        assert session.winner is None

        success, _ = self.interface.make_move((0, 0), (0, 1), session_id)
        assert not success

    def test_promotion_in_session(self):
        """测试会话中的兵升变"""
        board = ChessBoard.from_pieces({
            (1, 0): Piece(PieceType.PAWN, PieceColor.WHITE, True),
            (7, 4): Piece(PieceType.KING, PieceColor.WHITE),
            (0, 7): Piece(PieceType.KING, PieceColor.BLACK),
        })
        session_id = self.interface.create_session(board=board)
        success, message = self.interface.make_move((1, 0), (0, 0), session_id)
        assert success, message

        session = self.interface.get_session(session_id)
        assert session.board.piece_at((0, 0)) == Piece(PieceType.QUEEN, PieceColor.WHITE)
        assert session.move_notations == ["a7-a8"]
        assert session.status == GameStatus.CHECK

    def test_legal_destinations(self):
        """测试选中棋子的可走位置"""
        assert self.interface.get_legal_destinations((7, 1)) == [(5, 0), (5, 2)]
        # 不是当前走棋方的棋子
        assert self.interface.get_legal_destinations((0, 1)) == []

    def test_human_vs_computer(self):
        """测试人机对战"""
        config = GameConfig(game_mode='human-vs-computer', ai_color='black')
        session_id = self.interface.create_session(config)
        session = self.interface.get_session(session_id)
        assert session.mode == GameMode.HUMAN_VS_COMPUTER

        assert not self.interface.is_ai_turn()
        assert self.interface.play_ai_move() is None

        success, _ = self.interface.make_move((6, 4), (4, 4))
        assert success
        assert self.interface.is_ai_turn()

        move = self.interface.play_ai_move()
        assert isinstance(move, Move)
        assert session.board.piece_at(move.to_pos).color == PieceColor.BLACK
        assert session.current_player == PieceColor.WHITE
        assert len(session.move_history) == 2

    def test_computer_plays_white(self):
        """测试电脑执白先走"""
        config = GameConfig(game_mode='human-vs-computer', ai_color='white')
        self.interface.create_session(config)
        assert self.interface.is_ai_turn()
        assert self.interface.play_ai_move() is not None
        assert self.interface.get_session().current_player == PieceColor.BLACK

    def test_human_vs_human_has_no_ai_turn(self):
        """测试双人对战中没有电脑回合"""
        self.interface.make_move((6, 4), (4, 4))
        assert not self.interface.is_ai_turn()

    def test_reset(self):
        """测试重新开始"""
        self.interface.make_move((6, 4), (4, 4))
        new_id = self.interface.reset()

        assert new_id != self.session_id
        assert self.session_id not in self.interface.sessions
        session = self.interface.get_session()
        assert session.session_id == new_id
        assert session.board == ChessBoard.initial_setup()
        assert session.move_history == []
        assert session.current_player == PieceColor.WHITE

    def test_session_errors(self):
        """测试会话相关错误"""
        with pytest.raises(GameStateError):
            self.interface.get_session("missing")

        with pytest.raises(GameStateError):
            GameInterface().get_game_status()

        with pytest.raises(GameStateError):
            self.interface.create_session(GameConfig(game_mode='online'))

    def test_invalid_config_from_file(self, tmp_path):
        """测试配置文件中类型错误的颜色"""
        config_dir = tmp_path / "configs"
        manager = ConfigManager(str(config_dir))
        for bad_value in ("null", "1"):
            manager.path_for('game').write_text(f"ai_color: {bad_value}\n", encoding='utf-8')
            config = manager.get_game_config()
            with pytest.raises(GameStateError):
                self.interface.create_session(config)

        with pytest.raises(GameStateError):
            self.interface.create_session(GameConfig(ai_color=None))

    def test_session_to_dict(self):
        """测试会话序列化"""
        self.interface.make_move((6, 4), (4, 4))
        data = self.interface.get_session().to_dict()
        assert data['mode'] == 'human-vs-human'
        assert data['current_player'] == 'black'
        assert data['move_history'][0]['move'] == 'e2e4'
        assert data['move_history'][0]['notation'] == 'e2-e4'
        assert data['finished_at'] is None
