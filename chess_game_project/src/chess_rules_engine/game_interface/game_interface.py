"""
游戏接口和会话管理

在无状态的规则引擎之上维护对局：轮流走棋、走法记录、被吃棋子、
人机对战以及每步之后的将军/将死/逼和状态。
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple

from ..config.game_config import GameConfig, AIConfig
from ..rules_engine import (
    ChessBoard, GameStatus, Move, Piece, PieceColor, Position, RuleEngine,
    ensure_on_board
)
from ..utils.exceptions import ChessEngineError, GameStateError
from ..utils.logger import get_logger
from .chess_ai import RandomChessAI
from .notation import format_move, format_move_history


class GameMode(Enum):
    """对局模式"""
    HUMAN_VS_HUMAN = "human-vs-human"
    HUMAN_VS_COMPUTER = "human-vs-computer"


class GameResult(Enum):
    """对局结果"""
    ONGOING = "ongoing"       # 进行中
    WHITE_WIN = "white_win"   # 白方胜
    BLACK_WIN = "black_win"   # 黑方胜
    DRAW = "draw"             # 和棋（逼和）


@dataclass
class MoveRecord:
    """走法记录"""
    move: Move
    player: PieceColor
    notation: str
    captured_piece: Optional[Piece] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            'move': self.move.to_coordinate_notation(),
            'player': self.player.name.lower(),
            'notation': self.notation,
            'captured_piece': str(self.captured_piece) if self.captured_piece else None,
            'timestamp': self.timestamp.isoformat()
        }


@dataclass
class GameSession:
    """游戏会话"""
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    mode: GameMode = GameMode.HUMAN_VS_HUMAN
    ai_color: PieceColor = PieceColor.BLACK
    board: ChessBoard = field(default_factory=ChessBoard.initial_setup)

    current_player: PieceColor = PieceColor.WHITE
    status: GameStatus = GameStatus.ONGOING
    result: GameResult = GameResult.ONGOING

    move_history: List[MoveRecord] = field(default_factory=list)
    # 按吃子方分组的被吃棋子
    captured_pieces: Dict[PieceColor, List[Piece]] = field(
        default_factory=lambda: {PieceColor.WHITE: [], PieceColor.BLACK: []}
    )

    created_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    @property
    def is_finished(self) -> bool:
        return self.status.is_terminal

    @property
    def winner(self) -> Optional[PieceColor]:
        if self.result == GameResult.WHITE_WIN:
            return PieceColor.WHITE
        if self.result == GameResult.BLACK_WIN:
            return PieceColor.BLACK
        return None

    @property
    def move_notations(self) -> List[str]:
        return [record.notation for record in self.move_history]

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            'session_id': self.session_id,
            'mode': self.mode.value,
            'ai_color': self.ai_color.name.lower(),
            'current_player': self.current_player.name.lower(),
            'status': self.status.value,
            'result': self.result.value,
            'move_history': [record.to_dict() for record in self.move_history],
            'captured_pieces': {
                color.name.lower(): [str(piece) for piece in pieces]
                for color, pieces in self.captured_pieces.items()
            },
            'created_at': self.created_at.isoformat(),
            'finished_at': self.finished_at.isoformat() if self.finished_at else None
        }


class GameInterface:
    """游戏接口和会话管理器"""

    def __init__(self, rule_engine: Optional[RuleEngine] = None,
                 ai_config: Optional[AIConfig] = None):
        """
        初始化游戏接口

        Args:
            rule_engine: 规则引擎，None时新建
            ai_config: 随机AI配置
        """
        self.logger = get_logger("chess_engine.GameInterface")
        self.rule_engine = rule_engine or RuleEngine()
        self.ai_engine = RandomChessAI(ai_config, self.rule_engine)

        self.current_session: Optional[GameSession] = None
        self.sessions: Dict[str, GameSession] = {}

    def create_session(self, config: Optional[GameConfig] = None,
                       board: Optional[ChessBoard] = None,
                       current_player: PieceColor = PieceColor.WHITE) -> str:
        """
        创建新的游戏会话

        Args:
            config: 对局配置
            board: 起始局面，None表示标准初始局面
            current_player: 先走的一方

        Returns:
            会话ID
        """
        config = config or GameConfig()

        errors = config.validate()
        if errors:
            raise GameStateError("创建会话", f"无效的对局配置: {'; '.join(errors)}")

        mode = GameMode(config.game_mode)
        ai_color = PieceColor[config.ai_color.upper()]

        session = GameSession(
            mode=mode,
            ai_color=ai_color,
            board=board.clone() if board is not None else ChessBoard.initial_setup(),
            current_player=current_player
        )
        self._refresh_status(session)

        self.sessions[session.session_id] = session
        self.current_session = session

        self.logger.info(f"创建新会话: {session.session_id}, 模式: {mode.value}")
        return session.session_id

    def reset(self, session_id: Optional[str] = None) -> str:
        """
        重新开始：用相同的模式创建新会话并替换旧会话

        Returns:
            新会话ID
        """
        old_session = self._get_session(session_id)
        config = GameConfig(game_mode=old_session.mode.value,
                            ai_color=old_session.ai_color.name.lower())
        del self.sessions[old_session.session_id]
        return self.create_session(config)

    def get_legal_destinations(self, from_pos: Position,
                               session_id: Optional[str] = None) -> List[Position]:
        """
        获取选中棋子的所有合法目标格

        不是当前走棋方的棋子或对局已结束时返回空列表。
        """
        session = self._get_session(session_id)
        if session.is_finished:
            return []
        return self.rule_engine.get_legal_destinations(session.board, from_pos, session.current_player)

    def make_move(self, from_pos: Position, to_pos: Position,
                  session_id: Optional[str] = None) -> Tuple[bool, str]:
        """
        执行当前走棋方的一步走法

        Args:
            from_pos: 起始位置
            to_pos: 目标位置
            session_id: 会话ID

        Returns:
            (是否成功, 错误信息)
        """
        session = self._get_session(session_id)

        if session.is_finished:
            return False, f"对局已结束: {session.status.value}"

        try:
            from_pos = ensure_on_board(from_pos)
            to_pos = ensure_on_board(to_pos)
        except ChessEngineError as e:
            return False, str(e)

        if not self.rule_engine.is_legal_move(session.board, from_pos, to_pos, session.current_player):
            return False, "非法走法"

        self._record_move(session, from_pos, to_pos)
        return True, ""

    def is_ai_turn(self, session_id: Optional[str] = None) -> bool:
        """当前是否轮到电脑走棋"""
        session = self._get_session(session_id)
        return (session.mode == GameMode.HUMAN_VS_COMPUTER and
                session.current_player == session.ai_color and
                not session.is_finished)

    def play_ai_move(self, session_id: Optional[str] = None) -> Optional[Move]:
        """
        让电脑走一步

        Returns:
            电脑走的棋；不是电脑回合或没有合法走法时返回None
        """
        session = self._get_session(session_id)

        if not self.is_ai_turn(session.session_id):
            self.logger.warning("当前不是电脑的回合")
            return None

        move = self.ai_engine.select_move(session.board, session.current_player)
        if move is None:
            # 终局已由状态检测识别
            self._refresh_status(session)
            return None

        self._record_move(session, move.from_pos, move.to_pos)
        return move

    def get_game_status(self, session_id: Optional[str] = None) -> Dict[str, Any]:
        """
        获取游戏状态

        Returns:
            Dict: 游戏状态信息
        """
        session = self._get_session(session_id)
        return {
            'session_id': session.session_id,
            'current_player': session.current_player.name.lower(),
            'status': session.status.value,
            'result': session.result.value,
            'winner': session.winner.name.lower() if session.winner else None,
            'in_check': session.status in (GameStatus.CHECK, GameStatus.CHECKMATE),
            'game_over': session.is_finished,
            'move_count': len(session.move_history),
            'move_history': format_move_history(session.move_notations),
            'captured_by_white': [str(p) for p in session.captured_pieces[PieceColor.WHITE]],
            'captured_by_black': [str(p) for p in session.captured_pieces[PieceColor.BLACK]],
        }

    def get_session(self, session_id: Optional[str] = None) -> GameSession:
        """获取会话对象"""
        return self._get_session(session_id)

    def _get_session(self, session_id: Optional[str] = None) -> GameSession:
        """获取会话对象"""
        if session_id is None:
            if self.current_session is None:
                raise GameStateError("获取会话", "没有当前会话")
            return self.current_session

        if session_id not in self.sessions:
            raise GameStateError("获取会话", f"会话不存在: {session_id}")

        return self.sessions[session_id]

    def _record_move(self, session: GameSession, from_pos: Position, to_pos: Position):
        """执行已确认合法的走法并更新会话"""
        mover = session.current_player
        piece = session.board.piece_at(from_pos)
        outcome = self.rule_engine.apply_move(session.board, from_pos, to_pos)

        record = MoveRecord(
            move=Move(from_pos=from_pos, to_pos=to_pos),
            player=mover,
            notation=format_move(piece, from_pos, to_pos),
            captured_piece=outcome.captured_piece
        )
        session.move_history.append(record)
        if outcome.captured_piece is not None:
            session.captured_pieces[mover].append(outcome.captured_piece)

        session.board = outcome.resulting_board
        session.current_player = mover.opponent
        self.logger.info(f"{mover.display_name}走棋: {record.notation}")

        self._refresh_status(session)

    def _refresh_status(self, session: GameSession):
        """根据当前走棋方重新计算局面状态和对局结果"""
        session.status = self.rule_engine.get_game_status(session.board, session.current_player)

        if session.status == GameStatus.CHECKMATE:
            winner = session.current_player.opponent
            session.result = GameResult.WHITE_WIN if winner == PieceColor.WHITE else GameResult.BLACK_WIN
            self.logger.info(f"将死! {winner.display_name}获胜")
        elif session.status == GameStatus.STALEMATE:
            session.result = GameResult.DRAW
            self.logger.info("逼和! 对局为和棋")
        else:
            session.result = GameResult.ONGOING
            if session.status == GameStatus.CHECK:
                self.logger.info(f"{session.current_player.display_name}被将军")

        if session.is_finished and session.finished_at is None:
            session.finished_at = datetime.now()
