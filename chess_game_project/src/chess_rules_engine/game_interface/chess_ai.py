"""
随机走子AI

从所有合法走法中等概率随机选择一步。
"""

import random
from typing import Optional

from ..config.game_config import AIConfig
from ..rules_engine import ChessBoard, Move, PieceColor, RuleEngine
from ..utils.logger import LoggerMixin


class RandomChessAI(LoggerMixin):
    """
    随机走子AI

    枚举所有合法走法后均匀随机选择；没有合法走法时返回None，
    由调用方按将死或逼和处理，不会重试。
    """

    def __init__(self, config: Optional[AIConfig] = None,
                 rule_engine: Optional[RuleEngine] = None):
        """
        初始化AI

        Args:
            config: AI配置，seed 固定时走法可复现
            rule_engine: 规则引擎，None时新建
        """
        self.config = config or AIConfig()
        self.rule_engine = rule_engine or RuleEngine()
        self.rng = random.Random(self.config.seed)

    def select_move(self, board: ChessBoard, color: PieceColor) -> Optional[Move]:
        """
        为指定颜色选择一步走法

        Args:
            board: 当前棋盘状态
            color: AI执子颜色

        Returns:
            Optional[Move]: 随机选中的合法走法，没有合法走法时返回None
        """
        legal_moves = self.rule_engine.generate_legal_moves(board, color)

        if not legal_moves:
            self.log_info(f"{color.display_name}没有合法走法")
            return None

        move = self.rng.choice(legal_moves)
        self.log_debug(f"AI从 {len(legal_moves)} 个走法中选择: {move}")
        return move
