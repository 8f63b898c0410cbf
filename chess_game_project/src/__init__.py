"""
Chess Game 源代码模块

包含子系统：
- chess_rules_engine: 国际象棋规则引擎
"""

from . import chess_rules_engine

__all__ = [
    "chess_rules_engine",
]
