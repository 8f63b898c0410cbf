"""
国际象棋对弈系统 (Chess Game)

一个基于规则引擎的国际象棋对弈程序，支持双人对战和人机对战。
"""

__version__ = "0.1.0"
__author__ = "Chess Game Team"
__description__ = "国际象棋对弈系统 - 完整走子规则、将军检测、将死与逼和判定"

# 导入主要模块
from chess_game_project.src import chess_rules_engine

__all__ = [
    "chess_rules_engine",
    "__version__",
    "__author__",
    "__description__",
]
