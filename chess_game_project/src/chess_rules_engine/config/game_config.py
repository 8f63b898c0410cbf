"""
配置数据结构

定义各种配置类、默认参数以及每类配置的校验规则。
"""

from dataclasses import dataclass
from typing import List, Optional


GAME_MODES = ('human-vs-human', 'human-vs-computer')
COLORS = ('white', 'black')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class GameConfig:
    """对局配置"""
    game_mode: str = 'human-vs-human'   # 对局模式 ('human-vs-human', 'human-vs-computer')
    ai_color: str = 'black'             # 电脑执子颜色
    show_coordinates: bool = True       # 是否显示棋盘坐标
    show_legal_moves: bool = True       # 选中棋子后是否高亮可走格子

    def validate(self) -> List[str]:
        errors = []
        if self.game_mode not in GAME_MODES:
            errors.append(f"未知的对局模式: {self.game_mode}")
        if self.ai_color not in COLORS:
            errors.append(f"未知的颜色: {self.ai_color}")
        return errors


@dataclass
class AIConfig:
    """随机AI配置"""
    seed: Optional[int] = None          # 随机种子，None表示不固定
    think_delay: float = 1.0            # 电脑走棋前的停顿(秒)，仅用于界面展示

    def validate(self) -> List[str]:
        errors = []
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            errors.append(f"随机种子应为整数: {self.seed!r}")
        if not isinstance(self.think_delay, (int, float)) or self.think_delay < 0:
            errors.append(f"停顿时间不能为负数: {self.think_delay!r}")
        return errors


@dataclass
class SystemConfig:
    """系统配置"""
    # 日志配置
    log_level: str = 'INFO'             # 日志级别
    log_file: str = ''                  # 日志文件，为空时不写文件
    log_dir: str = 'logs/chess_rules_engine'  # 日志目录
    log_max_size: int = 10              # 日志文件最大大小(MB)
    log_backup_count: int = 5           # 日志备份数量
    console_output: bool = False        # 是否把日志输出到控制台

    def validate(self) -> List[str]:
        errors = []
        if str(self.log_level).upper() not in LOG_LEVELS:
            errors.append(f"未知的日志级别: {self.log_level}")
        if self.log_max_size <= 0:
            errors.append("日志文件大小必须大于0")
        if self.log_backup_count < 0:
            errors.append("日志备份数量不能为负数")
        return errors


# 默认配置实例
DEFAULT_GAME_CONFIG = GameConfig()
DEFAULT_AI_CONFIG = AIConfig()
DEFAULT_SYSTEM_CONFIG = SystemConfig()
