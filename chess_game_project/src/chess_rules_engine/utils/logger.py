"""
日志系统

引擎内所有日志记录器都位于 chess_engine 之下，
程序入口调用一次 setup_logger 或 configure_logging 即可统一配置。
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional


ROOT_LOGGER_NAME = 'chess_engine'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _rotating_file_handler(path: Path, level: int, formatter: logging.Formatter,
                           max_size: int, backup_count: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=max_size * 1024 * 1024,  # MB -> 字节
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: str = 'logs/chess_rules_engine',
    max_size: int = 10,  # MB
    backup_count: int = 5,
    console_output: bool = True
) -> logging.Logger:
    """
    设置日志记录器

    同名记录器已有处理器时不再重复添加。

    Args:
        name: 日志记录器名称
        level: 日志级别名称，无法识别时使用 INFO
        log_file: 日志文件名，为空时不写文件
        log_dir: 日志目录
        max_size: 单个日志文件最大大小(MB)
        backup_count: 轮转保留的文件数量
        console_output: 是否输出到标准输出

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    log_level = getattr(logging, str(level).upper(), logging.INFO)
    logger.setLevel(log_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if console_output:
        logger.addHandler(_console_handler(log_level, formatter))
    if log_file:
        logger.addHandler(_rotating_file_handler(
            Path(log_dir) / log_file, log_level, formatter, max_size, backup_count
        ))

    return logger


def configure_logging(system_config, debug: bool = False) -> logging.Logger:
    """
    按系统配置（SystemConfig）设置引擎的根日志记录器

    Args:
        system_config: 系统配置对象
        debug: 为True时强制使用 DEBUG 级别
    """
    return setup_logger(
        name=ROOT_LOGGER_NAME,
        level='DEBUG' if debug else system_config.log_level,
        log_file=system_config.log_file or None,
        log_dir=system_config.log_dir,
        max_size=system_config.log_max_size,
        backup_count=system_config.log_backup_count,
        console_output=system_config.console_output
    )


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """获取日志记录器"""
    return logging.getLogger(name)


class LoggerMixin:
    """为类提供 chess_engine.<类名> 日志记录器"""

    @property
    def logger(self) -> logging.Logger:
        return get_logger(f'{ROOT_LOGGER_NAME}.{type(self).__name__}')

    def log_info(self, message: str, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def log_debug(self, message: str, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)
