"""
配置管理器

每类配置登记为 (文件名, 配置类, 默认值)，统一负责读写、校验和导出。
"""

import json
from dataclasses import asdict, fields, replace
from pathlib import Path
from typing import Dict, Any, List, NamedTuple, Optional, Type

import yaml

from .game_config import (
    GameConfig, AIConfig, SystemConfig,
    DEFAULT_GAME_CONFIG, DEFAULT_AI_CONFIG, DEFAULT_SYSTEM_CONFIG
)
from ..utils.exceptions import ConfigurationError
from ..utils.logger import get_logger

logger = get_logger("chess_engine.ConfigManager")


class ConfigEntry(NamedTuple):
    """一类配置的登记信息"""
    filename: str
    config_class: Type
    default: Any


CONFIG_REGISTRY: Dict[str, ConfigEntry] = {
    'game': ConfigEntry('game_config.yaml', GameConfig, DEFAULT_GAME_CONFIG),
    'ai': ConfigEntry('ai_config.yaml', AIConfig, DEFAULT_AI_CONFIG),
    'system': ConfigEntry('system_config.yaml', SystemConfig, DEFAULT_SYSTEM_CONFIG),
}


def _read_file(path: Path) -> Any:
    """按扩展名读取 YAML 或 JSON 文件"""
    with open(path, 'r', encoding='utf-8') as f:
        if path.suffix in ('.yaml', '.yml'):
            return yaml.safe_load(f)
        return json.load(f)


def _write_file(path: Path, data: Dict[str, Any]):
    """按扩展名写出 YAML 或 JSON 文件"""
    with open(path, 'w', encoding='utf-8') as f:
        if path.suffix in ('.yaml', '.yml'):
            yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True, indent=2)
        else:
            json.dump(data, f, ensure_ascii=False, indent=2)


class ConfigManager:
    """
    配置管理器

    配置目录下每类配置一个文件，首次使用时用默认值创建。
    读取失败不会中断程序，而是记录错误并退回默认配置。
    """

    def __init__(self, config_dir: str = "chess_game_project/configs"):
        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        for name, entry in CONFIG_REGISTRY.items():
            path = self.path_for(name)
            if not path.exists():
                self.save_config(name, entry.default)
                logger.info(f"创建默认配置文件: {path}")

    def _entry(self, config_name: str) -> ConfigEntry:
        entry = CONFIG_REGISTRY.get(config_name)
        if entry is None:
            raise ConfigurationError(config_name, "未知的配置名称")
        return entry

    def path_for(self, config_name: str) -> Path:
        """配置文件路径"""
        return self.config_dir / self._entry(config_name).filename

    def load_config(self, config_name: str, config_class: Optional[Type] = None):
        """
        加载配置

        Args:
            config_name: 配置名称 ('game', 'ai', 'system')
            config_class: 配置类，默认取登记的类

        Returns:
            配置对象；文件缺失或无法解析时为默认配置的副本
        """
        entry = self._entry(config_name)
        path = self.config_dir / entry.filename

        if not path.exists():
            logger.warning(f"配置文件不存在: {path}，使用默认配置")
            return replace(entry.default)

        try:
            config = self._dict_to_dataclass(_read_file(path) or {},
                                             config_class or entry.config_class)
        except (OSError, yaml.YAMLError, json.JSONDecodeError, TypeError) as e:
            logger.error(f"加载配置文件失败: {path}, 错误: {e}")
            return replace(entry.default)

        logger.debug(f"成功加载配置: {path}")
        return config

    def save_config(self, config_name: str, config_obj: Any):
        """把配置对象写回对应文件"""
        path = self.path_for(config_name)
        try:
            _write_file(path, asdict(config_obj))
        except OSError as e:
            logger.error(f"保存配置文件失败: {path}, 错误: {e}")
            raise
        logger.debug(f"成功保存配置: {path}")

    def get_game_config(self) -> GameConfig:
        return self.load_config('game')

    def get_ai_config(self) -> AIConfig:
        return self.load_config('ai')

    def get_system_config(self) -> SystemConfig:
        return self.load_config('system')

    def update_config(self, config_name: str, **kwargs):
        """
        修改部分配置项并保存

        不存在的配置项会被忽略并记录警告。
        """
        config = self.load_config(config_name)
        known = {f.name for f in fields(config)}

        for key, value in kwargs.items():
            if key not in known:
                logger.warning(f"配置项不存在: {key}")
                continue
            setattr(config, key, value)

        self.save_config(config_name, config)

    def reset_config(self, config_name: str):
        """重置配置为默认值"""
        self.save_config(config_name, self._entry(config_name).default)
        logger.info(f"配置已重置为默认值: {config_name}")

    def get_validation_errors(self, config_name: str) -> List[str]:
        """返回配置中所有不合法项的说明"""
        return self.load_config(config_name).validate()

    def validate_config(self, config_name: str) -> bool:
        """配置是否全部合法"""
        errors = self.get_validation_errors(config_name)
        for error in errors:
            logger.warning(f"配置 {config_name} 无效: {error}")
        return not errors

    def get_all_configs(self) -> Dict[str, Any]:
        return {name: self.load_config(name) for name in CONFIG_REGISTRY}

    def export_configs(self, export_path: str):
        """
        导出所有配置到一个文件

        Args:
            export_path: 导出路径，扩展名为 .yaml/.yml 时写 YAML，否则写 JSON
        """
        export_data = {name: asdict(config) for name, config in self.get_all_configs().items()}
        _write_file(Path(export_path), export_data)
        logger.info(f"配置已导出到: {export_path}")

    @staticmethod
    def _dict_to_dataclass(data: Dict[str, Any], dataclass_type: Type):
        """字典转数据类，未知字段忽略"""
        if not isinstance(data, dict):
            raise TypeError(f"配置内容应为映射类型，实际为 {type(data).__name__}")

        field_names = {f.name for f in fields(dataclass_type)}
        return dataclass_type(**{k: v for k, v in data.items() if k in field_names})
