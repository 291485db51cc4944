"""
配置管理器模块。

提供应用程序配置的加载、保存和验证功能。
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Optional, Union

from unityver.utils.logger import get_logger
from unityver.core.interfaces import IConfigManager
from unityver.utils.input_validator import InputValidator, InputValidationError

logger = get_logger()


class ConfigValidationError(Exception):
    """配置验证错误异常。"""
    pass


class ConfigSaveError(Exception):
    """配置保存错误异常。"""
    pass


def get_config_dir() -> Path:
    """
    获取默认配置目录路径。

    打包为可执行文件时使用可执行文件旁的 config 目录，
    否则使用当前用户主目录下的 .unityver 目录，不会写入安装目录（如 site-packages）。

    返回:
        配置目录的 Path 对象
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent / "config"
    return Path.home() / ".unityver"


def _atomic_save_json(file_path: Path, data: Any, indent: int = 2) -> None:
    """
    原子保存 JSON 数据到文件，防止写入中断导致文件损坏。

    参数:
        file_path: 目标文件路径
        data: 要保存的数据
        indent: JSON 缩进
    """
    temp_path = file_path.with_suffix(file_path.suffix + ".tmp")

    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
        os.replace(temp_path, file_path)
    except BaseException:
        if temp_path.exists():
            temp_path.unlink()
        raise


class ConfigManager(IConfigManager):
    """
    配置管理器类。

    负责管理应用程序配置的加载、保存、验证和访问。
    实现 IConfigManager 抽象接口。
    """

    CONFIG_FILE_NAME = "config.json"

    REQUIRED_FIELDS = {
        "settings": dict,
    }

    SETTINGS_FIELDS = {
        "output_format": str,
        "log_level": str,
        "log_to_file": bool,
        "skip_invalid": bool,
    }

    DEFAULT_SETTINGS = {
        "output_format": "simple",
        "log_level": "INFO",
        "log_to_file": False,
        "skip_invalid": True,
    }

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        初始化配置管理器。

        参数:
            config_file: 配置文件路径，默认为 get_config_dir() 下的 config.json
        """
        self.config_file = Path(config_file) if config_file else get_config_dir() / self.CONFIG_FILE_NAME
        self._config: dict[str, Any] = {}

    def _ensure_config_dir(self) -> None:
        """确保配置目录存在。"""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)

    def get_default_config(self) -> dict[str, Any]:
        """
        获取内置默认配置。

        返回:
            默认配置字典
        """
        return {"settings": dict(self.DEFAULT_SETTINGS)}

    def load_config(self) -> dict[str, Any]:
        """
        加载配置文件。

        如果配置文件不存在，则创建默认配置文件；
        文件无法读取或验证失败时使用默认配置。

        返回:
            配置字典
        """
        try:
            if not self.config_file.exists():
                logger.info(f"配置文件不存在，创建默认配置: {self.config_file}")
                self._config = self.get_default_config()
                self.save_config()
                return self._config

            logger.debug(f"从文件加载配置: {self.config_file}")
            with open(self.config_file, "r", encoding="utf-8") as f:
                self._config = json.load(f)

            self._ensure_backward_compatibility()
            self.validate_config(self._config)
            logger.debug("配置加载成功")
            return self._config
        except (IOError, OSError, json.JSONDecodeError, ConfigSaveError) as e:
            logger.error(f"加载配置文件失败，使用默认配置: {e}")
            self._config = self.get_default_config()
            return self._config
        except ConfigValidationError as e:
            logger.error(f"配置验证失败，使用默认配置: {e}")
            self._config = self.get_default_config()
            return self._config

    def _ensure_backward_compatibility(self) -> None:
        """
        确保配置向后兼容，为旧版本配置添加新字段。
        """
        if not isinstance(self._config, dict):
            raise ConfigValidationError("配置必须是字典类型")

        if "settings" not in self._config:
            self._config["settings"] = {}

        settings = self._config["settings"]
        if not isinstance(settings, dict):
            return

        for field, default in self.DEFAULT_SETTINGS.items():
            if field not in settings:
                settings[field] = default

    def save_config(self, config: dict[str, Any] | None = None) -> None:
        """
        保存配置到文件。

        参数:
            config: 要保存的配置字典，如果为 None 则保存当前配置
        """
        try:
            if config is not None:
                self._config = config

            self.validate_config(self._config)

            logger.debug(f"保存配置到 {self.config_file}")
            self._ensure_config_dir()
            _atomic_save_json(self.config_file, self._config.copy(), indent=2)
            logger.debug("配置保存成功")
        except ConfigValidationError as e:
            logger.error(f"配置验证失败，无法保存: {e}")
            raise
        except (IOError, OSError, TypeError) as e:
            logger.error(f"保存配置失败: {e}")
            raise ConfigSaveError(f"无法保存配置到 {self.config_file}: {e}") from e

    def validate_config(self, config: dict[str, Any]) -> bool:
        """
        验证配置的有效性。

        参数:
            config: 要验证的配置字典

        返回:
            验证通过返回 True

        抛出:
            ConfigValidationError: 配置验证失败时抛出
        """
        if not isinstance(config, dict):
            raise ConfigValidationError("配置必须是字典类型")

        for field, expected_type in self.REQUIRED_FIELDS.items():
            if field not in config:
                raise ConfigValidationError(f"缺少必需字段: {field}")
            if not isinstance(config[field], expected_type):
                raise ConfigValidationError(
                    f"字段 '{field}' 必须是 {expected_type.__name__} 类型，"
                    f"实际为 {type(config[field]).__name__}"
                )

        settings = config["settings"]
        for field, expected_type in self.SETTINGS_FIELDS.items():
            if field not in settings:
                raise ConfigValidationError(f"settings 中缺少必需字段: {field}")
            if not isinstance(settings[field], expected_type):
                raise ConfigValidationError(
                    f"字段 'settings.{field}' 必须是 {expected_type.__name__} 类型，"
                    f"实际为 {type(settings[field]).__name__}"
                )

        try:
            InputValidator.validate_json_config(config)
        except InputValidationError as e:
            raise ConfigValidationError(str(e)) from e

        logger.debug("配置验证通过")
        return True

    @property
    def config(self) -> dict[str, Any]:
        """
        获取配置字典（延迟加载）。

        返回:
            配置字典
        """
        if not self._config:
            self.load_config()
        return self._config

    def get_config(self) -> dict[str, Any]:
        return self.config

    def get_settings(self) -> dict[str, Any]:
        return self.config.get("settings", {})

    def set_setting(self, key: str, value: Any) -> None:
        """
        设置并保存单个 settings 配置项。

        参数:
            key: 配置项名称（可带 "settings." 前缀）
            value: 配置值

        抛出:
            ConfigValidationError: 配置项未知或值无效时抛出
        """
        if key.startswith("settings."):
            key = key[len("settings."):]

        if key not in self.SETTINGS_FIELDS:
            raise ConfigValidationError(
                f"未知配置项: {key}，可用配置项: {', '.join(self.SETTINGS_FIELDS)}"
            )

        if key == "log_level" and isinstance(value, str):
            value = value.upper()

        candidate = json.loads(json.dumps(self.config))
        candidate["settings"][key] = value
        self.validate_config(candidate)
        self.save_config(candidate)
        logger.info(f"已设置 settings.{key} = {value!r}")

    def get_output_format(self) -> str:
        return InputValidator.safe_get_config_value(self.config, "settings.output_format", self.DEFAULT_SETTINGS["output_format"])

    def get_log_level(self) -> str:
        return InputValidator.safe_get_config_value(self.config, "settings.log_level", self.DEFAULT_SETTINGS["log_level"])

    def get_log_to_file(self) -> bool:
        return InputValidator.safe_get_config_value(self.config, "settings.log_to_file", self.DEFAULT_SETTINGS["log_to_file"])

    def get_skip_invalid(self) -> bool:
        """
        获取批量解析时是否跳过无效版本号。

        返回:
            True 表示跳过并记录警告，False 表示遇到无效版本号时抛出异常
        """
        return InputValidator.safe_get_config_value(self.config, "settings.skip_invalid", self.DEFAULT_SETTINGS["skip_invalid"])

    def reset_to_default(self) -> dict[str, Any]:
        """
        重置配置为默认配置。

        返回:
            更新后的配置字典
        """
        self._config = self.get_default_config()
        self.save_config()
        logger.info("配置已重置为默认值")
        return self._config
