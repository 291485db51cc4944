"""
输入验证模块。

提供用户输入的验证和 sanitization 功能。
"""

from typing import Any, Dict

from unityver.utils.logger import get_logger

logger = get_logger()


class InputValidationError(Exception):
    """输入验证错误异常。"""
    pass


class InputValidator:
    """
    输入验证器类。

    在版本字符串进入解析器之前，对命令行和配置中的原始输入进行检查。
    """

    MAX_VERSION_LENGTH = 100
    CHANNEL_NAMES = ("lts", "stable", "beta", "alpha", "unknown")
    OUTPUT_FORMATS = ("simple", "json", "table")
    LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

    @classmethod
    def validate_version_string(cls, version: str) -> bool:
        """
        验证版本号字符串的有效性。

        这里只检查是否为空和长度。语法由解析器负责，
        解析器只匹配前缀，版本号之后的附加文本（如 " (LTS)"、"+abc"）会被忽略。

        参数:
            version: 版本号字符串

        返回:
            验证通过返回 True，否则抛出 InputValidationError
        """
        if not isinstance(version, str):
            raise InputValidationError("版本号必须是字符串")

        if not version or not version.strip():
            raise InputValidationError("版本号不能为空")

        if len(version.strip()) > cls.MAX_VERSION_LENGTH:
            raise InputValidationError(f"版本号不能超过 {cls.MAX_VERSION_LENGTH} 个字符")

        return True

    @classmethod
    def sanitize_version_string(cls, version: str) -> str:
        """
        sanitize 版本号字符串。

        参数:
            version: 原始版本号

        返回:
            sanitized 后的版本号
        """
        if not version:
            return ""
        return version.strip()

    @classmethod
    def validate_channel_name(cls, channel_name: str) -> bool:
        """
        验证渠道名称。

        参数:
            channel_name: 渠道名称

        返回:
            验证通过返回 True，否则抛出 InputValidationError
        """
        if channel_name not in cls.CHANNEL_NAMES:
            raise InputValidationError(
                f"未知渠道: {channel_name}，可用渠道: {', '.join(cls.CHANNEL_NAMES)}"
            )
        return True

    @classmethod
    def sanitize_channel_name(cls, channel_name: str) -> str:
        if not channel_name:
            return ""
        return channel_name.strip().lower()

    @classmethod
    def validate_output_format(cls, output_format: str) -> bool:
        if output_format not in cls.OUTPUT_FORMATS:
            raise InputValidationError(
                f"输出格式无效: {output_format}，可用格式: {', '.join(cls.OUTPUT_FORMATS)}"
            )
        return True

    @classmethod
    def validate_log_level(cls, level: str) -> bool:
        if not isinstance(level, str) or level.upper() not in cls.LOG_LEVELS:
            raise InputValidationError(f"日志级别无效: {level}")
        return True

    @classmethod
    def validate_json_config(cls, config_data: Dict[str, Any]) -> bool:
        """
        验证 JSON 配置的结构。

        参数:
            config_data: 配置数据字典

        返回:
            验证通过返回 True，否则抛出 InputValidationError
        """
        if not isinstance(config_data, dict):
            raise InputValidationError("配置必须是字典类型")

        if "settings" in config_data:
            settings = config_data["settings"]
            if not isinstance(settings, dict):
                raise InputValidationError("settings 必须是字典类型")

            if "output_format" in settings:
                try:
                    cls.validate_output_format(settings["output_format"])
                except InputValidationError as e:
                    raise InputValidationError(f"settings.output_format: {e}") from e

            if "log_level" in settings:
                try:
                    cls.validate_log_level(settings["log_level"])
                except InputValidationError as e:
                    raise InputValidationError(f"settings.log_level: {e}") from e

        return True

    @classmethod
    def safe_get_config_value(cls, config: Dict[str, Any], key: str, default: Any = None) -> Any:
        """
        安全地获取配置值，避免 KeyError。

        参数:
            config: 配置字典
            key: 以点分隔的键名，例如 "settings.output_format"
            default: 默认值

        返回:
            配置值或默认值
        """
        value: Any = config
        for k in key.split('.'):
            if not isinstance(value, dict) or k not in value:
                return default
            value = value[k]
        return value
