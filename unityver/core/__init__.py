"""
Unityver 核心模块。

提供版本号解析、比较、配置管理和版本管理功能。
"""

from .version_identifier import (
    VersionIdentifier, VersionParseError, InvalidSyntaxError, MismatchingLengthError,
    CHANNEL_RANKS, FIELD_MAX_LENGTHS, parse, compare,
)
from .interfaces import IConfigManager, IVersionManager
from .config_manager import ConfigManager, ConfigValidationError, ConfigSaveError
from .version_manager import VersionManager, VersionManagerError, VersionNotFoundError, UnknownChannelError
from . import version_utils

__all__ = [
    "VersionIdentifier", "VersionParseError", "InvalidSyntaxError", "MismatchingLengthError",
    "CHANNEL_RANKS", "FIELD_MAX_LENGTHS", "parse", "compare",
    "IConfigManager", "IVersionManager",
    "ConfigManager", "ConfigValidationError", "ConfigSaveError",
    "VersionManager", "VersionManagerError", "VersionNotFoundError", "UnknownChannelError",
    "version_utils",
]
