"""
核心模块抽象接口定义。

定义 ConfigManager、VersionManager 等核心模块的抽象接口。
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from unityver.core.version_identifier import VersionIdentifier


class IConfigManager(ABC):
    """配置管理器抽象接口。"""

    @abstractmethod
    def get_config(self) -> dict[str, Any]:
        """获取配置字典。"""
        pass

    @abstractmethod
    def save_config(self, config: dict[str, Any] | None = None) -> None:
        """保存配置到文件。"""
        pass

    @abstractmethod
    def get_settings(self) -> dict[str, Any]:
        """获取 settings 配置部分。"""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: Any) -> None:
        """设置并保存单个 settings 配置项。"""
        pass

    @abstractmethod
    def get_output_format(self) -> str:
        """获取默认输出格式。"""
        pass

    @abstractmethod
    def get_log_level(self) -> str:
        """获取日志级别。"""
        pass

    @abstractmethod
    def get_log_to_file(self) -> bool:
        """获取是否输出日志文件。"""
        pass

    @abstractmethod
    def get_skip_invalid(self) -> bool:
        """获取批量解析时是否跳过无效版本号。"""
        pass

    @abstractmethod
    def reset_to_default(self) -> dict[str, Any]:
        """重置为默认配置。"""
        pass


class IVersionManager(ABC):
    """版本管理器抽象接口。"""

    @abstractmethod
    def parse_version(self, version: str) -> VersionIdentifier:
        """解析单个版本字符串。"""
        pass

    @abstractmethod
    def parse_versions(self, versions: Iterable[str], skip_invalid: Optional[bool] = None) -> List[VersionIdentifier]:
        """批量解析版本字符串。"""
        pass

    @abstractmethod
    def compare_versions(self, left: str, right: str) -> int:
        """三路比较两个版本字符串。"""
        pass

    @abstractmethod
    def sort_versions(self, versions: Iterable[str], channel: Optional[str] = None, descending: bool = True) -> List[VersionIdentifier]:
        """排序版本列表。"""
        pass

    @abstractmethod
    def get_latest_version(self, versions: Iterable[str], channel: Optional[str] = None) -> VersionIdentifier:
        """获取最新版本。"""
        pass

    @abstractmethod
    def get_latest_by_channel(self, versions: Iterable[str]) -> Dict[str, Optional[VersionIdentifier]]:
        """获取每个渠道的最新版本。"""
        pass

    @abstractmethod
    def group_versions_by_major(self, versions: Iterable[str]) -> List[Dict[str, Any]]:
        """按主版本号分组。"""
        pass
