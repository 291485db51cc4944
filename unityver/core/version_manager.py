"""
版本管理器模块。

提供版本号的批量解析、比较、排序、分组和最新版本查询功能。
"""

from typing import Any, Dict, Iterable, List, Optional

from unityver.utils.logger import get_logger
from unityver.core.config_manager import ConfigManager
from unityver.core import version_utils
from unityver.core.interfaces import IConfigManager, IVersionManager
from unityver.core.version_identifier import VersionIdentifier, VersionParseError, compare, parse
from unityver.utils.input_validator import InputValidator, InputValidationError

logger = get_logger()


class VersionManagerError(Exception):
    """版本管理错误异常。"""
    pass


class VersionNotFoundError(VersionManagerError):
    """没有满足条件的版本。"""
    pass


class UnknownChannelError(VersionManagerError):
    """请求了未知的渠道名称。"""
    pass


class VersionManager(IVersionManager):
    """
    版本管理器类。

    接收原始版本字符串，负责输入清理、解析和错误处理，
    并将排序、分组等具体工作委托给 version_utils。
    实现 IVersionManager 抽象接口。

    与库函数 parse/compare 不同，这里会先去掉版本字符串首尾的空白：
    compare_versions(" 2022.1.0", "2022.1.0") 返回 0，
    而 compare(" 2022.1.0", "2022.1.0") 抛出 InvalidSyntaxError。
    """

    def __init__(self, config_manager: Optional[IConfigManager] = None):
        """
        初始化版本管理器。

        参数:
            config_manager: 配置管理器实例，为 None 时使用默认 ConfigManager
        """
        self.config_manager = config_manager or ConfigManager()

    def parse_version(self, version: str) -> VersionIdentifier:
        """
        清理并解析单个版本字符串。

        参数:
            version: 版本字符串

        返回:
            VersionIdentifier 实例

        抛出:
            InputValidationError: 输入为空或过长时抛出
            VersionParseError: 版本语法无效或某部分超长时抛出
        """
        InputValidator.validate_version_string(version)
        version = InputValidator.sanitize_version_string(version)
        try:
            result = parse(version)
        except VersionParseError as e:
            logger.debug(f"解析版本失败: {e}")
            raise
        logger.debug(f"解析版本 {version} -> {result.comparison_key()}")
        return result

    def parse_versions(self, versions: Iterable[str], skip_invalid: Optional[bool] = None) -> List[VersionIdentifier]:
        """
        批量解析版本字符串。

        参数:
            versions: 版本字符串列表
            skip_invalid: 是否跳过无效版本号，为 None 时使用配置中的 skip_invalid

        返回:
            解析成功的版本列表，保持输入顺序
        """
        if skip_invalid is None:
            skip_invalid = self.config_manager.get_skip_invalid()

        result = []
        for version in versions:
            try:
                result.append(self.parse_version(version))
            except (InputValidationError, VersionParseError) as e:
                if not skip_invalid:
                    raise
                logger.warning(f"跳过无效版本 {version!r}: {e}")
        return result

    def compare_versions(self, left: str, right: str) -> int:
        """
        三路比较两个版本字符串。

        参数:
            left: 版本字符串
            right: 版本字符串

        返回:
            left 更新返回 1，right 更新返回 -1，相同返回 0
        """
        return compare(self.parse_version(left), self.parse_version(right))

    def _check_channel(self, channel: Optional[str]) -> Optional[str]:
        if channel is None:
            return None
        channel = InputValidator.sanitize_channel_name(channel)
        try:
            InputValidator.validate_channel_name(channel)
        except InputValidationError as e:
            raise UnknownChannelError(str(e)) from e
        return channel

    def sort_versions(
        self,
        versions: Iterable[str],
        channel: Optional[str] = None,
        descending: bool = True,
    ) -> List[VersionIdentifier]:
        """
        排序版本列表。

        参数:
            versions: 版本字符串列表
            channel: 仅保留该渠道的版本，None 表示所有渠道
            descending: True 表示最新的在前

        返回:
            排序后的版本列表
        """
        channel = self._check_channel(channel)
        parsed = self.parse_versions(versions)
        if channel is not None:
            parsed = version_utils.filter_by_channel(parsed, channel)
        if descending:
            return version_utils.sort_versions_desc(parsed)
        return version_utils.sort_versions_asc(parsed)

    def get_latest_version(self, versions: Iterable[str], channel: Optional[str] = None) -> VersionIdentifier:
        """
        获取最新版本。

        参数:
            versions: 版本字符串列表
            channel: 仅在该渠道内查找，None 表示所有渠道

        返回:
            最新的版本

        抛出:
            VersionNotFoundError: 没有满足条件的版本时抛出
        """
        channel = self._check_channel(channel)
        latest = version_utils.latest_version(self.parse_versions(versions), channel)
        if latest is None:
            scope = f"渠道 {channel} 中" if channel else ""
            raise VersionNotFoundError(f"{scope}没有可用的版本")
        return latest

    def get_latest_by_channel(self, versions: Iterable[str]) -> Dict[str, Optional[VersionIdentifier]]:
        """
        获取每个渠道的最新版本。

        参数:
            versions: 版本字符串列表

        返回:
            渠道名称到最新版本的映射
        """
        return version_utils.latest_by_channel(self.parse_versions(versions))

    def group_versions_by_major(self, versions: Iterable[str]) -> List[Dict[str, Any]]:
        """
        按主版本号分组版本列表。

        参数:
            versions: 版本字符串列表

        返回:
            分组后的版本列表，每个分组包含 major_version、versions 和 has_lts
        """
        return version_utils.group_versions_by_major(self.parse_versions(versions))
