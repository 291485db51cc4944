"""
版本工具模块。

提供版本号排序、按渠道过滤、按主版本号分组、获取最新版本等工具函数。
"""

from typing import Dict, Iterable, List, Optional

from unityver.core.version_identifier import VersionIdentifier

CHANNEL_ORDER = ("lts", "stable", "beta", "alpha", "unknown")


def sort_versions_desc(versions: Iterable[VersionIdentifier]) -> List[VersionIdentifier]:
    """
    按版本号降序排列版本列表。

    参数:
        versions: 版本列表

    返回:
        排序后的版本列表，最新的在前
    """
    return sorted(versions, key=lambda v: v.comparison_key(), reverse=True)


def sort_versions_asc(versions: Iterable[VersionIdentifier]) -> List[VersionIdentifier]:
    """按版本号升序排列版本列表。"""
    return sorted(versions, key=lambda v: v.comparison_key())


def filter_by_channel(versions: Iterable[VersionIdentifier], channel_name: str) -> List[VersionIdentifier]:
    """
    过滤出指定渠道的版本，保持原有顺序。

    参数:
        versions: 版本列表
        channel_name: 渠道名称 (lts, stable, beta, alpha, unknown)

    返回:
        属于该渠道的版本列表
    """
    return [v for v in versions if v.channel_name == channel_name]


def latest_version(
    versions: Iterable[VersionIdentifier],
    channel_name: Optional[str] = None,
) -> Optional[VersionIdentifier]:
    """
    获取最新版本。

    参数:
        versions: 版本列表
        channel_name: 仅在该渠道内查找，None 表示所有渠道

    返回:
        最新的版本，列表为空时返回 None
    """
    if channel_name is not None:
        versions = filter_by_channel(versions, channel_name)
    return max(versions, key=lambda v: v.comparison_key(), default=None)


def latest_by_channel(versions: Iterable[VersionIdentifier]) -> Dict[str, Optional[VersionIdentifier]]:
    """
    获取每个渠道的最新版本。

    参数:
        versions: 版本列表

    返回:
        渠道名称到最新版本的映射，没有版本的渠道映射为 None
    """
    result: Dict[str, Optional[VersionIdentifier]] = {name: None for name in CHANNEL_ORDER}
    for v in versions:
        current = result[v.channel_name]
        if current is None or v.comparison_key() > current.comparison_key():
            result[v.channel_name] = v
    return result


def group_versions_by_major(versions: Iterable[VersionIdentifier]) -> List[Dict]:
    """
    按主版本号分组版本列表。

    参数:
        versions: 版本列表

    返回:
        分组后的列表，按主版本号降序，每个分组包含 major_version、versions 和 has_lts
    """
    groups: Dict[int, Dict] = {}

    for v in sort_versions_desc(versions):
        if v.major not in groups:
            groups[v.major] = {
                "major_version": v.major,
                "versions": [],
                "has_lts": False
            }

        groups[v.major]["versions"].append(v)
        if v.is_lts():
            groups[v.major]["has_lts"] = True

    result = list(groups.values())
    result.sort(key=lambda g: g["major_version"], reverse=True)

    return result
