"""
版本标识符模块。

解析 MAJOR.MINOR.PATCH[CHANNELBUILD] 形式的版本号（如 2022.1.0f1、2021.3.0b15），
判断其发布渠道（LTS、stable、beta、alpha），并提供全序比较键。
"""

import re
from functools import total_ordering
from typing import Optional, Tuple, Union

from unityver.utils.logger import get_logger

logger = get_logger()


LTS_CHANNEL = "f"
BETA_CHANNEL = "b"
ALPHA_CHANNEL = "a"

# 渠道名称 -> 排名，数值越大越成熟
CHANNEL_RANKS = {
    "unknown": 0,
    "alpha": 1,
    "beta": 2,
    "stable": 3,
    "lts": 4,
}

CHANNEL_NAMES = {
    LTS_CHANNEL: "lts",
    None: "stable",
    BETA_CHANNEL: "beta",
    ALPHA_CHANNEL: "alpha",
}

# 检查顺序即字典顺序
FIELD_MAX_LENGTHS = {
    "major": 4,
    "minor": 2,
    "patch": 2,
    "channel": 1,
    "build": 3,
}

OPTIONAL_FIELDS = ("channel", "build")

NO_BUILD = -1

VERSION_PATTERN = re.compile(
    r"(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)"
    r"(?:(?P<channel>[A-Za-z])(?P<build>[0-9]+)|(?P<dangling>[A-Za-z]))?"
)


class VersionParseError(ValueError):
    """版本号解析错误异常基类。"""

    def __init__(self, version_string: str, message: str):
        super().__init__(message)
        self.version_string = version_string


class InvalidSyntaxError(VersionParseError):
    """版本号不符合 MAJOR.MINOR.PATCH[CHANNELBUILD] 语法。"""

    def __init__(self, version_string: str):
        super().__init__(version_string, f"无法解析版本字符串 '{version_string}'")


class MismatchingLengthError(VersionParseError):
    """版本号某一部分的长度超过允许的最大长度。"""

    def __init__(
        self,
        version_string: str,
        version_part: str,
        allowed_maximum_length: int,
        actual_length: int,
    ):
        super().__init__(
            version_string,
            f"无法解析版本字符串 '{version_string}'：'{version_part}' 部分的长度为 "
            f"{actual_length}，但允许的最大长度为 {allowed_maximum_length}",
        )
        self.version_part = version_part
        self.allowed_maximum_length = allowed_maximum_length
        self.actual_length = actual_length


def _check_lengths(version_string: str, match: "re.Match[str]") -> None:
    """
    按 major、minor、patch、channel、build 的顺序检查各部分长度。

    只报告第一个超长的部分。

    抛出:
        MismatchingLengthError: 某一部分超过最大长度时抛出
    """
    for part_name, maximum_length in FIELD_MAX_LENGTHS.items():
        value = match.group(part_name)
        if value is None and part_name in OPTIONAL_FIELDS:
            continue
        actual_length = len(value)
        if actual_length > maximum_length:
            raise MismatchingLengthError(version_string, part_name, maximum_length, actual_length)


@total_ordering
class VersionIdentifier:
    """
    版本标识符类。

    构造时解析版本字符串，之后不可修改。
    各字段通过只读属性访问，比较运算基于 comparison_key()。
    """

    __slots__ = ("_version_string", "_major", "_minor", "_patch", "_channel", "_build")

    def __init__(self, version_string: str):
        """
        解析版本字符串。

        参数:
            version_string: 版本字符串，例如 "2022.1.0f1"

        抛出:
            TypeError: 参数不是字符串时抛出
            InvalidSyntaxError: 不符合版本语法时抛出
            MismatchingLengthError: 某一部分超长时抛出
        """
        if not isinstance(version_string, str):
            raise TypeError(f"版本字符串必须是 str 类型，实际为 {type(version_string).__name__}")

        match = VERSION_PATTERN.match(version_string)
        if match is None or match.group("dangling") is not None:
            logger.debug(f"版本字符串语法无效: {version_string!r}")
            raise InvalidSyntaxError(version_string)

        _check_lengths(version_string, match)

        self._version_string = version_string
        self._major = int(match.group("major"))
        self._minor = int(match.group("minor"))
        self._patch = int(match.group("patch"))
        self._channel: Optional[str] = match.group("channel")
        self._build: Optional[int] = None
        if self._channel is not None:
            self._build = int(match.group("build"))

    @property
    def version_string(self) -> str:
        """原始版本字符串。"""
        return self._version_string

    @property
    def major(self) -> int:
        return self._major

    @property
    def minor(self) -> int:
        return self._minor

    @property
    def patch(self) -> int:
        return self._patch

    @property
    def channel(self) -> Optional[str]:
        """渠道字母，stable 版本为 None。"""
        return self._channel

    @property
    def build(self) -> Optional[int]:
        """构建号，仅在存在渠道字母时存在。"""
        return self._build

    @property
    def channel_name(self) -> str:
        """渠道名称：lts、stable、beta、alpha 或 unknown。"""
        return CHANNEL_NAMES.get(self._channel, "unknown")

    def is_lts(self) -> bool:
        return self._channel == LTS_CHANNEL

    def is_stable(self) -> bool:
        return self._channel is None

    def is_beta(self) -> bool:
        return self._channel == BETA_CHANNEL

    def is_alpha(self) -> bool:
        return self._channel == ALPHA_CHANNEL

    def is_unknown_channel(self) -> bool:
        return self.channel_name == "unknown"

    def channel_rank(self) -> int:
        """
        获取渠道排名。

        unknown < alpha < beta < stable < lts。

        返回:
            渠道排名整数
        """
        return CHANNEL_RANKS[self.channel_name]

    def comparison_key(self) -> Tuple[int, int, int, int, int, str]:
        """
        获取可比较的元组。

        元组为 (major, minor, patch, 渠道排名, 构建号, 渠道字母)。
        无构建号时使用 -1，因此同一渠道内低于任何构建号。
        最后一项仅用于区分两个不同的未知渠道字母。

        返回:
            可比较的元组，越新的版本越大
        """
        return (
            self._major,
            self._minor,
            self._patch,
            self.channel_rank(),
            NO_BUILD if self._build is None else self._build,
            self._channel or "",
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return self.comparison_key() == other.comparison_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return self.comparison_key() < other.comparison_key()

    def __hash__(self) -> int:
        return hash(self.comparison_key())

    def __str__(self) -> str:
        core = f"{self._major}.{self._minor}.{self._patch}"
        if self._channel is None:
            return core
        return f"{core}{self._channel}{self._build}"

    def __repr__(self) -> str:
        return f"VersionIdentifier('{self._version_string}')"

    def to_dict(self) -> dict:
        """
        转换为字典，用于 JSON 输出。

        返回:
            包含各字段、渠道名称和比较键的字典
        """
        return {
            "version": self._version_string,
            "major": self._major,
            "minor": self._minor,
            "patch": self._patch,
            "channel": self._channel,
            "build": self._build,
            "channel_name": self.channel_name,
            "comparison_key": list(self.comparison_key()),
        }


def parse(version_string: str) -> VersionIdentifier:
    """
    解析版本字符串为 VersionIdentifier。

    参数:
        version_string: 版本字符串

    返回:
        VersionIdentifier 实例
    """
    return VersionIdentifier(version_string)


def _coerce(version: Union[str, VersionIdentifier]) -> VersionIdentifier:
    if isinstance(version, VersionIdentifier):
        return version
    return parse(version)


def compare(left: Union[str, VersionIdentifier], right: Union[str, VersionIdentifier]) -> int:
    """
    三路比较两个版本。

    参数:
        left: 版本字符串或 VersionIdentifier
        right: 版本字符串或 VersionIdentifier

    返回:
        left 更新返回 1，right 更新返回 -1，相同返回 0
    """
    left_key = _coerce(left).comparison_key()
    right_key = _coerce(right).comparison_key()
    return (left_key > right_key) - (left_key < right_key)
