"""
Unityver：MAJOR.MINOR.PATCH[CHANNELBUILD] 版本号的解析、渠道分类与比较。
"""

from unityver.core.version_identifier import (
    CHANNEL_RANKS,
    FIELD_MAX_LENGTHS,
    InvalidSyntaxError,
    MismatchingLengthError,
    VersionIdentifier,
    VersionParseError,
    compare,
    parse,
)

__version__ = "0.1.0"

__all__ = [
    "CHANNEL_RANKS",
    "FIELD_MAX_LENGTHS",
    "InvalidSyntaxError",
    "MismatchingLengthError",
    "VersionIdentifier",
    "VersionParseError",
    "compare",
    "parse",
    "__version__",
]
