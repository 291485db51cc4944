"""
Unityver 命令行接口模块。
"""

import argparse
import json
import sys
from typing import Dict, List, Optional

from unityver import __version__
from unityver.core.config_manager import ConfigManager, ConfigSaveError, ConfigValidationError
from unityver.core.version_identifier import VersionIdentifier, VersionParseError
from unityver.core.version_manager import VersionManager, VersionManagerError
from unityver.utils.input_validator import InputValidationError
from unityver.utils.logger import add_file_handler, get_logger, set_log_level

logger = get_logger()

CHANNEL_CHOICES = ["lts", "stable", "beta", "alpha", "unknown"]

COMPARISON_SYMBOLS = {1: ">", 0: "=", -1: "<"}


def create_parser() -> argparse.ArgumentParser:
    """
    创建并配置命令行参数解析器。

    返回:
        配置好的 ArgumentParser 实例
    """
    parser = argparse.ArgumentParser(
        prog="unityver",
        description="Unityver - MAJOR.MINOR.PATCH[CHANNELBUILD] 版本号解析与比较",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  unityver parse 2022.1.0f1              显示版本号各部分和渠道
  unityver compare 2022.2.1f1 2022.2.1   比较两个版本
  unityver sort 2021.3.0b15 2022.1.0f1   按新旧排序
  unityver latest --channel lts ...      获取 LTS 渠道的最新版本
  unityver group 2021.3.1f1 2022.1.0     按主版本号分组
  unityver config --set output_format=json
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="启用详细输出",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="配置文件路径",
    )

    parser.add_argument(
        "--format",
        "-f",
        choices=["table", "json", "simple"],
        default=None,
        help="输出格式（默认使用配置中的 output_format）",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="命令",
        description="可用的 CLI 命令",
    )

    parse_parser = subparsers.add_parser(
        "parse",
        help="解析版本号并显示各部分",
    )
    parse_parser.add_argument(
        "versions",
        nargs="+",
        help="版本号，例如 2022.1.0f1",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="比较两个版本的新旧",
    )
    compare_parser.add_argument("left", help="第一个版本号")
    compare_parser.add_argument("right", help="第二个版本号")

    sort_parser = subparsers.add_parser(
        "sort",
        help="按新旧排序版本号",
    )
    sort_parser.add_argument(
        "versions",
        nargs="+",
        help="版本号列表",
    )
    sort_parser.add_argument(
        "--channel",
        choices=CHANNEL_CHOICES,
        default=None,
        help="仅保留指定渠道的版本",
    )
    sort_parser.add_argument(
        "--ascending",
        "-a",
        action="store_true",
        help="从旧到新排序",
    )

    latest_parser = subparsers.add_parser(
        "latest",
        help="获取最新版本",
    )
    latest_parser.add_argument(
        "versions",
        nargs="+",
        help="版本号列表",
    )
    latest_group = latest_parser.add_mutually_exclusive_group()
    latest_group.add_argument(
        "--channel",
        choices=CHANNEL_CHOICES,
        default=None,
        help="仅在指定渠道内查找",
    )
    latest_group.add_argument(
        "--all-channels",
        action="store_true",
        help="显示每个渠道的最新版本",
    )

    group_parser = subparsers.add_parser(
        "group",
        help="按主版本号分组",
    )
    group_parser.add_argument(
        "versions",
        nargs="+",
        help="版本号列表",
    )

    config_parser = subparsers.add_parser(
        "config",
        help="显示或编辑配置",
    )
    config_parser.add_argument(
        "--set",
        "-s",
        type=str,
        help="设置配置值（格式：key=value）",
    )
    config_parser.add_argument(
        "--reset",
        action="store_true",
        help="重置为默认配置",
    )

    return parser


def run_cli(args: argparse.Namespace) -> int:
    """
    运行命令行接口。

    参数:
        args: 解析后的命令行参数

    返回:
        退出码（0 表示成功）
    """
    if args.command is None:
        print("未指定命令。使用 --help 查看帮助信息。")
        return 1

    config_manager = ConfigManager(args.config)
    set_log_level("DEBUG" if args.verbose else config_manager.get_log_level())
    if config_manager.get_log_to_file():
        add_file_handler()

    if args.format is None:
        args.format = config_manager.get_output_format()

    command_handlers = {
        "parse": handle_parse,
        "compare": handle_compare,
        "sort": handle_sort,
        "latest": handle_latest,
        "group": handle_group,
        "config": handle_config,
    }

    handler = command_handlers.get(args.command)
    if handler is None:
        print(f"未知命令: {args.command}")
        return 1

    try:
        return handler(args, config_manager)
    except (InputValidationError, VersionParseError, VersionManagerError) as e:
        logger.debug(f"命令 {args.command} 失败: {e}")
        print(f"错误: {e}", file=sys.stderr)
        return 1
    except (ConfigValidationError, ConfigSaveError) as e:
        print(f"配置错误: {e}", file=sys.stderr)
        return 1


def _print_versions(versions: List[VersionIdentifier], output_format: str) -> None:
    """
    按指定格式输出版本列表。

    参数:
        versions: 版本列表
        output_format: 输出格式 (simple, json, table)
    """
    if output_format == "json":
        print(json.dumps([v.to_dict() for v in versions], indent=2, ensure_ascii=False))
    elif output_format == "table":
        print(f"{'版本':<16}{'major':>6}{'minor':>6}{'patch':>6}  {'渠道':<8}{'build':>6}")
        for v in versions:
            build = "" if v.build is None else str(v.build)
            print(f"{v.version_string:<16}{v.major:>6}{v.minor:>6}{v.patch:>6}  {v.channel_name:<8}{build:>6}")
    else:
        for v in versions:
            print(v.version_string)


def handle_parse(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    """
    处理 parse 命令：解析版本号并显示各部分。

    任一版本号无效时仍会处理其余版本号，最终返回 1。
    单个版本号的错误输出到 stderr，保证 stdout 上的 json 输出可直接解析。

    参数:
        args: 解析后的命令行参数
        config_manager: 配置管理器实例

    返回:
        退出码
    """
    version_manager = VersionManager(config_manager)
    parsed = []
    exit_code = 0

    for version in args.versions:
        try:
            parsed.append(version_manager.parse_version(version))
        except (InputValidationError, VersionParseError) as e:
            print(f"错误: {e}", file=sys.stderr)
            exit_code = 1

    if args.format in ("json", "table"):
        _print_versions(parsed, args.format)
        return exit_code

    for v in parsed:
        print(f"{v.version_string}:")
        print(f"  major:   {v.major}")
        print(f"  minor:   {v.minor}")
        print(f"  patch:   {v.patch}")
        print(f"  channel: {v.channel_name}" + (f" ({v.channel})" if v.channel else ""))
        if v.build is not None:
            print(f"  build:   {v.build}")
        if args.verbose:
            print(f"  key:     {v.comparison_key()}")
    return exit_code


def handle_compare(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    """
    处理 compare 命令：比较两个版本的新旧。

    参数:
        args: 解析后的命令行参数
        config_manager: 配置管理器实例

    返回:
        退出码
    """
    version_manager = VersionManager(config_manager)
    result = version_manager.compare_versions(args.left, args.right)

    if args.format == "json":
        print(json.dumps({"left": args.left, "right": args.right, "result": result}, indent=2))
    else:
        print(f"{args.left} {COMPARISON_SYMBOLS[result]} {args.right}")
    return 0


def handle_sort(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    """
    处理 sort 命令：按新旧排序版本号。

    参数:
        args: 解析后的命令行参数
        config_manager: 配置管理器实例

    返回:
        退出码
    """
    version_manager = VersionManager(config_manager)
    versions = version_manager.sort_versions(
        args.versions, channel=args.channel, descending=not args.ascending
    )
    _print_versions(versions, args.format)
    return 0


def handle_latest(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    """
    处理 latest 命令：获取最新版本。

    参数:
        args: 解析后的命令行参数
        config_manager: 配置管理器实例

    返回:
        退出码
    """
    version_manager = VersionManager(config_manager)

    if not args.all_channels:
        latest = version_manager.get_latest_version(args.versions, channel=args.channel)
        _print_versions([latest], args.format)
        return 0

    by_channel = version_manager.get_latest_by_channel(args.versions)
    if args.format == "json":
        result: Dict[str, Optional[dict]] = {
            name: v.to_dict() if v else None for name, v in by_channel.items()
        }
        print(json.dumps(result, indent=2, ensure_ascii=False))
    elif args.format == "table":
        _print_versions([v for v in by_channel.values() if v is not None], "table")
    else:
        for name, v in by_channel.items():
            print(f"{name:<8} {v.version_string if v else '-'}")
    return 0


def handle_group(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    """
    处理 group 命令：按主版本号分组。

    参数:
        args: 解析后的命令行参数
        config_manager: 配置管理器实例

    返回:
        退出码
    """
    version_manager = VersionManager(config_manager)
    groups = version_manager.group_versions_by_major(args.versions)

    if args.format == "json":
        result = [
            {
                "major_version": g["major_version"],
                "has_lts": g["has_lts"],
                "versions": [v.version_string for v in g["versions"]],
            }
            for g in groups
        ]
        print(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        for g in groups:
            marker = " (LTS)" if g["has_lts"] else ""
            print(f"{g['major_version']}{marker}:")
            for v in g["versions"]:
                print(f"  {v.version_string}")
    return 0


def handle_config(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    """
    处理 config 命令：显示或编辑配置。

    参数:
        args: 解析后的命令行参数
        config_manager: 配置管理器实例

    返回:
        退出码
    """
    if args.reset:
        config_manager.reset_to_default()
        print("配置已重置为默认值")
        return 0

    if args.set:
        key, _, value = args.set.partition("=")
        if not key or not value:
            print("格式无效。请使用: key=value", file=sys.stderr)
            return 1

        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            pass

        config_manager.set_setting(key, value)
        print(f"已设置 {key} = {value}")
        return 0

    print(json.dumps(config_manager.get_config(), indent=2, ensure_ascii=False))
    return 0
