"""
日志模块。

提供应用程序日志的配置和管理功能。
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

_logger: Optional[logging.Logger] = None


def get_data_dir() -> Path:
    """
    获取应用数据目录路径。

    打包为可执行文件时为可执行文件所在目录，否则为用户主目录下的 .unityver。

    返回:
        数据目录的 Path 对象
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    return Path.home() / ".unityver"


LOG_DIR = get_data_dir() / "logs"
LOGGER_NAME = "Unityver"
LOG_FILE_NAME = "unityver.log"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(module)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 5


def resolve_level(level: Union[int, str]) -> int:
    """
    将日志级别名称（如 "DEBUG"）转换为 logging 数值级别。

    参数:
        level: 数值级别或级别名称

    返回:
        logging 数值级别，无法识别时返回 logging.INFO
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logger(
    level: Union[int, str] = logging.INFO,
    log_to_file: bool = False,
    log_to_console: bool = True,
    log_dir: Optional[Path] = None,
    max_bytes: int = MAX_BYTES,
    backup_count: int = BACKUP_COUNT,
) -> logging.Logger:
    """
    配置并初始化日志记录器。

    参数:
        level: 日志级别，默认为 INFO
        log_to_file: 是否输出到文件，默认为 False
        log_to_console: 是否输出到控制台，默认为 True
        log_dir: 日志文件目录，默认为应用程序 logs 目录
        max_bytes: 单个日志文件最大字节数，默认为 5MB
        backup_count: 保留的备份文件数量，默认为 5

    返回:
        配置好的 Logger 实例
    """
    global _logger

    if _logger is not None:
        return _logger

    level = resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    if log_to_file:
        target_dir = log_dir or LOG_DIR
        target_dir.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            target_dir / LOG_FILE_NAME,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """
    获取日志记录器实例。

    如果尚未初始化，则使用默认配置初始化。

    返回:
        Logger 实例
    """
    if _logger is None:
        return setup_logger()
    return _logger


def set_log_level(level: Union[int, str]) -> None:
    """
    设置日志级别。

    参数:
        level: 日志级别（如 logging.DEBUG、"INFO" 等）
    """
    level = resolve_level(level)
    logger = get_logger()
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def add_file_handler(log_dir: Optional[Path] = None) -> Path:
    """
    为已初始化的日志记录器追加滚动文件输出。

    参数:
        log_dir: 日志文件目录，默认为应用程序 logs 目录

    返回:
        日志文件路径
    """
    logger = get_logger()
    target_dir = log_dir or LOG_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    log_file = target_dir / LOG_FILE_NAME

    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename) == log_file.absolute():
            return log_file

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logger.level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(file_handler)
    return log_file
