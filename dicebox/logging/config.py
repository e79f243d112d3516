"""日志配置模块

控制台输出带颜色的结构化日志；文件输出按大小轮转、按天数保留，
ERROR 及以上级别另外写入单独的错误日志。
"""
import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger


# 控制台格式：时间、级别、模块位置、消息
CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# 文件格式：同上，去掉颜色标记
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level:<8} | "
    "{name}:{function}:{line} | "
    "{message}"
)


def _add_file_sink(path: Path, level: str, rotation: str, retention: str) -> None:
    logger.add(
        path,
        level=level,
        format=FILE_FORMAT,
        rotation=rotation,
        retention=retention,
        compression="zip",
        encoding="utf-8",
        backtrace=True,
        diagnose=False,
    )


def setup_logging(
    level: str = "INFO",
    log_path: Optional[Path] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    enable_console: bool = True,
    enable_file: bool = True,
    file_prefix: str = "dicebox",
) -> None:
    """配置日志系统

    Args:
        level: 控制台日志级别，环境变量 LOG_LEVEL 优先
        log_path: 日志文件目录，为 None 时不写文件
        rotation: 轮转策略 (如 "10 MB", "00:00")
        retention: 保留策略 (如 "7 days")
        enable_console: 是否输出到 stderr
        enable_file: 是否输出到文件
        file_prefix: 主日志文件名前缀
    """
    logger.remove()

    console_level = os.environ.get("LOG_LEVEL", level).upper()

    if enable_console:
        logger.add(
            sys.stderr,
            level=console_level,
            format=CONSOLE_FORMAT,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    if enable_file and log_path:
        log_path = Path(log_path)
        log_path.mkdir(parents=True, exist_ok=True)

        # 主日志记录全部 DEBUG 以上信息，错误日志单独一份便于排查
        _add_file_sink(
            log_path / f"{file_prefix}_{{time:YYYY-MM-DD}}.log", "DEBUG", rotation, retention
        )
        _add_file_sink(
            log_path / "error_{time:YYYY-MM-DD}.log", "ERROR", rotation, retention
        )
