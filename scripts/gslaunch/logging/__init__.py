import logging
import os
import sys
from typing import Optional, Union

LEVEL_COLORS = {
    "DEBUG": "\x1b[36m",
    "INFO": "\x1b[32m",
    "WARNING": "\x1b[33m",
    "ERROR": "\x1b[31m",
    "CRITICAL": "\x1b[41m",
}
RESET = "\x1b[0m"

LOG_FILE_ENV = "GSLAUNCH_LOG_FILE"
LOG_LEVEL_ENV = "GSLAUNCH_LOG_LEVEL"


class ColoredFormatter(logging.Formatter):
    def __init__(self, fmt: str, use_color: bool = True):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        color = LEVEL_COLORS.get(levelname, "") if self.use_color else ""
        record.levelname = f"{color}{levelname}{RESET}" if color else levelname
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class Logger:
    """Thin wrapper over a stdlib logger that writes diagnostics to stderr.

    Every gslaunch logger shares one root, ``gslaunch``, so ``set_level``
    applies to the whole package. Game output on stdout stays untouched.
    """

    ROOT = "gslaunch"

    def __init__(self, name: str, level: Union[str, int, None] = None, log_file: Optional[str] = None):
        self.name = name
        self.logger = logging.getLogger(name)
        root = logging.getLogger(self.ROOT)
        if not root.handlers:
            _setup_handlers(root, log_file or os.environ.get(LOG_FILE_ENV))
            root.setLevel(_level_value(level or os.environ.get(LOG_LEVEL_ENV) or "INFO"))

    @classmethod
    def set_level(cls, level: Union[str, int]) -> None:
        logging.getLogger(cls.ROOT).setLevel(_level_value(level))

    def debug(self, msg: str, *args, **kwargs) -> None:
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self.logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self.logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self.logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs) -> None:
        self.logger.critical(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs) -> None:
        self.logger.exception(msg, *args, **kwargs)


def _level_value(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    level_value = logging.getLevelName(str(level).upper())
    if isinstance(level_value, str):
        return logging.INFO
    return level_value


def _setup_handlers(logger: logging.Logger, log_file: Optional[str]) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console_format = "[%(levelname)s] %(name)s: %(message)s"
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter(console_format, use_color=sys.stderr.isatty()))
    logger.addHandler(console_handler)

    if log_file:
        file_format = "%(asctime)s - %(name)s - [%(levelname)s] %(message)s"
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(file_format))
        logger.addHandler(file_handler)


__all__ = ["Logger", "ColoredFormatter"]
