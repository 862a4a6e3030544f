"""
Logging Configuration
=====================
Sets up the 'radialchart' logger and routes Qt's own diagnostics into it.

Why is this file needed?
------------------------
1. One place decides format and handlers; modules only call
   `logging.getLogger(__name__)`.
2. Qt reports SVG parse problems and painter misuse through its own message
   handler. `install_qt_message_handler` forwards those messages to the
   'radialchart.qt' logger so they land in the same stream and log file.
"""
import logging
import os
import sys
from typing import Optional

from PySide6.QtCore import QMessageLogContext, QtMsgType, qInstallMessageHandler

LOGGER_NAME = "radialchart"
LEVEL_ENV_VAR = "RADIALCHART_LOG_LEVEL"

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def _level_from_env(default: int) -> int:
    name = os.environ.get(LEVEL_ENV_VAR, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def _qt_message_handler(mode: QtMsgType, context: QMessageLogContext, message: str) -> None:
    logging.getLogger(f"{LOGGER_NAME}.qt").log(_QT_LEVELS.get(mode, logging.WARNING), message)


def install_qt_message_handler() -> None:
    qInstallMessageHandler(_qt_message_handler)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the 'radialchart' logger.

    Args:
        level: Logging level, overridden by the RADIALCHART_LOG_LEVEL
            environment variable when it names a valid level.
        log_file: Optional path of a log file (overwritten on every start).

    Returns:
        The configured package logger.
    """
    level = _level_from_env(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # A second call (tests, re-created app) must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    install_qt_message_handler()
    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
