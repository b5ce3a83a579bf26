# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Logging configuration for the GNSS satellite engine

All modules log through ``logging.getLogger(__name__)`` below the
``pysatnav`` logger, so configuring that logger (or one of its children such
as ``pysatnav.gnss.position_store``) controls the engine output.
"""

import logging
import sys
from enum import Enum
from typing import Any, Dict, Optional

ROOT_LOGGER = "pysatnav"


class LogLevel(Enum):
    """Log levels for the engine"""
    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def value_of(cls, level: str) -> int:
        """Numeric level of a level name such as ``"debug"``"""
        try:
            return cls[level.upper()].value
        except KeyError:
            raise ValueError(f"Unknown log level: {level}") from None


logging.addLevelName(LogLevel.TRACE.value, "TRACE")


def trace(self, message, *args, **kwargs):
    """Add trace method to logger"""
    if self.isEnabledFor(LogLevel.TRACE.value):
        self._log(LogLevel.TRACE.value, message, args, **kwargs)


logging.Logger.trace = trace


class ColoredFormatter(logging.Formatter):
    """Colored log formatter"""

    COLORS = {
        'TRACE': '\033[36m',     # Cyan
        'DEBUG': '\033[34m',     # Blue
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        log_color = self.COLORS.get(record.levelname, self.RESET)
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{log_color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logger(name: str = ROOT_LOGGER,
                 level: str = "INFO",
                 log_file: Optional[str] = None,
                 console: bool = True) -> logging.Logger:
    """
    Setup logger with specified configuration

    Parameters:
    -----------
    name : str
        Logger name
    level : str
        Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_file : Optional[str]
        Log file path (if None, no file logging)
    console : bool
        Enable console output

    Returns:
    --------
    logging.Logger
        Configured logger
    """
    numeric_level = LogLevel.value_of(level)
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    logger.handlers = []

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(ColoredFormatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        ))
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get logger by name"""
    return logging.getLogger(name)


def setup_logger_from_config(config: Optional[Dict[str, Any]]) -> logging.Logger:
    """
    Configure the engine loggers from the ``log_settings`` of a settings file

    Module loggers listed under ``module_levels`` get their own handlers and
    stop propagating, so their records are printed once at their own level.

    Example config:
    {
        'level': 'INFO',
        'log_file': 'gnss_satellites.log',
        'console': True,
        'module_levels': {
            'pysatnav.gnss.time_series': 'TRACE',
            'pysatnav.io.gnss_files': 'WARNING'
        }
    }
    """
    config = config or {}
    log_file = config.get('log_file')
    console = config.get('console', True)

    root = setup_logger(ROOT_LOGGER, config.get('level', 'INFO'), log_file, console)
    for module, level in config.get('module_levels', {}).items():
        if not module.startswith(ROOT_LOGGER):
            raise ValueError(f"Logger {module} is not an engine logger")
        module_logger = setup_logger(module, level, log_file, console)
        module_logger.propagate = False
    return root
