import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict
from .config import Config
from .exceptions import LoggerError

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOGGER_NAME = "mackerel_api"

class Logger:
    _loggers: Dict[str, logging.Logger] = {}

    def __init__(self, config: Config, name: str = LOGGER_NAME):
        """Initialize logger with configuration"""
        self.config = config

        if name in self._loggers:
            self.logger = self._loggers[name]
            for handler in self.logger.handlers[:]:
                self.logger.removeHandler(handler)
                handler.close()
        else:
            self.logger = logging.getLogger(name)
            self._loggers[name] = self.logger

        # Set log level
        level = self._get_log_level()
        self.logger.setLevel(level)

        # Set log format
        self.formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # Add file handler
        log_file = self.config.get("logging.file")
        if log_file:
            path = Path(log_file)
            if not path.parent.exists():
                try:
                    path.parent.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    raise LoggerError(f"Cannot create log directory: {path.parent}: {e}")

            max_size = self.config.get("logging.max_size", 1024 * 1024)  # 1MB default
            backup_count = self.config.get("logging.backup_count", 3)

            try:
                handler = RotatingFileHandler(
                    str(path),
                    maxBytes=max_size,
                    backupCount=backup_count,
                    encoding="utf-8"
                )
            except OSError as e:
                raise LoggerError(f"Failed to setup log file: {str(e)}")
            handler.setFormatter(self.formatter)
            self.logger.addHandler(handler)

        # Add console handler if enabled
        if self.config.get("logging.console_output", False):
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(self.formatter)
            self.logger.addHandler(console_handler)

    def _get_log_level(self) -> int:
        """Convert string log level to logging constant"""
        level_name = str(self.config.get("logging.level", "INFO")).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise LoggerError(f"Invalid log level: {level_name}")
        return level

    def get_child(self, suffix: str) -> logging.Logger:
        """Return a child logger that shares this logger's handlers"""
        return self.logger.getChild(suffix)

    def trace(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log trace message"""
        self.logger.log(TRACE, message, *args, **kwargs)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log debug message"""
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log info message"""
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log warning message"""
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log error message"""
        self.logger.error(message, *args, **kwargs)

    def critical(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log critical message"""
        self.logger.critical(message, *args, **kwargs)
