import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from quotes_core.config import Settings, settings as default_settings

LOGGER_NAME = "quotes_core"


class ColoredFormatter(logging.Formatter):
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m'      # Reset
    }

    def __init__(self, *args, use_colors: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.use_colors = use_colors

    def format(self, record):
        if self.use_colors and getattr(record, 'color', False):
            level_color = self.COLORS.get(record.levelname, '')
            reset_color = self.COLORS['RESET']
            original_levelname = record.levelname
            record.levelname = f"{level_color}{record.levelname}{reset_color}"
            formatted = super().format(record)
            record.levelname = original_levelname
            return formatted
        return super().format(record)


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """Configure the package logger: colored console plus rotating log files."""
    config = config or default_settings
    level = logging.getLevelName(config.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    # Console handler with colors
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter(
        fmt='%(asctime)s | %(levelname)-8s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        use_colors=config.colors_enabled,
    ))
    logger.addHandler(console_handler)

    if config.file_logging_enabled:
        logs_dir = Path(config.LOG_DIR)
        logs_dir.mkdir(parents=True, exist_ok=True)

        file_formatter = logging.Formatter(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Main log file handler with rotation
        file_handler = logging.handlers.RotatingFileHandler(
            filename=logs_dir / "quotes.log",
            maxBytes=config.LOG_MAX_FILE_SIZE,
            backupCount=config.LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)

        # Error log file handler
        error_handler = logging.handlers.RotatingFileHandler(
            filename=logs_dir / "errors.log",
            maxBytes=config.LOG_MAX_FILE_SIZE // 2,
            backupCount=config.LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(file_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(error_handler)

    logger.propagate = False
    return logger
