# ocr_mover/utils/logger.py

import logging
import logging.handlers
from pathlib import Path

CONSOLE_FORMAT = '%(asctime)s - [%(levelname)s] - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - [%(levelname)s] - %(filename)s:%(lineno)d - %(message)s'


class LoggerManager:
    """
    Wires a logger to a rotating log file and, for fatal events only, the console.

    The interactive session prints its own colored status lines, including
    every per-file failure. The console handler therefore stays above ERROR
    so nothing reaches the screen twice; the file keeps the full record.
    """

    def __init__(self, log_file_path: Path, console_level=logging.CRITICAL,
                 file_level=logging.DEBUG, logger_name: str | None = None):
        """
        Args:
            log_file_path: Where the rotating log file is written.
            console_level: The minimum level echoed to stderr.
            file_level: The minimum level written to the log file.
            logger_name: The logger to configure (the root logger by default).
        """
        self.log_file_path = log_file_path
        self.console_level = console_level
        self.file_level = file_level
        self.logger = logging.getLogger(logger_name)

    def setup(self):
        """Attaches both handlers, unless the logger already has some."""
        if self.logger.handlers:
            return

        self.logger.setLevel(min(self.console_level, self.file_level))
        self.logger.addHandler(self._configure(logging.StreamHandler(), self.console_level, CONSOLE_FORMAT))
        # 5 files of 5MB each, then the oldest is dropped.
        file_handler = logging.handlers.RotatingFileHandler(
            self.log_file_path, maxBytes=5*1024*1024, backupCount=5, encoding='utf-8'
        )
        self.logger.addHandler(self._configure(file_handler, self.file_level, FILE_FORMAT))

        self.logger.info(f"Session log: {self.log_file_path}")

    @staticmethod
    def _configure(handler: logging.Handler, level, fmt: str) -> logging.Handler:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt, datefmt='%H:%M:%S' if fmt == CONSOLE_FORMAT else None))
        return handler


def setup_logging(log_file_path: Path, console_level=logging.CRITICAL):
    """Initializes the application-wide logging system for one session."""
    LoggerManager(log_file_path, console_level=console_level).setup()
