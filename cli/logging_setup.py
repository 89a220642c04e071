"""Logging setup for the CLI"""

import logging
import os
import sys


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "info", debug: bool = False, debug_log_file: str = "implicit_grant_debug.log") -> None:
    """
    Configure the root logger for a CLI run

    Args:
        level: Level name used when debug mode is off
        debug: Log everything and append it to ``debug_log_file`` too
        debug_log_file: Debug log path
    """
    root_logger = logging.getLogger()

    # Clear existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if debug:
        root_logger.setLevel(logging.DEBUG)

        log_file = os.path.abspath(debug_log_file)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        # httpx logs every request at INFO/DEBUG; keep its noise out unless asked
        logging.getLogger("httpcore").setLevel(logging.INFO)

        logging.getLogger(__name__).info(f"Debug logging enabled - appending to {log_file}")
    else:
        numeric_level = getattr(logging, str(level).upper(), None)
        if not isinstance(numeric_level, int):
            numeric_level = logging.INFO
        root_logger.setLevel(numeric_level)
        logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))
