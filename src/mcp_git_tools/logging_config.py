import json
import logging
import sys
import time
from pathlib import Path
from typing import Optional

from .constants import ServerDefaults


class SafeStreamHandler(logging.StreamHandler):
    """
    Stream handler that gracefully handles closed streams during shutdown.
    """

    def handleError(self, record):
        # StreamHandler.emit reports write failures here, inside its except block
        error = sys.exc_info()[1]
        if isinstance(error, (ValueError, OSError)):
            text = str(error).lower()
            # Closed stderr during shutdown is expected
            if "closed file" in text or "bad file descriptor" in text:
                return
        super().handleError(record)


class StructuredLogFormatter(logging.Formatter):
    """
    Formats log records as structured JSON with contextual fields.
    """

    CONTEXT_FIELDS = ("request_id", "tool", "duration_ms")

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in self.CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            log_record["exception"] = record.exc_text
        return json.dumps(log_record, ensure_ascii=False)


def configure_logging(
    log_level: str = ServerDefaults.LOG_LEVEL,
    log_dir: Optional[Path] = None,
) -> Optional[Path]:
    """
    Centralized logging configuration for MCP Git Tools.

    Sets up the root logger with structured JSON output on stderr (stdout
    carries the MCP protocol). When ``log_dir`` is given, a timestamped log
    file is written there as well.

    Returns:
        Path of the log file, or None when file logging is off
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    formatter = StructuredLogFormatter()

    handler = SafeStreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    log_file = None
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{ServerDefaults.LOG_FILE_PREFIX}_{timestamp}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Silence overly verbose loggers
    for noisy in ("asyncio", "git", "mcp"):
        logging.getLogger(noisy).setLevel("WARNING")

    return log_file
