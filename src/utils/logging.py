"""Logging setup for the quote client and CLI."""
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Third-party loggers that repeat what the provider already logs per request
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_type: str = "json",
    enabled: bool = True
) -> None:
    """Configure the root logger; stdout stays free for CLI output."""

    if not enabled:
        logging.disable(logging.CRITICAL)
        return
    logging.disable(logging.NOTSET)

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = JsonFormatter() if format_type == "json" else logging.Formatter(TEXT_FORMAT)

    logging.basicConfig(
        level=numeric_level,
        handlers=_build_handlers(formatter, log_file),
        force=True
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def _build_handlers(formatter: logging.Formatter, log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


class JsonFormatter(logging.Formatter):
    """
    One JSON object per record.

    Carries the pair symbol from quote logs and the timing fields set by
    ``log_execution`` when present.
    """

    EXTRA_FIELDS = ("symbol", "function", "execution_time_ms", "error")

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(
            (field, getattr(record, field))
            for field in self.EXTRA_FIELDS
            if hasattr(record, field)
        )
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
