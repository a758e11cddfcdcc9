"""Logging setup: one line per record, extra fields appended as JSON."""
import json
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Attributes every LogRecord carries on this interpreter, plus the ones
# Formatter.format() adds; anything else arrived through ``extra=``.
RESERVED_RECORD_KEYS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class ExtraFormatter(logging.Formatter):
    """Formatter that appends ``extra=`` fields as a sorted JSON object."""

    def extra_fields(self, record: logging.LogRecord) -> dict:
        return {k: v for k, v in record.__dict__.items() if k not in RESERVED_RECORD_KEYS}

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra = self.extra_fields(record)
        if not extra:
            return line
        return f"{line} | {json.dumps(extra, default=str, sort_keys=True)}"


def configure_logging(level: str = "INFO") -> None:
    """Install ExtraFormatter on a fresh root handler; no-op if one exists."""
    root = logging.getLogger()
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(ExtraFormatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level.upper())
