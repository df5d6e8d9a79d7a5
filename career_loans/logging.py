"""Logging setup for hosts embedding a loan ledger.

Ledger events attach the loan they concern through
``extra={"extra": {"loan_id": ..., "reason": ...}}``. Both formatters
surface those fields so one loan can be followed across sweeps.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

LEDGER_LOGGER = "career_loans.ledger"

# Fields promoted to the top level of a JSON line and tagged on plain lines
LOAN_FIELDS = ("loan_id", "reason")

PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
PLAIN_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _to_level(level: str | None, default: int = logging.INFO) -> int:
    if not level:
        return default
    value = getattr(logging, level.upper(), None)
    return value if isinstance(value, int) else default


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    ledger_level: str | None = None,
) -> None:
    """Configure logging for career-loans.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    format_type : str
        Format type: "standard" or "json".
    ledger_level : str | None
        Separate level for the ledger's own events. ``"DEBUG"`` shows every
        installment; ``"WARNING"`` keeps only shortfalls. Defaults to
        ``level``.
    """
    log_level = _to_level(level)
    ledger_log_level = _to_level(ledger_level, log_level)

    formatter: logging.Formatter = JsonFormatter() if format_type == "json" else LoanFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Ledger records propagate to this handler, so it must let the lower level through
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(min(log_level, ledger_log_level))
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("career_loans").setLevel(log_level)
    logging.getLogger(LEDGER_LOGGER).setLevel(ledger_log_level)

    # Faker logs locale fallbacks at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


def loan_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Loan identifiers attached to a record, in ``LOAN_FIELDS`` order."""
    extra = getattr(record, "extra", None)
    if not isinstance(extra, dict):
        return {}
    return {name: extra[name] for name in LOAN_FIELDS if extra.get(name) is not None}


class LoanFormatter(logging.Formatter):
    """Plain-text formatter that tags each line with its loan.

    ``... | Retired loan 3f2a... | [loan_id=3f2a... reason=TERM_COMPLETE]``
    """

    def __init__(self) -> None:
        super().__init__(fmt=PLAIN_FORMAT, datefmt=PLAIN_DATEFMT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = loan_fields(record)
        if not fields:
            return line
        tags = " ".join(f"{name}={value}" for name, value in fields.items())
        return f"{line} | [{tags}]"


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging.

    Loan identifiers sit at the top level; any other event figures
    (principal, shortfall, amount charged) are nested under ``"data"``.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(loan_fields(record))

        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            data = {name: value for name, value in extra.items() if name not in LOAN_FIELDS}
            if data:
                log_data["data"] = data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)
