"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

import logging

# Attributes every LogRecord carries; anything else arrived through extra=
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class ExtraFormatter(logging.Formatter):
    """Formatter that appends the record's ``extra`` context as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {k: v for k, v in vars(record).items() if k not in _RESERVED}
        if not context:
            return line
        return line + " " + " ".join(f"{k}={v!r}" for k, v in sorted(context.items()))
