"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the lambda handler's `__init__.py` file
before any other logging is done.

Logging format:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "ERROR",
    "logger": "shortlink.lambdas.shorten_url.app",
    "message": "Token collision. Responding with 409.",
    "event": "TOKEN_COLLISION",
    "token": "Gh71WPTaq0Zx",
    "context": {"reason": "..."}
}

`event` and `token` are top-level so log queries can filter on the outcome code
and the short link. Any other `extra` field lands under `context`.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from shortlink.utils.constants import LOG_LEVEL_ENV


class JsonFormatter(logging.Formatter):
    """JSON formatter that promotes link fields and nests other LogRecord extras"""

    TOP_LEVEL_FIELDS = ('event', 'token')

    STANDARD_ATTRS = frozenset(
        {
            'args',
            'asctime',
            'created',
            'exc_info',
            'exc_text',
            'filename',
            'funcName',
            'levelname',
            'levelno',
            'lineno',
            'message',
            'module',
            'msecs',
            'msg',
            'name',
            'pathname',
            'process',
            'processName',
            'relativeCreated',
            'stack_info',
            'thread',
            'threadName',
            'taskName',
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        for key in self.TOP_LEVEL_FIELDS:
            if key in record.__dict__:
                log[key] = record.__dict__[key]

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self.STANDARD_ATTRS and key not in self.TOP_LEVEL_FIELDS
        }
        if context:
            log['context'] = context

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    log_level = os.getenv(LOG_LEVEL_ENV, 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
