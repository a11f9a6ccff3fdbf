"""
The `fockstate.logs` module includes the logging setup of `fockstate`.
"""

import atexit
import datetime as dt
import json
import logging
import logging.config
import os
import pathlib
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

DEFAULT_CONFIG_FILE = pathlib.Path(__file__).parent.resolve() / "logging_config.json"


def setup_logging(config_file: Optional[pathlib.Path] = None) -> None:
    """Configure logging.

    If the user defines 'logging_config.json' in the working directory it is loaded as the logging config, otherwise the
    default `fockstate` logging config is used.

    Args:
        config_file: explicit path of a `logging.config.dictConfig` JSON file, overrides both defaults
    """
    if config_file is None:
        user_config_file = pathlib.Path("logging_config.json")
        config_file = user_config_file if user_config_file.is_file() else DEFAULT_CONFIG_FILE
    with open(config_file) as f_in:
        config = json.load(f_in)
    logging.config.dictConfig(config)

    # getHandlerByName only exists from Python 3.12
    queue_handler = logging.getHandlerByName("queue_handler") if hasattr(logging, "getHandlerByName") else None
    if queue_handler is not None:
        queue_handler.listener.start()
        atexit.register(queue_handler.listener.stop)


class FockStateJSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Attributes:
        fmt_keys (dict): output keys mapped to the `LogRecord` attribute they are read from
    """

    def __init__(
        self,
        *,
        fmt_keys: Optional[dict[str, str]] = None,
    ) -> None:
        super().__init__()
        self.fmt_keys = fmt_keys if fmt_keys is not None else {}

    def format(self, record: logging.LogRecord) -> str:
        message = self._prepare_log_dict(record)
        return json.dumps(message, default=str)

    def _prepare_log_dict(self, record: logging.LogRecord) -> dict:
        always_fields = {
            "message": record.getMessage(),
            "timestamp": dt.datetime.fromtimestamp(record.created, tz=dt.timezone.utc).isoformat(),
        }

        if record.exc_info is not None:
            always_fields["exc_info"] = self.formatException(record.exc_info)

        if record.stack_info is not None:
            always_fields["stack_info"] = self.formatStack(record.stack_info)

        message = {
            key: msg_val if (msg_val := always_fields.pop(val, None)) is not None else getattr(record, val)
            for key, val in self.fmt_keys.items()
        }
        message.update(always_fields)
        return message


class RotatingFileHandlerWithDir(RotatingFileHandler):
    """RotatingFileHandler that creates the log directory if it does not exist already."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        log_file_path = kwargs.get("filename")
        if log_file_path:
            log_dir = os.path.dirname(log_file_path)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir)

        super().__init__(*args, **kwargs)
