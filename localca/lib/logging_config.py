"""JSON logging for the local CA library and its scripts."""

import logging

from pythonjsonlogger import jsonlogger

LOGGER_NAME = "localca"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record, limited to the fields in ``allowed_fields``."""

    allowed_fields = frozenset(
        {
            "timestamp",
            "level",
            "message",
            "exc_info",
            "funcName",
            "lineno",
        }
    )

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")

        for key in [key for key in log_record if key not in self.allowed_fields]:
            log_record.pop(key)


def _setup_logger() -> logging.Logger:
    """Attach the JSON handler to the ``localca`` logger once per process."""
    logger = logging.getLogger(LOGGER_NAME)

    # Already configured by an earlier import
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        CustomJsonFormatter(
            fmt="%(timestamp)s %(levelname)s %(funcName)s %(lineno)d %(message)s",
            timestamp=True,
        )
    )

    logger.setLevel(logging.INFO)
    logger.addHandler(handler)
    # Records stay out of the host application's root handlers
    logger.propagate = False

    return logger


LOGGER = _setup_logger()
