import logging
from logging.config import dictConfig

from flask import g, has_request_context


class RequestIdFilter(logging.Filter):
    """Stamp each record with the id of the request that produced it."""

    def filter(self, record):
        record.request_id = g.get("request_id", "-") if has_request_context() else "-"
        return True


def configure_logging(app):
    level = str(app.config.get("LOG_LEVEL", "INFO")).upper()

    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {"()": RequestIdFilter},
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s [%(name)s] [%(request_id)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "filters": ["request_id"],
            },
        },
        "loggers": {
            app.name: {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
        },
        "root": {"level": "WARNING", "handlers": ["console"]},
    })
