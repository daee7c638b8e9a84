# backend/app/logging_config.py
import logging
from typing import Dict


class OperationFilter(logging.Filter):
    def filter(self, record):
        # Provide a default operation if not already set
        if not hasattr(record, "operation"):
            record.operation = "-"
        return True


LOGGING_CONFIG: Dict[str, any] = {  # type: ignore
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "operation_filter": {
            "()": OperationFilter,
        },
    },
    "formatters": {
        "default": {
            "()": "uvicorn.logging.DefaultFormatter",
            "fmt": "%(levelprefix)s %(asctime)s [%(name)s] [%(operation)s] %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "access": {
            "()": "uvicorn.logging.AccessFormatter",
            "fmt": '%(levelprefix)s %(asctime)s [%(name)s] %(client_addr)s - "%(request_line)s" %(status_code)s',
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        # Tracebacks
        "detailed": {
            "format": "%(levelname)s %(asctime)s [%(name)s] [%(module)s:%(lineno)d] - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "default": {
            "formatter": "default",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "filters": ["operation_filter"],
        },
        "access": {
            "formatter": "access",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
        },
        "error": {
            "formatter": "detailed",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "level": "ERROR",
        },
    },
    "loggers": {
        "": {
            "handlers": ["default", "error"],
            "level": "INFO",
        },
        "uvicorn.access": {
            "handlers": ["access"],
            "level": "INFO",
            "propagate": False,
        },
        "backend": {
            "handlers": ["default", "error"],
            "level": "DEBUG",
            "propagate": False,
        },
        "seating_engine": {
            "handlers": ["default", "error"],
            "level": "INFO",
            "propagate": False,
        },
    },
}
