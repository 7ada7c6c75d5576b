import os
import sys
import logging
from logging.handlers import RotatingFileHandler

LOGS_DIR = os.environ.get(
    "HEALTHBOT_LOGS_DIR",
    os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "logs"),
)
os.makedirs(LOGS_DIR, exist_ok=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(filename)s::%(funcName)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 10 MB per file before rotating
MAX_LOG_SIZE = 10 * 1024 * 1024


def log_path(name):
    return os.path.join(LOGS_DIR, f"{name}.log")


def _file_handler(name, level=logging.INFO, backup_count=5, delay=False):
    handler = RotatingFileHandler(log_path(name), maxBytes=MAX_LOG_SIZE, backupCount=backup_count, delay=delay)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    return handler


def configure_root_logger(level=logging.INFO):
    """Console, healthbot.log and errors.log on the root logger"""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console_handler)
    root_logger.addHandler(_file_handler("healthbot", level))
    root_logger.addHandler(_file_handler("errors", logging.ERROR))
    return root_logger


def get_logger(module_name, log_name=None):
    """
    Named logger that also writes to logs/<log_name>.log. Records still
    propagate to the root handlers.
    """
    logger = logging.getLogger(module_name)
    if log_name and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        logger.addHandler(_file_handler(log_name, logging.NOTSET, backup_count=3, delay=True))
    return logger


def get_api_logger():
    """Webhook, routing and admin endpoints"""
    return get_logger("api", "api")


def get_db_logger():
    return get_logger("db", "database")


def get_llm_logger():
    return get_logger("llm", "llm")


def get_server_logger():
    return get_logger("server", "server")


def get_scheduler_logger():
    return get_logger("scheduler", "scheduler")


def get_alerts_logger():
    """Outbreak cache and alert dispatch"""
    return get_logger("alerts", "alerts")


def get_uvicorn_log_config():
    """
    dictConfig for uvicorn. Server and error records go through the root
    handlers set up by configure_root_logger; access lines get their own file.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "access": {"format": "%(asctime)s - %(levelname)s - %(message)s", "datefmt": DATE_FORMAT},
        },
        "handlers": {
            "access_file": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "access",
                "filename": log_path("access"),
                "maxBytes": MAX_LOG_SIZE,
                "backupCount": 5,
            },
        },
        "loggers": {
            "uvicorn": {"level": "INFO"},
            "uvicorn.access": {"level": "INFO", "handlers": ["access_file"], "propagate": False},
            # One line per Graph API call otherwise
            "httpx": {"level": "WARNING"},
        },
    }
