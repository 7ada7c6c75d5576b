import logging
import logging.config
from logging.handlers import RotatingFileHandler

from healthbot.utils.logger import get_logger, get_uvicorn_log_config, log_path


def test_named_logger_gets_one_file_handler():
    first = get_logger("healthbot-test", "healthbot-test")
    second = get_logger("healthbot-test", "healthbot-test")

    handlers = [h for h in second.handlers if isinstance(h, RotatingFileHandler)]
    assert first is second
    assert len(handlers) == 1
    assert handlers[0].baseFilename == log_path("healthbot-test")


def test_uvicorn_config_routes_access_lines_to_own_file():
    logging.config.dictConfig(get_uvicorn_log_config())

    access = logging.getLogger("uvicorn.access")
    assert access.propagate is False
    assert [h.baseFilename for h in access.handlers] == [log_path("access")]
    assert logging.getLogger("uvicorn").propagate is True
    assert logging.getLogger("httpx").level == logging.WARNING
