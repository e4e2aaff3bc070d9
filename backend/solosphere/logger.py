import logging
import sys
from pythonjsonlogger import jsonlogger
from .config import settings

def setup_logger(name: str = "solosphere") -> logging.Logger:
    """
    JSON logs on stdout; every record carries the service name and environment
    so API and seed output can be told apart in one stream.
    """
    logger = logging.getLogger(name)
    logger.setLevel(settings.LOG_LEVEL.upper())

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        rename_fields={"levelname": "level"},
        static_fields={
            "service": settings.SERVICE_NAME,
            "environment": settings.ENVIRONMENT,
        },
    ))
    logger.addHandler(handler)
    logger.propagate = False

    return logger

logger = setup_logger()
