# core/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List

# Top-level logger names owned by this project; the root logger is left to the host.
LOGGER_NAMESPACES = ("core", "fetchers", "app")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False
_handlers: List[logging.Handler] = []


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("true", "1", "yes")


def _file_handler(path: str, formatter: logging.Formatter) -> logging.Handler | None:
    try:
        log_dir = os.path.dirname(path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        fh = RotatingFileHandler(
            path,
            maxBytes=int(os.getenv("LOG_MAX_BYTES", str(1024 * 1024))),
            backupCount=int(os.getenv("LOG_BACKUPS", "3")),
        )
    except OSError as e:
        logging.getLogger(__name__).warning("Failed to open log file %s: %s", path, e)
        return None
    fh.setFormatter(formatter)
    return fh


def setup_logging():
    """Attach stdout and rotating-file handlers to the project's loggers, once."""
    global _configured
    if _configured:
        return

    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    handlers: List[logging.Handler] = []
    if _env_flag("LOG_TO_STDOUT", "true"):
        ch = logging.StreamHandler(sys.stdout)
        ch.setFormatter(formatter)
        handlers.append(ch)
    if _env_flag("LOG_TO_FILE", "false"):
        fh = _file_handler(
            os.getenv("LOG_FILE", os.path.join("data", "toy_catalog.log")), formatter
        )
        if fh is not None:
            handlers.append(fh)

    for ns in LOGGER_NAMESPACES:
        lg = logging.getLogger(ns)
        lg.setLevel(level)
        for h in handlers:
            lg.addHandler(h)

    # requests' connection pool logs every request at DEBUG
    if level <= logging.DEBUG and not _env_flag("LOG_HTTP_DEBUG", "false"):
        logging.getLogger("urllib3").setLevel(logging.INFO)

    _handlers.extend(handlers)
    _configured = True


def reset_logging() -> None:
    """Detach and close the handlers installed by setup_logging()."""
    global _configured
    for ns in LOGGER_NAMESPACES:
        lg = logging.getLogger(ns)
        lg.setLevel(logging.NOTSET)
        for h in _handlers:
            lg.removeHandler(h)
    for h in _handlers:
        h.close()
    _handlers.clear()
    _configured = False


def get_logger(name: str | None = None) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)
