import logging
import os
from pathlib import Path


def _default_level() -> int:
    name = os.environ.get("BAYEUX_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """Get a named logger with standard formatting.

    Example:
        logger = get_logger(__name__)
        logger.debug("routed %s %s", method, path)

    Records go to stderr and, when BAYEUX_LOG_DIR is set, to
    ``<BAYEUX_LOG_DIR>/<name>.log`` as well.

    Returns:
        logging.Logger: Configured logger instance.
    """
    if level is None:
        level = _default_level()
    logger = logging.getLogger(name)

    # avoid adding duplicate handlers if called repeatedly (common in tests)
    if logger.handlers:
        logger.setLevel(level)
        return logger

    formatter = logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    log_dir = os.environ.get("BAYEUX_LOG_DIR")
    if log_dir:
        logs_dir = Path(log_dir)
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            # unwritable log dir: stream only
            logs_dir = None
        if logs_dir is not None:
            filehandler = logging.FileHandler(str(logs_dir / f"{name}.log"), encoding="utf-8")
            filehandler.setFormatter(formatter)
            logger.addHandler(filehandler)

    logger.setLevel(level)
    # stop passing records to the root logger (avoid duplicated messages)
    logger.propagate = False
    return logger
