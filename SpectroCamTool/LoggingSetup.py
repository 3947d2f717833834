import logging
import os
from datetime import datetime
from typing import Optional

from rich.logging import RichHandler

PACKAGE_LOGGER = "SpectroCamTool"


def configure_logging(level: int = logging.WARNING,
                      log_dir: Optional[str] = None,
                      file_level: int = logging.INFO) -> logging.Logger:
    """
    Attach console and (optionally) file handlers to the package logger.

    The console gets a ``RichHandler`` at *level*.  When *log_dir* is
    given, a plain-text log named after the start time
    (``YYYYmmddTHHMMSS.log``) is also written there at *file_level*.
    Calling this again replaces the handlers installed before.

    Parameters
    ----------
    level : int, optional
        Console log level.  Default is ``logging.WARNING``.
    log_dir : str or None, optional
        Directory for the log file; created if missing.
    file_level : int, optional
        File log level.  Default is ``logging.INFO``.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = RichHandler(rich_tracebacks=True, show_path=False)
    console.setLevel(level)
    logger.addHandler(console)
    lowest = level

    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        filename = os.path.join(log_dir, f"{datetime.now():%Y%m%dT%H%M%S}.log")
        file_handler = logging.FileHandler(filename)
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(file_handler)
        lowest = min(level, file_level)

    logger.setLevel(lowest)
    return logger
