import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "mesh2schematic"
LOG_FORMAT = "[%(levelname).1s %(asctime)s] %(name)s: %(message)s"


def setup_logging(verbose: bool = False, log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Attach handlers to the package logger and return it.

    Progress and diagnostics go to stderr so stdout stays free for the
    command's own output. With `log_file`, every record down to DEBUG is
    also appended to that file regardless of `verbose`. Repeated calls
    replace the handlers from the previous call.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    console_level = logging.DEBUG if verbose else logging.INFO

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False
    logger.debug("Logging initialized (console=%s, file=%s)", logging.getLevelName(console_level), log_file)
    return logger
