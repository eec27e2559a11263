"""The 'py_gnuballistics' logger.

Console output at INFO level is on by default. Zero searches and integration
runs log their iteration and step counts at DEBUG, which ``enable_file_logging``
captures in a file.
"""
import logging
from typing import Optional

__all__ = ('logger',
           'enable_file_logging',
           'disable_file_logging',
)

logger: logging.Logger = logging.getLogger('py_gnuballistics')
logger.setLevel(logging.INFO)
_console = logging.StreamHandler()
_console.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
logger.addHandler(_console)

_file_handler: Optional[logging.FileHandler] = None


def enable_file_logging(filename: str = "debug.log") -> None:
    """Append DEBUG output to ``filename``, replacing any previous log file."""
    global _file_handler
    disable_file_logging()
    _file_handler = logging.FileHandler(filename)
    _file_handler.setLevel(logging.DEBUG)
    _file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
    logger.addHandler(_file_handler)


def disable_file_logging() -> None:
    global _file_handler
    if _file_handler is not None:
        logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
