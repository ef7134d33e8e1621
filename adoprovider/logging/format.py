"""Tools for formatting adoprovider logs."""
import logging
from functools import lru_cache

MAX_NAME_LEN = 26

LOG_FORMAT = f"%(asctime)s.%(msecs)03d %(ado_level)5s --- %(ado_name)-{MAX_NAME_LEN}s : %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

CUSTOM_LEVEL_NAMES = {
    50: "FATAL",
    40: "ERROR",
    30: "WARN",
    20: "INFO",
    10: "DEBUG",
}


class DefaultFormatter(logging.Formatter):
    """
    A formatter that uses ``LOG_FORMAT`` and ``LOG_DATE_FORMAT``.
    """

    def __init__(self, fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT):
        super().__init__(fmt=fmt, datefmt=datefmt)


class AddFormattedAttributes(logging.Filter):
    """
    Filter that adds two attributes to a log record:

    - ado_level: the abbreviated loglevel that's max 5 characters long
    - ado_name: the abbreviated name of the logger (e.g., `a.services.operations`), trimmed to ``MAX_NAME_LEN``
    """

    max_name_len: int

    def __init__(self, max_name_len: int = None):
        super().__init__()
        self.max_name_len = max_name_len if max_name_len else MAX_NAME_LEN

    def filter(self, record):
        record.ado_level = CUSTOM_LEVEL_NAMES.get(record.levelno, record.levelname)
        record.ado_name = self._get_compressed_logger_name(record.name)
        return True

    @lru_cache(maxsize=256)
    def _get_compressed_logger_name(self, name):
        return compress_logger_name(name, self.max_name_len)


def compress_logger_name(name: str, length: int) -> str:
    """
    Shortens a dotted logger name to at most ``length`` characters. Leading parts are reduced to their first
    letter one by one (``adoprovider.services.operations`` becomes ``a.services.operations``, then
    ``a.s.operations``), and the last part is cut if the name still does not fit.

    :param name: the logger name
    :param length: the max length of the logger name
    :return: the compressed name
    """
    parts = name.split(".")
    for i in range(len(parts) - 1):
        if len(".".join(parts)) <= length:
            break
        parts[i] = parts[i][0]

    compressed = ".".join(parts)
    if len(compressed) <= length:
        return compressed

    # all leading parts are single letters, cut the last part but keep at least its first letter
    prefix = ".".join(parts[:-1])
    prefix = f"{prefix}." if prefix else ""
    return prefix + parts[-1][: max(length - len(prefix), 1)]
