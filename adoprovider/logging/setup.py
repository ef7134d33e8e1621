import logging
import sys

from adoprovider import config, constants

from .format import AddFormattedAttributes, DefaultFormatter

# default levels for loggers of third-party libraries, these are not raised by the adoprovider log level
default_log_levels = {
    "plux": logging.WARNING,
}

trace_log_levels = {
    "plux": logging.DEBUG,
    "adoprovider.services.operations": logging.DEBUG,
}


def get_log_level_from_config():
    # overriding the log level if ADO_LOG has been set
    if config.ADO_LOG:
        log_level = str(config.ADO_LOG).upper()
        if log_level.lower() in constants.TRACE_LOG_LEVELS:
            log_level = "DEBUG"
        if log_level == "WARN":
            log_level = "WARNING"
        return logging.getLevelName(log_level)

    return logging.DEBUG if config.DEBUG else logging.INFO


def setup_logging_from_config():
    log_level = get_log_level_from_config()
    setup_logging(log_level)

    if config.is_trace_logging_enabled():
        for name, level in trace_log_levels.items():
            logging.getLogger(name).setLevel(level)


def create_default_handler(log_level: int):
    log_handler = logging.StreamHandler(stream=sys.stderr)
    log_handler.setLevel(log_level)
    log_handler.setFormatter(DefaultFormatter())
    log_handler.addFilter(AddFormattedAttributes())
    return log_handler


def setup_logging(log_level=logging.INFO) -> None:
    """
    Configures the python logging environment for adoprovider.

    :param log_level: the optional log level.
    """
    # create a default handler for the root logger (basically logging.basicConfig but explicit)
    log_handler = create_default_handler(log_level)

    # replace any existing handlers
    logging.basicConfig(level=log_level, handlers=[log_handler], force=True)

    # set log levels of loggers
    logging.root.setLevel(log_level)
    logging.getLogger("adoprovider").setLevel(log_level)
    for logger, level in default_log_levels.items():
        logging.getLogger(logger).setLevel(level)
