import logging
import os
from typing import Optional, TypeVar, Union

from adoprovider.constants import (
    DEFAULT_PROJECT_CREATE_MAX_POLLS,
    DEFAULT_PROJECT_CREATE_POLL_INTERVAL,
    FALSE_STRINGS,
    LOG_LEVELS,
    TRACE_LOG_LEVELS,
    TRUE_STRINGS,
)

T = TypeVar("T", int, float)

LOG = logging.getLogger(__name__)


def eval_log_type(env_var_name: str) -> Union[str, bool]:
    """Get the log type from environment variable"""
    ado_log = os.environ.get(env_var_name, "").lower().strip()
    return ado_log if ado_log in LOG_LEVELS else False


def parse_boolean_env(env_var_name: str) -> Optional[bool]:
    """Parse the value of the given env variable and return True/False, or None if it is not a boolean value."""
    value = os.environ.get(env_var_name, "").lower().strip()
    if value in TRUE_STRINGS:
        return True
    if value in FALSE_STRINGS:
        return False
    return None


def is_env_true(env_var_name: str) -> bool:
    """Whether the given environment variable has a truthy value."""
    return os.environ.get(env_var_name, "").lower().strip() in TRUE_STRINGS


def is_env_not_false(env_var_name: str) -> bool:
    """Whether the given environment variable is empty or has a truthy value."""
    return os.environ.get(env_var_name, "").lower().strip() not in FALSE_STRINGS


def parse_number_env(env_var_name: str, default: T) -> T:
    """
    Parse the given env variable with the type of the default value. Empty or malformed values fall back to the
    default (a warning is logged for malformed values).
    """
    value = os.environ.get(env_var_name, "").strip()
    if not value:
        return default
    try:
        return type(default)(value)
    except ValueError:
        LOG.warning(
            "Ignoring invalid value %r for %s, using default %s", value, env_var_name, default
        )
        return default


def is_trace_logging_enabled():
    if ADO_LOG:
        return str(ADO_LOG).lower() in TRACE_LOG_LEVELS
    return False


# log level of the adoprovider loggers, one of LOG_LEVELS
ADO_LOG = eval_log_type("ADO_LOG")

# whether debug logging is enabled
DEBUG = is_env_true("DEBUG") or ADO_LOG in TRACE_LOG_LEVELS

# whether to log the full traceback of errors raised by resource providers
ADO_VERBOSE_ERRORS = is_env_true("ADO_VERBOSE_ERRORS")

# number of status queries issued for an asynchronous project create before giving up
PROJECT_CREATE_MAX_POLLS = parse_number_env(
    "PROJECT_CREATE_MAX_POLLS", DEFAULT_PROJECT_CREATE_MAX_POLLS
)

# seconds to wait between two status queries of an asynchronous project create
PROJECT_CREATE_POLL_INTERVAL = parse_number_env(
    "PROJECT_CREATE_POLL_INTERVAL", DEFAULT_PROJECT_CREATE_POLL_INTERVAL
)
