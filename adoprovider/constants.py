import os

from adoprovider.version import __version__

VERSION = __version__

# root folder of the adoprovider package
ADOPROVIDER_ROOT_FOLDER = os.path.realpath(os.path.dirname(os.path.realpath(__file__)))

# strings to indicate truthy/falsy values
TRUE_STRINGS = ("1", "true", "True")
FALSE_STRINGS = ("0", "false", "False")
# strings with valid log levels for ADO_LOG
LOG_LEVELS = ("trace", "debug", "info", "warn", "error", "warning")

# trace log level, configurable via $ADO_LOG
ADO_LOG_TRACE = "trace"
TRACE_LOG_LEVELS = [ADO_LOG_TRACE]

# the project create operation is polled this many times, once per interval (in seconds)
DEFAULT_PROJECT_CREATE_MAX_POLLS = 5
DEFAULT_PROJECT_CREATE_POLL_INTERVAL = 1.0

# resource type name under which the project provider is registered
PROJECT_RESOURCE_TYPE = "AzureDevOps::Core::Project"

# capability groups and keys of the TeamProject wire representation
CAPABILITY_VERSION_CONTROL = "versioncontrol"
CAPABILITY_KEY_SOURCE_CONTROL_TYPE = "sourceControlType"
CAPABILITY_PROCESS_TEMPLATE = "processTemplate"
CAPABILITY_KEY_TEMPLATE_TYPE_ID = "templateTypeId"

# defaults for optional declared project attributes
DEFAULT_PROJECT_VISIBILITY = "private"
DEFAULT_PROJECT_VERSION_CONTROL = "Git"
DEFAULT_PROJECT_WORK_ITEM_TEMPLATE = "Agile"
