class ServiceException(Exception):
    """
    An exception that indicates that an Azure DevOps service error occurred.
    Do not use this exception directly (use the specific subclasses or CommonServiceException instead).
    """

    code: str = "ServiceException"
    sender_fault: bool = False
    status_code: int = 400

    def __init__(self, message: str = None):
        self.message = message or ""
        super().__init__(self.message)


class CommonServiceException(ServiceException):
    """
    An exception with an explicit error code, for errors which are not tied to a single operation of the service.
    """

    def __init__(self, code: str, message: str, status_code: int = 400, sender_fault: bool = False):
        self.code = code
        self.status_code = status_code
        self.sender_fault = sender_fault
        super().__init__(message)


class ResourceNotFoundException(ServiceException):
    """The requested resource does not exist."""

    code: str = "ResourceNotFoundException"
    sender_fault: bool = True
    status_code: int = 404


class InvalidParameterValueException(ServiceException):
    """A value of the request is not allowed."""

    code: str = "InvalidParameterValue"
    sender_fault: bool = True
    status_code: int = 400
