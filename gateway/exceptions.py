"""Custom exception classes for the gateway."""


class GatewayException(Exception):
    """
    Base exception class for all gateway errors.
    """
    pass


class ShareNotFoundError(GatewayException):
    """
    Raised when a path that must exist is absent from the share.
    """
    pass


class ShareEntryExistsError(GatewayException):
    """
    Raised when a create or rename targets a name that is already taken.
    """
    pass


class ShareOperationError(GatewayException):
    """
    Raised when the share fails for any other reason (network, authentication, permission).
    """
    pass


class InvalidInputError(GatewayException):
    """
    Raised when request input is missing or malformed.
    """
    pass


class InvalidRangeError(InvalidInputError):
    """
    Raised when a Range header cannot be satisfied or parsed.
    """
    pass


class InvalidPathError(InvalidInputError):
    """
    Raised when a relative path escapes the configured base location.
    """
    pass
