#!/usr/bin/env python3


class JamfError(Exception):
    """base class for all errors raised by jamf_oapi_lib"""


class UnsupportedError(JamfError):
    """the operation is not supported by this object or class"""


class InvalidDataError(JamfError, ValueError):
    """a value does not meet the constraints of its attribute"""


class UnknownAttributeError(JamfError, ValueError):
    """an attribute name is not in the class's OAPI_PROPERTIES"""


class MissingDataError(JamfError):
    """required data was not provided"""


class APIRequestError(JamfError):
    """an HTTP request to the Jamf Pro API did not succeed"""

    def __init__(self, message, status_code=None, response=None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class NoSuchItemError(APIRequestError):
    """the requested object does not exist"""


class AlreadyExistsError(APIRequestError):
    """the object conflicts with an existing one"""


class AuthorizationError(APIRequestError):
    """the credentials are missing, invalid, or lack the needed privileges"""
