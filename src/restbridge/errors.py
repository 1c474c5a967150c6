"""
errors.py
---------
Exceptions raised by integration plugins and the transport layer.
"""


class IntegrationError(Exception):
    pass


class ConfigurationError(IntegrationError):
    """The step configuration cannot be turned into a request."""


class RequestExecutionError(IntegrationError):
    """The request was sent (or attempted) and failed."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code
