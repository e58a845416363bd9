# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Physician Calendar)
# Description: Errors raised by the REST appointment store client.
# ============================================================================
"""REST appointment store exceptions."""

from ....application.ports.remote_store_error import RemoteStoreError


class RemoteStoreConnectionError(RemoteStoreError):
    """Network errors: DNS, refused connections, dropped sockets."""

    def __init__(self, message: str):
        super().__init__(message, error_code="CONNECTION_ERROR")


class RemoteStoreTimeoutError(RemoteStoreError):
    """The remote store did not answer in time."""

    def __init__(self, message: str = "Request to the appointment server timed out"):
        super().__init__(message, error_code="TIMEOUT")


class RemoteStoreHTTPError(RemoteStoreError):
    """The remote store answered with a non-success status code."""

    def __init__(self, status_code: int, message: str, error_code: str | None = None):
        super().__init__(message, error_code=error_code or f"HTTP_{status_code}", status_code=status_code)


class InvalidRemoteResponseError(RemoteStoreError):
    """The remote store answered with a body that cannot be used."""

    def __init__(self, message: str):
        super().__init__(message, error_code="INVALID_RESPONSE")


class InvalidRemoteRequestError(RemoteStoreError):
    """The request was rejected locally and never sent."""

    def __init__(self, message: str):
        super().__init__(message, error_code="INVALID_REQUEST")
