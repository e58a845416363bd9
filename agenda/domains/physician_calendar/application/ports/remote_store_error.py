# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Base error raised by remote appointment store adapters.
# ============================================================================
"""Remote store error.

Adapters raise this (or a subclass) for every transport, authorization or
server failure. Use cases treat failures and timeouts the same way.
"""


class RemoteStoreError(Exception):
    """Base exception for remote appointment store errors."""

    def __init__(self, message: str, error_code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.error_code = error_code or "REMOTE_STORE_ERROR"
        self.error_message = message
        self.status_code = status_code
