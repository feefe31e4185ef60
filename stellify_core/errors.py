# =============================================================================
# stellify_core/errors.py  -  Exception Taxonomy
# =============================================================================
#
#   StellifyError
#     ├── ConfigError      missing/invalid environment (fatal at startup)
#     ├── RemoteAPIError   non-2xx response or transport failure
#     └── DecodeError      remote body does not have the expected shape
#
# Only the bootstrap (main.py) and the dispatcher catch these.  Everything
# below them lets them propagate.
# =============================================================================

from typing import Any


class StellifyError(Exception):
    """Base class for every error raised by this project."""


class ConfigError(StellifyError):
    """Raised when the process environment cannot produce valid Settings."""


class RemoteAPIError(StellifyError):
    """The Stellify API rejected a request, or could not be reached.

    Attributes:
        status_code: HTTP status of the response, or None for transport
            failures (DNS, refused connection, timeouts).
        detail: The parsed response body when the API sent one.
    """

    def __init__(self, message: str, status_code: int | None = None, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail


class DecodeError(StellifyError):
    """A response arrived but its body is not what the endpoint returns."""

    def __init__(self, message: str, body: Any = None):
        super().__init__(message)
        self.message = message
        self.body = body
