"""Exceptions with special meanings for the Zevenet checks.

Every error that ends a check early derives from :class:`CheckError` and
names the :class:`~.state.ServiceState` it is reported with. The
:class:`~.check.Check` controller catches them while probing a resource and
turns them into a single result, so none of them ever reaches the
threshold logic.
"""

from .state import ServiceState, critical, unknown

AUTH_REQUIRED_MESSAGE = "Authorization required, please specify a correct ZAPI v3 key!"


class CheckError(RuntimeError):
    """Abort check execution.

    This exception should be raised if it becomes clear for a plugin
    that it is not able to determine the system status. Raising this
    exception will make the plugin display the exception's argument and
    exit with the state given in :attr:`state` (UNKNOWN by default).
    """

    state: ServiceState = unknown


class UsageError(CheckError):
    """Missing or malformed command line arguments.

    Detected before the appliance is contacted.
    """


class TransportError(CheckError):
    """The appliance could not be reached (connect, timeout, DNS, TLS)."""


class ResponseError(CheckError):
    """The appliance answered, but not with a usable JSON document."""

    status_code: int | None

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthError(CheckError):
    """The appliance rejected the ZAPI key."""

    state = critical

    def __init__(self, message: str = AUTH_REQUIRED_MESSAGE) -> None:
        super().__init__(message)


class NotFoundError(CheckError):
    """The requested farm, backend or interface is not on the appliance."""

    state = critical
