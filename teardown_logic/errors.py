"""
Exception types raised by the teardown pipeline and its collaborators.
"""

from typing import Optional


class TeardownError(Exception):
    """Base class for every failure surfaced by a termination step."""


class StackManagerError(TeardownError):
    """A stack manager call (list, delete, describe) failed."""


class TransportError(StackManagerError):
    """The stack manager could not be reached."""


class QueryError(StackManagerError):
    """The stack manager rejected a query."""


class NotPermittedError(StackManagerError):
    """The caller is not allowed to perform the operation."""


class RolesetError(TeardownError):
    """A roleset could not be removed."""


class ServiceInputError(TeardownError):
    """No service name could be resolved for an undeploy."""


class StackTerminationError(TeardownError):
    """A stack reached a terminal status that is not a successful completion."""

    def __init__(
        self, stack_name: str, status: str, status_reason: Optional[str] = None
    ):
        self.stack_name = stack_name
        self.status = status
        self.status_reason = status_reason or ""
        super().__init__(f"Ended in failed status {status} {self.status_reason}")
