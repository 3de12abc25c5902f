"""
Capabilities the termination steps consume.

Concrete implementations live in cloudformation.py and roleset.py; tests use
MagicMock or the recording fakes in tests/conftest.py.
"""

from typing import List, Optional, Protocol

from .stacks import Stack, StackType


class StackLister(Protocol):
    def list_stacks(self, stack_type: StackType) -> List[Stack]:
        """Raises TransportError or QueryError."""
        ...


class StackDeleter(Protocol):
    def delete_stack(self, stack_name: str) -> None:
        """Raises TransportError or NotPermittedError."""
        ...


class StackWaiter(Protocol):
    def await_final_status(self, stack_name: str) -> Optional[Stack]:
        """
        Block until the stack is terminal or gone. Returns None when the stack
        does not exist. Never raises because of a failed terminal status.
        """
        ...


class RolesetManager(Protocol):
    def delete_environment_roleset(self, environment_name: str) -> None: ...

    def delete_service_roleset(
        self, environment_name: str, service_name: str
    ) -> None: ...
