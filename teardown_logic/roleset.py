"""
Roleset management: IAM stacks holding the role bindings of an environment or service.
"""

from .collaborators import StackDeleter, StackWaiter
from .errors import RolesetError
from .progress_indicator import ProgressIndicator
from .stacks import StackType, create_stack_name, is_successful_status


class StackRolesetManager:
    """Deletes roleset stacks through the stack deleter and waiter."""

    def __init__(
        self,
        namespace: str,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
        progress: ProgressIndicator,
    ):
        self.namespace = namespace
        self.stack_deleter = stack_deleter
        self.stack_waiter = stack_waiter
        self.progress = progress

    def environment_roleset_name(self, environment_name: str) -> str:
        return create_stack_name(
            self.namespace, StackType.IAM, "environment", environment_name
        )

    def service_roleset_name(self, environment_name: str, service_name: str) -> str:
        return create_stack_name(
            self.namespace, StackType.IAM, "service", service_name, environment_name
        )

    def _delete_roleset(self, stack_name: str):
        self.stack_deleter.delete_stack(stack_name)
        stack = self.stack_waiter.await_final_status(stack_name)
        if stack is not None and not is_successful_status(stack.status):
            raise RolesetError(
                f"Roleset {stack_name} ended in failed status {stack.status} {stack.status_reason or ''}"
            )
        self.progress.debug(f"Roleset {stack_name} deleted")

    def delete_environment_roleset(self, environment_name: str) -> None:
        self._delete_roleset(self.environment_roleset_name(environment_name))

    def delete_service_roleset(self, environment_name: str, service_name: str) -> None:
        if not service_name:
            raise RolesetError(
                f"Cannot delete service roleset in '{environment_name}' without a service name"
            )
        self._delete_roleset(self.service_roleset_name(environment_name, service_name))
