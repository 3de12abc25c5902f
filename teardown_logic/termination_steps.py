"""
Termination steps for environments and services.

Every step captures its configuration and collaborators at construction time and
exposes a single execute() that returns None on success and raises on a hard failure.
Steps are callable so they can be handed straight to the pipeline executor.
"""

from typing import List, Optional

from .collaborators import RolesetManager, StackDeleter, StackLister, StackWaiter
from .errors import ServiceInputError, StackTerminationError, TeardownError
from .outcome import PhaseOutcome, first_failure
from .progress_indicator import ProgressIndicator
from .stacks import (
    Stack,
    StackType,
    belongs_to_environment,
    create_stack_name,
    is_successful_status,
)


def check_final_status(stack_name: str, stack: Optional[Stack]):
    """Raise unless the stack is gone or ended in a successful status."""
    if stack is not None and not is_successful_status(stack.status):
        raise StackTerminationError(stack_name, stack.status, stack.status_reason)


def delete_stacks_then_wait(
    stack_type: StackType,
    environment_name: str,
    stack_lister: StackLister,
    stack_deleter: StackDeleter,
    stack_waiter: StackWaiter,
    progress: ProgressIndicator,
    on_deleted=None,
    wait_message: str = "Waiting on stack '{name}'",
) -> List[Stack]:
    """
    Delete every stack of a type tagged with the environment, then wait for all of them.

    All delete requests go out before the first wait so the stacks are retired
    concurrently. A failed delete aborts before any wait. Final statuses are not
    classified here.
    """
    stacks = stack_lister.list_stacks(stack_type)
    targets = [s for s in stacks if belongs_to_environment(s, environment_name)]

    for stack in targets:
        stack_deleter.delete_stack(stack.name)
        if on_deleted is not None:
            on_deleted(stack)

    for stack in targets:
        progress.info(
            wait_message.format(
                name=stack.name,
                service=stack.service,
                environment=environment_name,
            )
        )
        final = stack_waiter.await_final_status(stack.name)
        if final is not None:
            progress.debug(f"Stack '{stack.name}' finished as {final.status}")

    return targets


class TerminationStep:
    """Base for all steps."""

    description = "Terminate"

    def execute(self):
        raise NotImplementedError

    def __call__(self):
        return self.execute()


class ServiceTerminator(TerminationStep):
    """Removes every service stack in the environment along with its roleset."""

    description = "Terminate services"

    def __init__(
        self,
        environment_name: str,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
        roleset_manager: RolesetManager,
        progress: ProgressIndicator,
    ):
        self.environment_name = environment_name
        self.stack_lister = stack_lister
        self.stack_deleter = stack_deleter
        self.stack_waiter = stack_waiter
        self.roleset_manager = roleset_manager
        self.progress = progress

    def _delete_roleset(self, stack: Stack):
        # fire and forget: a roleset failure never stops the service teardown
        try:
            self.roleset_manager.delete_service_roleset(
                self.environment_name, stack.service or ""
            )
        except TeardownError as e:
            self.progress.warning(
                f"Unable to delete roleset for service '{stack.service}': {e}"
            )

    def execute(self):
        self.progress.notice(
            f"Terminating Services for environment '{self.environment_name}' ..."
        )
        delete_stacks_then_wait(
            StackType.SERVICE,
            self.environment_name,
            self.stack_lister,
            self.stack_deleter,
            self.stack_waiter,
            self.progress,
            on_deleted=self._delete_roleset,
            wait_message="   Undeploying service '{service}' from environment '{environment}'",
        )


class DatabaseTerminator(TerminationStep):
    description = "Terminate databases"

    def __init__(
        self,
        environment_name: str,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
        progress: ProgressIndicator,
    ):
        self.environment_name = environment_name
        self.stack_lister = stack_lister
        self.stack_deleter = stack_deleter
        self.stack_waiter = stack_waiter
        self.progress = progress

    def execute(self):
        self.progress.notice(
            f"Terminating Databases for environment '{self.environment_name}' ..."
        )
        delete_stacks_then_wait(
            StackType.DATABASE,
            self.environment_name,
            self.stack_lister,
            self.stack_deleter,
            self.stack_waiter,
            self.progress,
            wait_message="   Terminating database for service '{service}' from environment '{environment}'",
        )


class ScopedStackTerminator(TerminationStep):
    """Deletes the single environment stack of one type and checks how it ended."""

    stack_type: StackType = StackType.CONTAINER_PLATFORM
    label = "stack"

    def __init__(
        self,
        namespace: str,
        environment_name: str,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
        progress: ProgressIndicator,
    ):
        self.namespace = namespace
        self.environment_name = environment_name
        self.stack_deleter = stack_deleter
        self.stack_waiter = stack_waiter
        self.progress = progress

    @property
    def stack_name(self) -> str:
        return create_stack_name(
            self.namespace, self.stack_type, self.environment_name
        )

    def execute(self):
        self.progress.notice(
            f"Terminating {self.label} environment '{self.environment_name}' ..."
        )
        stack_name = self.stack_name
        self.stack_deleter.delete_stack(stack_name)
        check_final_status(stack_name, self.stack_waiter.await_final_status(stack_name))


class ContainerPlatformTerminator(ScopedStackTerminator):
    description = "Terminate container platform"
    stack_type = StackType.CONTAINER_PLATFORM
    label = "ECS"


class ServiceDiscoveryTerminator(ScopedStackTerminator):
    description = "Terminate service discovery"
    stack_type = StackType.SERVICE_DISCOVERY
    label = "Consul"


class LoadBalancerTerminator(ScopedStackTerminator):
    description = "Terminate load balancer"
    stack_type = StackType.LOAD_BALANCER
    label = "ELB"


class NetworkTerminator(TerminationStep):
    """
    Removes the network stack and then its target stack.

    Delete requests are best effort: the network may be shared or still have
    dependents outside this environment. Both sub-resources are always attempted;
    the first failed wait is raised afterwards.
    """

    description = "Terminate network"

    def __init__(
        self,
        namespace: str,
        environment_name: str,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
        progress: ProgressIndicator,
    ):
        self.namespace = namespace
        self.environment_name = environment_name
        self.stack_deleter = stack_deleter
        self.stack_waiter = stack_waiter
        self.progress = progress

    def _request_delete(self, phase: str, stack_name: str, label: str) -> PhaseOutcome:
        try:
            self.stack_deleter.delete_stack(stack_name)
        except TeardownError as e:
            self.progress.debug(f"Unable to delete {label}, but ignoring error: {e}")
            return PhaseOutcome.suppressed(phase, e)
        return PhaseOutcome.succeeded(phase)

    def _await(self, phase: str, stack_name: str) -> PhaseOutcome:
        try:
            check_final_status(
                stack_name, self.stack_waiter.await_final_status(stack_name)
            )
        except StackTerminationError as e:
            return PhaseOutcome.failed(phase, e)
        return PhaseOutcome.succeeded(phase)

    def run_phases(self) -> List[PhaseOutcome]:
        network_stack_name = create_stack_name(
            self.namespace, StackType.NETWORK, self.environment_name
        )
        target_stack_name = create_stack_name(
            self.namespace, StackType.TARGET, self.environment_name
        )
        return [
            self._request_delete("network-delete", network_stack_name, "VPC"),
            self._await("network-wait", network_stack_name),
            self._request_delete("target-delete", target_stack_name, "VPC target"),
            self._await("target-wait", target_stack_name),
        ]

    def execute(self):
        self.progress.notice(
            f"Terminating VPC environment '{self.environment_name}' ..."
        )
        failure = first_failure(self.run_phases())
        if failure is not None:
            failure.raise_for_failure()


class EnvironmentRolesetTerminator(TerminationStep):
    description = "Terminate environment roleset"

    def __init__(
        self,
        roleset_manager: RolesetManager,
        environment_name: str,
        progress: ProgressIndicator,
    ):
        self.roleset_manager = roleset_manager
        self.environment_name = environment_name
        self.progress = progress

    def execute(self):
        self.progress.notice(
            f"Terminating roleset for environment '{self.environment_name}' ..."
        )
        self.roleset_manager.delete_environment_roleset(self.environment_name)


class ServiceWorkflow:
    """State shared between the steps of a service undeploy."""

    def __init__(self):
        self.service_name: Optional[str] = None

    def require_service_name(self) -> str:
        if not self.service_name:
            raise ServiceInputError("Service name has not been resolved")
        return self.service_name


class ServiceInput(TerminationStep):
    """Resolves which service to undeploy, falling back to the configured default."""

    description = "Resolve service"

    def __init__(
        self,
        workflow: ServiceWorkflow,
        service_name: Optional[str],
        default_service_name: Optional[str] = None,
    ):
        self.workflow = workflow
        self.service_name = service_name
        self.default_service_name = default_service_name

    def execute(self):
        name = (self.service_name or self.default_service_name or "").strip()
        if not name:
            raise ServiceInputError(
                "No service name given and no default service is configured"
            )
        self.workflow.service_name = name


class ServiceUndeployer(TerminationStep):
    description = "Undeploy service"

    def __init__(
        self,
        workflow: ServiceWorkflow,
        namespace: str,
        environment_name: str,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
        progress: ProgressIndicator,
    ):
        self.workflow = workflow
        self.namespace = namespace
        self.environment_name = environment_name
        self.stack_deleter = stack_deleter
        self.stack_waiter = stack_waiter
        self.progress = progress

    def execute(self):
        service_name = self.workflow.require_service_name()
        self.progress.notice(
            f"Undeploying service '{service_name}' from '{self.environment_name}'"
        )
        stack_name = create_stack_name(
            self.namespace, StackType.SERVICE, service_name, self.environment_name
        )
        if self.stack_waiter.await_final_status(stack_name) is None:
            self.progress.info("  Stack is already deleted.")
            return

        self.stack_deleter.delete_stack(stack_name)
        check_final_status(stack_name, self.stack_waiter.await_final_status(stack_name))


class ServiceRolesetTerminator(TerminationStep):
    description = "Terminate service roleset"

    def __init__(
        self,
        workflow: ServiceWorkflow,
        roleset_manager: RolesetManager,
        environment_name: str,
    ):
        self.workflow = workflow
        self.roleset_manager = roleset_manager
        self.environment_name = environment_name

    def execute(self):
        self.roleset_manager.delete_service_roleset(
            self.environment_name, self.workflow.require_service_name()
        )
