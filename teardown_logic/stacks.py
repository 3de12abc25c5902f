"""
Stack model, stack naming and status classification.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

SUCCESS_SUFFIX = "_COMPLETE"
IN_PROGRESS_SUFFIX = "_IN_PROGRESS"

ENVIRONMENT_TAG = "environment"
SERVICE_TAG = "service"
TYPE_TAG = "type"


class StackType(str, Enum):
    """Kinds of stacks an environment is provisioned from"""

    SERVICE = "service"
    DATABASE = "database"
    CONTAINER_PLATFORM = "cluster"
    SERVICE_DISCOVERY = "consul"
    LOAD_BALANCER = "loadbalancer"
    NETWORK = "vpc"
    TARGET = "target"
    IAM = "iam"


@dataclass(frozen=True)
class Stack:
    """A stack as reported by the stack manager. Never mutated locally."""

    name: str
    status: str
    status_reason: Optional[str] = None
    stack_type: Optional[StackType] = None
    tags: Dict[str, str] = field(default_factory=dict)

    @property
    def environment(self) -> Optional[str]:
        return self.tags.get(ENVIRONMENT_TAG)

    @property
    def service(self) -> Optional[str]:
        return self.tags.get(SERVICE_TAG)


def create_stack_name(namespace: str, stack_type: StackType, *parts: str) -> str:
    """
    Build the deterministic stack name for a resource.

    create_stack_name("mu", StackType.SERVICE, "web", "dev") -> "mu-service-web-dev"
    """
    return "-".join([namespace, stack_type.value, *parts])


def is_terminal_status(status: str) -> bool:
    return not status.endswith(IN_PROGRESS_SUFFIX)


def is_successful_status(status: str) -> bool:
    return status.endswith(SUCCESS_SUFFIX)


def belongs_to_environment(stack: Stack, environment_name: str) -> bool:
    """Environment membership is decided by the environment tag alone."""
    return stack.tags.get(ENVIRONMENT_TAG) == environment_name
