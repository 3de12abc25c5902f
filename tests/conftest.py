"""
Shared fixtures: in-memory collaborators that record every call in order.
"""

from unittest.mock import MagicMock

import pytest

from teardown_logic.context import TeardownContext
from teardown_logic.progress_indicator import ProgressIndicator
from teardown_logic.stacks import Stack


class FakeStackManager:
    """Lister, deleter and waiter backed by dictionaries."""

    def __init__(self, calls):
        self.calls = calls
        self.stacks_by_type = {}
        # name -> (status, reason), None for absent, or a list consumed per wait
        self.final_status = {}
        self.delete_errors = {}
        self.list_error = None

    def add_stack(self, stack_type, name, **tags):
        self.stacks_by_type.setdefault(stack_type, []).append(
            Stack(name=name, status="CREATE_COMPLETE", stack_type=stack_type, tags=tags)
        )

    def list_stacks(self, stack_type):
        self.calls.append(("list", stack_type.value))
        if self.list_error is not None:
            raise self.list_error
        return list(self.stacks_by_type.get(stack_type, []))

    def delete_stack(self, stack_name):
        self.calls.append(("delete", stack_name))
        if stack_name in self.delete_errors:
            raise self.delete_errors[stack_name]

    def await_final_status(self, stack_name):
        self.calls.append(("wait", stack_name))
        result = self.final_status.get(stack_name, ("DELETE_COMPLETE", None))
        if isinstance(result, list):
            result = result.pop(0)
        if result is None:
            return None
        status, reason = result
        return Stack(name=stack_name, status=status, status_reason=reason)

    def deletes(self):
        return [name for action, name in self.calls if action == "delete"]


class FakeRolesetManager:
    def __init__(self, calls):
        self.calls = calls
        self.error = None

    def delete_environment_roleset(self, environment_name):
        self.calls.append(("env-roleset", environment_name))
        if self.error is not None:
            raise self.error

    def delete_service_roleset(self, environment_name, service_name):
        self.calls.append(("svc-roleset", f"{service_name}-{environment_name}"))
        if self.error is not None:
            raise self.error


@pytest.fixture
def calls():
    return []


@pytest.fixture
def stack_manager(calls):
    return FakeStackManager(calls)


@pytest.fixture
def roleset_manager(calls):
    return FakeRolesetManager(calls)


@pytest.fixture
def mock_progress():
    return MagicMock(spec=ProgressIndicator)


@pytest.fixture
def context(stack_manager, roleset_manager, mock_progress):
    return TeardownContext(
        namespace="mu",
        stack_manager=stack_manager,
        roleset_manager=roleset_manager,
        progress=mock_progress,
    )
