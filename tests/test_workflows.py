"""
End to end tests for the environment termination and service undeploy workflows.
"""

import pytest

from teardown_logic.errors import ServiceInputError, StackTerminationError
from teardown_logic.stacks import StackType
from teardown_logic.workflows import (
    new_environment_terminator,
    new_service_undeployer,
    terminate_environment,
    undeploy_service,
)


@pytest.fixture
def dev_environment(stack_manager):
    stack_manager.add_stack(
        StackType.SERVICE, "mu-service-web-dev", environment="dev", service="web"
    )
    stack_manager.add_stack(
        StackType.SERVICE, "mu-service-api-dev", environment="dev", service="api"
    )
    stack_manager.add_stack(
        StackType.SERVICE, "mu-service-web-prod", environment="prod", service="web"
    )
    stack_manager.add_stack(
        StackType.DATABASE, "mu-database-web-dev", environment="dev", service="web"
    )
    return stack_manager


class TestTerminateEnvironment:
    def test_full_teardown_order(self, context, dev_environment, calls):
        terminate_environment(context, "dev")

        assert dev_environment.deletes() == [
            "mu-service-web-dev",
            "mu-service-api-dev",
            "mu-database-web-dev",
            "mu-cluster-dev",
            "mu-consul-dev",
            "mu-loadbalancer-dev",
            "mu-vpc-dev",
            "mu-target-dev",
        ]
        rolesets = [c for c in calls if c[0].endswith("roleset")]
        assert rolesets == [
            ("svc-roleset", "web-dev"),
            ("svc-roleset", "api-dev"),
            ("env-roleset", "dev"),
        ]

    def test_roleset_runs_between_discovery_and_load_balancer(self, context, calls):
        terminate_environment(context, "dev")

        order = [c[1] for c in calls if c[0] in ("delete", "env-roleset")]
        assert order.index("dev") == order.index("mu-consul-dev") + 1
        assert order.index("mu-loadbalancer-dev") == order.index("dev") + 1

    def test_consumers_are_deleted_before_shared_infrastructure(
        self, context, dev_environment
    ):
        terminate_environment(context, "dev")

        deletes = dev_environment.deletes()
        last_consumer = max(
            deletes.index(name)
            for name in deletes
            if name.startswith(("mu-service-", "mu-database-"))
        )
        first_infrastructure = min(
            deletes.index(name)
            for name in ("mu-cluster-dev", "mu-loadbalancer-dev", "mu-vpc-dev")
        )
        assert last_consumer < first_infrastructure

    def test_platform_failure_stops_remaining_steps(
        self, context, dev_environment, calls
    ):
        dev_environment.final_status["mu-cluster-dev"] = (
            "DELETE_FAILED",
            "dependent resource in use",
        )

        with pytest.raises(StackTerminationError) as exc_info:
            terminate_environment(context, "dev")

        message = str(exc_info.value)
        assert "DELETE_FAILED" in message
        assert "dependent resource in use" in message
        deletes = dev_environment.deletes()
        assert deletes[-1] == "mu-cluster-dev"
        assert ("env-roleset", "dev") not in calls

    def test_second_run_on_empty_environment_succeeds(self, context, dev_environment):
        terminate_environment(context, "dev")

        dev_environment.stacks_by_type.clear()
        for name in dev_environment.deletes():
            dev_environment.final_status[name] = None

        terminate_environment(context, "dev")

    def test_builder_has_seven_steps(self, context):
        executor = new_environment_terminator(context, "dev")
        assert [step.description for step in executor.steps] == [
            "Terminate services",
            "Terminate databases",
            "Terminate container platform",
            "Terminate service discovery",
            "Terminate environment roleset",
            "Terminate load balancer",
            "Terminate network",
        ]


class TestUndeployService:
    def test_undeploys_service_and_roleset(self, context, stack_manager, calls):
        stack_manager.final_status["mu-service-web-dev"] = ("CREATE_COMPLETE", None)

        undeploy_service(context, "web", "dev")

        assert stack_manager.deletes() == ["mu-service-web-dev"]
        assert calls[-1] == ("svc-roleset", "web-dev")

    def test_failed_undeploy_skips_service_roleset(self, context, stack_manager, calls):
        stack_manager.final_status["mu-service-web-dev"] = [
            ("CREATE_COMPLETE", None),
            ("DELETE_FAILED", "svc in use"),
        ]

        with pytest.raises(StackTerminationError, match="DELETE_FAILED svc in use"):
            undeploy_service(context, "web", "dev")

        assert not [c for c in calls if c[0] == "svc-roleset"]

    def test_already_absent_service_issues_no_delete(self, context, stack_manager):
        stack_manager.final_status["mu-service-web-dev"] = None

        undeploy_service(context, "web", "dev", delete_roleset=False)

        assert stack_manager.deletes() == []

    def test_keep_roleset(self, context, calls):
        executor = new_service_undeployer(context, "web", "dev", delete_roleset=False)
        assert len(executor.steps) == 2

        executor.run()
        assert not [c for c in calls if c[0] == "svc-roleset"]

    def test_default_service_from_context(self, context, stack_manager):
        context.default_service_name = "api"

        undeploy_service(context, None, "dev")

        assert stack_manager.deletes() == ["mu-service-api-dev"]

    def test_missing_service_name(self, context, calls):
        with pytest.raises(ServiceInputError):
            undeploy_service(context, None, "dev")

        assert calls == []
