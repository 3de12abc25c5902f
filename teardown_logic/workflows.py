"""
Workflow builders: environment termination and single service undeploy.
"""

from typing import Optional

from .context import TeardownContext
from .pipeline import PipelineExecutor, new_pipeline_executor
from .termination_steps import (
    ContainerPlatformTerminator,
    DatabaseTerminator,
    EnvironmentRolesetTerminator,
    LoadBalancerTerminator,
    NetworkTerminator,
    ServiceDiscoveryTerminator,
    ServiceInput,
    ServiceRolesetTerminator,
    ServiceTerminator,
    ServiceUndeployer,
    ServiceWorkflow,
)


def new_environment_terminator(
    ctx: TeardownContext, environment_name: str
) -> PipelineExecutor:
    """
    Build the pipeline that tears down a whole environment.

    Consumers go first (services, databases), then the platform, discovery,
    roleset and load balancer they depend on. The network goes last.
    """
    manager = ctx.stack_manager
    progress = ctx.progress

    return new_pipeline_executor(
        ServiceTerminator(
            environment_name, manager, manager, manager, ctx.roleset_manager, progress
        ),
        DatabaseTerminator(environment_name, manager, manager, manager, progress),
        ContainerPlatformTerminator(
            ctx.namespace, environment_name, manager, manager, progress
        ),
        ServiceDiscoveryTerminator(
            ctx.namespace, environment_name, manager, manager, progress
        ),
        EnvironmentRolesetTerminator(ctx.roleset_manager, environment_name, progress),
        LoadBalancerTerminator(
            ctx.namespace, environment_name, manager, manager, progress
        ),
        NetworkTerminator(ctx.namespace, environment_name, manager, manager, progress),
        progress=progress,
    )


def new_service_undeployer(
    ctx: TeardownContext,
    service_name: Optional[str],
    environment_name: str,
    delete_roleset: bool = True,
) -> PipelineExecutor:
    """Build the pipeline that removes one service from a running environment."""
    workflow = ServiceWorkflow()
    steps = [
        ServiceInput(workflow, service_name, ctx.default_service_name),
        ServiceUndeployer(
            workflow,
            ctx.namespace,
            environment_name,
            ctx.stack_manager,
            ctx.stack_manager,
            ctx.progress,
        ),
    ]
    if delete_roleset:
        steps.append(
            ServiceRolesetTerminator(workflow, ctx.roleset_manager, environment_name)
        )
    return PipelineExecutor(steps, progress=ctx.progress)


def terminate_environment(ctx: TeardownContext, environment_name: str):
    new_environment_terminator(ctx, environment_name).run()


def undeploy_service(
    ctx: TeardownContext,
    service_name: Optional[str],
    environment_name: str,
    delete_roleset: bool = True,
):
    new_service_undeployer(
        ctx, service_name, environment_name, delete_roleset=delete_roleset
    ).run()
