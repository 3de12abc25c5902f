"""
Shared context holding configuration and collaborators for the workflows.
"""

from dataclasses import dataclass
from typing import Optional

import boto3

from .cloudformation import CloudFormationStackManager
from .progress_indicator import ProgressIndicator
from .roleset import StackRolesetManager


@dataclass
class TeardownContext:
    namespace: str
    stack_manager: CloudFormationStackManager
    roleset_manager: StackRolesetManager
    progress: ProgressIndicator
    default_service_name: Optional[str] = None


def build_context(
    region: str,
    namespace: str,
    service_name: Optional[str] = None,
    verbose: bool = False,
    poll_interval: float = 10.0,
    profile: Optional[str] = None,
    progress: Optional[ProgressIndicator] = None,
) -> TeardownContext:
    """Create AWS clients and wire the CloudFormation backed collaborators."""
    session = boto3.Session(region_name=region, profile_name=profile)
    if progress is None:
        progress = ProgressIndicator(verbose=verbose)

    stack_manager = CloudFormationStackManager(
        session.client("cloudformation"), progress, poll_interval=poll_interval
    )
    roleset_manager = StackRolesetManager(
        namespace, stack_manager, stack_manager, progress
    )

    progress.debug(f"Teardown context initialized for region {region}")
    return TeardownContext(
        namespace=namespace,
        stack_manager=stack_manager,
        roleset_manager=roleset_manager,
        progress=progress,
        default_service_name=service_name,
    )
