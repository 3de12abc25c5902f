"""
CloudFormation backed stack lister, deleter and waiter.
"""

import time
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_cloudformation.client import CloudFormationClient

from .errors import NotPermittedError, QueryError, StackManagerError, TransportError
from .progress_indicator import ProgressIndicator
from .stacks import TYPE_TAG, Stack, StackType, is_terminal_status

ACCESS_DENIED_CODES = {"AccessDenied", "AccessDeniedException", "UnauthorizedOperation"}


def get_aws_error_message(error: ClientError) -> str:
    """Extracts the error code and message from a botocore ClientError."""
    details = error.response.get("Error", {})
    return f"{details.get('Code', 'Unknown')}: {details.get('Message', str(error))}"


def _translate_error(
    error: Exception, action: str, client_error_type=QueryError
) -> StackManagerError:
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        message = f"Unable to {action}: {get_aws_error_message(error)}"
        if code in ACCESS_DENIED_CODES:
            return NotPermittedError(message)
        return client_error_type(message)
    return TransportError(f"Unable to {action}: {error}")


def _is_missing_stack(error: ClientError) -> bool:
    details = error.response.get("Error", {})
    return details.get("Code") == "ValidationError" and "does not exist" in details.get(
        "Message", ""
    )


def stack_from_description(description: Dict[str, Any]) -> Stack:
    """Converts a describe_stacks entry into a Stack."""
    tags = {tag["Key"]: tag["Value"] for tag in description.get("Tags", [])}
    stack_type = None
    if tags.get(TYPE_TAG) in {t.value for t in StackType}:
        stack_type = StackType(tags[TYPE_TAG])

    return Stack(
        name=description["StackName"],
        status=description["StackStatus"],
        status_reason=description.get("StackStatusReason"),
        stack_type=stack_type,
        tags=tags,
    )


class CloudFormationStackManager:
    """Lists, deletes and waits on CloudFormation stacks."""

    def __init__(
        self,
        cfn_client: CloudFormationClient,
        progress: ProgressIndicator,
        poll_interval: float = 10.0,
    ):
        self.cfn = cfn_client
        self.progress = progress
        self.poll_interval = poll_interval

    def list_stacks(self, stack_type: StackType) -> List[Stack]:
        """List live stacks whose type tag matches stack_type."""
        stacks = []
        try:
            paginator = self.cfn.get_paginator("describe_stacks")
            for page in paginator.paginate():
                for description in page.get("Stacks", []):
                    stack = stack_from_description(description)
                    if stack.stack_type != stack_type:
                        continue
                    if stack.status == "DELETE_COMPLETE":
                        continue
                    stacks.append(stack)
        except (ClientError, BotoCoreError) as e:
            raise _translate_error(e, f"list {stack_type.value} stacks") from e

        self.progress.debug(f"Found {len(stacks)} {stack_type.value} stacks")
        return stacks

    def delete_stack(self, stack_name: str) -> None:
        self.progress.debug(f"Deleting stack '{stack_name}'")
        try:
            self.cfn.delete_stack(StackName=stack_name)
        except (ClientError, BotoCoreError) as e:
            raise _translate_error(
                e, f"delete stack {stack_name}", client_error_type=TransportError
            ) from e

    def describe_stack(self, stack_name: str) -> Optional[Stack]:
        """Returns None when the stack does not exist."""
        try:
            response = self.cfn.describe_stacks(StackName=stack_name)
        except ClientError as e:
            if _is_missing_stack(e):
                return None
            raise _translate_error(e, f"describe stack {stack_name}") from e
        except BotoCoreError as e:
            raise _translate_error(e, f"describe stack {stack_name}") from e

        descriptions = response.get("Stacks", [])
        if not descriptions:
            return None
        return stack_from_description(descriptions[0])

    def await_final_status(self, stack_name: str) -> Optional[Stack]:
        """Poll until the stack is terminal or gone. Failed statuses are returned, not raised."""
        while True:
            stack = self.describe_stack(stack_name)
            if stack is None:
                self.progress.debug(f"Stack '{stack_name}' does not exist")
                return None
            if is_terminal_status(stack.status):
                return stack

            self.progress.debug(
                f"Stack '{stack_name}' is {stack.status}, checking again in {self.poll_interval}s"
            )
            time.sleep(self.poll_interval)
