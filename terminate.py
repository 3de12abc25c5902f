#!/usr/bin/env python3
"""
Environment teardown script

Usage:
    python terminate.py environment ENV [--confirm]
    python terminate.py service ENV [--service NAME] [--keep-roleset] [--confirm]

Examples:
    python terminate.py environment dev               # Tear down the whole dev environment
    python terminate.py service dev --service web     # Remove the web service from dev
"""

import argparse
import logging
import sys

from teardown_logic.context import build_context
from teardown_logic.errors import TeardownError
from teardown_logic.progress_indicator import ProgressIndicator
from teardown_logic.settings import (
    AWS_REGION,
    DEFAULT_SERVICE_NAME,
    NAMESPACE,
    POLL_INTERVAL,
)
from teardown_logic.workflows import terminate_environment, undeploy_service


def parse_arguments(argv):
    parser = argparse.ArgumentParser(
        description="Tear down environments and services provisioned as stacks",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--region", default=AWS_REGION, help=f"AWS region (default: {AWS_REGION})"
    )
    parser.add_argument(
        "--namespace",
        default=NAMESPACE,
        help=f"Stack name prefix (default: {NAMESPACE})",
    )
    parser.add_argument("--profile", help="AWS CLI profile to use")
    parser.add_argument(
        "--verbose", action="store_true", help="Show debug output"
    )
    parser.add_argument(
        "--confirm",
        action="store_true",
        help="Skip confirmation prompt (use with caution)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    env_parser = subparsers.add_parser(
        "environment", help="Terminate every stack of an environment"
    )
    env_parser.add_argument("environment", help="Environment name, e.g. 'dev'")

    svc_parser = subparsers.add_parser(
        "service", help="Undeploy a single service from an environment"
    )
    svc_parser.add_argument("environment", help="Environment name, e.g. 'dev'")
    svc_parser.add_argument(
        "--service",
        default=DEFAULT_SERVICE_NAME,
        help="Service name (default: TEARDOWN_SERVICE_NAME)",
    )
    svc_parser.add_argument(
        "--keep-roleset",
        action="store_true",
        help="Leave the service roleset in place",
    )

    return parser.parse_args(argv)


def confirm_teardown(args) -> bool:
    if args.command == "environment":
        target = f"environment '{args.environment}'"
    else:
        target = f"service '{args.service}' in environment '{args.environment}'"

    answer = input(
        f"This will delete all stacks of {target} in region {args.region}. "
        f"Are you sure? (type 'yes' to confirm): "
    )
    return answer.strip().lower() == "yes"


def main(argv=None) -> int:
    args = parse_arguments(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    progress = ProgressIndicator(verbose=args.verbose)

    if args.command == "service" and not args.service:
        progress.error(
            "No service given: pass --service or set TEARDOWN_SERVICE_NAME"
        )
        return 2

    if not args.confirm and not confirm_teardown(args):
        print("Teardown cancelled.")
        return 0

    try:
        ctx = build_context(
            args.region,
            args.namespace,
            service_name=DEFAULT_SERVICE_NAME,
            poll_interval=POLL_INTERVAL,
            profile=args.profile,
            progress=progress,
        )

        if args.command == "environment":
            terminate_environment(ctx, args.environment)
            progress.success(f"Environment '{args.environment}' terminated")
        else:
            undeploy_service(
                ctx,
                args.service,
                args.environment,
                delete_roleset=not args.keep_roleset,
            )
            progress.success(
                f"Service '{args.service}' undeployed from environment '{args.environment}'"
            )

    except TeardownError as e:
        progress.error(f"Teardown failed: {e}")
        return 1
    except KeyboardInterrupt:
        progress.warning("Operation cancelled by user.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
