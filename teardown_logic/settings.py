"""Settings for stack teardown

Values can be overridden through environment variables or a .env.local file
in the project root.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env.local if it exists
env_path = Path(__file__).parent.parent / ".env.local"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)

AWS_REGION = os.getenv("AWS_REGION", "us-east-1")

# Prefix of every stack name, e.g. "mu" in "mu-cluster-dev"
NAMESPACE = os.getenv("TEARDOWN_NAMESPACE", "mu")

# Service undeployed when none is given on the command line
DEFAULT_SERVICE_NAME = os.getenv("TEARDOWN_SERVICE_NAME")

# Seconds between status checks while waiting on a stack
POLL_INTERVAL = float(os.getenv("TEARDOWN_POLL_INTERVAL", "10"))
