"""
Progress reporting and colored terminal output for teardown runs.
"""

import logging

logger = logging.getLogger("teardown_logic")
logger.addHandler(logging.NullHandler())


class Colors:
    """ANSI color codes for terminal output"""

    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    GREY = "\033[90m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


class ProgressIndicator:
    """Step counter and message sink handed to every termination step"""

    def __init__(self, total_steps: int = 0, verbose: bool = False):
        self.total_steps = total_steps
        self.current_step = 0
        self.verbose = verbose

    def start(self, total_steps: int):
        """Reset the counter for a new pipeline run."""
        self.total_steps = total_steps
        self.current_step = 0

    def next_step(self, description: str):
        self.current_step += 1
        print(
            f"\n{Colors.OKBLUE}[{self.current_step}/{self.total_steps}] {description}{Colors.ENDC}"
        )

    def notice(self, message: str):
        print(f"{Colors.BOLD}{message}{Colors.ENDC}")

    def info(self, message: str):
        print(f"{Colors.OKCYAN}[INFO] {message}{Colors.ENDC}")

    def success(self, message: str):
        print(f"{Colors.OKGREEN}[OK] {message}{Colors.ENDC}")

    def warning(self, message: str):
        print(f"{Colors.WARNING}[WARNING] {message}{Colors.ENDC}")

    def error(self, message: str):
        print(f"{Colors.FAIL}[ERROR] {message}{Colors.ENDC}")

    def debug(self, message: str):
        """Printed when verbose, otherwise left to whoever configures the logger."""
        if self.verbose:
            print(f"{Colors.GREY}[DEBUG] {message}{Colors.ENDC}")
        else:
            logger.debug(message)
