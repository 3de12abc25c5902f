#!/usr/bin/env python3
"""
Lint and test runner for the teardown project.

Runs isort, black, flake8 and pytest in sequence and stops at the first failure.
"""

import subprocess
import sys
from typing import List, Tuple

CHECKS = [
    (["isort", "--check-only", "."], "Checking import order with isort"),
    (["black", "--check", "."], "Checking formatting with black"),
    (["flake8", "teardown_logic", "tests", "terminate.py"], "Linting with flake8"),
    (["pytest"], "Running tests with pytest"),
]


def run_command(command: List[str], description: str) -> Tuple[bool, str]:
    """
    Run a command and return its success status and combined output.

    Args:
        command: List of command parts to execute
        description: Human-readable description of the check
    """
    print(f"\n{description}...")
    print(f"   Running: {' '.join(command)}")

    try:
        result = subprocess.run(command, capture_output=True, text=True, check=False)
    except FileNotFoundError:
        error_msg = f"Command not found: {command[0]}"
        print(f"[FAILED] {description} - {error_msg}")
        return False, error_msg

    output = (result.stdout.strip() + "\n" + result.stderr.strip()).strip()
    if result.returncode == 0:
        print(f"[OK] {description}")
        return True, output

    print(f"[FAILED] {description}")
    print(f"   Error:\n{output}")
    return False, output


def main():
    results = []
    for command, description in CHECKS:
        success, _ = run_command(command, description)
        results.append((description, success))
        if not success:
            print("\nStopping due to a failing check.")
            break

    print("\n" + "=" * 60)
    for description, success in results:
        print(f"   {'PASSED' if success else 'FAILED'}: {description}")

    sys.exit(0 if all(success for _, success in results) else 1)


if __name__ == "__main__":
    main()
