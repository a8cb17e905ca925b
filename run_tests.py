"""Test runner script for the transcript corrector.

Usage:
    python run_tests.py                 # whole suite
    python run_tests.py --coverage      # with coverage of the project packages
    python run_tests.py -k normalizer   # extra arguments go to pytest
"""
import subprocess
import sys

PACKAGES = ("corrector", "app", "config", "core")


def build_command(extra_args, coverage=False):
    """pytest command line for the suite in tests/."""
    cmd = [sys.executable, "-m", "pytest", "tests/", "-v", "--tb=short"]
    if coverage:
        cmd += [f"--cov={package}" for package in PACKAGES]
        cmd += ["--cov-report=term-missing", "--cov-report=html"]
    return cmd + list(extra_args)


def run_tests(extra_args=(), coverage=False):
    title = "Running Transcript Corrector Tests" + (" with Coverage" if coverage else "")
    print("=" * 70)
    print(title)
    print("=" * 70)
    print()

    returncode = subprocess.run(build_command(extra_args, coverage), check=False).returncode
    if coverage and returncode == 0:
        print()
        print("Coverage report generated in htmlcov/index.html")
    return returncode


if __name__ == "__main__":
    args = sys.argv[1:]
    coverage = "--coverage" in args or "-c" in args
    extra = [arg for arg in args if arg not in ("--coverage", "-c")]

    sys.exit(run_tests(extra, coverage))
