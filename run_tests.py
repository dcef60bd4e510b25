#!/usr/bin/env python3
"""
Test runner script for PyFastResample.

Shortcuts for running the different test suites. Taichi kernels are compiled
on first use, so the unit suite dominates the run time.
"""
import argparse
import subprocess
import sys

SUITES = {
    "imports": ("tests/test_imports.py", "Import tests"),
    "unit": ("tests/unit/", "Unit tests"),
    "cli": ("tests/unit/test_cli.py", "CLI tests"),
    "integration": ("tests/integration/", "Integration tests"),
}


def run_command(cmd, description=None):
    """Run a command and return True on success."""
    if description:
        print(f"→ {description}")

    result = subprocess.run(cmd, shell=True)
    return result.returncode == 0


def main():
    parser = argparse.ArgumentParser(
        description="PyFastResample test runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_tests.py --imports          # Run only import tests
  python run_tests.py --unit             # Run only unit tests
  python run_tests.py --cli              # Run only CLI tests
  python run_tests.py --integration      # Run only integration tests
  python run_tests.py --all              # Run every suite in turn
  python run_tests.py --all --coverage   # With a coverage report
        """,
    )

    for name, (_, description) in SUITES.items():
        parser.add_argument(f"--{name}", action="store_true", help=f"Run {description.lower()} only")
    parser.add_argument("--all", action="store_true", help="Run all tests")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--coverage", action="store_true", help="Run with coverage report")

    args = parser.parse_args()

    base_cmd = "PYTHONPATH=. python -m pytest"
    base_cmd += " -v" if args.verbose else " -q"
    if args.coverage:
        base_cmd += " --cov=pyfastresample --cov-report=html --cov-report=term"
    base_cmd += " --disable-warnings"

    selected = [name for name in SUITES if getattr(args, name)]
    if args.all:
        print("Running complete test suite...")
        selected = ["imports", "unit", "integration"]
    elif not selected:
        # Default: import tests and unit tests
        selected = ["imports", "unit"]

    success = True
    for name in selected:
        path, description = SUITES[name]
        if not run_command(f"{base_cmd} {path}", description):
            success = False

    if success:
        print("\n✅ All tests passed!")
        return 0
    print("\n❌ Some tests failed!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
