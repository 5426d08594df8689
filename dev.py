"""Development script to run checks (formatting, linting, tests) and a sample audit."""

import argparse
import subprocess
import sys


def run_command(command: list[str], step_name: str) -> None:
    """Run a shell command as a step in the development process."""
    print(f"\n--- Running Step: {step_name} ---")
    print(f"$ {' '.join(command)}")
    try:
        subprocess.run(command, check=True)
    except subprocess.CalledProcessError:
        print(f"\n❌ Failed: {step_name}")
        sys.exit(1)


def main() -> None:
    """Run the development checks and optionally the sample audit."""
    parser = argparse.ArgumentParser(
        description="Run development checks and a dry-run audit of the sample snapshot."
    )
    parser.add_argument(
        "--ci", action="store_true", help="Run checks and tests only, skip the audit"
    )
    args = parser.parse_args()

    if not args.ci:
        run_command(["uv", "run", "ruff", "format"], "Ruff Formatting")
        run_command(["uv", "run", "ruff", "check", "--fix"], "Ruff Linting & Fixes")
    else:
        run_command(["uv", "run", "ruff", "format", "--check"], "Ruff Format Check")
        run_command(["uv", "run", "ruff", "check"], "Ruff Linting")

    run_command(["uv", "run", "pytest", "-q"], "Tests")

    if args.ci:
        print("\n✅ CI checks passed successfully. Skipping the sample audit.")
        return

    run_command(
        [
            "uv",
            "run",
            "find-resources-in-wrong-gallery",
            "samples/snapshot.yml",
            "--config",
            "samples/config.yml",
            "--dry-run",
        ],
        "Sample Audit",
    )

    print("\n✅ All development checks and the sample audit passed successfully.")


if __name__ == "__main__":
    main()
