"""Entry point for SmartTable.

Usage:
    python -m smarttable.main              # print the SmartTable demonstration
    python -m smarttable.main --shell      # interactive command shell on stdin
    python -m smarttable.main --debug      # either mode with DEBUG logging
"""
import sys
import logging
import argparse

from smarttable.shell import Shell, format_record, format_value


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def run_demo(store, out=None):
    """Print the tracked-table walkthrough: four writes, the log, one revert."""
    from smarttable.table import SmartTable

    out = out if out is not None else sys.stdout
    smart = SmartTable(store)
    smart.name = "John"
    smart.age = 25
    smart.age = 26
    smart.city = "New York"

    print("SmartTable demonstration:", file=out)
    print("  Current data:", file=out)
    for key, value in smart.data().items():
        print(f"    {key}: {format_value(value)}", file=out)

    print("  History:", file=out)
    for i, change in enumerate(smart.get_history(), 1):
        print(f"    {format_record(i, change)}", file=out)

    smart.revert(1)
    print(f"  After reverting 1 step, age = {format_value(smart.age)}", file=out)
    return smart


def run_shell(store, prompt="", lines=None, out=None) -> int:
    """Run the command shell. Returns the process exit code."""
    logger = logging.getLogger(__name__)

    interactive = lines is None and sys.stdin.isatty()
    lines = lines if lines is not None else sys.stdin
    shell = Shell(store, out=out, prompt=prompt if interactive else "")
    if interactive:
        shell.execute("help")

    try:
        errors = shell.run(lines)
    except KeyboardInterrupt:
        errors = 0
    if errors:
        logger.info("Shell finished with %d error(s)", errors)
    return 1 if errors else 0


def main(argv=None):
    from smarttable.config import Config

    parser = argparse.ArgumentParser(description="SmartTable — tracked key/value store with undo")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--demo", action="store_true",
                       help="Print the SmartTable demonstration (default)")
    group.add_argument("--shell", action="store_true",
                       help="Read set/get/history/revert commands from stdin")
    parser.add_argument("--debug", action="store_true",
                        help="Enable DEBUG logging")
    args = parser.parse_args(argv)

    config = Config()
    setup_logging(args.debug or config.debug_logging)

    try:
        store = config.make_store()
    except ValueError as e:
        parser.error(f"bad configuration: {e}")

    if args.shell:
        sys.exit(run_shell(store, prompt=config.shell_prompt))
    run_demo(store)


if __name__ == "__main__":
    main()
