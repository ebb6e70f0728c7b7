"""Line-oriented command interpreter over a TrackedStore."""
import json
import logging
import shlex
import sys
from typing import Any, List, TextIO

from smarttable.store import ChangeRecord, TrackedStore

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Commands:
  set KEY VALUE   write VALUE (parsed as JSON if possible, else a string)
  get KEY         print the current value
  history         list recorded changes, oldest first
  revert [N]      undo the last N changes (default 1)
  show            print current data
  help            this text
  quit | exit     leave the shell"""


class ShellError(Exception):
    """Bad command or arguments; reported to the user, never fatal."""


def format_value(value: Any) -> str:
    return repr(value)


def format_record(index: int, record: ChangeRecord) -> str:
    return (f"{index}. {record.key}: {format_value(record.old_value)}"
            f" -> {format_value(record.new_value)}")


def parse_value(text: str) -> Any:
    """Parse a command-line value: JSON literal if it is one, raw string otherwise."""
    try:
        return json.loads(text)
    except ValueError:
        # JSONDecodeError, or an int literal past the digit limit
        return text


class Shell:
    """Reads commands line by line and applies them to a store.

    Errors are written to the output as 'error: ...' and processing
    continues with the next line.
    """

    def __init__(self, store: TrackedStore, out: TextIO = None, prompt: str = ""):
        self.store = store
        self.out = out if out is not None else sys.stdout
        self.prompt = prompt
        self._running = False

    def _write(self, line: str = ""):
        self.out.write(line + "\n")

    def _show_prompt(self):
        if self.prompt:
            self.out.write(self.prompt)
            self.out.flush()

    def run(self, lines) -> int:
        """Execute commands from an iterable of lines. Returns the number of errors."""
        self._running = True
        errors = 0
        try:
            self._show_prompt()
            for line in lines:
                try:
                    self.execute(line)
                except ShellError as e:
                    errors += 1
                    self._write(f"error: {e}")
                if not self._running:
                    break
                self._show_prompt()
        finally:
            self._running = False
        return errors

    def execute(self, line: str):
        line = line.strip()
        if not line or line.startswith("#"):
            return
        parts = line.split(None, 1)
        command = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""

        if command == "set":
            # the value is taken verbatim so JSON quoting survives
            logger.debug("shell: set %s", rest)
            self._set(rest)
            return

        handler = getattr(self, f"_cmd_{command}", None)
        if handler is None:
            raise ShellError(f"unknown command '{command}' (try 'help')")
        try:
            args = shlex.split(rest)
        except ValueError as e:
            raise ShellError(str(e)) from e
        logger.debug("shell: %s %s", command, args)
        handler(args)

    def _expect(self, args: List[str], count: int, usage: str):
        if len(args) != count:
            raise ShellError(f"usage: {usage}")

    def _set(self, rest: str):
        parts = rest.split(None, 1)
        if len(parts) < 2:
            raise ShellError("usage: set KEY VALUE")
        key, value = parts[0], parse_value(parts[1].strip())
        self.store.set(key, value)

    def _cmd_get(self, args):
        self._expect(args, 1, "get KEY")
        self._write(format_value(self.store.get(args[0])))

    def _cmd_history(self, args):
        self._expect(args, 0, "history")
        records = self.store.history()
        if not records:
            self._write("(no changes)")
        for i, record in enumerate(records, 1):
            self._write(format_record(i, record))

    def _cmd_revert(self, args):
        if len(args) > 1:
            raise ShellError("usage: revert [N]")
        steps = 1
        if args:
            try:
                steps = int(args[0])
            except ValueError as e:
                raise ShellError(f"revert count must be an integer, got '{args[0]}'") from e
        undone = self.store.revert(steps)
        self._write(f"reverted {len(undone)} change(s)")

    def _cmd_show(self, args):
        self._expect(args, 0, "show")
        items = self.store.items()
        if not items:
            self._write("(empty)")
        for key, value in items:
            self._write(f"{key}: {format_value(value)}")

    def _cmd_help(self, args):
        self._write(HELP_TEXT)

    def _cmd_quit(self, args):
        self._running = False

    _cmd_exit = _cmd_quit
