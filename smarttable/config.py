"""Configuration management — JSON-based, stored in ~/.config/smarttable/."""
import json
import logging
import time
from pathlib import Path

from smarttable.store import TrackedStore

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "debug_logging": False,
    "max_history": None,  # None = unlimited, every write can be reverted
    "timestamp_clock": "wall",  # "wall" or "monotonic"
    "shell_prompt": "smarttable> ",
}

CLOCKS = {
    "wall": time.time,
    "monotonic": time.monotonic,
}

CONFIG_DIR = Path.home() / ".config" / "smarttable"
CONFIG_FILE = CONFIG_DIR / "config.json"


class Config:
    def __init__(self):
        self._data = dict(DEFAULT_CONFIG)
        self.load()

    def load(self):
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE, "r") as f:
                    stored = json.load(f)
                if not isinstance(stored, dict):
                    raise ValueError(f"expected a JSON object, got {type(stored).__name__}")
                self._data.update(stored)
            except (ValueError, OSError) as e:
                logger.warning("Ignoring unreadable config %s: %s", CONFIG_FILE, e)

    def save(self):
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value
        self.save()

    @property
    def debug_logging(self):
        return bool(self._data.get("debug_logging", False))

    @debug_logging.setter
    def debug_logging(self, val):
        self._data["debug_logging"] = bool(val)
        self.save()

    @property
    def max_history(self):
        return self._data.get("max_history")

    @max_history.setter
    def max_history(self, val):
        self._data["max_history"] = None if val is None else int(val)
        self.save()

    @property
    def timestamp_clock(self):
        return self._data.get("timestamp_clock", "wall")

    @property
    def shell_prompt(self):
        return self._data.get("shell_prompt", "smarttable> ")

    def make_store(self) -> TrackedStore:
        """Build an empty TrackedStore using the configured history limit and clock."""
        clock_name = self.timestamp_clock
        if not isinstance(clock_name, str) or clock_name not in CLOCKS:
            raise ValueError(
                f"unknown timestamp_clock {clock_name!r}, expected one of {sorted(CLOCKS)}")
        max_history = self.max_history
        if max_history is not None:
            try:
                max_history = int(max_history)
            except (TypeError, ValueError) as e:
                raise ValueError(f"max_history must be an integer or null, got {max_history!r}") from e
            if max_history < 0:
                raise ValueError(f"max_history must not be negative, got {max_history}")
        return TrackedStore(max_history=max_history, clock=CLOCKS[clock_name])
