"""Tracked store — key/value data with an undo log of every write."""
import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


class _Absent:
    """Marker for "no such key", distinct from None and every other value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "<absent>"

    def __bool__(self):
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


@dataclass(frozen=True)
class ChangeRecord:
    key: str
    old_value: Any      # ABSENT if the key did not exist before the write
    new_value: Any
    timestamp: float


class TrackedStore:
    """Key/value mapping that logs every set() so it can be reverted.

    All writes go through set(); revert() pops the most recent records
    and restores the old values, removing keys that did not exist.
    """

    def __init__(self, max_history: Optional[int] = None,
                 clock: Callable[[], float] = time.time):
        self._data: Dict[str, Any] = {}
        self._history: deque[ChangeRecord] = deque(maxlen=max_history)
        self._clock = clock

    @property
    def max_history(self) -> Optional[int]:
        return self._history.maxlen

    def get(self, key: str, default: Any = ABSENT) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any):
        if not isinstance(key, str):
            raise TypeError(f"key must be str, not {type(key).__name__}")
        if value is ABSENT:
            raise ValueError("ABSENT marks a missing key and cannot be stored")
        record = ChangeRecord(
            key=key,
            old_value=self._data.get(key, ABSENT),
            new_value=value,
            timestamp=self._clock(),
        )
        self._history.append(record)
        self._data[key] = value
        logger.debug("set %s: %r -> %r", key, record.old_value, value)

    def history(self) -> List[ChangeRecord]:
        """Return the change log, oldest first. The list is a copy."""
        return list(self._history)

    def revert(self, steps: int = 1) -> List[ChangeRecord]:
        """Undo up to `steps` most recent writes.

        Returns the undone records, most recent first. Reverting more
        steps than there are records just empties the log.
        """
        undone = []
        while steps > 0 and self._history:
            record = self._history.pop()
            if record.old_value is ABSENT:
                self._data.pop(record.key, None)
            else:
                self._data[record.key] = record.old_value
            undone.append(record)
            steps -= 1
        if undone:
            logger.debug("Reverted %d change(s), %d left in history",
                         len(undone), len(self._history))
        return undone

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._data)

    def keys(self) -> List[str]:
        return list(self._data)

    def items(self) -> List[tuple]:
        return list(self._data.items())

    def __contains__(self, key) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __repr__(self):
        return f"TrackedStore({self._data!r}, history={len(self._history)})"
