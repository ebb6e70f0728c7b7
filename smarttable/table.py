"""Attribute-style facade over TrackedStore."""
from typing import Any, Dict, List, Optional

from smarttable.store import ChangeRecord, TrackedStore


class SmartTable:
    """Tracks plain attribute writes.

        smart = SmartTable()
        smart.age = 25
        smart.age = 26
        smart.revert()
        smart.age  # 25

    Names starting with '_' are ordinary private attributes and are never
    tracked. Methods of this class win over data keys with the same name
    on read, so `smart.revert` is always the method.
    """

    def __init__(self, store: Optional[TrackedStore] = None):
        self._store = store if store is not None else TrackedStore()

    def __getattr__(self, name: str) -> Any:
        # only called when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        return self._store.get(name)

    def __setattr__(self, name: str, value: Any):
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        self._store.set(name, value)

    def __delattr__(self, name: str):
        if name.startswith("_"):
            object.__delattr__(self, name)
            return
        raise AttributeError(f"tracked field '{name}' cannot be deleted, use revert()")

    @property
    def store(self) -> TrackedStore:
        return self._store

    def data(self) -> Dict[str, Any]:
        return self._store.snapshot()

    def get_history(self) -> List[ChangeRecord]:
        return self._store.history()

    def revert(self, steps: int = 1) -> List[ChangeRecord]:
        return self._store.revert(steps)

    def __contains__(self, name) -> bool:
        return name in self._store

    def __repr__(self):
        return f"SmartTable({self._store.snapshot()!r})"
