"""SmartTable — key/value store that records every write and can revert them."""
from smarttable.store import ABSENT, ChangeRecord, TrackedStore
from smarttable.table import SmartTable

__all__ = ["ABSENT", "ChangeRecord", "TrackedStore", "SmartTable"]
