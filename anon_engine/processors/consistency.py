import threading
import uuid
from typing import Callable, Dict, Tuple

# (parent_schema, parent_table, parent_column)
Scope = Tuple[str, str, str]


class ConsistencyStore:
    """
    Memoization that keeps anonymized values consistent within one run.

    Three independent maps:
      * alphanumeric: parent column -> raw value -> scrambled value
      * uuid: raw UUID -> new UUID
      * iban: raw IBAN -> new IBAN

    Each map has its own lock held over the whole lookup-compute-insert
    sequence, so two threads missing the same key never insert two different
    values. A value is stored only after it was computed; once stored it
    never changes and is never evicted.
    """

    def __init__(self):
        self._alphanumeric: Dict[Scope, Dict[str, str]] = {}
        self._uuids: Dict[uuid.UUID, uuid.UUID] = {}
        self._ibans: Dict[str, str] = {}
        self._alphanumeric_lock = threading.Lock()
        self._uuids_lock = threading.Lock()
        self._ibans_lock = threading.Lock()

    def remap_alphanumeric(self, scope: Scope, raw: str, compute: Callable[[str], str]) -> str:
        with self._alphanumeric_lock:
            scope_map = self._alphanumeric.get(scope)
            if scope_map is not None and raw in scope_map:
                return scope_map[raw]

            value = compute(raw)
            self._alphanumeric.setdefault(scope, {})[raw] = value
            return value

    def remap_uuid(self, raw: uuid.UUID, compute: Callable[[uuid.UUID], uuid.UUID]) -> uuid.UUID:
        with self._uuids_lock:
            if raw in self._uuids:
                return self._uuids[raw]

            value = compute(raw)
            self._uuids[raw] = value
            return value

    def remap_iban(self, raw: str, compute: Callable[[str], str]) -> str:
        with self._ibans_lock:
            if raw in self._ibans:
                return self._ibans[raw]

            value = compute(raw)
            self._ibans[raw] = value
            return value

    def stats(self) -> Dict[str, int]:
        with self._alphanumeric_lock:
            scopes = len(self._alphanumeric)
            alphanumeric = sum(len(v) for v in self._alphanumeric.values())
        with self._uuids_lock:
            uuids = len(self._uuids)
        with self._ibans_lock:
            ibans = len(self._ibans)

        return {
            "alphanumeric_scopes": scopes,
            "alphanumeric": alphanumeric,
            "uuid": uuids,
            "iban": ibans,
        }
