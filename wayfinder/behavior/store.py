"""
wayfinder.behavior.store -- Learned (weekday, hour) usage records.

One ``BehaviorRecord`` per ``(weekday, hour)`` bucket, created lazily
and mutated in place afterwards.  Every read-modify-write runs under a
single lock so concurrent learners on the same bucket cannot lose an
increment.  Callers only ever receive copies; the mapping itself is
never handed out.

The store lives in memory only.  ``snapshot()`` / ``restore()`` give an
external persistence layer plain dicts to save and load.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional

from wayfinder.core.types import BehaviorRecord, BucketKey

log = logging.getLogger("wayfinder.behavior")


class BehaviorStore:
    """Thread-safe mapping of ``(weekday, hour)`` to ``BehaviorRecord``."""

    def __init__(self) -> None:
        self._records: Dict[BucketKey, BehaviorRecord] = {}
        self._lock = threading.Lock()

    # -- reads ----------------------------------------------------------

    def get(self, weekday: int, hour: int) -> Optional[BehaviorRecord]:
        """Return a copy of the record for the bucket, or None."""
        with self._lock:
            record = self._records.get((weekday, hour))
            return replace(record) if record is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._records

    def keys(self) -> List[BucketKey]:
        with self._lock:
            return sorted(self._records)

    # -- writes ---------------------------------------------------------

    def upsert(
        self,
        weekday: int,
        hour: int,
        factory: Callable[[], BehaviorRecord],
        mutate: Callable[[BehaviorRecord], None],
    ) -> BehaviorRecord:
        """
        Atomically create-or-update the record for a bucket.

        ``factory`` builds the seed record when the bucket is empty;
        ``mutate`` is then applied to the live record in place.  Both
        run while the lock is held.  Returns a copy of the result.

        A mutation that lowers ``frequency`` is rejected with
        ``ValueError`` and the record is left as it was.
        """
        key = (weekday, hour)
        with self._lock:
            record = self._records.get(key)
            created = record is None
            if record is None:
                record = factory()
                if record.key != key:
                    raise ValueError(f"Seed record key {record.key} does not match bucket {key}")

            working = replace(record)
            mutate(working)
            if working.frequency < record.frequency:
                raise ValueError(
                    f"Behavior frequency for {key} cannot decrease "
                    f"({record.frequency} -> {working.frequency})"
                )
            # re-run the dataclass clamps on the mutated copy
            working.__post_init__()
            self._records[key] = working

        if created:
            log.debug("Created behavior record for %s", key)
        return replace(working)

    def clear(self) -> None:
        """Drop every record and start a new store lifetime.

        Frequencies restart from zero afterwards; monotonic growth holds
        between clears, not across them.
        """
        with self._lock:
            self._records.clear()

    # -- persistence hooks ----------------------------------------------

    def snapshot(self) -> List[Dict]:
        """Serialise every record, ordered by bucket key."""
        with self._lock:
            return [self._records[k].to_dict() for k in sorted(self._records)]

    def restore(self, rows: Iterable[Dict]) -> int:
        """
        Load records produced by ``snapshot()``.

        A row never lowers the frequency of a record already in the
        store; such rows are skipped.  Returns the number of records
        written.
        """
        records = [BehaviorRecord.from_dict(row) for row in rows]
        written = 0
        with self._lock:
            for record in records:
                existing = self._records.get(record.key)
                if existing is not None and record.frequency < existing.frequency:
                    log.debug("Skipping stale behavior row for %s", record.key)
                    continue
                self._records[record.key] = record
                written += 1
        return written
