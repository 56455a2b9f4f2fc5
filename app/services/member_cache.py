"""Process-local read cache for single-member lookups."""

import threading
import uuid

from app.schemas.member import MemberResponse


class MemberCache:
    """
    Member id -> last computed MemberResponse.

    Each call is atomic under one lock. There is no get-then-put transaction:
    concurrent first reads of a cold id may both load from the store, which
    only duplicates work. Entries live until evicted explicitly; there is no
    TTL and no size bound.
    """

    def __init__(self) -> None:
        self._entries: dict[uuid.UUID, MemberResponse] = {}
        self._lock = threading.Lock()

    def get(self, member_id: uuid.UUID) -> MemberResponse | None:
        with self._lock:
            return self._entries.get(member_id)

    def put(self, member_id: uuid.UUID, value: MemberResponse) -> None:
        with self._lock:
            self._entries[member_id] = value

    def evict(self, member_id: uuid.UUID) -> None:
        """Drop the entry for member_id; missing ids are ignored."""
        with self._lock:
            self._entries.pop(member_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
