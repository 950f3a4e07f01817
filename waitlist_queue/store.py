from __future__ import annotations

# The QueueStore is the single owner of the waitlist.
#
# It only knows identity keys. Which key belongs to "the current user" is a
# session concern (see session.py); the store never tracks it.

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from .errors import DuplicateError, NotFoundError
from .identity import IdentityKey, parse_name
from .wait_time import estimate_wait

StoreListener = Callable[["QueueStore"], None]


@dataclass(frozen=True)
class Member:
    """One person in the queue."""

    id: int
    first_name: str
    last_initial: str = ""
    joined_at: float = field(default_factory=time.time)  # display only

    @property
    def key(self) -> IdentityKey:
        return IdentityKey(self.first_name, self.last_initial)

    @property
    def display_name(self) -> str:
        return self.key.display_name()


class QueueStore:
    """Ordered in-memory waitlist (testable without any UI)."""

    def __init__(self, seed: Iterable[Member] = (), *, clock: Callable[[], float] = time.time) -> None:
        self._lock = threading.Lock()
        self._clock = clock
        self._members: list[Member] = []
        self._listeners: list[StoreListener] = []

        for m in seed:
            if any(existing.id == m.id for existing in self._members):
                raise ValueError(f"duplicate seed id {m.id}")
            if any(existing.key == m.key for existing in self._members):
                raise DuplicateError(f"{m.display_name} is already in the queue")
            self._members.append(m)

        # Monotonic: stays above every id handed out, even after the member
        # with the highest id leaves.
        self._next_id: int = max((m.id for m in self._members), default=0) + 1

    @classmethod
    def with_demo_seed(cls, *, clock: Callable[[], float] = time.time) -> "QueueStore":
        """Store pre-filled with three people who joined 15, 10 and 5 minutes ago."""
        now = clock()
        seed = [
            Member(id=1, first_name="John", last_initial="D", joined_at=now - 15 * 60),
            Member(id=2, first_name="Jane", last_initial="S", joined_at=now - 10 * 60),
            Member(id=3, first_name="Mike", last_initial="J", joined_at=now - 5 * 60),
        ]
        return cls(seed, clock=clock)

    # -------------------- listeners --------------------

    def add_listener(self, listener: StoreListener) -> None:
        """Call `listener(store)` after every successful join/leave."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # -------------------- mutations --------------------

    def join(self, raw_name: str) -> Member:
        """Append a new member parsed from `raw_name`.

        Raises:
            ValidationError: empty or whitespace-only name.
            DuplicateError: the identity key is already queued.
        """
        key = parse_name(raw_name)
        with self._lock:
            if self._index_of(key) is not None:
                raise DuplicateError(f"{key.display_name()} is already in the queue")

            current_max = max((m.id for m in self._members), default=0)
            member_id = max(current_max + 1, self._next_id)
            self._next_id = member_id + 1

            member = Member(
                id=member_id,
                first_name=key.first_name,
                last_initial=key.last_initial,
                joined_at=self._clock(),
            )
            self._members.append(member)

        self._notify()
        return member

    def leave(self, key: IdentityKey) -> Member:
        """Remove the member matching `key` and return it.

        Survivors keep their relative order.

        Raises:
            NotFoundError: nobody in the queue matches `key`.
        """
        key = IdentityKey(*key)
        with self._lock:
            idx = self._index_of(key)
            if idx is None:
                raise NotFoundError(f"{key.display_name()} is not in the queue")
            member = self._members.pop(idx)

        self._notify()
        return member

    # -------------------- queries --------------------

    def position(self, key: IdentityKey) -> int | None:
        """1-based position of `key`, or None when absent."""
        with self._lock:
            idx = self._index_of(IdentityKey(*key))
        return None if idx is None else idx + 1

    def find(self, key: IdentityKey) -> Member | None:
        with self._lock:
            idx = self._index_of(IdentityKey(*key))
            return None if idx is None else self._members[idx]

    def list(self) -> tuple[Member, ...]:
        """Read-only snapshot in queue order."""
        with self._lock:
            return tuple(self._members)

    @staticmethod
    def estimate_wait(position: int) -> str:
        return estimate_wait(position)

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready view of the queue, as published to observers."""
        members = self.list()
        return {
            "type": "queue_status",
            "count": len(members),
            "members": [
                {
                    "id": m.id,
                    "name": m.display_name,
                    "position": pos,
                    "wait": estimate_wait(pos),
                    "joined_at": m.joined_at,
                }
                for pos, m in enumerate(members, start=1)
            ],
        }

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        with self._lock:
            return self._index_of(IdentityKey(*key)) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._members)

    def _index_of(self, key: IdentityKey) -> int | None:
        # Caller holds the lock.
        for i, m in enumerate(self._members):
            if m.first_name == key.first_name and m.last_initial == key.last_initial:
                return i
        return None
