from __future__ import annotations

# Per-user presentation state.
#
# One session = one person looking at the queue. The session remembers which
# identity key is "mine", whether the join form is open and what error text
# the form shows. Views (gui.py, console.py) render from it and call into it;
# they keep no queue state of their own.

from dataclasses import dataclass

from .errors import DuplicateError, ValidationError
from .identity import IdentityKey
from .store import Member, QueueStore
from .wait_time import estimate_wait

EMPTY_NAME_MESSAGE = "Please enter your name"
ALREADY_QUEUED_MESSAGE = "You are already in the queue"


@dataclass(frozen=True)
class QueueRow:
    position: int
    name: str
    wait: str
    is_me: bool
    member_id: int


class QueueSession:
    """NOT_IN_QUEUE -> submit_name -> IN_QUEUE -> leave -> NOT_IN_QUEUE."""

    def __init__(self, store: QueueStore) -> None:
        self.store = store
        self._my_key: IdentityKey | None = None
        self._form_visible = False
        self._form_error = ""

    # -------------------- form --------------------

    @property
    def form_visible(self) -> bool:
        return self._form_visible

    @property
    def form_error(self) -> str:
        return self._form_error

    def open_form(self) -> None:
        self._form_visible = True

    def cancel_form(self) -> None:
        self._form_visible = False
        self._form_error = ""

    def edit_name(self) -> None:
        """Typing into the form clears a stale error."""
        self._form_error = ""

    def submit_name(self, raw: str) -> bool:
        """Join the queue with `raw`; returns False and sets form_error on failure.

        A session holds at most one place in the queue.
        """
        if self.in_queue:
            self._form_error = ALREADY_QUEUED_MESSAGE
            return False
        try:
            member = self.store.join(raw)
        except ValidationError:
            self._form_error = EMPTY_NAME_MESSAGE
            return False
        except DuplicateError:
            self._form_error = ALREADY_QUEUED_MESSAGE
            return False

        self._my_key = member.key
        self._form_error = ""
        self._form_visible = False
        return True

    # -------------------- membership --------------------

    def leave(self) -> Member | None:
        """Remove my entry. Returns the removed member, or None if there was none."""
        key = self._my_key
        if key is None:
            return None
        self._my_key = None
        if key not in self.store:
            return None
        return self.store.leave(key)

    @property
    def my_key(self) -> IdentityKey | None:
        return self._my_key

    @property
    def my_position(self) -> int | None:
        if self._my_key is None:
            return None
        return self.store.position(self._my_key)

    @property
    def in_queue(self) -> bool:
        return self.my_position is not None

    @property
    def my_wait(self) -> str | None:
        pos = self.my_position
        return None if pos is None else estimate_wait(pos)

    def rows(self) -> list[QueueRow]:
        return [
            QueueRow(
                position=pos,
                name=m.display_name,
                wait=estimate_wait(pos),
                is_me=self._my_key is not None and m.key == self._my_key,
                member_id=m.id,
            )
            for pos, m in enumerate(self.store.list(), start=1)
        ]
