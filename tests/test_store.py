import pytest

from waitlist_queue.errors import DuplicateError, NotFoundError, ValidationError
from waitlist_queue.identity import IdentityKey
from waitlist_queue.store import Member, QueueStore


def seeded() -> QueueStore:
    return QueueStore.with_demo_seed(clock=lambda: 10_000.0)


def test_demo_seed_order_and_join_times():
    store = seeded()
    members = store.list()
    assert [m.display_name for m in members] == ["John D.", "Jane S.", "Mike J."]
    assert [m.id for m in members] == [1, 2, 3]
    assert [m.joined_at for m in members] == [10_000.0 - 900, 10_000.0 - 600, 10_000.0 - 300]


def test_join_appends_with_next_id_and_position():
    store = seeded()
    m = store.join("Alice Brown")
    assert m.id == 4
    assert m.key == ("Alice", "B")
    assert m.joined_at == 10_000.0
    assert store.position(m.key) == 4
    assert store.estimate_wait(store.position(m.key)) == "20m"
    assert store.list()[-1] == m


def test_join_duplicate_does_not_mutate():
    store = seeded()
    before = store.list()
    with pytest.raises(DuplicateError):
        store.join("John Doe")
    assert store.list() == before


def test_join_is_case_sensitive():
    store = seeded()
    store.join("john doe")
    assert len(store) == 4


def test_join_blank_does_not_mutate():
    store = seeded()
    with pytest.raises(ValidationError):
        store.join("   ")
    assert len(store) == 3


def test_join_single_token_name():
    store = seeded()
    m = store.join("Madonna")
    assert m.key == IdentityKey("Madonna", "")
    with pytest.raises(DuplicateError):
        store.join("  Madonna ")


def test_positions_follow_insertion_order():
    store = QueueStore()
    names = ["Ann A", "Bob B", "Cid C", "Dee D"]
    for n in names:
        store.join(n)
    for rank, n in enumerate(names, start=1):
        first, last = n.split()
        assert store.position((first, last)) == rank


def test_leave_removes_one_and_keeps_order():
    store = seeded()
    removed = store.leave(IdentityKey("Jane", "S"))
    assert removed.id == 2
    assert len(store) == 2
    assert store.position(("Jane", "S")) is None
    assert [m.first_name for m in store.list()] == ["John", "Mike"]
    assert store.position(("Mike", "J")) == 2


def test_leave_missing_raises():
    store = seeded()
    with pytest.raises(NotFoundError):
        store.leave(IdentityKey("Nobody", "X"))
    assert len(store) == 3


def test_ids_are_never_reused():
    store = seeded()
    m = store.join("Alice Brown")
    store.leave(m.key)
    again = store.join("Alice Brown")
    assert again.id == 5


def test_contains_and_find():
    store = seeded()
    assert ("John", "D") in store
    assert ("John", "X") not in store
    assert "John" not in store
    assert store.find(("Mike", "J")).id == 3
    assert store.find(("Mike", "X")) is None


def test_seed_rejects_duplicate_keys():
    with pytest.raises(DuplicateError):
        QueueStore([Member(id=1, first_name="A"), Member(id=2, first_name="A")])


def test_listeners_fire_only_on_successful_mutation():
    store = seeded()
    calls = []
    store.add_listener(lambda s: calls.append(len(s)))

    store.join("Alice Brown")
    with pytest.raises(DuplicateError):
        store.join("Alice Bell")
    store.leave(("Alice", "B"))
    with pytest.raises(NotFoundError):
        store.leave(("Alice", "B"))

    assert calls == [4, 3]


def test_snapshot():
    store = seeded()
    snap = store.snapshot()
    assert snap["type"] == "queue_status"
    assert snap["count"] == 3
    assert snap["members"][0] == {
        "id": 1,
        "name": "John D.",
        "position": 1,
        "wait": "5m",
        "joined_at": 10_000.0 - 900,
    }
    assert [m["wait"] for m in snap["members"]] == ["5m", "10m", "15m"]


def test_duplicate_message_names_the_member():
    store = seeded()
    with pytest.raises(DuplicateError) as exc:
        store.join("John Doe")
    assert exc.value.message == "John D. is already in the queue"
    assert exc.value.code == "duplicate"
