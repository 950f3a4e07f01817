from waitlist_queue.session import ALREADY_QUEUED_MESSAGE, EMPTY_NAME_MESSAGE, QueueSession
from waitlist_queue.store import QueueStore


def make_session() -> QueueSession:
    return QueueSession(QueueStore.with_demo_seed())


def test_submit_name_joins_and_tracks_me():
    s = make_session()
    s.open_form()
    assert not s.in_queue

    assert s.submit_name("Alice Brown")
    assert s.in_queue
    assert s.my_key == ("Alice", "B")
    assert s.my_position == 4
    assert s.my_wait == "20m"
    assert not s.form_visible
    assert s.form_error == ""


def test_submit_blank_sets_error_and_keeps_form_open():
    s = make_session()
    s.open_form()
    assert not s.submit_name("  ")
    assert s.form_error == EMPTY_NAME_MESSAGE
    assert s.form_visible
    assert len(s.store) == 3


def test_submit_duplicate_sets_error():
    s = make_session()
    s.open_form()
    assert not s.submit_name("John Doe")
    assert s.form_error == ALREADY_QUEUED_MESSAGE
    assert not s.in_queue


def test_edit_and_cancel_clear_error():
    s = make_session()
    s.open_form()
    s.submit_name("")
    s.edit_name()
    assert s.form_error == ""

    s.submit_name("")
    s.cancel_form()
    assert s.form_error == ""
    assert not s.form_visible


def test_rows_mark_me():
    s = make_session()
    s.submit_name("Alice Brown")
    rows = s.rows()
    assert [(r.position, r.name, r.wait) for r in rows] == [
        (1, "John D.", "5m"),
        (2, "Jane S.", "10m"),
        (3, "Mike J.", "15m"),
        (4, "Alice B.", "20m"),
    ]
    assert [r.is_me for r in rows] == [False, False, False, True]


def test_leave_returns_to_not_in_queue():
    s = make_session()
    s.submit_name("Alice Brown")
    removed = s.leave()
    assert removed is not None and removed.id == 4
    assert not s.in_queue
    assert s.my_key is None
    assert len(s.store) == 3


def test_leave_when_not_in_queue_is_noop():
    s = make_session()
    assert s.leave() is None
    assert len(s.store) == 3


def test_position_moves_up_when_someone_ahead_leaves():
    s = make_session()
    s.submit_name("Alice Brown")
    s.store.leave(("John", "D"))
    assert s.my_position == 3
    assert s.my_wait == "15m"


def test_leave_after_removed_elsewhere_resets():
    s = make_session()
    s.submit_name("Alice Brown")
    s.store.leave(("Alice", "B"))
    assert not s.in_queue
    assert s.leave() is None
    assert s.my_key is None


def test_second_submit_in_same_session_is_refused():
    s = make_session()
    assert s.submit_name("Alice Brown")
    assert not s.submit_name("Bob Stone")
    assert s.form_error == ALREADY_QUEUED_MESSAGE
    assert s.my_key == ("Alice", "B")
    assert len(s.store) == 4
