from datetime import datetime, timezone

from storefront_dashboard.core.models import Notification, NotificationKind


def _notification(id_, second, is_read=False):
    return Notification(
        id=id_,
        message=f"note {id_}",
        kind=NotificationKind.ALERT,
        is_read=is_read,
        timestamp=datetime(2024, 1, 1, 0, 0, second, tzinfo=timezone.utc),
    )


def test_starts_empty(store):
    assert store.state.notifications == ()
    assert store.state.unread_count == 0


def test_add_notification_inserts_at_head_and_counts_unread(store):
    first = store.add_notification("first", "alert")
    second = store.add_notification("second", NotificationKind.MESSAGE)

    assert [n.id for n in store.state.notifications] == [second.id, first.id]
    assert store.state.unread_count == 2
    assert not second.is_read
    assert second.kind is NotificationKind.MESSAGE


def test_mark_as_read_sets_flag_and_decrements(store):
    note = store.add_notification("hello", "alert")
    store.mark_notification_as_read(note.id)

    assert store.state.notifications[0].is_read
    assert store.state.unread_count == 0


def test_mark_as_read_underflows_on_missing_or_already_read(store):
    # Observed behaviour: the counter is decremented unconditionally.
    note = store.add_notification("hello", "alert")
    store.mark_notification_as_read(note.id)
    store.mark_notification_as_read(note.id)
    store.mark_notification_as_read("does-not-exist")

    assert store.state.unread_count == -2


def test_clamp_flag_keeps_counter_at_zero(make_store):
    store = make_store(clamp_unread_count=True)
    note = store.add_notification("hello", "alert")
    store.mark_notification_as_read(note.id)
    store.mark_notification_as_read(note.id)
    store.mark_notification_as_read("missing")

    assert store.state.unread_count == 0


def test_clear_notifications(store):
    store.add_notification("a", "alert")
    store.add_notification("b", "alert")
    store.clear_notifications()

    assert store.state.notifications == ()
    assert store.state.unread_count == 0


def test_filter_notifications(store):
    a = store.add_notification("a", "alert")
    b = store.add_notification("b", "alert")
    store.mark_notification_as_read(a.id)

    assert [n.id for n in store.filter_notifications("unread")] == [b.id]
    assert [n.id for n in store.filter_notifications("read")] == [a.id]
    assert len(store.filter_notifications("all")) == 2


def test_sort_is_stable_for_equal_timestamps(store):
    a, b, c = _notification("A", 1), _notification("B", 1), _notification("C", 2)

    newest = store.sort_notifications("newest", [a, b, c])
    oldest = store.sort_notifications("oldest", [a, b, c])

    assert [n.id for n in newest] == ["C", "A", "B"]
    assert [n.id for n in oldest] == ["A", "B", "C"]


def test_sort_defaults_to_full_ledger(store):
    first = store.add_notification("first", "alert")
    second = store.add_notification("second", "alert")

    assert [n.id for n in store.sort_notifications("oldest")] == [first.id, second.id]


def test_filter_and_sort_do_not_mutate(store):
    store.add_notification("a", "alert")
    store.add_notification("b", "message")
    before = store.state

    for _ in range(3):
        store.filter_notifications("unread")
        store.sort_notifications("oldest")
        store.sort_notifications("newest", store.filter_notifications("read"))

    assert store.state is before
    assert store.state.unread_count == 2
