import json
import logging
import os
from decimal import Decimal

import pytest

from storefront_dashboard.config import StoreConfig
from storefront_dashboard.core.compat import SnapshotAdapter
from storefront_dashboard.core.dashboard_store import DashboardStore
from storefront_dashboard.core.models import NotificationKind, OrderStatus, SalesSeries
from storefront_dashboard.core.generators import OrderDataGenerator, RandomDataGenerator
from storefront_dashboard.core.storage import (
    JsonFileStorage, MemoryStorage, SessionStateStorage, SnapshotStorage, create_storage,
)


LEGACY_DOCUMENT = {
    "version": 0,
    "state": {
        "notifications": [
            {
                "id": "n1",
                "message": "New new order #lx from Customer 9",
                "type": "alert",
                "isRead": False,
                "timestamp": "2024-01-21T08:00:00.000Z",
            }
        ],
        "unreadCount": 1,
        "messages": [],
        "unreadMessages": 0,
        "totalRevenue": 500,
        "revenueChange": {"increase": 12, "decrease": 7},
        "orders": {
            "shipped": [],
            "pending": [
                {
                    "id": "lx-a-b",
                    "status": "pending",
                    "amount": 321,
                    "customer": "Customer 9",
                    "date": "2024-01-21T08:00:00.000Z",
                }
            ],
            "new": [],
        },
        "searchQuery": "lx",
        "searchResults": [],
        "salesData": {"today": [1, 2], "yesterday": [3, 4], "labels": ["9AM", "12PM"]},
    },
}


def test_every_mutation_is_saved(store, storage):
    assert store.config.storage_name not in storage.documents

    store.add_order("new")
    document = storage.documents["dashboard-store"]

    assert document["version"] == 1
    assert len(document["state"]["orders"]["new"]) == 1
    assert document["state"]["unread_count"] == 1


def test_json_file_round_trip(tmp_path, generator):
    config = StoreConfig(data_dir=str(tmp_path))
    store = DashboardStore(config=config, storage=create_storage(config), generator=generator)
    order = store.add_order("pending")
    store.update_revenue(50000)
    store.mark_message_as_read("2")

    path = tmp_path / "dashboard-store.json"
    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8"))["version"] == 1

    reloaded = DashboardStore(config=config, storage=JsonFileStorage(str(tmp_path)))
    assert reloaded.state == store.state
    assert reloaded.find_order(order.id) == order


def test_missing_snapshot_uses_defaults(tmp_path):
    store = DashboardStore(storage=JsonFileStorage(str(tmp_path)))

    assert store.state.unread_messages == 7
    assert store.state.revenue.total == 45365.00


def test_corrupt_snapshot_falls_back_to_defaults(tmp_path, caplog):
    (tmp_path / "dashboard-store.json").write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        store = DashboardStore(storage=JsonFileStorage(str(tmp_path)))

    assert len(store.state.messages) == 7
    assert "Failed to read snapshot" in caplog.text


def test_newer_schema_is_discarded(caplog):
    storage = MemoryStorage({"dashboard-store": {"version": 99, "state": {}}})

    with caplog.at_level(logging.ERROR):
        store = DashboardStore(storage=storage)

    assert store.state.unread_messages == 7
    assert "Discarding unreadable snapshot" in caplog.text


def test_legacy_snapshot_is_migrated():
    store = DashboardStore(storage=MemoryStorage({"dashboard-store": LEGACY_DOCUMENT}))
    state = store.state

    assert state.unread_count == 1
    assert state.notifications[0].kind is NotificationKind.ALERT
    assert state.notifications[0].timestamp.tzinfo is not None
    assert (state.revenue.total, state.revenue.change_increase, state.revenue.change_decrease) == (500, 12, 7)
    assert state.orders.pending[0].status is OrderStatus.PENDING
    assert state.orders.pending[0].amount == 321
    assert state.search_query == "lx"
    assert state.sales.today == (1, 2)
    # saved sales data replaces the defaults as a whole; absent series are empty
    assert state.sales.weekly == SalesSeries()
    assert state.sales.quarterly == SalesSeries()
    assert state.messages == ()


def test_absent_series_stay_empty_after_sales_update():
    store = DashboardStore(storage=MemoryStorage({"dashboard-store": LEGACY_DOCUMENT}))

    store.update_sales_data([5, 6], [7, 8])

    assert store.state.sales.today == (5, 6)
    assert store.state.sales.labels == ("9AM", "12PM")
    assert store.get_sales_series("30d") == SalesSeries()
    assert store.sales_frame("7d").empty


def test_legacy_migration_is_logged():
    adapter = SnapshotAdapter()
    adapter.migrate(LEGACY_DOCUMENT)

    assert adapter.get_migration_log() == ["Migrated snapshot: v0 -> v1"]


def test_document_without_state_is_rejected():
    with pytest.raises(ValueError):
        SnapshotAdapter().migrate({"version": 1})


def test_save_failure_is_swallowed(generator, caplog):
    class BrokenStorage(MemoryStorage):
        def save(self, name, document):
            raise OSError("disk full")

    store = DashboardStore(storage=BrokenStorage(), generator=generator)

    with caplog.at_level(logging.ERROR):
        order = store.add_order("new")

    assert store.state.orders.new == (order,)
    assert "Failed to persist snapshot" in caplog.text


def test_failed_file_save_leaves_previous_snapshot_and_no_temp_files(tmp_path, generator, caplog):
    config = StoreConfig(data_dir=str(tmp_path), keep_caller_order_fields=True)
    store = DashboardStore(config=config, storage=JsonFileStorage(str(tmp_path)), generator=generator)
    store.set_search_query("before")

    with caplog.at_level(logging.ERROR):
        store.add_order("new", amount=Decimal("10.5"), customer="Acme")

    assert "Failed to persist snapshot" in caplog.text
    assert [p.name for p in tmp_path.iterdir()] == ["dashboard-store.json"]
    saved = json.loads((tmp_path / "dashboard-store.json").read_text(encoding="utf-8"))
    assert saved["state"]["search_query"] == "before"
    assert saved["state"]["orders"]["new"] == []


def test_file_saves_use_separate_temp_files(tmp_path, monkeypatch):
    storage = JsonFileStorage(str(tmp_path))
    temp_names = []
    real_replace = os.replace

    def recording_replace(src, dst):
        temp_names.append(os.path.basename(src))
        real_replace(src, dst)

    monkeypatch.setattr(os, "replace", recording_replace)
    storage.save("dashboard-store", {"version": 1, "state": {}})
    storage.save("dashboard-store", {"version": 1, "state": {"search_query": "x"}})

    assert len(set(temp_names)) == 2
    assert storage.load("dashboard-store")["state"] == {"search_query": "x"}
    assert [p.name for p in tmp_path.iterdir()] == ["dashboard-store.json"]


def test_load_failure_is_swallowed():
    class BrokenStorage(MemoryStorage):
        def load(self, name):
            raise OSError("unreadable")

    store = DashboardStore(storage=BrokenStorage())

    assert store.state.unread_messages == 7


def test_session_state_storage():
    session_state = {}
    store = DashboardStore(storage=SessionStateStorage(session_state))
    store.set_search_query("shoes")

    assert session_state["dashboard-store"]["state"]["search_query"] == "shoes"

    restored = DashboardStore(storage=SessionStateStorage(session_state))
    assert restored.state.search_query == "shoes"


def test_session_state_storage_ignores_foreign_values():
    storage = SessionStateStorage({"dashboard-store": "not a snapshot"})

    assert storage.load("dashboard-store") is None


def test_backends_and_generators_share_interfaces(tmp_path, generator):
    for backend in (MemoryStorage(), SessionStateStorage({}), JsonFileStorage(str(tmp_path))):
        assert isinstance(backend, SnapshotStorage)
    assert not isinstance(object(), SnapshotStorage)

    assert isinstance(RandomDataGenerator(), OrderDataGenerator)
    assert isinstance(generator, OrderDataGenerator)


def test_create_storage_backends(tmp_path):
    assert isinstance(create_storage(StoreConfig(storage_backend="memory")), MemoryStorage)
    assert isinstance(create_storage(StoreConfig(storage_backend="file", data_dir=str(tmp_path))), JsonFileStorage)
    assert isinstance(create_storage(StoreConfig(storage_backend="session"), {}), SessionStateStorage)
    with pytest.raises(ValueError):
        create_storage(StoreConfig(storage_backend="cloud"))
