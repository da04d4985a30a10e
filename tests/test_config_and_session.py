import os

from storefront_dashboard.config import StoreConfig, StoreDefaults, load_config
from storefront_dashboard.core import StateKeys, get_session_store


def test_load_config_defaults():
    config = load_config({})

    assert config == StoreConfig()
    assert config.storage_name == "dashboard-store"
    assert not config.clamp_unread_count
    assert config.revenue_swing_mode == "last"
    assert not config.keep_caller_order_fields


def test_load_config_from_environment(tmp_path):
    config = load_config({
        "STOREFRONT_DASHBOARD_DATA_DIR": str(tmp_path),
        "STOREFRONT_DASHBOARD_STORAGE_BACKEND": "memory",
        "STOREFRONT_DASHBOARD_CLAMP_UNREAD_COUNT": "true",
        "STOREFRONT_DASHBOARD_REVENUE_SWING_MODE": "max",
        "STOREFRONT_DASHBOARD_KEEP_CALLER_ORDER_FIELDS": "0",
    })

    assert config.storage_backend == "memory"
    assert config.clamp_unread_count
    assert config.revenue_swing_mode == "max"
    assert not config.keep_caller_order_fields
    assert config.storage_path == os.path.join(str(tmp_path), "dashboard-store.json")


def test_state_key_names_follow_prefixes():
    for key in StateKeys.get_all_keys():
        assert StateKeys.validate_key_name(key), key

    assert not StateKeys.validate_key_name("")
    assert not StateKeys.validate_key_name("selected_tab")
    assert StateKeys.suggest_key_name("orders", "Export Format") == "orders_export_format"
    assert StateKeys.get_module_keys("missing") == []


def test_init_ui_state_only_fills_missing():
    session_state = {"inbox_notification_filter": "unread"}

    written = StateKeys.init_ui_state(session_state)

    assert session_state["inbox_notification_filter"] == "unread"
    assert session_state["sales_time_range"] == "24h"
    assert written == len(session_state) - 1
    assert StateKeys.init_ui_state(session_state) == 0


def test_session_store_is_created_once():
    session_state = {}
    config = StoreConfig(storage_backend="session")

    store = get_session_store(session_state, config)
    store.add_notification("hello", "message")

    assert get_session_store(session_state, config) is store
    assert session_state[StateKeys.STORE_INSTANCE] is store
    assert session_state[StoreDefaults.STORAGE_NAME]["state"]["unread_count"] == 1


def test_custom_storage_name_is_the_session_snapshot_key():
    session_state = {}
    config = load_config({
        "STOREFRONT_DASHBOARD_STORAGE_NAME": "east-store",
        "STOREFRONT_DASHBOARD_STORAGE_BACKEND": "session",
    })

    store = get_session_store(session_state, config)
    store.set_search_query("boots")

    key = StateKeys.snapshot_key(config)
    assert key == "east-store"
    assert session_state[key]["state"]["search_query"] == "boots"
    assert StateKeys.validate_key_name(key, config)
    assert not StateKeys.validate_key_name(key)
    assert StateKeys.snapshot_key() == StoreDefaults.STORAGE_NAME
