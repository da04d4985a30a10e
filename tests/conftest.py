from datetime import datetime, timedelta, timezone

import pytest

from storefront_dashboard.config import StoreConfig
from storefront_dashboard.core.dashboard_store import DashboardStore
from storefront_dashboard.core.storage import MemoryStorage


BASE_TIME = datetime(2024, 1, 20, 12, 0, tzinfo=timezone.utc)


class SequenceGenerator:
    """Deterministic stand-in for the random order data generator."""

    def __init__(self):
        self.ids = 0
        self.ticks = 0
        self.customers = 0
        self.amounts = 0

    def new_id(self):
        self.ids += 1
        return f"id{self.ids:03d}-abc-def"

    def now(self):
        self.ticks += 1
        return BASE_TIME + timedelta(seconds=self.ticks)

    def customer_name(self):
        self.customers += 1
        return f"Customer {self.customers}"

    def order_amount(self):
        self.amounts += 1
        return 100 + self.amounts


@pytest.fixture()
def generator():
    return SequenceGenerator()


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def make_store(generator, storage):
    def _make(**config_kwargs):
        return DashboardStore(config=StoreConfig(**config_kwargs), storage=storage, generator=generator)
    return _make


@pytest.fixture()
def store(make_store):
    return make_store()
