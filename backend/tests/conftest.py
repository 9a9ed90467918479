from datetime import date

import pytest
from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from delivery_core import DeliveryService, LocalOrderStore, LocalSettingsStore
from delivery_core.settings_store import FALLBACK_DEFAULTS

MONDAY = date(2024, 6, 3)
FRIDAY = date(2024, 6, 7)


@pytest.fixture
def memory_db():
    db = TinyDB(storage=MemoryStorage)
    yield db
    db.close()


@pytest.fixture
def settings_store(memory_db):
    return LocalSettingsStore(memory_db, default_config=dict(FALLBACK_DEFAULTS))


@pytest.fixture
def order_store(memory_db):
    return LocalOrderStore(memory_db)


@pytest.fixture
def service(settings_store, order_store):
    return DeliveryService(settings_store=settings_store, order_store=order_store)
