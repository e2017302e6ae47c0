import os
import tempfile
from decimal import Decimal

import pytest

# app.py reads its configuration at import time
_DB_DIR = tempfile.mkdtemp(prefix="gameverse-test-")
os.environ["GAMEVERSE_DB"] = os.path.join(_DB_DIR, "test_store.db")
os.environ["SECRET_KEY"] = "test-secret"
os.environ.pop("SQS_QUEUE_URL", None)
os.environ.pop("GAMEVERSE_STRICT_CART", None)
os.environ.pop("GAMEVERSE_GREETING", None)

from gameverse_lib import CatalogEntry, CartLedger, LineItem, StaticCatalog  # noqa: E402


@pytest.fixture()
def entries():
    return [
        CatalogEntry(id=1, name="Elden Ring", description="...", price=Decimal("69.99")),
        CatalogEntry(id=2, name="Hollow Knight", description="...", price=Decimal("14.99")),
        CatalogEntry(id=3, name="God of War Ragnarök", description="...", price=Decimal("55.00")),
    ]


@pytest.fixture()
def catalog(entries):
    return StaticCatalog(entries)


@pytest.fixture()
def ledger(entries):
    return CartLedger((
        LineItem(entries[0], 1),
        LineItem(entries[1], 2),
        LineItem(entries[2], 1),
    ))


@pytest.fixture()
def checkout_calls():
    return []


@pytest.fixture()
def client(checkout_calls):
    import app as app_module

    def record(total, items):
        checkout_calls.append((total, items))

    flask_app = app_module.app
    flask_app.config["TESTING"] = True
    old_handler = flask_app.config["CHECKOUT_HANDLER"]
    old_strict = flask_app.config["STRICT_CART"]
    flask_app.config["CHECKOUT_HANDLER"] = record
    flask_app.config["STRICT_CART"] = False

    with flask_app.test_client() as client:
        yield client

    flask_app.config["CHECKOUT_HANDLER"] = old_handler
    flask_app.config["STRICT_CART"] = old_strict
