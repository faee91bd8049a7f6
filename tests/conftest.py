"""
Shared fixtures: a fresh seeded SQLite database per test, the app wired to
it through app.state, and an httpx client over ASGI.
"""
import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("METRICS_ENABLED", "false")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

from decimal import Decimal  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy import event, func, select, update  # noqa: E402

from restaurant_api.core.exceptions import NotificationError  # noqa: E402
from restaurant_api.core.notifier import Notifier  # noqa: E402
from restaurant_api.core.security import create_access_token  # noqa: E402
from restaurant_api.db.database import Database  # noqa: E402
from restaurant_api.db.seed import seed_sample_data  # noqa: E402
from restaurant_api.main import app  # noqa: E402
from restaurant_api.models import InventoryItem, Order, OrderItem, Payment  # noqa: E402


class RecordingNotifier(Notifier):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list[tuple[str, str, str]] = []

    async def send(self, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise NotificationError("mail relay unreachable")
        self.sent.append((to, subject, body))


# ─── Fixtures ──────────────────────────────────────────────────────────────────
@pytest_asyncio.fixture
async def db(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'restaurant.db'}")
    await database.create_all()
    async with database.session() as session:
        await seed_sample_data(session)
    yield database
    await database.dispose()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest_asyncio.fixture
async def client(db, notifier):
    app.state.db = db
    app.state.notifier = notifier
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.state.db = None
    app.state.notifier = None


@pytest.fixture
def query_log(db):
    """Every SQL statement the engine sends, in order."""
    statements: list[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(db.engine.sync_engine, "before_cursor_execute", record)
    yield statements
    event.remove(db.engine.sync_engine, "before_cursor_execute", record)


def _auth(role: str, user_id: int = 1, username: str = "tester") -> dict[str, str]:
    token = create_access_token(user_id, username, role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return _auth("admin", username="admin")


@pytest.fixture
def staff_headers():
    return _auth("staff", user_id=2, username="staff")


@pytest.fixture
def customer_headers():
    return _auth("customer", user_id=3, username="customer")


# ─── Helpers ───────────────────────────────────────────────────────────────────
def pizza_order(quantity: int = 2, price: str = "250", **overrides) -> dict:
    payload = {
        "customer_name": "A",
        "customer_phone": "123",
        "items": [{"menu_item_id": 1, "quantity": quantity, "price": price}],
        "total_amount": str(Decimal(price) * quantity),
    }
    payload.update(overrides)
    return payload


async def set_stock(db: Database, item_name: str, quantity: str) -> None:
    async with db.session() as session:
        await session.execute(
            update(InventoryItem).where(InventoryItem.item_name == item_name).values(quantity=Decimal(quantity))
        )
        await session.commit()


async def stock_of(db: Database, item_name: str) -> Decimal:
    async with db.session() as session:
        return await session.scalar(select(InventoryItem.quantity).where(InventoryItem.item_name == item_name))


async def snapshot(db: Database) -> dict:
    """Row counts of orders/order_items/payments plus every inventory quantity."""
    async with db.session() as session:
        inventory = (await session.execute(select(InventoryItem.id, InventoryItem.quantity))).all()
        return {
            "orders": await session.scalar(select(func.count(Order.id))),
            "order_items": await session.scalar(select(func.count(OrderItem.id))),
            "payments": await session.scalar(select(func.count(Payment.id))),
            "inventory": {row.id: row.quantity for row in inventory},
        }
