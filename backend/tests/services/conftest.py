"""Service test fixtures — async DB, record store, view cache, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db and get_view_cache dependencies overridden per test
    - db_manager patched so the record store and readiness probe use the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - PRAGMA foreign_keys=ON: an unknown customerId fails in the store like on Postgres
"""

from contextlib import asynccontextmanager
from datetime import date

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from invoice_actions.db.base import Base
from invoice_actions.db.session import create_schema
from invoice_actions.infrastructure.database import get_db, DatabaseSessionManager
from invoice_actions.infrastructure.invoice_store import SqlRecordStore
from invoice_actions.infrastructure.view_cache import ListViewCache, get_view_cache
from invoice_actions.models.customer import Customer
from invoice_actions.models.invoice import Invoice
import invoice_actions.infrastructure.database as db_module
from invoice_actions.main import app


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    await create_schema(engine)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def test_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
def record_store(test_manager):
    return SqlRecordStore(test_manager)


@pytest.fixture
def view_cache():
    return ListViewCache()


@pytest.fixture
def client_for(test_manager, test_session_factory, view_cache):
    """Open a test client on any app built by create_app(), DB and cache overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    @asynccontextmanager
    async def open_client(target_app):
        target_app.dependency_overrides[get_db] = override_get_db
        target_app.dependency_overrides[get_view_cache] = lambda: view_cache

        original_manager = db_module.db_manager
        db_module.db_manager = test_manager
        try:
            async with AsyncClient(
                transport=ASGITransport(app=target_app), base_url="http://test",
            ) as c:
                yield c
        finally:
            target_app.dependency_overrides.clear()
            db_module.db_manager = original_manager

    return open_client


@pytest.fixture
async def client(client_for):
    """FastAPI test client for the default app."""
    async with client_for(app) as c:
        yield c


@pytest.fixture
async def seed_customers(test_db):
    customers = [
        Customer(id="c1", name="Delba de Oliveira", email="delba@oliveira.com"),
        Customer(id="c2", name="Lee Robinson", email="lee@robinson.com"),
    ]
    test_db.add_all(customers)
    await test_db.commit()
    return customers


@pytest.fixture
async def seed_invoice(test_db, seed_customers):
    invoice = Invoice(
        customer_id="c1", amount=15795, status="pending", date=date(2026, 10, 1),
    )
    test_db.add(invoice)
    await test_db.commit()
    await test_db.refresh(invoice)
    await test_db.commit()  # release the shared in-memory connection
    return invoice
