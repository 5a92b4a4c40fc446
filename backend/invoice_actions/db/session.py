"""Schema Bootstrap — creates the tables for local runs and test fixtures.

Invariants:
    - create_all only adds missing tables; it never alters or drops existing ones

Design Decisions:
    - No migration tooling: the schema is two tables, created from ORM metadata
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from invoice_actions.db.base import Base


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    # Import models so Base.metadata has them
    import invoice_actions.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
