"""Database fixtures for gridquery tests (shared)."""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Customer, Purchase


async def create_sample_customers(session: AsyncSession):
    """Create and commit the customers used across tests."""
    customers = [
        Customer(id=1, name="Alice Johnson", email="alice@example.com", age=34, city="Paris", nickname="ali"),
        Customer(id=2, name="Bob Smith", email="bob@example.com", age=27, city="Berlin", nickname="bobby"),
        Customer(id=3, name="Charlie Brown", email="charlie@example.com", age=41, city="Paris", nickname="chuck"),
        Customer(id=4, name="Dave Bobson", email="dave@example.org", age=19, city="Rome", nickname=None),
        Customer(id=5, name="Eve O'Neil", email="eve@example.com", age=27, city="Berlin", nickname="evie"),
    ]
    session.add_all(customers)
    await session.flush()
    await session.commit()
    return customers


@pytest.fixture(scope="function")
async def sample_customers(db_session: AsyncSession):
    return await create_sample_customers(db_session)


async def create_sample_purchases(session: AsyncSession):
    purchases = [
        Purchase(id=1, customer_id=1, total=Decimal("120.00"), status="paid"),
        Purchase(id=2, customer_id=1, total=Decimal("35.50"), status="open"),
        Purchase(id=3, customer_id=2, total=Decimal("80.00"), status="paid"),
        Purchase(id=4, customer_id=3, total=Decimal("15.00"), status="cancelled"),
    ]
    session.add_all(purchases)
    await session.flush()
    await session.commit()
    return purchases


@pytest.fixture(scope="function")
async def populated_db(db_session: AsyncSession):
    customers = await create_sample_customers(db_session)
    purchases = await create_sample_purchases(db_session)
    return {'customers': customers, 'purchases': purchases}
