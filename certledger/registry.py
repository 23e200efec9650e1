import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from certledger.db import Store
from certledger.errors import DuplicateKey, NotFound, StoreError
from certledger.models import Customer

logger = logging.getLogger(__name__)


class CustomerRegistry:
    """
    Customer records keyed by email.
    """

    def __init__(self, store: Store):
        self.store = store

    async def exists(self, email: str) -> bool:
        query = select(func.count()).select_from(Customer).where(Customer.email == email)
        try:
            async with self.store.session() as session:
                count = await session.scalar(query)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to count customers for {email}")
            raise StoreError("Error looking up customer.") from e
        return bool(count)

    async def create(self, name: str, email: str) -> Customer:
        if await self.exists(email):
            logger.warning(f"Customer {email} already exists")
            raise DuplicateKey("Customer with email exists.")

        customer = Customer(name=name, email=email)
        try:
            async with self.store.session() as session:
                session.add(customer)
                await session.commit()
        except IntegrityError as e:
            # lost a race against a concurrent create; the unique index decides
            logger.warning(f"Customer {email} already exists")
            raise DuplicateKey("Customer with email exists.") from e
        except SQLAlchemyError as e:
            logger.exception(f"Failed to insert customer {email}")
            raise StoreError("Error inserting customer into database.") from e

        logger.info(f"Created customer {email}")
        return customer

    async def get(self, email: str) -> Customer:
        try:
            async with self.store.session() as session:
                customer = await session.scalar(select(Customer).where(Customer.email == email))
        except SQLAlchemyError as e:
            logger.exception(f"Failed to look up customer {email}")
            raise StoreError("Error looking up customer.") from e

        if customer is None:
            raise NotFound("Customer does not exist.")
        return customer

    async def delete(self, email: str) -> None:
        try:
            async with self.store.session() as session:
                result = await session.execute(delete(Customer).where(Customer.email == email))
                await session.commit()
        except SQLAlchemyError as e:
            logger.exception(f"Failed to delete customer {email}")
            raise StoreError("Error deleting customer.") from e

        if result.rowcount == 0:
            raise NotFound("Customer does not exist.")
        logger.info(f"Deleted customer {email}")
