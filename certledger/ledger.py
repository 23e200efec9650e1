import logging
import uuid
from typing import List

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from certledger.db import Store
from certledger.errors import CustomerNotFound, InvalidId, NotFound, StoreError, UpdateFailed
from certledger.models import Certificate
from certledger.registry import CustomerRegistry

logger = logging.getLogger(__name__)


def parse_certificate_id(value: str) -> str:
    """
    Normalize a certificate id to its canonical UUID string.

    Raises InvalidId for anything that does not parse as a UUID.
    """
    try:
        return str(uuid.UUID(value))
    except (TypeError, ValueError) as e:
        raise InvalidId("Certificate not found.") from e


class CertificateLedger:
    """
    Certificates issued to registered customers.

    A certificate can only be created for an email the registry knows about
    at that moment; later customer deletions leave certificates in place.
    """

    def __init__(self, store: Store, registry: CustomerRegistry):
        self.store = store
        self.registry = registry

    async def create(self, email: str, private_key: str, body: str, active: bool = False) -> Certificate:
        if not await self.registry.exists(email):
            logger.warning(f"Refusing certificate for unknown customer {email}")
            raise CustomerNotFound("Customer does not exist.")

        cert = Certificate(
            id=str(uuid.uuid4()),
            email=email,
            private_key=private_key,
            body=body,
            active=active,
        )
        try:
            async with self.store.session() as session:
                session.add(cert)
                await session.commit()
        except SQLAlchemyError as e:
            logger.exception(f"Failed to insert certificate for {email}")
            raise StoreError("Error inserting certificate into database.") from e

        logger.info(f"Created certificate {cert.id} for {email}")
        return cert

    async def list_by_customer(self, email: str) -> List[Certificate]:
        if not await self.registry.exists(email):
            raise CustomerNotFound("Customer does not exist.")

        try:
            async with self.store.session() as session:
                result = await session.scalars(select(Certificate).where(Certificate.email == email))
                return list(result.all())
        except SQLAlchemyError as e:
            logger.exception(f"Failed to list certificates for {email}")
            raise StoreError("Error looking up customer certificates.") from e

    async def update_active(self, cert_id: str, active: bool) -> None:
        cert_id = parse_certificate_id(cert_id)

        query = update(Certificate).where(Certificate.id == cert_id).values(active=active)
        try:
            async with self.store.session() as session:
                result = await session.execute(query)
                await session.commit()
        except SQLAlchemyError as e:
            logger.exception(f"Failed to update certificate {cert_id}")
            raise UpdateFailed("Error updating certificate.") from e

        if result.rowcount == 0:
            raise NotFound("Certificate not found.")
        logger.info(f"Set certificate {cert_id} active={active}")
