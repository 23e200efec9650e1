import logging
from typing import List

from fastapi import APIRouter, Depends, status

from certledger.db import Store, get_store
from certledger.ledger import CertificateLedger
from certledger.registry import CustomerRegistry
from certledger.schemas import (
    ActiveUpdate,
    CertificateIn,
    CertificateOut,
    CustomerIn,
    CustomerOut,
    Message,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_registry(store: Store = Depends(get_store)) -> CustomerRegistry:
    return CustomerRegistry(store)


def get_ledger(
    store: Store = Depends(get_store),
    registry: CustomerRegistry = Depends(get_registry),
) -> CertificateLedger:
    return CertificateLedger(store, registry)


# customers

@router.post("/customer", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
async def create_customer(payload: CustomerIn, registry: CustomerRegistry = Depends(get_registry)):
    return await registry.create(payload.name, payload.email)


@router.get("/customer/{email}", response_model=CustomerOut)
async def get_customer(email: str, registry: CustomerRegistry = Depends(get_registry)):
    return await registry.get(email)


@router.delete("/customer/{email}", response_model=Message)
async def delete_customer(email: str, registry: CustomerRegistry = Depends(get_registry)):
    await registry.delete(email)
    return Message(message="Customer deleted.")


# certificates

@router.post("/certificate", response_model=CertificateOut, status_code=status.HTTP_201_CREATED)
async def create_certificate(payload: CertificateIn, ledger: CertificateLedger = Depends(get_ledger)):
    return await ledger.create(payload.email, payload.private_key, payload.body, payload.active)


@router.get("/certificate/{email}", response_model=List[CertificateOut])
async def get_customer_certificates(email: str, ledger: CertificateLedger = Depends(get_ledger)):
    """
    All certificates issued to a customer; an empty list when there are none.
    """
    return await ledger.list_by_customer(email)


@router.put("/certificate/{cert_id}", response_model=Message)
async def update_certificate(
    cert_id: str,
    payload: ActiveUpdate,
    ledger: CertificateLedger = Depends(get_ledger),
):
    await ledger.update_active(cert_id, payload.active)
    return Message(message="Successfully updated certificate.")
