from sqlalchemy import Boolean, Column, String

from certledger.db import Base


class Customer(Base):
    __tablename__ = "customers"

    email = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)


class Certificate(Base):
    __tablename__ = "certificates"

    id = Column(String(36), primary_key=True, index=True)
    email = Column(String, index=True, nullable=False)
    private_key = Column("key", String, nullable=False)
    body = Column(String, nullable=False)
    active = Column(Boolean, nullable=False, default=False)
