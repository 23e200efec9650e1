from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from certledger.config import Settings

# SQLAlchemy ORM 基底類別
Base = declarative_base()


class Store:
    """
    Engine + session factory shared by the registry and the ledger.

    Built once per process and disposed on shutdown.
    """

    def __init__(self, settings: Settings):
        self.engine = create_async_engine(settings.url, echo=settings.db_echo, future=True)
        self.sessionmaker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @asynccontextmanager
    async def session(self):
        async with self.sessionmaker() as session:
            yield session

    async def create_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self):
        await self.engine.dispose()


# 給 FastAPI 用的 Store dependency
def get_store(request: Request) -> Store:
    return request.app.state.store
