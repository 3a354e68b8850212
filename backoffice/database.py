# backoffice/database.py
from typing import Any, Dict, Iterable, List, Optional

from fastapi import Request
from loguru import logger
from sqlalchemy import event, func, select
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, selectinload, sessionmaker
from sqlalchemy.pool import StaticPool

# Base declarative
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Gateway:
    """Narrow access point to the relational store.

    One instance per process. The hosting application calls ``open()`` on
    startup and ``close()`` on shutdown; every operation runs in its own
    session, so a read-then-write pair in a route handler is not atomic.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_maker = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    async def open(self) -> None:
        if self._engine is not None:
            return
        url = make_url(self.url)
        kwargs: Dict[str, Any] = {"echo": self.echo, "future": True}
        is_sqlite = url.get_backend_name() == "sqlite"
        if is_sqlite and url.database in (None, "", ":memory:"):
            # in-memory databases live only as long as their single connection
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}

        engine = create_async_engine(self.url, **kwargs)
        if is_sqlite:
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        self._engine = engine
        self._session_maker = sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
        logger.info("Gateway opened ({})", url.render_as_string(hide_password=True))

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        logger.info("Gateway closed")

    def _session(self) -> AsyncSession:
        if self._session_maker is None:
            raise RuntimeError("Gateway is not open")
        return self._session_maker()

    @staticmethod
    def _loaders(model, include: Iterable[str]):
        return [selectinload(getattr(model, name)) for name in include]

    async def _select_one(self, session: AsyncSession, model, id: int, include: Iterable[str]):
        stmt = (
            select(model)
            .options(*self._loaders(model, include))
            .where(model.id == id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_unique(self, model, id: int, include: Iterable[str] = ()):
        async with self._session() as session:
            return await self._select_one(session, model, id, include)

    async def find_many(self, model, include: Iterable[str] = ()) -> List[Any]:
        async with self._session() as session:
            result = await session.execute(
                select(model).options(*self._loaders(model, include)).order_by(model.id)
            )
            return list(result.scalars().all())

    async def count(self, model) -> int:
        async with self._session() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    async def create(self, model, fields: Dict[str, Any], include: Iterable[str] = ()):
        async with self._session() as session:
            row = model(**fields)
            session.add(row)
            await session.commit()
            return await self._select_one(session, model, row.id, include)

    async def update(self, model, id: int, fields: Dict[str, Any], include: Iterable[str] = ()):
        async with self._session() as session:
            row = await session.get(model, id)
            if row is None:
                return None
            for name, value in fields.items():
                setattr(row, name, value)
            await session.commit()
            return await self._select_one(session, model, id, include)

    async def delete(self, model, id: int) -> bool:
        async with self._session() as session:
            row = await session.get(model, id)
            if row is None:
                return False
            await session.delete(row)
            await session.commit()
            return True


def get_gateway(request: Request) -> Gateway:
    return request.app.state.gateway
