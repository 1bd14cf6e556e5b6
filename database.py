import logging

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """One engine + session factory, opened at startup and disposed at shutdown."""

    def __init__(self, url: str):
        self.url = url
        self.engine: AsyncEngine | None = None
        self.session_factory: sessionmaker | None = None

    async def connect(self):
        if self.engine is not None:
            return
        connect_args = {"check_same_thread": False} if self.url.startswith("sqlite") else {}
        self.engine = create_async_engine(self.url, connect_args=connect_args)
        self.session_factory = sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)
        await init_db(self.engine)

    async def disconnect(self):
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None

    def session(self) -> AsyncSession:
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        return self.session_factory()

    async def ping(self) -> bool:
        async with self.session() as session:
            await session.execute(text("SELECT 1"))
        return True


async def init_db(engine: AsyncEngine):
    import models  # noqa: F401  registers the tables on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))


async def get_db(request: Request):
    async with request.app.state.db.session() as session:
        yield session
