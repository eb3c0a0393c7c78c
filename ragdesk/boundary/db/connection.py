"""
Database connection management.

Async SQLAlchemy engine and session factory for the document metadata store.

Dependencies: sqlalchemy, ragdesk.configs
System role: Database connection lifecycle management
"""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from ragdesk.configs.database import DatabaseSettings


def get_async_engine(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Create an async engine with connection pooling.

    pool_pre_ping verifies connections before use so stale ones are
    replaced instead of failing the first query.

    Args:
        db_config: Database settings

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine
    """
    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create an async session factory bound to engine.

    Usage:
        SessionFactory = get_async_session_factory(engine)
        async with SessionFactory() as session:
            ...
    """
    return async_sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
