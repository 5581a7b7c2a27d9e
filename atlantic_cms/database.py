"""
Database connection and session management
Using SQLModel with asyncpg for async PostgreSQL operations
"""
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from typing import AsyncGenerator, Optional
import ssl
import os
import logging
from atlantic_cms.config import DATABASE_URL, DB_SSL_CERT_PATH, DEBUG, MODE

logger = logging.getLogger(__name__)

# Convert postgresql:// to postgresql+asyncpg:// for async operations
async_database_url = DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")
using_asyncpg = async_database_url.startswith("postgresql+asyncpg://")

# SSL configuration for asyncpg
ssl_config: Optional[ssl.SSLContext] = None

if DB_SSL_CERT_PATH:
    try:
        if os.path.exists(DB_SSL_CERT_PATH) and os.path.getsize(DB_SSL_CERT_PATH) > 0:
            logger.info(f"Loading SSL certificate from: {DB_SSL_CERT_PATH}")
            ssl_config = ssl.create_default_context(cafile=DB_SSL_CERT_PATH)
            # Hosted Postgres certificates are not issued for the pooler hostname
            ssl_config.check_hostname = False
            ssl_config.verify_mode = ssl.CERT_REQUIRED
        else:
            logger.warning(f"SSL certificate file missing or empty: {DB_SSL_CERT_PATH}")
    except Exception as e:
        logger.error(f"Failed to create SSL context: {e}", exc_info=True)
        ssl_config = None

connect_args = {}
engine_kwargs = {}

if using_asyncpg:
    # The hosted pooler runs in transaction mode and cannot keep prepared statements
    connect_args = {
        "command_timeout": 30,
        "statement_cache_size": 0,
        "server_settings": {
            "application_name": "atlantic_cms"
        }
    }
    if ssl_config:
        connect_args["ssl"] = ssl_config
        logger.info("SSL enabled for database connections")
    engine_kwargs = {
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "pool_timeout": 30,
        "pool_size": 10,
        "max_overflow": 20,
    }

async_engine = create_async_engine(
    async_database_url,
    echo=DEBUG,
    future=True,
    connect_args=connect_args,
    **engine_kwargs,
)

logger.info(f"Database engine created (mode: {MODE}, SSL: {'enabled' if ssl_config else 'disabled'})")

# Create async session factory
AsyncSessionLocal = sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get async database session
    Usage: async def endpoint(session: AsyncSession = Depends(get_async_session))
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def reset_session(session: AsyncSession) -> None:
    """
    Roll back after a failed read so the request can keep using the session
    """
    try:
        await session.rollback()
    except Exception as e:
        logger.debug(f"Rollback after failed read also failed: {e}")


async def close_db():
    """
    Close database connections
    Call this on application shutdown
    """
    await async_engine.dispose()
    logger.info("Database connections closed")


async def test_db_connection():
    """
    Test database connection - useful for debugging
    """
    try:
        async with AsyncSessionLocal() as session:
            from sqlalchemy import text
            result = await session.execute(text("SELECT 1"))
            value = result.scalar()
            logger.info(f"Database connection test successful: {value}")
            return True
    except Exception as e:
        logger.error(f"Database connection test failed: {e}", exc_info=True)
        return False
