"""
Database connection management using asyncpg.
"""

from typing import Optional

import asyncpg

from utils.logger import get_logger

logger = get_logger("Database")

_pool: Optional[asyncpg.Pool] = None


async def init_database(database_url: str) -> None:
    """Initialize database connection pool."""
    global _pool

    if not database_url:
        logger.warning("DATABASE_URL not set - config storage disabled")
        return

    try:
        _pool = await asyncpg.create_pool(
            database_url,
            min_size=1,
            max_size=10,
            command_timeout=60,
        )
        logger.success("Database connected successfully")
        await _init_tables()
    except Exception as e:
        logger.error(f"Failed to connect to database: {e}")
        raise


async def _init_tables() -> None:
    """Initialize database tables if they don't exist."""
    if not _pool:
        return

    async with _pool.acquire() as conn:
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS guild_config (
                guild_id VARCHAR(20) PRIMARY KEY,
                bot_log_channel_id VARCHAR(20),
                member_log_channel_id VARCHAR(20),
                mod_log_channel_id VARCHAR(20),
                muted_role_id VARCHAR(20),
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        logger.info("Database tables initialized")


async def close_database() -> None:
    """Close database connection pool."""
    global _pool

    if _pool:
        await _pool.close()
        _pool = None
        logger.info("Database connection closed")


def get_pool() -> Optional[asyncpg.Pool]:
    """Get the database connection pool."""
    return _pool
