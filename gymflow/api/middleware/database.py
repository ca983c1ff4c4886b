import os
import json
import logging
import asyncpg
import asyncio
from dotenv import load_dotenv
from redis import asyncio as aioredis

from gymflow.api.middleware.misc import SafeError

load_dotenv(override=True)

logger = logging.getLogger(__name__)

async def setup_connection() -> asyncpg.connection.Connection:
    try:
        return await asyncpg.connect(**{
            "database": os.getenv("DATABASE"),
            "user": os.getenv("DB_USER"),
            "password": os.getenv("DB_PASSWORD"),
            "host": os.getenv("DB_HOST"),
            "port": int(os.getenv("DB_PORT", "5432")),
            "timeout": int(os.getenv("DB_TIMEOUT", "10"))
        })

    except Exception:
        logger.exception("Error connecting to database")
        return None

async def database_connection():
    conn = await setup_connection()
    try:
        yield conn
    finally:
        if conn: await conn.close()

def require_connection(conn):
    if conn is None:
        raise SafeError("database unavailable")
    return conn

async def redis_connection():
    try:
        redis_url = f"redis://:{os.environ['REDIS_PASSWORD']}@{os.environ['REDIS_HOST']}:{os.environ['REDIS_PORT']}"
        return await aioredis.from_url(
            redis_url,
            encoding='utf-8',
            decode_responses=True
        )
    except Exception:
        logger.exception("Error connecting to redis")
        return None

def encode_json(value):
    return json.dumps(value, ensure_ascii=False)

def decode_json(value, default=None):
    """jsonb columns come back from asyncpg as text unless a codec is set."""
    if value is None: return default
    if isinstance(value, (dict, list)): return value
    return json.loads(value)

if __name__ == "__main__":
    async def test_func():
        assert await setup_connection() != None

    asyncio.run(test_func())
