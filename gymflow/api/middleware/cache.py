import os
import json
import logging
from copy import deepcopy
from dotenv import load_dotenv
from fastapi import Request

from gymflow.api.middleware.database import redis_connection

load_dotenv(override=True)

logger = logging.getLogger(__name__)

EXERCISES_KEY = "exercises"

class Cache:
    """Async key/value cache handed to request handlers as a dependency."""

    async def get(self, key):
        raise NotImplementedError

    async def put(self, key, value):
        raise NotImplementedError

    async def invalidate(self, key):
        raise NotImplementedError

class NullCache(Cache):
    async def get(self, key):
        return None

    async def put(self, key, value):
        pass

    async def invalidate(self, key):
        pass

class MemoryCache(Cache):
    def __init__(self):
        self.data = {}

    # copies so callers cannot mutate cached entries
    async def get(self, key):
        if key not in self.data: return None
        return deepcopy(self.data[key])

    async def put(self, key, value):
        self.data[key] = deepcopy(value)

    async def invalidate(self, key):
        self.data.pop(key, None)

class RedisCache(Cache):
    def __init__(self, prefix="gymflow", ttl_secs=None):
        self.prefix = prefix
        self.ttl_secs = ttl_secs
        self.client = None

    def key_name(self, key):
        return f"{self.prefix}:{key}"

    async def connection(self):
        if self.client is None:
            self.client = await redis_connection()
        return self.client

    async def get(self, key):
        r = await self.connection()
        if r is None: return None
        try:
            value = await r.get(self.key_name(key))
            if value is None: return None
            return json.loads(value)
        except Exception:
            logger.exception("redis get failed for %s, treating as a miss", key)
            return None

    async def put(self, key, value):
        r = await self.connection()
        if r is None: return
        try:
            await r.set(self.key_name(key), json.dumps(value, ensure_ascii=False), ex=self.ttl_secs)
        except Exception:
            logger.exception("redis put failed for %s", key)

    async def invalidate(self, key):
        r = await self.connection()
        if r is None: return
        try:
            await r.delete(self.key_name(key))
        except Exception:
            logger.exception("redis invalidate failed for %s", key)

def build_cache(backend=None):
    backend = (backend or os.getenv("CACHE_BACKEND", "memory")).lower()
    match backend:
        case "memory":
            return MemoryCache()
        case "redis":
            ttl = os.getenv("CACHE_TTL_SECS")
            return RedisCache(ttl_secs=int(ttl) if ttl else None)
        case "none":
            return NullCache()
        case _:
            raise ValueError(f"unknown cache backend '{backend}'")

def get_cache(request: Request) -> Cache:
    return request.app.state.cache
