import json
import pytest

from ..main import app
from ..api.middleware.cache import MemoryCache, get_cache
from ..api.middleware.database import database_connection

class FakeTransaction:
    def __init__(self, conn):
        self.conn = conn

    async def start(self):
        self.conn.calls.append(("tx_start", None, ()))

    async def commit(self):
        self.conn.calls.append(("tx_commit", None, ()))

    async def rollback(self):
        self.conn.calls.append(("tx_rollback", None, ()))

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()
        return False

class FakeConnection:
    """Stands in for an asyncpg connection, recording every statement."""

    def __init__(self, fetch_result=None, fetchrow_result=None, fetchval_result=None, error=None):
        self.fetch_result = fetch_result or []
        self.fetchrow_result = fetchrow_result
        self.fetchval_result = fetchval_result
        self.error = error
        self.calls = []

    def record(self, method, query, args):
        self.calls.append((method, query, args))
        if self.error is not None: raise self.error

    def methods(self):
        return [call[0] for call in self.calls]

    def calls_for(self, method):
        return [call for call in self.calls if call[0] == method]

    async def fetch(self, query, *args):
        self.record("fetch", query, args)
        return self.fetch_result

    async def fetchrow(self, query, *args):
        self.record("fetchrow", query, args)
        return self.fetchrow_result

    async def fetchval(self, query, *args):
        self.record("fetchval", query, args)
        return self.fetchval_result

    async def execute(self, query, *args):
        self.record("execute", query, args)
        return "OK"

    def transaction(self):
        return FakeTransaction(self)

    async def close(self):
        pass

@pytest.fixture(autouse=True)
def memory_cache():
    cache = MemoryCache()
    app.dependency_overrides[get_cache] = lambda: cache
    yield cache
    app.dependency_overrides.pop(get_cache, None)

@pytest.fixture(autouse=True)
def no_database():
    async def override():
        yield None
    app.dependency_overrides[database_connection] = override
    yield
    app.dependency_overrides.pop(database_connection, None)

@pytest.fixture
def fake_conn():
    conn = FakeConnection()
    async def override():
        yield conn
    app.dependency_overrides[database_connection] = override
    return conn

def make_exercise(exercise_id, muscle_groups, equipment=None, difficulty=None, name=None):
    return {
        "id": exercise_id,
        "name": name or f"Exercise {exercise_id}",
        "description": "",
        "muscle_groups": muscle_groups,
        "equipment": equipment if equipment is not None else ["Sin equipo"],
        "difficulty": difficulty,
        "sets": 3,
        "reps": "12",
        "rest": "60s",
        "calories": 0,
        "calories_per_rep": 5,
        "emoji": "💪",
        "requires_gym": False,
        "video_url": "",
    }

def make_exercise_row(exercise_id, muscle_groups, equipment=None, difficulty="principiante", name=None):
    row = make_exercise(exercise_id, muscle_groups, equipment=[], difficulty=difficulty, name=name)
    row["muscle_groups"] = json.dumps(muscle_groups)
    row["equipment"] = json.dumps(equipment or [])
    row["position"] = 0
    return row

@pytest.fixture
def category_pool():
    """Twenty exercises, four for each focus category, all equipment free."""
    categories = [
        ("pecho", ["Pecho"]),
        ("espalda", ["Espalda"]),
        ("piernas", ["Piernas"]),
        ("full", ["Full body"]),
        ("core", ["Core"]),
    ]
    pool = []
    for prefix, groups in categories:
        for i in range(4):
            pool.append(make_exercise(f"{prefix}-{i}", groups))
    return pool
