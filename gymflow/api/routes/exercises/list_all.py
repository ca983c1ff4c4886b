from fastapi import APIRouter, Depends
import logging

from gymflow.api.middleware.cache import Cache, get_cache, EXERCISES_KEY
from gymflow.api.middleware.database import database_connection, decode_json
from gymflow.api.middleware.misc import *

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/list/all")
async def exercises_list_all(conn = Depends(database_connection), cache: Cache = Depends(get_cache)):
    exercises = await load_exercise_pool(conn, cache)
    return {
        "success": True,
        "exercises": sorted(exercises, key=lambda e: e["name"].lower())
    }

async def load_exercise_pool(conn, cache: Cache):
    """Catalog read for routine generation; an unreachable catalog is an empty pool."""
    cached = await cache.get(EXERCISES_KEY)
    if isinstance(cached, list): return cached
    if cached is not None:
        logger.warning("ignoring cached exercise pool of type %s", type(cached).__name__)

    if conn is None:
        logger.warning("no database connection, using empty exercise pool")
        return []

    try:
        rows = await fetch_exercise_rows(conn)
    except Exception:
        logger.exception("error reading exercise catalog")
        return []

    exercises = [exercise_row_to_dict(row) for row in rows]
    await cache.put(EXERCISES_KEY, exercises)
    logger.info("loaded %d exercises from catalog", len(exercises))
    return exercises

async def fetch_exercise_rows(conn):
    return await conn.fetch(
        """
        select *
        from exercises
        order by position, id
        """
    )

def exercise_row_to_dict(row):
    return {
        "id": str(row["id"]),
        "name": row["name"],
        "description": row["description"] or "",
        "muscle_groups": decode_json(row["muscle_groups"], []),
        "equipment": normalize_equipment(decode_json(row["equipment"], [])),
        "difficulty": normalize_difficulty(row["difficulty"]),
        "sets": row["sets"],
        "reps": row["reps"],
        "rest": row["rest"],
        "calories": row["calories"],
        "calories_per_rep": row["calories_per_rep"],
        "emoji": row["emoji"],
        "requires_gym": row["requires_gym"],
        "video_url": row["video_url"],
    }

def normalize_equipment(equipment):
    if isinstance(equipment, str): equipment = [equipment]
    equipment = [tag for tag in equipment or [] if tag]
    return equipment if equipment else [NO_EQUIPMENT]

def normalize_difficulty(difficulty):
    try:
        return parse_difficulty(difficulty)
    except ValueError:
        logger.warning("unknown exercise difficulty '%s', treating as unset", difficulty)
        return None
