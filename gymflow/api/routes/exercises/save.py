from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
import logging

from gymflow.api.middleware.cache import Cache, get_cache, EXERCISES_KEY
from gymflow.api.middleware.database import database_connection, require_connection, encode_json
from gymflow.api.middleware.misc import *

router = APIRouter()
logger = logging.getLogger(__name__)

class Exercise(BaseModel):
    id: Optional[str] = None
    name: str = name_field
    description: str = ""
    muscle_groups: List[str] = []
    equipment: List[str] = []
    difficulty: Optional[str] = "Principiante"
    sets: int = Field(default=3, ge=0)
    reps: str = "12"
    rest: str = "60s"
    calories: int = Field(default=0, ge=0)
    calories_per_rep: int = Field(default=0, ge=0)
    emoji: str = "💪"
    requires_gym: bool = False
    video_url: str = ""

    @field_validator("equipment", mode="before")
    def equipment_as_list(cls, v):
        if v is None: return []
        if isinstance(v, str): return [v]
        return v

    @field_validator("difficulty")
    def difficulty_known(cls, v):
        return parse_difficulty(v)

class ExercisesSave(BaseModel):
    exercises: List[Exercise]

@router.post("/save")
async def exercises_save(req: ExercisesSave, conn = Depends(database_connection), cache: Cache = Depends(get_cache)):
    conn = require_connection(conn)
    tx = None
    try:
        tx = conn.transaction()
        await tx.start()

        await conn.execute(
            """
            delete from exercises;
            """
        )

        ids = []
        for i, exercise in enumerate(req.exercises):
            ids.append(await insert_exercise(conn, exercise, i))

        await tx.commit()

    except SafeError as e:
        if tx: await tx.rollback()
        raise e
    except Exception:
        logger.exception("error saving exercises")
        if tx: await tx.rollback()
        raise SafeError("could not save exercises")

    await cache.invalidate(EXERCISES_KEY)
    logger.info("saved %d exercises", len(ids))

    return {
        "success": True,
        "ids": ids
    }

async def insert_exercise(conn, exercise: Exercise, position):
    exercise_id = exercise.id or generate_id("ex")
    await conn.execute(
        """
        insert into exercises
        (id, position, name, description, muscle_groups, equipment, difficulty, sets, reps, rest, calories, calories_per_rep, emoji, requires_gym, video_url)
        values
        ($1, $2, $3, $4, $5::jsonb, $6::jsonb, $7, $8, $9, $10, $11, $12, $13, $14, $15)
        """,
        exercise_id,
        position,
        exercise.name,
        exercise.description,
        encode_json(exercise.muscle_groups),
        encode_json(exercise.equipment),
        exercise.difficulty,
        exercise.sets,
        exercise.reps,
        exercise.rest,
        exercise.calories,
        exercise.calories_per_rep,
        exercise.emoji,
        exercise.requires_gym,
        exercise.video_url
    )
    return exercise_id
