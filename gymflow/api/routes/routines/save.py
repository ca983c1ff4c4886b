from fastapi import APIRouter, Depends
from pydantic import BaseModel, model_validator
from typing import Dict, List, Optional
import logging

from gymflow.api.middleware.database import database_connection, require_connection, encode_json
from gymflow.api.middleware.misc import *

router = APIRouter()
logger = logging.getLogger(__name__)

class RoutineSave(BaseModel):
    id: Optional[int] = None
    name: str = name_field
    objective: str = ""
    level: str = ""
    equipment: str = ""
    day_count: int = day_count_field
    day_labels: List[str] = []
    focus_by_day: Dict[str, focus_literal] = {}
    exercises_by_day: Dict[str, List[dict]] = {}
    status: routine_status_literal = "pending"

    @model_validator(mode="after")
    def days_consistent(self):
        if self.day_labels != WEEK_DAYS[:self.day_count]:
            raise ValueError(f"day_labels must be the first {self.day_count} week days")
        if set(self.exercises_by_day.keys()) != set(self.day_labels):
            raise ValueError("exercises_by_day must have one entry per day label")
        self.focus_by_day = parse_focus_days(self.focus_by_day, self.day_count)
        if len(self.focus_by_day) != self.day_count:
            raise ValueError("focus_by_day must have one focus per day")
        return self

#? whole routine is written as a unit, no partial updates of exercises
@router.post("/save")
async def routines_save(req: RoutineSave, conn = Depends(database_connection)):
    conn = require_connection(conn)

    routine = req.model_dump(exclude={"id", "objective", "level", "equipment"})
    metadata = {
        "objective": req.objective,
        "level": req.level,
        "equipment": req.equipment,
    }

    try:
        if req.id is None:
            routine_id = await insert_routine(conn, routine, metadata)
        else:
            routine_id = await replace_routine(conn, req.id, routine, metadata)
    except SafeError as e:
        raise e
    except Exception:
        logger.exception("error saving routine")
        raise SafeError("could not save routine")

    return {
        "success": True,
        "id": routine_id
    }

async def insert_routine(conn, routine, metadata):
    conn = require_connection(conn)
    routine_id = await conn.fetchval(
        """
        insert into routines
        (name, objective, level, equipment, day_count, day_labels, focus_by_day, exercises, status)
        values
        ($1, $2, $3, $4, $5, $6::jsonb, $7::jsonb, $8::jsonb, $9)
        returning id
        """,
        routine["name"],
        metadata.get("objective", ""),
        metadata.get("level", ""),
        metadata.get("equipment", ""),
        routine["day_count"],
        encode_json(routine["day_labels"]),
        encode_json(routine["focus_by_day"]),
        encode_json(routine["exercises_by_day"]),
        routine.get("status", "pending")
    )
    logger.info("saved routine %s '%s'", routine_id, routine["name"])
    return routine_id

async def replace_routine(conn, routine_id, routine, metadata):
    conn = require_connection(conn)
    updated_id = await conn.fetchval(
        """
        update routines
        set
            name = $1,
            objective = $2,
            level = $3,
            equipment = $4,
            day_count = $5,
            day_labels = $6::jsonb,
            focus_by_day = $7::jsonb,
            exercises = $8::jsonb,
            status = $9,
            updated_at = now() at time zone 'utc'
        where id = $10
        returning id
        """,
        routine["name"],
        metadata.get("objective", ""),
        metadata.get("level", ""),
        metadata.get("equipment", ""),
        routine["day_count"],
        encode_json(routine["day_labels"]),
        encode_json(routine["focus_by_day"]),
        encode_json(routine["exercises_by_day"]),
        routine.get("status", "pending"),
        routine_id
    )
    if updated_id is None:
        raise SafeError("routine does not exist")
    logger.info("replaced routine %s", routine_id)
    return updated_id
