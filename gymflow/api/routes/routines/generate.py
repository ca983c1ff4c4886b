from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Dict, Optional
import logging

from gymflow.api.middleware.cache import Cache, get_cache
from gymflow.api.middleware.database import database_connection
from gymflow.api.middleware.misc import *
from gymflow.api.routes.exercises.list_all import load_exercise_pool
from gymflow.api.routes.routines.save import insert_routine
from gymflow.api.routes.users.profile import notify_user

router = APIRouter()
logger = logging.getLogger(__name__)

DEFAULT_ROUTINE_NAME = "Mi Rutina Personalizada"

# padding runs while a day holds fewer than MIN, the cap keeps a prefix of MAX
MIN_EXERCISES_PER_DAY = 5
MAX_EXERCISES_PER_DAY = 5

FULL_BODY = "Full Body"

full_body_groups = frozenset([
    "Pecho", "Espalda", "Hombros", "Bíceps", "Tríceps", "Antebrazos",
    "Piernas", "Cuádriceps", "Isquiotibiales", "Glúteos", "Aductores", "Abductores",
    "Pantorrillas", "Abdominales", "Core", "Espalda baja", "Cardio", "Full body"
])
focus_muscle_groups = {
    "Pecho y Tríceps": frozenset(["Pecho", "Tríceps", "Hombros"]),
    "Espalda y Bíceps": frozenset(["Espalda", "Bíceps"]),
    "Piernas y Hombros": frozenset(["Piernas", "Hombros", "Glúteos", "Cuádriceps", "Isquiotibiales", "Pantorrillas"]),
    "Full Body": full_body_groups,
    "Core y Cardio": frozenset(["Core", "Abdominales", "Espalda baja", "Cardio"]),
}

class RoutineGenerate(BaseModel):
    name: str = Field(default=DEFAULT_ROUTINE_NAME, min_length=1, max_length=100)
    objective: str = ""
    level: Optional[str] = None
    equipment: equipment_tier_literal = "full"
    equipment_label: Optional[str] = None
    day_count: int = day_count_field
    focus_by_day: Optional[Dict[str, focus_literal]] = None
    save: bool = True
    notify_email: Optional[str] = None

    @field_validator("level")
    def level_known(cls, v):
        return parse_difficulty(v)

    @field_validator("equipment", mode="before")
    def equipment_known(cls, v):
        return parse_equipment_tier(v)

    @model_validator(mode="after")
    def focus_days_in_routine(self):
        self.focus_by_day = parse_focus_days(self.focus_by_day, self.day_count)
        return self

@router.post("/generate")
async def routines_generate(req: RoutineGenerate, conn = Depends(database_connection), cache: Cache = Depends(get_cache)):
    pool = await load_exercise_pool(conn, cache)

    routine = generate_weekly_routine(
        pool,
        req.day_count,
        focus_by_day=req.focus_by_day,
        difficulty=req.level,
        equipment_tier=req.equipment,
        equipment_label=req.equipment_label,
        name=req.name
    )

    result = {
        "success": True,
        "routine": routine
    }
    if len(pool) == 0:
        result["warning"] = "no exercises available"

    if not req.save: return result

    try:
        routine["id"] = await insert_routine(conn, routine, {
            "objective": req.objective,
            "level": req.level or "",
            "equipment": req.equipment,
        })
    except SafeError as e:
        raise e
    except Exception:
        logger.exception("error saving generated routine")
        raise SafeError("could not save routine")

    if req.notify_email:
        result["email"] = await notify_user(
            conn,
            req.notify_email,
            "Rutina creada",
            f"Tu rutina \"{routine['name']}\" de {routine['day_count']} días está lista.\n\n¡Sigue entrenando con GymFlow!"
        )

    return result

def rotation_focus(day_index):
    return focus_labels[day_index % len(focus_labels)]

def resolve_focus(day_index, focus_by_day=None):
    if focus_by_day:
        day_number = day_index + 1
        for key in (str(day_number), day_number):
            if key in focus_by_day: return focus_by_day[key]
    return rotation_focus(day_index)

def focus_targets(focus):
    return focus_muscle_groups.get(focus, focus_muscle_groups[FULL_BODY])

def difficulty_match(exercise, difficulty):
    if difficulty not in difficulty_levels: return True
    return not exercise.get("difficulty") or exercise["difficulty"] == difficulty

def equipment_match(exercise, equipment_tier, equipment_label=None):
    if equipment_tier not in ("none", "basic"): return True

    tags = exercise.get("equipment") or [NO_EQUIPMENT]
    if isinstance(tags, str): tags = [tags]

    if equipment_label is None:
        equipment_label = equipment_tier_labels[equipment_tier]
    return NO_EQUIPMENT in tags or equipment_label in tags

def muscle_match(exercise, targets):
    return any(group in targets for group in exercise.get("muscle_groups") or [])

def select_day_exercises(
    exercise_pool,
    focus,
    difficulty=None,
    equipment_tier="full",
    equipment_label=None,
    min_exercises=MIN_EXERCISES_PER_DAY,
    max_exercises=MAX_EXERCISES_PER_DAY
):
    targets = focus_targets(focus)
    eligible = [
        exercise for exercise in exercise_pool
        if difficulty_match(exercise, difficulty)
        and equipment_match(exercise, equipment_tier, equipment_label)
    ]

    selected = [exercise for exercise in eligible if muscle_match(exercise, targets)]

    if len(selected) < min_exercises:
        chosen = {id(exercise) for exercise in selected}
        padding = [exercise for exercise in eligible if id(exercise) not in chosen]
        selected += padding[:min_exercises - len(selected)]

    return selected[:max_exercises]

def generate_weekly_routine(
    exercise_pool,
    day_count,
    focus_by_day=None,
    difficulty=None,
    equipment_tier="full",
    equipment_label=None,
    name=DEFAULT_ROUTINE_NAME,
    min_exercises=MIN_EXERCISES_PER_DAY,
    max_exercises=MAX_EXERCISES_PER_DAY
):
    """Build a day-keyed schedule from an exercise pool.

    Days are independent: each resolves its focus (explicit choice or the
    fixed rotation), filters the pool by muscle group, difficulty and
    equipment, pads with any other compatible exercise while it is short of
    `min_exercises`, then keeps the first `max_exercises`. Pool order is the
    only tie-break, so identical inputs give identical output.
    """
    day_labels = WEEK_DAYS[:max(day_count, 0)]

    focus_areas = {}
    exercises = {}
    for i, day_label in enumerate(day_labels):
        focus = resolve_focus(i, focus_by_day)
        focus_areas[str(i + 1)] = focus
        exercises[day_label] = select_day_exercises(
            exercise_pool,
            focus,
            difficulty=difficulty,
            equipment_tier=equipment_tier,
            equipment_label=equipment_label,
            min_exercises=min_exercises,
            max_exercises=max_exercises
        )

    return {
        "name": name,
        "day_count": day_count,
        "day_labels": day_labels,
        "focus_by_day": focus_areas,
        "exercises_by_day": exercises,
        "status": "pending"
    }
