import uuid
from typing import Literal, get_args
from pydantic import Field

def datetime_to_timestamp_ms(dt):
    if dt is None: return None
    return int(dt.timestamp() * 1000)

def generate_id(prefix):
    return f"{prefix}-{uuid.uuid4().hex[:12]}"

email_field = Field(pattern=r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
name_field = Field(min_length=1, max_length=100)
day_count_field = Field(default=3, ge=2, le=6)

routine_status_literal = Literal["pending", "in-progress", "completed"]

status_text_map = {
    "pending": "Pendiente",
    "in-progress": "En progreso",
    "completed": "Completada",
}

class SafeError(Exception):
    """Error with a message safe to show to the client."""
    pass

WEEK_DAYS = ["Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado", "Domingo"]
NO_EQUIPMENT = "Sin equipo"

focus_literal = Literal["Pecho y Tríceps", "Espalda y Bíceps", "Piernas y Hombros", "Full Body", "Core y Cardio"]
focus_labels = list(get_args(focus_literal))

difficulty_literal = Literal["Principiante", "Intermedio", "Avanzado"]
difficulty_levels = list(get_args(difficulty_literal))
difficulty_aliases = {
    "beginner": "Principiante",
    "principiante": "Principiante",
    "intermediate": "Intermedio",
    "intermedio": "Intermedio",
    "advanced": "Avanzado",
    "avanzado": "Avanzado",
}

equipment_tier_literal = Literal["none", "basic", "full"]
equipment_tiers = list(get_args(equipment_tier_literal))
equipment_tier_aliases = {
    "none": "none",
    "casa": "none",
    "basic": "basic",
    "basico": "basic",
    "básico": "basic",
    "full": "full",
    "completo": "full",
    "gimnasio": "full",
}
equipment_tier_labels = {
    "none": NO_EQUIPMENT,
    "basic": "Mancuernas",
    "full": None,
}

def parse_difficulty(value):
    if value is None or str(value).strip() == "": return None
    key = str(value).strip().lower()
    if key not in difficulty_aliases:
        raise ValueError(f"unknown difficulty '{value}'")
    return difficulty_aliases[key]

def parse_equipment_tier(value):
    tier = equipment_tier_aliases.get(str(value).strip().lower())
    if tier not in equipment_tiers:
        raise ValueError(f"unknown equipment tier '{value}'")
    return tier

def parse_focus_days(focus_by_day, day_count=len(WEEK_DAYS)):
    """Canonical 1-based string keys ("01" -> "1"); days outside 1..day_count are rejected."""
    if focus_by_day is None: return None
    days = {}
    for key, focus in focus_by_day.items():
        key = str(key).strip()
        if not key.isdigit() or not 1 <= int(key) <= day_count:
            raise ValueError(f"focus day '{key}' must be a day number between 1 and {day_count}")
        day = str(int(key))
        if day in days:
            raise ValueError(f"focus day '{key}' is given more than once")
        days[day] = focus
    return days
