from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Optional
from datetime import date

from gymflow.api.middleware.database import database_connection, require_connection
from gymflow.api.middleware.misc import *
from gymflow.api.routes.users.profile import notify_user

router = APIRouter()

class RoutineRename(BaseModel):
    routine_id: int
    name: str = name_field
    notify_email: Optional[str] = None

class RoutineStatus(BaseModel):
    routine_id: int
    status: routine_status_literal
    notify_email: Optional[str] = None

@router.put("/rename")
async def routines_rename(req: RoutineRename, conn = Depends(database_connection)):
    conn = require_connection(conn)

    await update_routine_column(conn, req.routine_id, "name", req.name)

    result = {"success": True}
    if req.notify_email:
        result["email"] = await notify_user(
            conn,
            req.notify_email,
            "Rutina actualizada",
            f"Has actualizado la rutina \"{req.name}\".\n\nFecha: {date.today().strftime('%d/%m/%Y')}\n\n¡Sigue entrenando con GymFlow!"
        )
    return result

@router.put("/status")
async def routines_status(req: RoutineStatus, conn = Depends(database_connection)):
    conn = require_connection(conn)

    name = await update_routine_column(conn, req.routine_id, "status", req.status)

    result = {"success": True}
    if req.notify_email:
        result["email"] = await notify_user(
            conn,
            req.notify_email,
            "Estado de rutina actualizado",
            f"Has actualizado el estado de la rutina \"{name}\".\n\nNuevo estado: {status_text_map[req.status]}\n\nFecha: {date.today().strftime('%d/%m/%Y')}\n\n¡Sigue entrenando con GymFlow!"
        )
    return result

async def update_routine_column(conn, routine_id, column, value):
    # column names come from this module only, never from the request
    name = await conn.fetchval(
        f"""
        update routines
        set
            {column} = $1,
            updated_at = now() at time zone 'utc'
        where id = $2
        returning name
        """, value, routine_id
    )
    if name is None:
        raise SafeError("routine does not exist")
    return name
