from fastapi import APIRouter, Depends

from gymflow.api.middleware.database import database_connection, require_connection, decode_json
from gymflow.api.middleware.misc import *

router = APIRouter()

@router.get("/list/all")
async def routines_list_all(conn = Depends(database_connection)):
    conn = require_connection(conn)

    rows = await conn.fetch(
        """
        select *
        from routines
        order by created_at desc, id desc
        """
    )

    return {
        "success": True,
        "routines": [routine_row_to_dict(row) for row in rows]
    }

@router.get("/get")
async def routines_get(routine_id: int, conn = Depends(database_connection)):
    conn = require_connection(conn)
    return {
        "success": True,
        "routine": await fetch_routine(conn, routine_id)
    }

async def fetch_routine(conn, routine_id):
    row = await conn.fetchrow(
        """
        select *
        from routines
        where id = $1
        """, routine_id
    )
    if row is None:
        raise SafeError("routine does not exist")
    return routine_row_to_dict(row)

def routine_row_to_dict(row):
    return {
        "id": row["id"],
        "name": row["name"],
        "objective": row["objective"],
        "level": row["level"],
        "equipment": row["equipment"],
        "day_count": row["day_count"],
        "day_labels": decode_json(row["day_labels"], []),
        "focus_by_day": decode_json(row["focus_by_day"], {}),
        "exercises_by_day": decode_json(row["exercises"], {}),
        "status": row["status"],
        "created_at": datetime_to_timestamp_ms(row["created_at"]),
        "updated_at": datetime_to_timestamp_ms(row["updated_at"]),
    }
