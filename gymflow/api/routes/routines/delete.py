from fastapi import APIRouter, Depends
from typing import Optional
from datetime import date

from gymflow.api.middleware.database import database_connection, require_connection
from gymflow.api.middleware.misc import *
from gymflow.api.routes.users.profile import notify_user

router = APIRouter()

@router.delete("/delete")
async def routines_delete(routine_id: int, notify_email: Optional[str] = None, conn = Depends(database_connection)):
    conn = require_connection(conn)

    deleted_id = await conn.fetchval(
        """
        delete
        from routines
        where id = $1
        returning id
        """, routine_id
    )
    if deleted_id is None:
        raise SafeError("routine does not exist")

    result = {"success": True}
    if notify_email:
        result["email"] = await notify_user(
            conn,
            notify_email,
            "Rutina eliminada",
            f"Has eliminado una rutina de entrenamiento.\n\nFecha: {date.today().strftime('%d/%m/%Y')}\n\n¡Sigue entrenando con GymFlow!"
        )
    return result
