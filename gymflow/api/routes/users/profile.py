from fastapi import APIRouter, Depends
from pydantic import BaseModel
import asyncio
import logging

from gymflow.api.middleware.database import database_connection, require_connection
from gymflow.api.middleware.email import send_email
from gymflow.api.middleware.misc import *

router = APIRouter()
logger = logging.getLogger(__name__)

class UserProfile(BaseModel):
    email: str = email_field
    name: str = ""
    notifications_enabled: bool = False

@router.get("/profile")
async def users_get_profile(email: str, conn = Depends(database_connection)):
    conn = require_connection(conn)
    return {
        "success": True,
        "profile": await fetch_user_profile(conn, email)
    }

@router.post("/profile")
async def users_save_profile(req: UserProfile, conn = Depends(database_connection)):
    conn = require_connection(conn)

    await conn.execute(
        """
        insert into user_profiles
        (email, name, notifications_enabled)
        values
        ($1, $2, $3)
        on conflict (email) do update
        set
            name = $2,
            notifications_enabled = $3
        """, req.email.lower(), req.name, req.notifications_enabled
    )
    logger.info("saved user profile for %s", req.email)

    return {"success": True}

async def fetch_user_profile(conn, email):
    row = await conn.fetchrow(
        """
        select email, name, notifications_enabled
        from user_profiles
        where lower(email) = lower($1)
        """, email
    )
    if row is None: return None
    return {
        "email": row["email"],
        "name": row["name"],
        "notifications_enabled": row["notifications_enabled"],
    }

async def notify_user(conn, email, subject, body):
    """Fire-and-forget notification; the outcome is only reported back, never retried."""
    try:
        profile = await fetch_user_profile(conn, email)
    except Exception as e:
        logger.exception("error reading profile for %s", email)
        return {
            "success": False,
            "message": str(e)
        }

    if profile is None or not profile["notifications_enabled"]:
        return {
            "success": False,
            "message": "notifications disabled"
        }

    result = await asyncio.to_thread(send_email, profile["email"], subject, body)
    if not result["success"]:
        logger.warning("notification to %s failed: %s", email, result["message"])
    return result
