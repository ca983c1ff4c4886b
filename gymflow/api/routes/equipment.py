from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from typing import List, Optional
import logging

from gymflow.api.middleware.database import database_connection, require_connection, encode_json, decode_json
from gymflow.api.middleware.misc import *

router = APIRouter(prefix="/equipment")
logger = logging.getLogger(__name__)

class Equipment(BaseModel):
    id: Optional[str] = None
    name: str = name_field
    description: str = ""
    muscle_groups: List[str] = []
    emoji: str = "🏋️"
    category: str = "General"
    calories_per_hour: int = Field(default=0, ge=0)
    image: str = ""

class EquipmentSave(BaseModel):
    equipment: List[Equipment]

@router.get("/list/all")
async def equipment_list_all(conn = Depends(database_connection)):
    conn = require_connection(conn)

    rows = await conn.fetch(
        """
        select *
        from equipment
        order by name
        """
    )

    equipment = []
    for row in rows:
        equipment.append({
            "id": row["id"],
            "name": row["name"],
            "description": row["description"],
            "muscle_groups": decode_json(row["muscle_groups"], []),
            "emoji": row["emoji"],
            "category": row["category"],
            "calories_per_hour": row["calories_per_hour"],
            "image": row["image"],
        })

    return {
        "success": True,
        "equipment": equipment
    }

@router.post("/save")
async def equipment_save(req: EquipmentSave, conn = Depends(database_connection)):
    conn = require_connection(conn)
    tx = None
    try:
        tx = conn.transaction()
        await tx.start()

        await conn.execute(
            """
            delete from equipment;
            """
        )

        ids = []
        for item in req.equipment:
            item_id = item.id or generate_id("eq")
            await conn.execute(
                """
                insert into equipment
                (id, name, description, muscle_groups, emoji, category, calories_per_hour, image)
                values
                ($1, $2, $3, $4::jsonb, $5, $6, $7, $8)
                """, item_id, item.name, item.description, encode_json(item.muscle_groups), item.emoji, item.category, item.calories_per_hour, item.image
            )
            ids.append(item_id)

        await tx.commit()

    except Exception:
        logger.exception("error saving equipment")
        if tx: await tx.rollback()
        raise SafeError("could not save equipment")

    logger.info("saved %d equipment items", len(ids))
    return {
        "success": True,
        "ids": ids
    }
