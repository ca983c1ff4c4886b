from fastapi import APIRouter

from gymflow.api.routes.routines import generate
from gymflow.api.routes.routines import list_all
from gymflow.api.routes.routines import save
from gymflow.api.routes.routines import update
from gymflow.api.routes.routines import delete

router = APIRouter(prefix="/routines")

router.include_router(generate.router)
router.include_router(list_all.router)
router.include_router(save.router)
router.include_router(update.router)
router.include_router(delete.router)
