from fastapi import APIRouter

from gymflow.api.routes.exercises import list_all
from gymflow.api.routes.exercises import save

router = APIRouter(prefix="/exercises")

router.include_router(list_all.router)
router.include_router(save.router)
