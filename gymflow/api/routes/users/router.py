from fastapi import APIRouter

from gymflow.api.routes.users import profile

router = APIRouter(prefix="/users")

router.include_router(profile.router)
