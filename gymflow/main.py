import os
import logging
from dotenv import load_dotenv

load_dotenv(override=True)

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from gymflow.api.routes.exercises import router as exercises_router
from gymflow.api.routes.routines import router as routines_router
from gymflow.api.routes.users import router as users_router
from gymflow.api.routes import equipment
from gymflow.api.routes import email

from gymflow.api.middleware.cache import build_cache
from gymflow.api.middleware.misc import SafeError

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="GymFlow API")
app.state.cache = build_cache()

@app.exception_handler(SafeError)
async def safe_error_handler(_, exc: SafeError):
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": str(exc)
        },
    )

@app.exception_handler(Exception)
async def generic_error_handler(_, exc: Exception):
    logger.error("unhandled error", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "server error"
        },
    )

@app.get("/")
async def root():
    return JSONResponse(content={"message": "OK"}, status_code=200)

app.include_router(exercises_router.router)
app.include_router(routines_router.router)
app.include_router(users_router.router)
app.include_router(equipment.router)
app.include_router(email.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("gymflow.main:app", host="127.0.0.1", port=8000, log_level='debug', reload=True)
