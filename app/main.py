# app/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.common.errors import (
    ConflictError,
    NotFoundError,
    RecordShapeError,
    StoreError,
    ValidationError,
)
from app.core.config import settings
from app.db.session import engine

# importing the models registers their tables on Base.metadata
from app.models.base import Base
from app.models.friendship import Friendship  # noqa: F401
from app.models.user import User  # noqa: F401
from app.routers import auth, friendship, my_friend

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create missing tables on startup
    Base.metadata.create_all(bind=engine)
    logger.info("Friend graph API started")
    yield
    engine.dispose()
    logger.info("Friend graph API stopped")


app = FastAPI(
    title="Friend Graph API",
    description="Friends with total and mutual friend counts",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error(status.HTTP_404_NOT_FOUND, "NOT_FOUND", str(exc))


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR", str(exc))


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    return _error(status.HTTP_409_CONFLICT, "CONFLICT", str(exc))


@app.exception_handler(RecordShapeError)
async def record_shape_handler(request: Request, exc: RecordShapeError):
    logger.exception("Malformed friend record: %s", exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "An internal error occurred")


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.exception("Edge store failure: %s", exc)
    return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "STORE_UNAVAILABLE", "The friend store is unavailable")


app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(my_friend.router, prefix="/api/v1/my-friends", tags=["my-friends"])
app.include_router(friendship.router, prefix="/api/v1/friendship-requests", tags=["friendship-requests"])


@app.get("/")
def read_root():
    return {"message": "Friend Graph API is running!"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
