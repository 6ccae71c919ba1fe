from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from shared.config import settings
from shared.exceptions import (
    AlreadyExistsError,
    AppError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from shared.infrastructure.database import engine
from shared.logging import setup_logging
from users.interfaces.routes import router as users_router

setup_logging(settings.LOG_LEVEL, json_format=settings.LOG_JSON)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting user directory service")
    yield
    await engine.dispose()


app = FastAPI(
    title="User Directory",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router)


@app.exception_handler(ValidationError)
async def validation_error_handler(request, exc: ValidationError):
    return JSONResponse(
        status_code=400, content={"detail": exc.message, "field": exc.field}
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(AlreadyExistsError)
async def already_exists_handler(request, exc: AlreadyExistsError):
    return JSONResponse(
        status_code=409, content={"detail": exc.message, "field": exc.field}
    )


@app.exception_handler(ConflictError)
async def conflict_handler(request, exc: ConflictError):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(AppError)
async def app_error_handler(request, exc: AppError):
    logger.error("Unhandled application error: {}", exc.message)
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.get("/health")
async def health_check():
    return {"status": "ok"}
