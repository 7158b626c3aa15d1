# app/main.py
# FastAPI app setup and router wiring
# routers are split per feature (photos, chat)

from __future__ import annotations

import logging
from asyncio import sleep
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api.routes_chat import router as chat_router
from app.api.routes_photo import router as photo_router
from app.core.config import settings
from app.core.errors import AppError, UnknownError, ValidationError
from app.db.indexes import ensure_indexes
from app.db.init import close_db, get_db, init_db
from app.services.file_store import URL_PREFIX

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

DB_INIT_RETRIES = 20


@asynccontextmanager
async def lifespan(app: FastAPI):
    Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)

    # 1) connect to Mongo first (20 tries, 1s apart)
    db = None
    for i in range(DB_INIT_RETRIES):
        try:
            db = await init_db()
            log.info("[startup] db ready")
            break
        except Exception as e:
            log.warning("[startup] db init retry %d: %s", i + 1, e)
            await sleep(1.0)
    if db is None:
        log.error("[startup] db init failed after retries")

    # 2) indexes
    if db is not None:
        try:
            await ensure_indexes()
            log.info("[startup] indexes ensured")
        except Exception as e:
            log.warning("[startup] ensure_indexes failed: %s", e)

    yield

    # close the Mongo connection
    await close_db()


app = FastAPI(title="NSS Club Website - API", version="0.1.0", lifespan=lifespan)

# CORS: frontend origins + cookies
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


# every failure leaves as {success: false, message[, details]}
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    log.info("bad request on %s: %s", request.url.path, exc.errors())
    err = ValidationError("Invalid request")
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception("unhandled error on %s", request.url.path)
    err = UnknownError()
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


@app.get("/")
async def root():
    return {"status": "ok"}


@app.get("/health")
async def health():
    # Mongo ping when connected, "skip" before startup finished
    ok = {"status": "ok", "db": "skip"}
    try:
        db = get_db()
    except RuntimeError:
        return ok
    try:
        await db.command("ping")
        ok["db"] = "ok"
    except Exception as e:
        ok["db"] = f"error: {e}"
    return ok


# prefixes live in each router file
app.include_router(photo_router)
app.include_router(chat_router)

# uploaded images, e.g. /uploads/1700000000000-1a2b3c4d-team.jpg
app.mount(URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")
