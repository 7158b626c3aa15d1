# app/db/init.py
# Mongo connection helpers (motor, used from startup/shutdown hooks)

from __future__ import annotations
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.core.config import settings

_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None

async def init_db() -> AsyncIOMotorDatabase:
    # called once at startup; builds the process-wide connection
    global _client, _db
    if _db is not None:
        return _db

    # tz_aware: uploadedAt comes back as UTC, same as it went in
    _client = AsyncIOMotorClient(settings.MONGO_URI, tz_aware=True)
    _db = _client[settings.MONGO_DB]

    # raises if the server is not reachable yet
    await _db.command("ping")
    return _db

def get_db() -> AsyncIOMotorDatabase:
    # handle used by routes/services. raises before init
    if _db is None:
        raise RuntimeError("MongoDB is not initialized yet.")
    return _db

async def close_db() -> None:
    # close on shutdown
    global _client, _db
    if _client:
        _client.close()
    _client = None
    _db = None
