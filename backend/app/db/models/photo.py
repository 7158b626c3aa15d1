# app/db/models/photo.py
from pydantic import BaseModel, Field
from datetime import datetime, timezone

def _utcnow() -> datetime:
    # Mongo keeps milliseconds; truncate so the returned record matches what is stored
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)

# stored document (the _id is assigned by Mongo on insert)
class PhotoDoc(BaseModel):
    title: str = "Untitled"
    description: str = ""
    category: str = "general"
    imageUrl: str
    uploadedAt: datetime = Field(default_factory=_utcnow)
