# app/db/models/schemas.py
# Pydantic models for the HTTP surface
# PhotoOut: photo record as the frontend sees it (_id as string)
# ChatIn/ChatOut: AI chat proxy body
from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime

# # photo record (list/upload response)
class PhotoOut(BaseModel):
    # serialized as "_id" to match the Mongo document shape
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str = "Untitled"
    description: str = ""
    category: str = "general"
    imageUrl: str
    uploadedAt: datetime

    @classmethod
    def from_doc(cls, doc: Mapping[str, Any]) -> "PhotoOut":
        return cls(
            id=str(doc["_id"]),
            title=doc.get("title") or "Untitled",
            description=doc.get("description") or "",
            category=doc.get("category") or "general",
            imageUrl=doc.get("imageUrl", ""),
            uploadedAt=doc["uploadedAt"],
        )

class UploadOut(BaseModel):
    success: bool = True
    photo: PhotoOut

class DeleteOut(BaseModel):
    success: bool = True

# # AI chat
class ChatIn(BaseModel):
    message: Any = ""
    # {"role": ..., "content": ...} turns, forwarded as given
    history: Optional[List[Dict[str, Any]]] = None

class ChatOut(BaseModel):
    success: bool = True
    answer: str

class ErrorOut(BaseModel):
    success: bool = False
    message: str
    details: Optional[str] = None
