# app/services/gallery.py
# photo gallery: file store + "photos" collection kept together
# upload -> file then record, list -> newest first, delete -> file then record

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from starlette.concurrency import run_in_threadpool

from app.core.errors import NotFoundError, UnknownError, ValidationError
from app.db.models.photo import PhotoDoc
from app.services.file_store import FileStore

log = logging.getLogger(__name__)


def _or_default(value: Optional[str], default: str) -> str:
    # blank form fields fall back to the record defaults
    if value is None:
        return default
    value = value.strip()
    return value or default


class GalleryService:
    def __init__(self, photos: AsyncIOMotorCollection, files: FileStore):
        self.photos = photos
        self.files = files

    async def upload(
        self,
        data: Optional[bytes],
        filename: Optional[str],
        title: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Store the file, then insert the record that points to it.
        Returns the inserted document (with _id).
        """
        if data is None:
            raise ValidationError("No file uploaded")

        # disk writes run off the event loop
        name = await run_in_threadpool(self.files.save, data, filename)
        image_url = self.files.url_for(name)

        doc = PhotoDoc(
            title=_or_default(title, "Untitled"),
            description=(description or "").strip(),
            category=_or_default(category, "general"),
            imageUrl=image_url,
        ).model_dump()

        try:
            result = await self.photos.insert_one(doc)
        except Exception:
            # record never existed, so the file must not outlive it
            log.exception("photo insert failed, removing %s", image_url)
            await run_in_threadpool(self.files.remove, image_url)
            raise UnknownError("Upload failed")

        doc["_id"] = result.inserted_id
        log.info("photo %s uploaded (%s)", result.inserted_id, image_url)
        return doc

    async def list(self) -> List[Dict[str, Any]]:
        cursor = self.photos.find({}).sort([("uploadedAt", -1), ("_id", -1)])
        return await cursor.to_list(length=None)

    async def delete(self, photo_id: str) -> None:
        if not ObjectId.is_valid(photo_id):
            raise ValidationError("Invalid id")
        oid = ObjectId(photo_id)

        photo = await self.photos.find_one({"_id": oid})
        if not photo:
            raise NotFoundError("Not found")

        # disk first; a failure here never blocks the catalog delete
        if photo.get("imageUrl"):
            await run_in_threadpool(self.files.remove, photo["imageUrl"])

        result = await self.photos.delete_one({"_id": oid})
        if result.deleted_count == 0:
            # lost a race with another delete of the same id
            raise NotFoundError("Not found")
        log.info("photo %s deleted", photo_id)
