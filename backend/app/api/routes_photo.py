# app/api/routes_photo.py
# photo gallery: upload / list / delete

from __future__ import annotations
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.core.deps import get_gallery_service
from app.core.errors import AppError, UnknownError, ValidationError
from app.db.models.schemas import DeleteOut, ErrorOut, PhotoOut, UploadOut
from app.services.gallery import GalleryService

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["photos"])

# {success: false, message} envelope, see app.main handlers
ERRORS = {
    400: {"model": ErrorOut},
    404: {"model": ErrorOut},
    500: {"model": ErrorOut},
}

@router.post("/upload", response_model=UploadOut, responses={400: ERRORS[400], 500: ERRORS[500]})
async def upload_photo(
    photo: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    gallery: GalleryService = Depends(get_gallery_service),
):
    """
    Multipart upload: "photo" file + optional title/description/category
    """
    # browsers send an empty part with filename="" when nothing was picked
    if photo is None or not photo.filename:
        raise ValidationError("No file uploaded")

    try:
        # zero-byte files are still files and are stored as-is
        data = await photo.read()

        doc = await gallery.upload(
            data,
            photo.filename,
            title=title,
            description=description,
            category=category,
        )
        return UploadOut(photo=PhotoOut.from_doc(doc))
    except AppError:
        raise
    except Exception:
        log.exception("Upload error")
        raise UnknownError("Upload failed")

@router.get("/photos", response_model=List[PhotoOut], responses={500: ERRORS[500]})
async def list_photos(gallery: GalleryService = Depends(get_gallery_service)):
    """
    All photos, newest first (no pagination)
    """
    try:
        docs = await gallery.list()
    except Exception:
        log.exception("List error")
        raise UnknownError("Could not load photos")
    return [PhotoOut.from_doc(d) for d in docs]

@router.delete("/photos/{photo_id}", response_model=DeleteOut, responses=ERRORS)
async def delete_photo(photo_id: str, gallery: GalleryService = Depends(get_gallery_service)):
    """
    Removes the file (best effort) and then the record
    """
    try:
        await gallery.delete(photo_id)
    except AppError:
        raise
    except Exception:
        log.exception("Delete error")
        raise UnknownError("Delete failed")
    return DeleteOut()
