# shared dependencies (service wiring for routes; tests override these)
from fastapi import Depends

from app.core.config import settings
from app.db.indexes import PHOTOS
from app.db.init import get_db
from app.services.file_store import FileStore
from app.services.gallery import GalleryService

def get_file_store() -> FileStore:
    return FileStore(settings.UPLOAD_DIR)

def get_gallery_service(files: FileStore = Depends(get_file_store)) -> GalleryService:
    # raises RuntimeError if Mongo is not up yet
    return GalleryService(get_db()[PHOTOS], files)
