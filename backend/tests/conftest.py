"""Shared pytest fixtures for the club website API tests.

The Mongo collection is replaced by a small in-memory fake that supports the
handful of Motor calls the gallery uses, so no database server is needed.
"""

from __future__ import annotations

import copy
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.staticfiles import StaticFiles
from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.deps import get_file_store, get_gallery_service
from app.main import app
from app.services.file_store import FileStore
from app.services.gallery import GalleryService


class FakeCursor:
    """Enough of ``AsyncIOMotorCursor`` for ``find().sort().to_list()``."""

    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = docs

    def sort(self, keys, direction: Optional[int] = None) -> "FakeCursor":
        if isinstance(keys, str):
            keys = [(keys, direction or 1)]
        # stable sorts, last key first
        for field, order in reversed(list(keys)):
            self._docs.sort(key=lambda d: d.get(field), reverse=order < 0)
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        docs = self._docs if length is None else self._docs[:length]
        return [copy.deepcopy(d) for d in docs]


class FakeCollection:
    """In-memory stand-in for an ``AsyncIOMotorCollection``."""

    def __init__(self):
        self.docs: List[Dict[str, Any]] = []
        self.indexes: Dict[str, Dict[str, Any]] = {"_id_": {"key": [("_id", 1)]}}
        self.fail_insert = False

    @staticmethod
    def _matches(doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
        return all(doc.get(k) == v for k, v in query.items())

    async def insert_one(self, doc: Dict[str, Any]):
        if self.fail_insert:
            raise RuntimeError("insert failed")
        stored = copy.deepcopy(doc)
        stored.setdefault("_id", ObjectId())
        self.docs.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    def find(self, query: Optional[Dict[str, Any]] = None) -> FakeCursor:
        query = query or {}
        return FakeCursor([d for d in self.docs if self._matches(d, query)])

    async def find_one(self, query: Dict[str, Any]):
        for d in self.docs:
            if self._matches(d, query):
                return copy.deepcopy(d)
        return None

    async def delete_one(self, query: Dict[str, Any]):
        for i, d in enumerate(self.docs):
            if self._matches(d, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def count_documents(self, query: Dict[str, Any]) -> int:
        return len([d for d in self.docs if self._matches(d, query)])

    async def index_information(self) -> Dict[str, Dict[str, Any]]:
        return copy.deepcopy(self.indexes)

    async def create_index(self, keys, name: str, **options: Any) -> str:
        self.indexes[name] = {"key": list(keys), **options}
        return name

    async def drop_index(self, name: str) -> None:
        del self.indexes[name]


@pytest.fixture
def photos() -> FakeCollection:
    """Empty fake ``photos`` collection."""
    return FakeCollection()


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Temporary upload directory."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def file_store(upload_dir: Path) -> FileStore:
    return FileStore(upload_dir)


@pytest.fixture
def gallery(photos: FakeCollection, file_store: FileStore) -> GalleryService:
    return GalleryService(photos, file_store)


@pytest.fixture
def test_client(gallery: GalleryService, file_store: FileStore, upload_dir: Path, monkeypatch):
    """TestClient with the gallery wired to the fake collection and temp dir.

    The /uploads mount is pointed at the same temp dir so stored files are
    served back. The app lifespan is not entered, so no Mongo connection is
    attempted.
    """
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(upload_dir))
    for route in app.routes:
        if getattr(route, "name", None) == "uploads":
            monkeypatch.setattr(route, "app", StaticFiles(directory=upload_dir))
    app.dependency_overrides[get_file_store] = lambda: file_store
    app.dependency_overrides[get_gallery_service] = lambda: gallery
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def upload(test_client):
    """Helper that posts one image and returns the response."""

    def _upload(name: str = "team photo.jpg", data: bytes = b"\xff\xd8\xff fake jpeg", **fields):
        return test_client.post(
            "/api/upload",
            files={"photo": (name, data, "image/jpeg")},
            data=fields,
        )

    return _upload
