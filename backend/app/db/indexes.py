# photo collection indexes
# ensure_indexes() is awaited once from app startup.

from __future__ import annotations
from typing import Any, Dict, List, Tuple

from app.db.init import get_db

PHOTOS = "photos"


async def ensure_index(coll, name: str, keys: List[Tuple[str, int]], **options: Any) -> bool:
    """
    Create the index unless one with the same name and key pattern exists.
    - same name, different keys/unique flag: drop and recreate
    Returns True when the index was (re)created.
    """
    # motor: index_information() is async
    existing: Dict[str, Dict[str, Any]] = await coll.index_information()

    if name in existing:
        idx = existing[name]  # e.g. {'v': 2, 'key': [('uploadedAt', -1), ('_id', -1)]}
        same_keys = [tuple(k) for k in idx.get("key", [])] == [tuple(k) for k in keys]
        same_unique = bool(idx.get("unique", False)) == bool(options.get("unique", False))
        if same_keys and same_unique:
            return False
        await coll.drop_index(name)

    await coll.create_index(keys, name=name, **options)
    return True


async def ensure_indexes():
    db = get_db()

    # listing is always newest first
    await ensure_index(db[PHOTOS], "uploadedAt_-1__id_-1", [("uploadedAt", -1), ("_id", -1)])
