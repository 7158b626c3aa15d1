# app/services/file_store.py
# uploaded image files on local disk
# - stored name: <epoch ms>-<random token>-<sanitized original name>
# - public url:  /uploads/<stored name>

from __future__ import annotations
import errno
import logging
import time
import uuid
from pathlib import Path

from app.services.utils import sanitize_filename

log = logging.getLogger(__name__)

URL_PREFIX = "/uploads"


class FileStore:
    def __init__(self, root: str | Path):
        self.root = Path(root)

    def ensure_dir(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def make_name(self, original_name: str | None) -> str:
        ms = int(time.time() * 1000)
        return f"{ms}-{uuid.uuid4().hex[:8]}-{sanitize_filename(original_name)}"

    def url_for(self, name: str) -> str:
        return f"{URL_PREFIX}/{name}"

    def path_for(self, image_url: str) -> Path | None:
        """
        /uploads/<name> -> <root>/<name>
        Anything that does not name a file directly inside root gives None.
        """
        if not image_url:
            return None
        name = image_url
        if name.startswith(URL_PREFIX + "/"):
            name = name[len(URL_PREFIX) + 1:]
        name = name.lstrip("/")
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            return None
        return self.root / name

    def save(self, data: bytes, original_name: str | None) -> str:
        # returns the stored name; "xb" so an existing file is never overwritten
        self.ensure_dir()
        for _ in range(5):
            name = self.make_name(original_name)
            try:
                with open(self.root / name, "xb") as fh:
                    fh.write(data)
            except FileExistsError:
                continue
            log.info("stored upload %s (%d bytes)", name, len(data))
            return name
        raise FileExistsError(errno.EEXIST, "could not pick a free file name", str(self.root))

    def remove(self, image_url: str) -> bool:
        """
        Best-effort delete. True when a file was removed.
        Missing file is tolerated (info log), other OS errors are logged as warnings.
        """
        path = self.path_for(image_url)
        if path is None:
            log.info("no local file behind %r, nothing to remove", image_url)
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            log.info("file already absent: %s", path)
            return False
        except OSError as e:
            log.warning("Could not remove file: %s (%s)", path, e)
            return False
        log.info("removed file %s", path)
        return True
