# app/services/utils.py
# upload file name sanitizing
# - "My Photo (1).JPG" -> "My_Photo_1_.JPG"
# - path parts dropped, so a stored name never leaves the upload dir

from __future__ import annotations
import re
import unicodedata

MAX_NAME_LEN = 100
FALLBACK_NAME = "upload"

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")
_REPEAT = re.compile(r"_{2,}")

def _nfkc(s: str) -> str:
    return unicodedata.normalize("NFKC", s or "")

def sanitize_filename(name: str | None) -> str:

    # original upload name -> safe file name
    # 1) NFKC -> basename only (both / and \ separators)
    # 2) whitespace and unsafe chars -> "_", collapse repeats
    # 3) strip leading dots/underscores (no hidden files), cap length

    s = _nfkc((name or "").strip())
    s = re.split(r"[\\/]", s)[-1]

    s = re.sub(r"\s+", "_", s)
    s = _UNSAFE.sub("_", s)
    s = _REPEAT.sub("_", s)
    s = s.lstrip("._")

    if len(s) > MAX_NAME_LEN:
        # keep the extension when cutting
        stem, dot, ext = s.rpartition(".")
        if dot and 0 < len(ext) <= 10:
            s = stem[: MAX_NAME_LEN - len(ext) - 1] + "." + ext
        else:
            s = s[:MAX_NAME_LEN]

    return s or FALLBACK_NAME
