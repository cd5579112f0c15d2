import re
from pathlib import Path

_RESERVED = re.compile(r'[\\/:*?"<>|]')


def safe_name(s: str) -> str:
    s = re.sub(r'[\\/:*?"<>|]+', " ", s).strip()
    s = re.sub(r"\s+", " ", s)
    return s or "Unnamed"


def has_reserved_chars(name: str) -> bool:
    return bool(_RESERVED.search(name))


def existing_dir(path: str | None) -> Path | None:
    """Folder to open in the file manager: the path itself or its nearest existing parent."""
    if not path or not path.strip():
        return None
    p = Path(path.strip()).expanduser()
    for candidate in (p, *p.parents):
        if candidate.is_dir():
            return candidate
    return None
