# robackup/utils/profiles.py
import json
import logging
from pathlib import Path

from ..models.job import JobConfiguration
from .paths import has_reserved_chars

log = logging.getLogger(__name__)

PROFILE_SUFFIX = ".json"


class ProfileError(Exception):
    """A stored profile could not be read or written."""


class InvalidProfileName(ProfileError, ValueError):
    pass


class ProfileStore:
    """Named job configurations, one JSON file per profile."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def _path_for(self, name: str) -> Path:
        name = (name or "").strip()
        if not name or has_reserved_chars(name) or name in {".", ".."}:
            raise InvalidProfileName(f"Invalid profile name: {name!r}")
        return self.directory / f"{name}{PROFILE_SUFFIX}"

    def names(self) -> list[str]:
        if not self.directory.is_dir():
            return []
        return sorted(p.stem for p in self.directory.glob(f"*{PROFILE_SUFFIX}") if p.is_file())

    def save(self, name: str, config: JobConfiguration) -> Path:
        p = self._path_for(name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            p.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            raise ProfileError(f"Could not save profile {name!r}: {e}") from e
        log.info("Saved profile %r to %s", name, p)
        return p

    def _existing(self, name: str) -> Path | None:
        # names that cannot be saved cannot exist either
        try:
            p = self._path_for(name)
        except InvalidProfileName:
            return None
        return p if p.exists() else None

    def load(self, name: str) -> JobConfiguration | None:
        if (p := self._existing(name)) is None:
            return None
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("profile root is not an object")
            return JobConfiguration.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            log.warning("Profile %r at %s is unreadable: %s", name, p, e)
            raise ProfileError(f"Could not load profile {name!r}: {e}") from e

    def delete(self, name: str) -> bool:
        if (p := self._existing(name)) is None:
            return False
        try:
            p.unlink()
        except OSError as e:
            raise ProfileError(f"Could not delete profile {name!r}: {e}") from e
        log.info("Deleted profile %r", name)
        return True
