# robackup/utils/settings.py
import json
import logging
from pathlib import Path

log = logging.getLogger(__name__)


# Top directory = folder that contains the `robackup/` package
def _top_dir() -> Path:
    # This file is robackup/utils/settings.py → parents[2] is the folder above robackup/
    return Path(__file__).resolve().parents[2]

APP_SETTINGS_FILE = _top_dir() / "robackup_settings.json"
FALLBACK_SETTINGS_FILE = Path("robackup_settings.json")

DEFAULT_SETTINGS = {
    "robocopy_path": "robocopy",
    "profiles_dir": str(Path.home() / "Robackup" / "profiles"),
    "output_encoding": "utf-8",        # cp850 / cp437 match robocopy's OEM console output on Windows
    "simulate_by_default": True,       # start every session with /L

    # Logging
    "log_level": "INFO",
    "log_file": "",                    # empty → console only

    # layout persistence:
    # "window_geometry": [x, y, w, h],
    # "v_split_sizes": [...],
}


def load_settings(path: Path | None = None) -> dict:
    p = path or APP_SETTINGS_FILE
    if p.exists():
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
            return {**DEFAULT_SETTINGS, **data}
        except (OSError, ValueError) as e:
            log.warning("Settings file %s is unreadable (%s); using defaults", p, e)
    # First run or broken file → write defaults so the file exists in the top dir
    save_settings(DEFAULT_SETTINGS, p)
    return DEFAULT_SETTINGS.copy()


def save_settings(data: dict, path: Path | None = None) -> None:
    p = path or APP_SETTINGS_FILE
    try:
        p.write_text(json.dumps(data, indent=2), encoding="utf-8")
    except OSError as e:
        # Last resort fallback to CWD
        log.warning("Could not write %s (%s); writing %s instead", p, e, FALLBACK_SETTINGS_FILE)
        FALLBACK_SETTINGS_FILE.write_text(json.dumps(data, indent=2), encoding="utf-8")
