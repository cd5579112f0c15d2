# robackup/models/job.py
from dataclasses import dataclass, field
from typing import Union

# bool | int | str; bool must be checked before int since bool subclasses int
OptionValue = Union[bool, int, str]

SIMULATE_FLAG = "/L"
MULTILINE_FLAGS = ("/XF", "/XD", "/IF")  # exclude files, exclude dirs, include files


def empty_text_options() -> dict[str, str]:
    return {flag: "" for flag in MULTILINE_FLAGS}


@dataclass
class JobConfiguration:
    source_path: str = ""
    destination_path: str = ""
    options: dict[str, OptionValue] = field(default_factory=dict)
    text_options: dict[str, str] = field(default_factory=empty_text_options)
    simulate_only: bool = True

    def to_dict(self) -> dict:
        """Profile record layout, shared with older profile files."""
        return {
            "sourcePath": self.source_path,
            "destPath": self.destination_path,
            "options": dict(self.options),
            "textOptions": dict(self.text_options),
            "simulationMode": self.simulate_only,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JobConfiguration":
        """Build from a profile record; raises ValueError on wrongly typed fields."""
        source = _typed(data, "sourcePath", str, "")
        dest = _typed(data, "destPath", str, "")
        simulate = _typed(data, "simulationMode", bool, True)
        options = _typed(data, "options", dict, {})
        text_options = _typed(data, "textOptions", dict, {})

        for flag, value in options.items():
            if not isinstance(value, (bool, int, str)):
                raise ValueError(f"option {flag!r} has unsupported value {value!r}")
        for flag, value in text_options.items():
            if not isinstance(value, str):
                raise ValueError(f"text option {flag!r} must be a string, got {value!r}")

        return cls(
            source_path=source,
            destination_path=dest,
            options=dict(options),
            text_options={**empty_text_options(), **text_options},
            simulate_only=simulate,
        )


def _typed(data: dict, key: str, kind: type, default):
    # missing or null fields fall back to the default
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kind):
        raise ValueError(f"{key} must be {kind.__name__}, got {type(value).__name__}")
    return value
