import math
from typing import NamedTuple

from ..models.job import JobConfiguration, MULTILINE_FLAGS, SIMULATE_FLAG


class Token(NamedTuple):
    text: str
    is_path: bool = False


def _with_value(flag: str, value) -> str:
    # Compound tokens like "/LOG:file" keep only the part before the first colon
    prefix = flag.split(":", 1)[0] if ":" in flag else flag
    return f"{prefix}:{value}"


def _option_token(flag: str, value) -> str | None:
    if isinstance(value, bool):
        return flag if value else None
    if isinstance(value, int):
        # 0 is indistinguishable from "unset" (so /R:0 cannot be expressed)
        return _with_value(flag, value) if value > 0 else None
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and value > 0:
            return _with_value(flag, int(value))
        return None
    if isinstance(value, str) and (text := value.strip()):
        return _with_value(flag, text)
    return None


def split_lines(text: str | None) -> list[str]:
    if not text or not isinstance(text, str):
        return []
    return [s for line in text.splitlines() if (s := line.strip())]


def command_tokens(config: JobConfiguration) -> list[Token]:
    tokens: list[Token] = []
    if config.source_path:
        tokens.append(Token(config.source_path, True))
    if config.destination_path:
        tokens.append(Token(config.destination_path, True))

    if config.simulate_only and not config.options.get(SIMULATE_FLAG):
        tokens.append(Token(SIMULATE_FLAG))

    for flag, value in config.options.items():
        if (tok := _option_token(flag, value)) is not None:
            tokens.append(Token(tok))

    for flag in MULTILINE_FLAGS:
        for entry in split_lines(config.text_options.get(flag)):
            tokens.append(Token(flag))
            tokens.append(Token(entry, True))
    return tokens


def build_args(config: JobConfiguration) -> list[str]:
    """Argument vector for robocopy, raw and unquoted (one token per argument)."""
    return [t.text for t in command_tokens(config)]


def format_preview(config: JobConfiguration, executable: str = "robocopy") -> str:
    """Human-readable command line; path arguments are shown in double quotes."""
    parts = [executable]
    parts.extend(f'"{t.text}"' if t.is_path else t.text for t in command_tokens(config))
    return " ".join(parts)
