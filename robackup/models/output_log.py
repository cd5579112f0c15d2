# robackup/models/output_log.py
from dataclasses import dataclass
from enum import Enum

from .exit_codes import describe_exit_code


class OutputChannel(Enum):
    STDOUT = "stdout"
    STDERR = "stderr"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class OutputLine:
    channel: OutputChannel
    text: str


@dataclass(frozen=True)
class RunResult:
    code: int | None
    success: bool
    cancelled: bool = False


def completion_line(result: RunResult) -> OutputLine:
    info = describe_exit_code(result.code)
    return OutputLine(OutputChannel(info.status), f"\n--- Finished with code {result.code}: {info.message} ---\n")


def spawn_error_line(message: str) -> OutputLine:
    return OutputLine(OutputChannel.ERROR, f"Error: {message}\n")


class OutputLog:
    """Append-only record of everything shown in the console for one run.

    Nothing is dropped automatically; only clear() removes lines.
    """

    def __init__(self):
        self._lines: list[OutputLine] = []

    def append(self, channel: OutputChannel, text: str) -> OutputLine:
        line = OutputLine(channel, text)
        self._lines.append(line)
        return line

    def add(self, line: OutputLine) -> OutputLine:
        self._lines.append(line)
        return line

    def clear(self) -> None:
        self._lines.clear()

    @property
    def lines(self) -> tuple[OutputLine, ...]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self):
        return iter(self._lines)
