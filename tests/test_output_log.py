"""Tests for robackup.models.output_log: the append-only console record."""
from __future__ import annotations

from robackup.models.output_log import (
    OutputChannel,
    OutputLine,
    OutputLog,
    RunResult,
    completion_line,
    spawn_error_line,
)


def test_append_keeps_order_and_channels() -> None:
    log = OutputLog()
    log.append(OutputChannel.INFO, "> Running\n")
    log.add(OutputLine(OutputChannel.STDOUT, "chunk one"))
    log.add(OutputLine(OutputChannel.STDERR, "oops"))

    assert [line.channel for line in log] == [OutputChannel.INFO, OutputChannel.STDOUT, OutputChannel.STDERR]
    assert log.lines[1].text == "chunk one"


def test_log_is_never_truncated() -> None:
    log = OutputLog()
    for i in range(20_000):
        log.append(OutputChannel.STDOUT, f"{i}\n")
    assert len(log) == 20_000
    assert log.lines[0].text == "0\n"


def test_clear_empties_log() -> None:
    log = OutputLog()
    log.append(OutputChannel.STDOUT, "x")
    log.clear()
    assert len(log) == 0
    assert log.lines == ()


def test_lines_snapshot_is_immutable_view() -> None:
    log = OutputLog()
    log.append(OutputChannel.STDOUT, "a")
    snapshot = log.lines
    log.append(OutputChannel.STDOUT, "b")
    assert len(snapshot) == 1


def test_completion_line_uses_exit_code_class() -> None:
    assert completion_line(RunResult(code=1, success=True)).channel is OutputChannel.SUCCESS
    assert completion_line(RunResult(code=5, success=True)).channel is OutputChannel.WARNING
    assert completion_line(RunResult(code=16, success=False)).channel is OutputChannel.ERROR

    line = completion_line(RunResult(code=99, success=False))
    assert line.channel is OutputChannel.INFO
    assert "99" in line.text


def test_completion_line_has_no_cancelled_form() -> None:
    # the window writes the cancellation line itself when the user cancels
    line = completion_line(RunResult(code=None, success=False, cancelled=True))
    assert "Cancelled" not in line.text
    assert line.channel is OutputChannel.INFO


def test_spawn_error_line() -> None:
    line = spawn_error_line("robocopy: not found")
    assert line.channel is OutputChannel.ERROR
    assert "robocopy: not found" in line.text
