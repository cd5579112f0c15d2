"""Tests for robackup.workers.robocopy_runner.RobocopyRunner.

The current Python interpreter stands in for robocopy: each test passes a
``-c`` script as the argument vector and spins the Qt event loop until the
runner reports completion.
"""
from __future__ import annotations

import gc
import sys

import pytest
from PySide6.QtCore import QProcess

from robackup.models.output_log import OutputChannel
from robackup.workers.robocopy_runner import AlreadyRunning, RobocopyRunner, SpawnFailure

SLEEPER = "import time; print('started', flush=True); time.sleep(30)"


class Recorder:
    def __init__(self, runner: RobocopyRunner):
        self.output = []
        self.completed = []
        self.failed = []
        runner.output.connect(lambda line: self.output.append(line))
        runner.completed.connect(lambda result: self.completed.append(result))
        runner.failed.connect(lambda message: self.failed.append(message))

    def text(self, channel: OutputChannel) -> str:
        return "".join(line.text for line in self.output if line.channel is channel)


@pytest.fixture
def runner(qapp):
    r = RobocopyRunner(sys.executable)
    yield r
    r.shutdown()


def _script(code: str) -> list[str]:
    return ["-u", "-c", code]


def test_successful_run_streams_stdout_and_completes(runner, wait_until) -> None:
    rec = Recorder(runner)
    future = runner.start(_script("print('hello'); print('world')"))

    assert runner.is_running()
    wait_until(future.done)

    result = future.result()
    assert result.code == 0
    assert result.success is True
    assert result.cancelled is False
    assert rec.completed == [result]
    assert rec.text(OutputChannel.STDOUT).splitlines() == ["hello", "world"]
    assert not runner.is_running()


def test_stderr_is_a_separate_channel(runner, wait_until) -> None:
    rec = Recorder(runner)
    future = runner.start(_script("import sys; sys.stderr.write('bad thing\\n')"))
    wait_until(future.done)

    assert "bad thing" in rec.text(OutputChannel.STDERR)
    assert rec.text(OutputChannel.STDOUT) == ""


def test_output_order_within_channel_is_preserved(runner, wait_until) -> None:
    rec = Recorder(runner)
    future = runner.start(_script("for i in range(200): print(i, flush=True)"))
    wait_until(future.done)

    assert rec.text(OutputChannel.STDOUT).split() == [str(i) for i in range(200)]


@pytest.mark.parametrize("code,success", [(1, True), (5, True), (7, True), (8, False), (16, False)])
def test_exit_code_classification(runner, wait_until, code: int, success: bool) -> None:
    future = runner.start(_script(f"import sys; sys.exit({code})"))
    wait_until(future.done)

    result = future.result()
    assert result.code == code
    assert result.success is success


def test_start_while_running_is_rejected_without_side_effects(runner, wait_until) -> None:
    rec = Recorder(runner)
    runner.start(_script(SLEEPER))
    wait_until(lambda: "started" in rec.text(OutputChannel.STDOUT))
    current = runner._run
    emitted = len(rec.output)

    with pytest.raises(AlreadyRunning):
        runner.start(_script("print('second')"))

    assert runner._run is current
    assert runner.is_running()
    assert len(rec.output) == emitted
    assert rec.completed == [] and rec.failed == []


def test_cancel_when_idle_returns_false(runner) -> None:
    assert runner.cancel() is False
    assert not runner.is_running()


def test_cancel_clears_handle_immediately(runner, wait_until) -> None:
    rec = Recorder(runner)
    future = runner.start(_script(SLEEPER))
    wait_until(lambda: "started" in rec.text(OutputChannel.STDOUT))

    assert runner.cancel() is True
    assert not runner.is_running()
    assert runner.cancel() is False

    # the process closes later; trailing events are allowed
    wait_until(future.done)
    result = future.result()
    assert result.cancelled is True
    assert result.success is False


def test_new_run_can_start_right_after_cancel(runner, wait_until) -> None:
    rec = Recorder(runner)
    first = runner.start(_script(SLEEPER))
    wait_until(lambda: "started" in rec.text(OutputChannel.STDOUT))
    runner.cancel()

    second = runner.start(_script("print('again')"))
    wait_until(lambda: first.done() and second.done())

    assert second.result().code == 0
    assert not second.result().cancelled
    assert not runner.is_running()


def test_spawn_failure_reports_error_and_resets(qapp, wait_until) -> None:
    runner = RobocopyRunner("robackup-no-such-program-xyz")
    rec = Recorder(runner)

    future = runner.start(["C:\\src", "D:\\dst"])
    wait_until(future.done)

    assert isinstance(future.exception(), SpawnFailure)
    assert len(rec.failed) == 1
    assert "robackup-no-such-program-xyz" in rec.failed[0]
    assert rec.completed == []
    assert not runner.is_running()

    runner.executable = sys.executable
    again = runner.start(_script("pass"))
    wait_until(again.done)
    assert again.result().success


def test_unknown_encoding_fails_before_spawning(qapp) -> None:
    runner = RobocopyRunner(sys.executable, encoding="no-such-codec")
    with pytest.raises(LookupError):
        runner.start(_script("pass"))
    assert not runner.is_running()


def test_output_is_decoded_with_configured_encoding(qapp, wait_until) -> None:
    runner = RobocopyRunner(sys.executable, encoding="cp850")
    rec = Recorder(runner)
    future = runner.start(_script("import sys; sys.stdout.buffer.write(bytes([0x82, 0x0a]))"))
    wait_until(future.done)

    assert rec.text(OutputChannel.STDOUT) == "é\n"


def test_independent_runners_do_not_share_state(qapp, wait_until) -> None:
    a = RobocopyRunner(sys.executable)
    b = RobocopyRunner(sys.executable)
    fa = a.start(_script(SLEEPER))

    assert a.is_running()
    assert not b.is_running()
    fb = b.start(_script("pass"))
    wait_until(fb.done)

    a.cancel()
    wait_until(fa.done)
    assert fb.result().success


def test_runners_can_be_dropped_after_their_runs(qapp, wait_until) -> None:
    for i in range(3):
        runner = RobocopyRunner(sys.executable)
        rec = Recorder(runner)
        future = runner.start(_script(f"print('run {i}')"))
        wait_until(future.done)
        assert rec.text(OutputChannel.STDOUT).strip() == f"run {i}"

        del runner, rec
        gc.collect()
        qapp.processEvents()


def test_closed_processes_are_released_on_next_start(runner, wait_until) -> None:
    first = runner.start(_script("pass"))
    wait_until(first.done)
    assert len(runner._closed) == 1

    second = runner.start(_script("pass"))
    assert len(runner._closed) == 0
    wait_until(second.done)

    runner.shutdown()
    assert runner._closed == []
    assert runner.findChildren(QProcess) == []
