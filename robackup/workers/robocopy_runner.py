# robackup/workers/robocopy_runner.py
import codecs
import logging
import sys
from concurrent.futures import Future

from PySide6.QtCore import QObject, QProcess, Signal

from ..models.exit_codes import is_success
from ..models.output_log import OutputChannel, OutputLine, RunResult

log = logging.getLogger(__name__)


class AlreadyRunning(RuntimeError):
    pass


class SpawnFailure(RuntimeError):
    pass


class _Run:
    def __init__(self, proc: QProcess, encoding: str):
        self.proc: QProcess | None = proc
        self.future: Future = Future()
        self.cancelled = False
        self.decoders = {
            OutputChannel.STDOUT: codecs.getincrementaldecoder(encoding)(errors="replace"),
            OutputChannel.STDERR: codecs.getincrementaldecoder(encoding)(errors="replace"),
        }


class RobocopyRunner(QObject):
    """Runs one robocopy process at a time and streams its output.

    Subscribers connect to the signals and disconnect with
    ``signal.disconnect(slot)``; the runner keeps no other listener list.
    Output chunks are forwarded as they arrive and are not split into lines.
    """

    output = Signal(object)     # OutputLine
    completed = Signal(object)  # RunResult
    failed = Signal(str)        # spawn error message

    def __init__(self, executable: str = "robocopy", encoding: str = "utf-8", parent=None):
        super().__init__(parent)
        self.executable = executable
        self.encoding = encoding
        self._run: _Run | None = None
        # closed processes, released on the next start() or shutdown()
        self._closed: list[_Run] = []

    def is_running(self) -> bool:
        return self._run is not None

    def start(self, args: list[str]) -> Future:
        if self._run is not None:
            raise AlreadyRunning("A robocopy job is already running")

        codecs.lookup(self.encoding)  # LookupError for an unknown encoding, nothing spawned yet
        self._release_closed()
        proc = QProcess(self)
        proc.setProcessChannelMode(QProcess.ProcessChannelMode.SeparateChannels)
        run = _Run(proc, self.encoding)
        self._run = run

        proc.readyReadStandardOutput.connect(lambda: self._read(run, OutputChannel.STDOUT))
        proc.readyReadStandardError.connect(lambda: self._read(run, OutputChannel.STDERR))
        proc.finished.connect(lambda code, status: self._on_finished(run, code, status))
        proc.errorOccurred.connect(lambda err: self._on_error(run, err))

        log.info("Starting %s with %d argument(s): %s", self.executable, len(args), args)
        proc.start(self.executable, [str(a) for a in args])
        return run.future

    def cancel(self) -> bool:
        if (run := self._run) is None:
            return False
        run.cancelled = True
        self._run = None
        # Console programs ignore the polite close terminate() sends on Windows
        if sys.platform == "win32":
            run.proc.kill()
        else:
            run.proc.terminate()
        log.info("Cancellation requested (pid %s)", run.proc.processId())
        return True

    def shutdown(self, timeout_ms: int = 3000) -> None:
        if (run := self._run) is not None:
            self.cancel()
            if not run.proc.waitForFinished(timeout_ms):
                log.warning("robocopy did not exit within %d ms, killing it", timeout_ms)
                run.proc.kill()
                run.proc.waitForFinished(timeout_ms)
        self._release_closed()

    def _release_closed(self) -> None:
        # Never called from inside a process's own signal handlers
        while self._closed:
            run = self._closed.pop()
            proc, run.proc = run.proc, None
            for sig in (proc.readyReadStandardOutput, proc.readyReadStandardError,
                        proc.finished, proc.errorOccurred):
                sig.disconnect()
            proc.setParent(None)
            del proc

    def _retire(self, run: _Run) -> None:
        if self._run is run:
            self._run = None
        if run not in self._closed:
            self._closed.append(run)

    def _read(self, run: _Run, channel: OutputChannel) -> None:
        if channel is OutputChannel.STDOUT:
            data = bytes(run.proc.readAllStandardOutput())
        else:
            data = bytes(run.proc.readAllStandardError())
        if text := run.decoders[channel].decode(data):
            self.output.emit(OutputLine(channel, text))

    def _flush(self, run: _Run) -> None:
        for channel in (OutputChannel.STDOUT, OutputChannel.STDERR):
            self._read(run, channel)
            if tail := run.decoders[channel].decode(b"", final=True):
                self.output.emit(OutputLine(channel, tail))

    def _on_finished(self, run: _Run, exit_code: int, exit_status) -> None:
        self._flush(run)
        self._retire(run)
        code = exit_code if exit_status == QProcess.ExitStatus.NormalExit else None
        result = RunResult(code=code, success=is_success(code), cancelled=run.cancelled)
        log.info("robocopy finished: code=%s success=%s cancelled=%s", code, result.success, run.cancelled)
        self.completed.emit(result)
        if not run.future.done():
            run.future.set_result(result)

    def _on_error(self, run: _Run, error) -> None:
        if error != QProcess.ProcessError.FailedToStart:
            # crashes and read errors still end in finished()
            log.debug("QProcess reported %s: %s", error, run.proc.errorString())
            return
        message = f"Could not start {self.executable}: {run.proc.errorString()}"
        log.error(message)
        self._retire(run)
        self.failed.emit(message)
        if not run.future.done():
            run.future.set_exception(SpawnFailure(message))
