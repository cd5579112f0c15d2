# robackup/widgets/console_view.py
from PySide6.QtGui import QColor, QFont, QTextCharFormat, QTextCursor
from PySide6.QtWidgets import QPlainTextEdit

from ..models.output_log import OutputChannel, OutputLine

CHANNEL_COLORS = {
    OutputChannel.STDOUT: "#d4d4d4",
    OutputChannel.STDERR: "#f48771",
    OutputChannel.INFO: "#569cd6",
    OutputChannel.SUCCESS: "#6a9955",
    OutputChannel.WARNING: "#dcdcaa",
    OutputChannel.ERROR: "#f44747",
}

class ConsoleView(QPlainTextEdit):
    """Read-only console; chunks are inserted as-is (they need not end on a line break)."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setUndoRedoEnabled(False)
        self.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.setPlaceholderText("robocopy output will appear here…")
        font = QFont("Consolas"); font.setStyleHint(QFont.Monospace)
        self.setFont(font)
        self.setStyleSheet("QPlainTextEdit { background:#1e1e1e; }")
        self._formats = {}
        for channel, color in CHANNEL_COLORS.items():
            fmt = QTextCharFormat(); fmt.setForeground(QColor(color))
            self._formats[channel] = fmt

    def append_line(self, line: OutputLine):
        bar = self.verticalScrollBar()
        at_bottom = bar.value() >= bar.maximum() - 4
        cur = self.textCursor()
        cur.movePosition(QTextCursor.End)
        # robocopy writes \r for in-place progress; show those as line breaks
        cur.insertText(line.text.replace("\r\n", "\n").replace("\r", "\n"), self._formats[line.channel])
        if at_bottom: bar.setValue(bar.maximum())
