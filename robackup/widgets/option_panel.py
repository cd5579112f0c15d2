# robackup/widgets/option_panel.py
from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget, QScrollArea, QVBoxLayout, QGridLayout, QFormLayout, QHBoxLayout, QCheckBox,
    QSpinBox, QLineEdit, QPlainTextEdit, QPushButton, QToolButton, QLabel, QFileDialog
)

from ..models.options import OptionDef, OptionKind

DESTRUCTIVE_STYLE = "color:#d9822b; font-weight:600;"


class _CharSetEditor(QWidget):
    changed = Signal(str)

    def __init__(self, charset: str, parent=None):
        super().__init__(parent)
        self.charset = charset
        row = QHBoxLayout(self); row.setContentsMargins(0, 0, 0, 0)
        self.buttons: dict[str, QToolButton] = {}
        for ch in charset:
            b = QToolButton(); b.setText(ch); b.setCheckable(True); b.setFixedWidth(28)
            b.toggled.connect(lambda _checked: self.changed.emit(self.value()))
            row.addWidget(b); self.buttons[ch] = b
        row.addStretch()

    def value(self) -> str:
        return "".join(ch for ch in self.charset if self.buttons[ch].isChecked())

    def set_value(self, value: str):
        for ch, b in self.buttons.items():
            b.blockSignals(True); b.setChecked(ch in (value or "")); b.blockSignals(False)


class OptionPanel(QScrollArea):
    """One catalog section rendered as editors; reports edits per flag."""

    optionChanged = Signal(str, object)   # flag, value (None → unset)
    textOptionChanged = Signal(str, str)  # multiline flag, raw text

    def __init__(self, options: list[OptionDef], parent=None):
        super().__init__(parent)
        self.setWidgetResizable(True)
        self.defs = options
        self.editors: dict[str, QWidget] = {}

        body = QWidget(); v = QVBoxLayout(body)
        toggles = QGridLayout(); form = QFormLayout()
        n_toggles = 0
        for opt in options:
            if opt.kind is OptionKind.TOGGLE:
                cb = self._make_toggle(opt)
                toggles.addWidget(cb, n_toggles // 2, n_toggles % 2); n_toggles += 1
            else:
                label = QLabel(f"<b>{opt.flag}</b> {opt.label}"); label.setToolTip(opt.description)
                form.addRow(label, self._make_editor(opt))
        v.addLayout(toggles); v.addLayout(form); v.addStretch()
        self.setWidget(body)

    def _make_toggle(self, opt: OptionDef) -> QCheckBox:
        text = f"{opt.flag}  {opt.label}" + ("  ⚠" if opt.destructive else "")
        cb = QCheckBox(text); cb.setToolTip(opt.description)
        if opt.destructive: cb.setStyleSheet(DESTRUCTIVE_STYLE)
        cb.toggled.connect(lambda on, f=opt.flag: self.optionChanged.emit(f, True if on else None))
        self.editors[opt.flag] = cb
        return cb

    def _make_editor(self, opt: OptionDef) -> QWidget:
        f = opt.flag
        if opt.kind is OptionKind.NUMBER:
            w = QSpinBox()
            # 0 is shown as "not set"; robocopy never receives flag:0
            w.setRange(0, opt.maximum if opt.maximum is not None else 999999)
            w.setSpecialValueText("— not set —")
            w.setToolTip(opt.description)
            w.valueChanged.connect(lambda n: self.optionChanged.emit(f, self._clamp(opt, n)))
            self.editors[f] = w
            return w
        if opt.kind is OptionKind.CHARSET:
            w = _CharSetEditor(opt.charset); w.setToolTip(opt.description)
            w.changed.connect(lambda s: self.optionChanged.emit(f, s or None))
            self.editors[f] = w
            return w
        if opt.kind is OptionKind.MULTILINE:
            w = QPlainTextEdit(); w.setPlaceholderText(opt.placeholder); w.setToolTip(opt.description)
            w.setFixedHeight(90)
            w.textChanged.connect(lambda: self.textOptionChanged.emit(f, w.toPlainText()))
            self.editors[f] = w
            return w

        edit = QLineEdit(); edit.setPlaceholderText(opt.placeholder); edit.setToolTip(opt.description)
        edit.textChanged.connect(lambda s: self.optionChanged.emit(f, s.strip() or None))
        self.editors[f] = edit
        if opt.kind is not OptionKind.FILE:
            return edit
        row_w = QWidget(); row = QHBoxLayout(row_w); row.setContentsMargins(0, 0, 0, 0)
        btn = QPushButton("Browse…"); btn.clicked.connect(lambda: self._browse_file(edit, opt))
        row.addWidget(edit); row.addWidget(btn)
        return row_w

    @staticmethod
    def _clamp(opt: OptionDef, n: int):
        if n <= 0: return None
        if opt.minimum is not None and n < opt.minimum: return opt.minimum
        return n

    def _browse_file(self, edit: QLineEdit, opt: OptionDef):
        f, _ = QFileDialog.getSaveFileName(self, f"Choose file for {opt.flag}", edit.text() or "robocopy.log",
                                           "Log files (*.log *.txt);;All files (*)")
        if f: edit.setText(f)

    def load(self, options: dict, text_options: dict):
        """Show the given values without emitting change signals."""
        for opt in self.defs:
            w = self.editors[opt.flag]
            w.blockSignals(True)
            try:
                if opt.kind is OptionKind.MULTILINE:
                    w.setPlainText(text_options.get(opt.flag, "") or "")
                    continue
                value = options.get(opt.flag)
                if opt.kind is OptionKind.TOGGLE:
                    w.setChecked(value is True)
                elif opt.kind is OptionKind.NUMBER:
                    try: w.setValue(int(value or 0))
                    except (TypeError, ValueError): w.setValue(0)
                elif opt.kind is OptionKind.CHARSET:
                    w.set_value(value if isinstance(value, str) else "")
                else:
                    w.setText(value if isinstance(value, str) else "")
            finally:
                w.blockSignals(False)
