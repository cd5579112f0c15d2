# robackup/dialogs/prefs.py
import codecs

from PySide6.QtWidgets import (
    QDialog, QDialogButtonBox, QFormLayout, QHBoxLayout, QLabel, QVBoxLayout,
    QLineEdit, QPushButton, QComboBox, QCheckBox, QFileDialog, QMessageBox
)

ENCODINGS = ["utf-8", "cp850", "cp437", "cp1252", "utf-16-le"]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

class PrefsDialog(QDialog):
    def __init__(self, settings: dict, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Preferences")
        self.settings = settings
        self.setMinimumWidth(600)

        self.rc_edit = QLineEdit(self.settings["robocopy_path"])
        btn_browse_rc = QPushButton("Browse…"); btn_browse_rc.clicked.connect(self._browse_rc)
        self.prof_edit = QLineEdit(self.settings["profiles_dir"])
        btn_browse_prof = QPushButton("Browse…"); btn_browse_prof.clicked.connect(self._browse_prof)

        self.enc_combo = QComboBox(); self.enc_combo.setEditable(True); self.enc_combo.addItems(ENCODINGS)
        self.enc_combo.setCurrentText(self.settings.get("output_encoding", "utf-8"))
        enc_hint = QLabel("(Windows consoles usually print in cp850 or cp437)")

        self.chk_simulate = QCheckBox("Start new sessions in simulation mode (/L)")
        self.chk_simulate.setChecked(self.settings.get("simulate_by_default", True))

        self.level_combo = QComboBox(); self.level_combo.addItems(LOG_LEVELS)
        self.level_combo.setCurrentText(str(self.settings.get("log_level", "INFO")).upper())
        self.log_edit = QLineEdit(self.settings.get("log_file", ""))
        self.log_edit.setPlaceholderText("leave blank to log to the console only")
        btn_browse_log = QPushButton("Browse…"); btn_browse_log.clicked.connect(self._browse_log)

        form = QFormLayout()
        row_rc = QHBoxLayout(); row_rc.addWidget(self.rc_edit); row_rc.addWidget(btn_browse_rc)
        form.addRow("robocopy path:", row_rc)
        row_prof = QHBoxLayout(); row_prof.addWidget(self.prof_edit); row_prof.addWidget(btn_browse_prof)
        form.addRow("Profiles folder:", row_prof)
        form.addRow("Output encoding:", self.enc_combo); form.addRow("", enc_hint)
        form.addRow("", self.chk_simulate)
        form.addRow("Log level:", self.level_combo)
        row_log = QHBoxLayout(); row_log.addWidget(self.log_edit); row_log.addWidget(btn_browse_log)
        form.addRow("Application log file:", row_log)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self._accept_if_valid); buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self); layout.addLayout(form); layout.addWidget(buttons)

    def _accept_if_valid(self):
        enc = self.enc_combo.currentText().strip()
        try:
            codecs.lookup(enc)
        except LookupError:
            QMessageBox.warning(self, "Preferences", f"Unknown encoding: {enc}")
            return
        self.accept()

    def _browse_rc(self):
        f, _ = QFileDialog.getOpenFileName(self, "Locate robocopy", self.rc_edit.text() or "C:\\Windows\\System32", "Programs (*.exe);;All (*)")
        if f: self.rc_edit.setText(f)

    def _browse_prof(self):
        d = QFileDialog.getExistingDirectory(self, "Choose profiles folder", self.prof_edit.text())
        if d: self.prof_edit.setText(d)

    def _browse_log(self):
        f, _ = QFileDialog.getSaveFileName(self, "Application log file", self.log_edit.text() or "robackup.log", "Log files (*.log *.txt);;All files (*)")
        if f: self.log_edit.setText(f)

    def get_values(self) -> dict:
        return {
            "robocopy_path": self.rc_edit.text().strip() or "robocopy",
            "profiles_dir": self.prof_edit.text().strip() or self.settings["profiles_dir"],
            "output_encoding": self.enc_combo.currentText().strip() or "utf-8",
            "simulate_by_default": self.chk_simulate.isChecked(),
            "log_level": self.level_combo.currentText(),
            "log_file": self.log_edit.text().strip(),
        }
