# robackup/main_window.py
import logging
from pathlib import Path

from PySide6.QtCore import Qt, QUrl
from PySide6.QtGui import QAction, QDesktopServices, QGuiApplication
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QPushButton, QSplitter,
    QTabWidget, QLineEdit, QCheckBox, QListWidget, QGroupBox, QFileDialog, QDialog, QMessageBox
)

from .app import setup_logging
from .utils.settings import load_settings, save_settings
from .utils.paths import safe_name, existing_dir
from .utils.command import build_args, format_preview
from .utils.profiles import ProfileStore, ProfileError
from .models.job import JobConfiguration, SIMULATE_FLAG
from .models.options import SECTIONS, PRESETS, DEFAULT_EXCLUSIONS, options_in_section, destructive_flags
from .models.output_log import OutputLog, OutputChannel, OutputLine, completion_line, spawn_error_line
from .workers.robocopy_runner import RobocopyRunner
from .widgets.path_edit import PathLineEdit
from .widgets.option_panel import OptionPanel
from .widgets.console_view import ConsoleView
from .dialogs.prefs import PrefsDialog

log = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, settings: dict | None = None):
        super().__init__()
        self.setWindowTitle("Robackup")
        self.resize(1280, 860)
        self.settings = settings or load_settings()
        self.config = JobConfiguration(simulate_only=bool(self.settings.get("simulate_by_default", True)))
        self.output_log = OutputLog()
        self.profiles = ProfileStore(self.settings["profiles_dir"])

        self.runner = RobocopyRunner(self.settings["robocopy_path"], self.settings.get("output_encoding", "utf-8"), self)
        self.runner.output.connect(self._on_output)
        self.runner.completed.connect(self._on_completed)
        self.runner.failed.connect(self._on_failed)

        # Paths
        self.src_edit = PathLineEdit(); self.src_edit.setPlaceholderText("C:\\Users\\me\\Documents")
        self.dst_edit = PathLineEdit(); self.dst_edit.setPlaceholderText("D:\\Backup")
        self.src_edit.textChanged.connect(self._on_source_changed)
        self.dst_edit.textChanged.connect(self._on_dest_changed)
        paths = QGroupBox("Source and destination"); g = QGridLayout(paths)
        for row, (label, edit) in enumerate((("Source:", self.src_edit), ("Destination:", self.dst_edit))):
            btn_browse = QPushButton("Browse…"); btn_browse.clicked.connect(lambda _=False, e=edit: self._browse_dir(e))
            btn_open = QPushButton("Open"); btn_open.clicked.connect(lambda _=False, e=edit: self._open_folder(e.text()))
            g.addWidget(QLabel(label), row, 0); g.addWidget(edit, row, 1); g.addWidget(btn_browse, row, 2); g.addWidget(btn_open, row, 3)

        presets_row = QHBoxLayout(); presets_row.addWidget(QLabel("Presets:"))
        for preset in PRESETS:
            b = QPushButton(preset.name); b.setToolTip(preset.description)
            b.clicked.connect(lambda _=False, p=preset: self.apply_preset(p)); presets_row.addWidget(b)
        btn_excl = QPushButton("Default Exclusions"); btn_excl.setToolTip("Fill /XF and /XD with common junk files and folders")
        btn_excl.clicked.connect(self.apply_default_exclusions)
        presets_row.addWidget(btn_excl); presets_row.addStretch()

        # Option tabs
        self.tabs = QTabWidget()
        self.panels: list[OptionPanel] = []
        for section, title in SECTIONS:
            panel = OptionPanel(options_in_section(section))
            panel.optionChanged.connect(self._on_option_changed)
            panel.textOptionChanged.connect(self._on_text_option_changed)
            self.panels.append(panel); self.tabs.addTab(panel, title)
        self.tabs.addTab(self._build_profiles_tab(), "Profiles")

        # Command preview
        self.preview = QLineEdit(); self.preview.setReadOnly(True)
        self.preview.setStyleSheet("font-family: Consolas, monospace;")
        btn_copy = QPushButton("Copy"); btn_copy.clicked.connect(self.copy_command)
        preview_row = QHBoxLayout(); preview_row.addWidget(QLabel("Command:")); preview_row.addWidget(self.preview); preview_row.addWidget(btn_copy)

        # Console
        self.console = ConsoleView()
        self.status_label = QLabel("Idle")
        btn_clear = QPushButton("Clear Output"); btn_clear.clicked.connect(self.clear_output)
        console_head = QHBoxLayout(); console_head.addWidget(QLabel("<b>robocopy output</b>")); console_head.addStretch()
        console_head.addWidget(self.status_label); console_head.addWidget(btn_clear)
        console_box = QWidget(); cv = QVBoxLayout(console_box); cv.setContentsMargins(0, 0, 0, 0)
        cv.addLayout(console_head); cv.addWidget(self.console)

        top = QWidget(); tv = QVBoxLayout(top); tv.setContentsMargins(0, 0, 0, 0)
        tv.addWidget(paths); tv.addLayout(presets_row); tv.addWidget(self.tabs); tv.addLayout(preview_row)
        self.v_split = QSplitter(Qt.Vertical)
        self.v_split.addWidget(top); self.v_split.addWidget(console_box)
        self.v_split.setSizes([560, 260])

        # Action bar
        self.chk_simulate = QCheckBox(f"Simulation mode ({SIMULATE_FLAG}: list only, change nothing)")
        self.chk_simulate.setChecked(self.config.simulate_only)
        self.chk_simulate.toggled.connect(self._on_simulate_toggled)
        self.btn_run = QPushButton(); self.btn_run.clicked.connect(self.run_job)
        self.btn_cancel = QPushButton("Cancel"); self.btn_cancel.setEnabled(False); self.btn_cancel.clicked.connect(self.cancel_job)
        actions = QHBoxLayout(); actions.addWidget(self.chk_simulate); actions.addStretch()
        actions.addWidget(self.btn_run); actions.addWidget(self.btn_cancel)

        central = QWidget(); v = QVBoxLayout(central)
        v.addWidget(self.v_split); v.addLayout(actions)
        self.setCentralWidget(central)

        m = self.menuBar().addMenu("&Options")
        act_prefs = QAction("Preferences…", self); act_prefs.triggered.connect(self.open_prefs); m.addAction(act_prefs)

        self._restore_layout()
        self._refresh_profiles()
        self._refresh()

    def _build_profiles_tab(self) -> QWidget:
        w = QWidget(); v = QVBoxLayout(w)
        self.profile_name = QLineEdit(); self.profile_name.setPlaceholderText("Profile name")
        btn_save = QPushButton("Save"); btn_save.clicked.connect(self.save_profile)
        row = QHBoxLayout(); row.addWidget(self.profile_name); row.addWidget(btn_save)
        self.profile_list = QListWidget()
        self.profile_list.itemDoubleClicked.connect(lambda item: self.load_profile(item.text()))
        btn_load = QPushButton("Load"); btn_load.clicked.connect(lambda: self._with_selected_profile(self.load_profile))
        btn_delete = QPushButton("Delete"); btn_delete.clicked.connect(lambda: self._with_selected_profile(self.delete_profile))
        btns = QHBoxLayout(); btns.addWidget(btn_load); btns.addWidget(btn_delete); btns.addStretch()
        v.addLayout(row); v.addWidget(self.profile_list); v.addLayout(btns)
        return w

    def _restore_layout(self):
        if geo := self.settings.get("window_geometry"):
            if len(geo) == 4: self.setGeometry(*[int(x) for x in geo])
        if vs := self.settings.get("v_split_sizes"): self.v_split.setSizes([int(x) for x in vs])

    def _save_layout(self):
        g = self.geometry()
        self.settings["window_geometry"] = [g.x(), g.y(), g.width(), g.height()]
        self.settings["v_split_sizes"] = self.v_split.sizes()
        save_settings(self.settings)

    def closeEvent(self, e):
        if self.runner.is_running():
            log.info("Window closing while robocopy runs; cancelling")
        self.runner.shutdown()
        self._save_layout()
        super().closeEvent(e)

    # --- configuration -------------------------------------------------

    def _on_source_changed(self, text: str):
        self.config.source_path = text.strip(); self._refresh()

    def _on_dest_changed(self, text: str):
        self.config.destination_path = text.strip(); self._refresh()

    def _on_simulate_toggled(self, on: bool):
        self.config.simulate_only = on; self._refresh()

    def _on_option_changed(self, flag: str, value):
        if value is None or value is False or value == "":
            self.config.options.pop(flag, None)
        else:
            self.config.options[flag] = value
        self._refresh()

    def _on_text_option_changed(self, flag: str, text: str):
        self.config.text_options[flag] = text; self._refresh()

    def _refresh(self):
        self.preview.setText(format_preview(self.config))
        running = self.runner.is_running()
        self.btn_run.setText("Simulate Backup" if self.config.simulate_only else "Run Backup")
        self.btn_run.setEnabled(not running and bool(self.config.source_path and self.config.destination_path))
        self.btn_cancel.setEnabled(running)

    def _load_config(self, config: JobConfiguration):
        """Push a configuration into every widget, then rebuild the preview once."""
        self.config = config
        for edit, text in ((self.src_edit, config.source_path), (self.dst_edit, config.destination_path)):
            edit.blockSignals(True); edit.setText(text); edit.blockSignals(False)
        self.chk_simulate.blockSignals(True); self.chk_simulate.setChecked(config.simulate_only); self.chk_simulate.blockSignals(False)
        for panel in self.panels: panel.load(config.options, config.text_options)
        self._refresh()

    def apply_preset(self, preset):
        self.config.options.update(preset.options)
        self._load_config(self.config)
        self._log(OutputChannel.INFO, f"Applied preset: {preset.name}\n")

    def apply_default_exclusions(self):
        self.config.text_options["/XF"] = "\n".join(DEFAULT_EXCLUSIONS["files"])
        self.config.text_options["/XD"] = "\n".join(DEFAULT_EXCLUSIONS["folders"])
        self._load_config(self.config)

    def _browse_dir(self, edit: QLineEdit):
        d = QFileDialog.getExistingDirectory(self, "Choose folder", edit.text() or str(Path.home()))
        if d: edit.setText(d)

    def _open_folder(self, path: str):
        if p := existing_dir(path): QDesktopServices.openUrl(QUrl.fromLocalFile(str(p)))
        else: self._log(OutputChannel.WARNING, f"Folder does not exist: {path}\n")

    def copy_command(self):
        QGuiApplication.clipboard().setText(format_preview(self.config))

    # --- running -------------------------------------------------------

    def _log(self, channel: OutputChannel, text: str):
        self._show(self.output_log.append(channel, text))

    def _show(self, line: OutputLine):
        self.console.append_line(line)

    def clear_output(self):
        self.output_log.clear(); self.console.clear(); self.status_label.setText("Idle")

    def run_job(self):
        if not self.config.source_path or not self.config.destination_path:
            self._log(OutputChannel.ERROR, "Error: choose both a source and a destination folder.\n")
            return
        if not self.config.simulate_only and (danger := destructive_flags(self.config.options)):
            ret = QMessageBox.question(self, "Destructive options",
                                       f"{', '.join(danger)} can delete files. Run for real?")
            if ret != QMessageBox.Yes: return

        args = build_args(self.config)
        if self.runner.is_running():
            self._log(OutputChannel.WARNING, "A robocopy job is already running.\n")
            return
        self.clear_output()
        self._log(OutputChannel.INFO, f"> Running: {format_preview(self.config, self.runner.executable)}\n")
        self.status_label.setText("Running…")
        try:
            self.runner.start(args)
        except LookupError as e:
            log.error("Could not start robocopy: %s", e)
            self._show(self.output_log.add(spawn_error_line(str(e))))
            self.status_label.setText("Failed")
            return
        self._refresh()

    def cancel_job(self):
        if self.runner.cancel():
            self._log(OutputChannel.WARNING, "\n--- Operation cancelled by user ---\n")
            self.status_label.setText("Cancelled")
        self._refresh()

    def _on_output(self, line: OutputLine):
        self._show(self.output_log.add(line))

    def _on_completed(self, result):
        if result.cancelled:
            return  # already reported by cancel_job
        self._show(self.output_log.add(completion_line(result)))
        self.status_label.setText(f"Exit code: {result.code}")
        self._refresh()

    def _on_failed(self, message: str):
        self._show(self.output_log.add(spawn_error_line(message)))
        self.status_label.setText("Failed")
        self._refresh()

    # --- profiles ------------------------------------------------------

    def _refresh_profiles(self):
        self.profile_list.clear()
        self.profile_list.addItems(self.profiles.names())

    def _with_selected_profile(self, action):
        if item := self.profile_list.currentItem(): action(item.text())

    def save_profile(self):
        name = self.profile_name.text().strip()
        if not name and self.config.source_path:
            name = safe_name(Path(self.config.source_path).name)
        if not name:
            self._log(OutputChannel.WARNING, "Enter a profile name first.\n")
            return
        try:
            self.profiles.save(name, self.config)
        except ProfileError as e:
            self._log(OutputChannel.ERROR, f"Error: {e}\n")
            return
        self.profile_name.clear()
        self._refresh_profiles()
        self._log(OutputChannel.INFO, f"Saved profile: {name}\n")

    def load_profile(self, name: str):
        try:
            config = self.profiles.load(name)
        except ProfileError as e:
            self._log(OutputChannel.ERROR, f"Error: {e}\n")
            return
        if config is None:
            self._log(OutputChannel.WARNING, f"Profile not found: {name}\n")
            self._refresh_profiles()
            return
        self._load_config(config)
        self._log(OutputChannel.INFO, f"Loaded profile: {name}\n")

    def delete_profile(self, name: str):
        try:
            self.profiles.delete(name)
        except ProfileError as e:
            self._log(OutputChannel.ERROR, f"Error: {e}\n")
        self._refresh_profiles()

    def open_prefs(self):
        dlg = PrefsDialog(self.settings, self)
        if dlg.exec() == QDialog.Accepted:
            self.settings.update(dlg.get_values())
            save_settings(self.settings)
            setup_logging(self.settings)
            self.runner.executable = self.settings["robocopy_path"]
            self.runner.encoding = self.settings["output_encoding"]
            self.profiles = ProfileStore(self.settings["profiles_dir"])
            self._refresh_profiles()
            self._log(OutputChannel.INFO, "Saved preferences.\n")
