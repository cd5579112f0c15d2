# robackup/widgets/path_edit.py
from pathlib import Path
from PySide6.QtWidgets import QLineEdit

class PathLineEdit(QLineEdit):
    def __init__(self, *a, **kw):
        super().__init__(*a, **kw)
        self.setAcceptDrops(True)
        self.setClearButtonEnabled(True)

    def _first_local_dir(self, mime) -> Path | None:
        for url in mime.urls():
            if url.isLocalFile():
                p = Path(url.toLocalFile())
                if p.is_dir(): return p
                if p.is_file(): return p.parent
        return None

    def dragEnterEvent(self, event):
        """Accept the drag action if it carries a local folder."""
        if event.mimeData().hasUrls() and self._first_local_dir(event.mimeData()):
            event.acceptProposedAction()
        else:
            super().dragEnterEvent(event)

    def dragMoveEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            super().dragMoveEvent(event)

    def dropEvent(self, event):
        """Dropping a folder (or a file, meaning its folder) replaces the text."""
        if event.mimeData().hasUrls():
            if p := self._first_local_dir(event.mimeData()):
                self.setText(str(p))
                event.acceptProposedAction()
                return
        super().dropEvent(event)
