# ui/widgets/results_list_widget.py
from __future__ import annotations

from PySide6.QtCore import Signal, Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableView, QLabel, QStackedWidget

from lyrics_finder.core.models import Song
from lyrics_finder.ui.models.song_table_model import SongTableModel

NO_RESULTS_TEXT = "No songs found. Try a different search."


class ResultsListWidget(QWidget):
    songSelected = Signal(object)   # Song

    def __init__(self, parent=None):
        super().__init__(parent)

        self.table = QTableView()
        self.model = SongTableModel([])
        self.table.setModel(self.model)

        self.table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QTableView.EditTrigger.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        self.table.setShowGrid(False)
        self.table.setAlternatingRowColors(True)
        self.table.setObjectName("ResultsTable")
        self.table.verticalHeader().setDefaultSectionSize(24)

        self.table.setColumnWidth(0, 360)
        self.table.setColumnWidth(1, 220)
        self.table.setColumnWidth(2, 80)
        self.table.horizontalHeader().setStretchLastSection(True)

        # Double click / Enter -> open lyrics
        self.table.doubleClicked.connect(self._on_activate)
        # only while the table has focus, so Enter in the search box still submits
        for key in ("Return", "Enter"):
            shortcut = QShortcut(QKeySequence(key), self.table, activated=self._open_current)
            shortcut.setContext(Qt.ShortcutContext.WidgetShortcut)

        self.placeholder = QLabel(NO_RESULTS_TEXT)
        self.placeholder.setObjectName("NoResults")
        self.placeholder.setAlignment(Qt.AlignCenter)

        self.stack = QStackedWidget()
        self.stack.addWidget(self.table)
        self.stack.addWidget(self.placeholder)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.stack)

    # -------------------------
    # External API
    # -------------------------
    def set_results(self, songs: list[Song]):
        self.model.set_songs(songs)
        if songs:
            self.stack.setCurrentWidget(self.table)
            self.table.scrollToTop()
        else:
            self.stack.setCurrentWidget(self.placeholder)

    def is_showing_placeholder(self) -> bool:
        return self.stack.currentWidget() is self.placeholder

    def selected_song(self) -> Song | None:
        idx = self.table.currentIndex()
        if not idx.isValid():
            return None
        return self.model.song_at(idx.row())

    # -------------------------
    # UI Events
    # -------------------------
    def _on_activate(self, index):
        if not index.isValid():
            return
        song = self.model.song_at(index.row())
        if song is not None:
            self.songSelected.emit(song)

    def _open_current(self):
        song = self.selected_song()
        if song is not None:
            self.songSelected.emit(song)
