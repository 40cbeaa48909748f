from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QListWidget, QListWidgetItem, QPushButton, QToolButton, QMessageBox, QMenu
)

from lyrics_finder.core.models import FavoriteEntry


class FavoriteItemWidget(QWidget):
    removeClicked = Signal(object)   # FavoriteEntry

    def __init__(self, entry: FavoriteEntry, parent=None):
        super().__init__(parent)
        self.entry = entry

        row = QHBoxLayout(self)
        row.setContentsMargins(8, 4, 4, 4)

        text = QVBoxLayout()
        text.setSpacing(0)
        title = QLabel(entry.track_name)
        title.setObjectName("FavoriteTitle")
        artist = QLabel(entry.artist_name)
        artist.setObjectName("FavoriteArtist")
        text.addWidget(title)
        text.addWidget(artist)
        row.addLayout(text, 1)

        self.btn_remove = QToolButton()
        self.btn_remove.setText("✕")
        self.btn_remove.setToolTip(f"Remove {entry.track_name}")
        self.btn_remove.setCursor(Qt.CursorShape.PointingHandCursor)
        self.btn_remove.clicked.connect(lambda: self.removeClicked.emit(self.entry))
        row.addWidget(self.btn_remove, 0, Qt.AlignmentFlag.AlignVCenter)


class FavoritesListWidget(QWidget):
    """Saved favorites; hidden while the list is empty."""
    openFavorite = Signal(str, str)     # track_name, artist_name
    removeFavorite = Signal(str, str)   # track_name, artist_name
    clearRequested = Signal()           # emitted only after the user confirmed

    def __init__(self, parent=None):
        super().__init__(parent)
        self._entries: list[FavoriteEntry] = []

        header = QHBoxLayout()
        label = QLabel("⭐ Favorites")
        label.setObjectName("FavoritesHeader")
        header.addWidget(label, 1)

        self.btn_clear = QPushButton("Clear all")
        self.btn_clear.clicked.connect(self._on_clear_clicked)
        header.addWidget(self.btn_clear)

        self.list = QListWidget()
        self.list.setObjectName("FavoritesList")
        self.list.itemActivated.connect(self._on_item_activated)
        self.list.itemClicked.connect(self._on_item_activated)
        self.list.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.list.customContextMenuRequested.connect(self._on_context_menu)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addLayout(header)
        layout.addWidget(self.list, 1)

        self.set_favorites([])

    def set_favorites(self, entries: list[FavoriteEntry]):
        self._entries = list(entries)
        self.list.clear()

        for entry in self._entries:
            item = QListWidgetItem(self.list)
            item.setData(Qt.ItemDataRole.UserRole, entry)
            row = FavoriteItemWidget(entry)
            row.removeClicked.connect(self._emit_remove)
            item.setSizeHint(row.sizeHint())
            self.list.setItemWidget(item, row)

        self.setVisible(bool(self._entries))

    def count(self) -> int:
        return len(self._entries)

    def confirm_clear(self) -> bool:
        res = QMessageBox.question(
            self,
            "Clear favorites",
            "Are you sure you want to clear all favorites?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return res == QMessageBox.StandardButton.Yes

    # -------------------------
    # UI Events
    # -------------------------
    def _on_clear_clicked(self):
        if not self._entries:
            return
        if self.confirm_clear():
            self.clearRequested.emit()

    def _on_item_activated(self, item: QListWidgetItem):
        entry = item.data(Qt.ItemDataRole.UserRole)
        if entry is not None:
            self.openFavorite.emit(entry.track_name, entry.artist_name)

    def _emit_remove(self, entry: FavoriteEntry):
        self.removeFavorite.emit(entry.track_name, entry.artist_name)

    def _on_context_menu(self, pos):
        item = self.list.itemAt(pos)
        if item is None:
            return
        entry = item.data(Qt.ItemDataRole.UserRole)

        menu = QMenu(self)
        act_open = menu.addAction("View lyrics")
        act_remove = menu.addAction("Remove from favorites")

        chosen = menu.exec(self.list.viewport().mapToGlobal(pos))
        if chosen == act_open:
            self.openFavorite.emit(entry.track_name, entry.artist_name)
        elif chosen == act_remove:
            self.removeFavorite.emit(entry.track_name, entry.artist_name)
