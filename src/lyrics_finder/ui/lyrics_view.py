# ui/lyrics_view.py
from __future__ import annotations

from typing import List, Tuple

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QStackedWidget,
    QTextEdit, QTableWidget, QTableWidgetItem,
    QPushButton, QHBoxLayout, QButtonGroup
)

from lyrics_finder.core.lrc import format_duration, format_timestamp, parse_lrc
from lyrics_finder.core.models import Song


class LyricsView(QWidget):
    """
    Detail panel for one song:
      - header: title, artist, album, Back / Add to Favorites
      - Plain | Synced switch (Synced only when the record has LRC)
      - message page for instrumental tracks and missing lyrics
    """
    backRequested = Signal()
    addFavoriteRequested = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)

        root = QVBoxLayout(self)
        root.setContentsMargins(10, 10, 10, 10)
        root.setSpacing(8)

        # --- header ---
        header = QHBoxLayout()
        header.setSpacing(8)

        self.btn_back = QPushButton("← Back")
        self.btn_back.clicked.connect(lambda: self.backRequested.emit())
        header.addWidget(self.btn_back)

        info = QVBoxLayout()
        info.setSpacing(2)
        self.title = QLabel("Lyrics")
        self.title.setObjectName("SongTitle")
        self.title.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self.artist = QLabel("")
        self.artist.setObjectName("SongArtist")
        self.album = QLabel("")
        self.album.setObjectName("SongAlbum")
        info.addWidget(self.title)
        info.addWidget(self.artist)
        info.addWidget(self.album)
        header.addLayout(info, 1)

        self.btn_favorite = QPushButton("⭐ Add to Favorites")
        self.btn_favorite.setObjectName("FavoriteButton")
        self.btn_favorite.clicked.connect(lambda: self.addFavoriteRequested.emit())
        header.addWidget(self.btn_favorite, 0, Qt.AlignmentFlag.AlignTop)

        root.addLayout(header)

        # --- plain / synced switch ---
        switch = QHBoxLayout()
        self.btn_plain = QPushButton("Plain")
        self.btn_synced = QPushButton("Synced")
        for b in (self.btn_plain, self.btn_synced):
            b.setCheckable(True)
            switch.addWidget(b)
        switch.addStretch(1)
        self._mode_group = QButtonGroup(self)
        self._mode_group.setExclusive(True)
        self._mode_group.addButton(self.btn_plain)
        self._mode_group.addButton(self.btn_synced)
        self.btn_plain.clicked.connect(self._show_plain_page)
        self.btn_synced.clicked.connect(self._show_synced_page)
        root.addLayout(switch)

        # --- stack: msg / plain / synced ---
        self.stack = QStackedWidget()
        root.addWidget(self.stack, 1)

        self.msg = QLabel("No lyrics")
        self.msg.setObjectName("NoLyrics")
        self.msg.setAlignment(Qt.AlignCenter)
        self.msg.setWordWrap(True)
        self.stack.addWidget(self.msg)

        self.plain = QTextEdit()
        self.plain.setReadOnly(True)
        self.stack.addWidget(self.plain)

        self.table = QTableWidget(0, 2)
        self.table.setHorizontalHeaderLabels(["Time", "Text"])
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(self.table.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(self.table.SelectionMode.SingleSelection)
        self.table.setEditTriggers(self.table.EditTrigger.NoEditTriggers)
        self.table.setColumnWidth(0, 95)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.stack.addWidget(self.table)

        self.show_none("No song selected")

    # --- public API ---
    def show_none(self, message: str):
        self._reset_state()
        self.msg.setText(message)
        self.stack.setCurrentWidget(self.msg)

    def set_song(self, song: Song):
        self.title.setText(song.track_name or "Lyrics")
        self.artist.setText(f"By {song.artist_name}")
        album = song.album_name or "Unknown Album"
        duration = format_duration(song.duration)
        self.album.setText(f"{album} · {duration}" if duration else album)

        if song.instrumental and not song.has_lyrics:
            self.show_none("This track is instrumental.")
            return

        pairs = parse_lrc(song.synced_lyrics) if song.has_synced_lyrics else []

        if song.has_lyrics:
            self._reset_state()
            self.plain.setPlainText(song.plain_lyrics)
            self._fill_synced(pairs)
            self._show_plain_page()
            return

        # no plain text: keep the synced view reachable, but say so first
        self.show_none("Lyrics not available for this song.")
        self._fill_synced(pairs)

    def set_favorited(self, favorited: bool):
        if favorited:
            self.btn_favorite.setText("✓ Already Favorited")
            self.btn_favorite.setProperty("favorited", True)
        else:
            self.btn_favorite.setText("⭐ Add to Favorites")
            self.btn_favorite.setProperty("favorited", False)
        # re-evaluate [favorited="true"] selector
        self.btn_favorite.style().unpolish(self.btn_favorite)
        self.btn_favorite.style().polish(self.btn_favorite)

    # --- internal helpers ---
    def _reset_state(self):
        self.plain.clear()
        self.table.setRowCount(0)
        self.btn_plain.setEnabled(False)
        self.btn_synced.setEnabled(False)
        # an exclusive group refuses to uncheck its checked button
        self._mode_group.setExclusive(False)
        self.btn_plain.setChecked(False)
        self.btn_synced.setChecked(False)
        self._mode_group.setExclusive(True)

    def _fill_synced(self, pairs: List[Tuple[int, str]]):
        self.table.setRowCount(len(pairs))
        for row, (ms, text) in enumerate(pairs):
            it_time = QTableWidgetItem(format_timestamp(int(ms)))
            it_time.setData(Qt.ItemDataRole.UserRole, int(ms))
            self.table.setItem(row, 0, it_time)
            self.table.setItem(row, 1, QTableWidgetItem(text))
        self.btn_synced.setEnabled(bool(pairs))

    def _show_plain_page(self):
        self.btn_plain.setEnabled(True)
        self.btn_plain.setChecked(True)
        self.stack.setCurrentWidget(self.plain)

    def _show_synced_page(self):
        if self.table.rowCount() == 0:
            return
        self.btn_synced.setChecked(True)
        self.stack.setCurrentWidget(self.table)

    def current_page(self) -> str:
        w = self.stack.currentWidget()
        if w is self.plain:
            return "plain"
        if w is self.table:
            return "synced"
        return "message"
