# ui/models/song_table_model.py
from __future__ import annotations

from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex

from lyrics_finder.core.lrc import format_duration
from lyrics_finder.core.models import Song


def lyrics_state(song: Song) -> str:
    if song.instrumental:
        return "instrumental"
    if song.has_synced_lyrics:
        return "synced"
    if song.has_lyrics:
        return "plain"
    return "none"


class SongTableModel(QAbstractTableModel):
    HEADERS = ["Track", "Album", "Duration", "Lyrics"]

    def __init__(self, songs=()):
        super().__init__()
        self._songs: list[Song] = list(songs)

    def set_songs(self, songs):
        self.beginResetModel()
        self._songs = list(songs)
        self.endResetModel()

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._songs)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(self.HEADERS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        return self.HEADERS[section]

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        song = self._songs[index.row()]
        col = index.column()

        if role == Qt.DisplayRole:
            if col == 0:
                return song.display_title
            if col == 1:
                return song.album_name or "Unknown Album"
            if col == 2:
                return format_duration(song.duration)
            if col == 3:
                return lyrics_state(song)
        if role == Qt.UserRole:
            return song
        return None

    def song_at(self, row: int) -> Song | None:
        if row < 0 or row >= len(self._songs):
            return None
        return self._songs[row]
