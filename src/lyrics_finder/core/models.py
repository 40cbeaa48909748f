# core/models.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


def _opt_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value)
    return s if s.strip() else None


@dataclass(frozen=True)
class Song:
    id: int
    track_name: str
    artist_name: str
    album_name: Optional[str] = None
    duration: Optional[float] = None    # seconds
    plain_lyrics: Optional[str] = None
    synced_lyrics: Optional[str] = None  # LRC, "[mm:ss.xx] line"
    instrumental: bool = False

    @staticmethod
    def from_api(data: dict) -> "Song":
        # LRCLIB record: {id, trackName, artistName, albumName, duration, instrumental, plainLyrics, syncedLyrics}
        duration = data.get("duration")
        return Song(
            id=int(data["id"]),
            track_name=data.get("trackName") or "",
            artist_name=data.get("artistName") or "",
            album_name=_opt_text(data.get("albumName")),
            duration=float(duration) if duration is not None else None,
            plain_lyrics=_opt_text(data.get("plainLyrics")),
            synced_lyrics=_opt_text(data.get("syncedLyrics")),
            instrumental=bool(data.get("instrumental", False)),
        )

    @property
    def has_lyrics(self) -> bool:
        return bool(self.plain_lyrics and self.plain_lyrics.strip())

    @property
    def has_synced_lyrics(self) -> bool:
        return bool(self.synced_lyrics and self.synced_lyrics.strip())

    @property
    def display_title(self) -> str:
        return f"{self.artist_name} — {self.track_name}" if self.artist_name else self.track_name


@dataclass(frozen=True)
class FavoriteEntry:
    track_name: str
    artist_name: str
    album_name: Optional[str] = None

    @property
    def identity(self) -> tuple[str, str]:
        return self.track_name.lower(), self.artist_name.lower()

    def matches(self, track_name: str, artist_name: str) -> bool:
        return self.identity == (track_name.lower(), artist_name.lower())

    @staticmethod
    def from_song(song: Song) -> "FavoriteEntry":
        return FavoriteEntry(
            track_name=song.track_name,
            artist_name=song.artist_name,
            album_name=song.album_name,
        )

    @staticmethod
    def from_json(data: dict) -> "FavoriteEntry":
        return FavoriteEntry(
            track_name=str(data.get("trackName") or ""),
            artist_name=str(data.get("artistName") or ""),
            album_name=data.get("albumName"),
        )

    def to_json(self) -> dict:
        return {
            "trackName": self.track_name,
            "artistName": self.artist_name,
            "albumName": self.album_name,
        }
