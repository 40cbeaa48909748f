"""Exceptions raised by the lyrics finder core."""
from __future__ import annotations


class LyricsFinderError(Exception):
    """Base exception for Lyrics Finder."""
    pass


class ValidationError(LyricsFinderError):
    """User input rejected before any request is made."""
    pass


class TransportError(LyricsFinderError):
    """The HTTP request could not complete (DNS, refused connection, timeout)."""
    pass


class RemoteError(LyricsFinderError):
    """LRCLIB answered with a non-success status."""

    def __init__(self, status: int, message: str):
        super().__init__(f"API Error: {status} {message}".rstrip())
        self.status = status
        self.message = message


class DuplicateFavorite(LyricsFinderError):
    """The song is already in the favorites list."""

    def __init__(self, track_name: str, artist_name: str):
        super().__init__("This song is already in your favorites!")
        self.track_name = track_name
        self.artist_name = artist_name
