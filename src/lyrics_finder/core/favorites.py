from __future__ import annotations

import json
import logging

from lyrics_finder.core.exceptions import DuplicateFavorite
from lyrics_finder.core.models import FavoriteEntry, Song
from lyrics_finder.db.preferences import PreferenceStore

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favoritesSongs"
THEME_KEY = "theme"

THEME_LIGHT = "light"
THEME_DARK = "dark"


class FavoritesManager:
    """
    Favorites list kept in the preference store under one JSON key.

    Nothing is cached: every call reads the stored list again and every
    mutation writes the whole list back, so the store stays the single
    source of truth.
    """

    def __init__(self, store: PreferenceStore):
        self.store = store

    def list(self) -> list[FavoriteEntry]:
        raw = self.store.get_item(FAVORITES_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored favorites are not valid JSON; treating as empty")
            return []
        if not isinstance(data, list):
            logger.warning("Stored favorites are not a list; treating as empty")
            return []
        return [FavoriteEntry.from_json(item) for item in data if isinstance(item, dict)]

    def is_favorited(self, track_name: str, artist_name: str) -> bool:
        return any(fav.matches(track_name, artist_name) for fav in self.list())

    def add(self, song: Song) -> FavoriteEntry:
        favorites = self.list()
        if any(fav.matches(song.track_name, song.artist_name) for fav in favorites):
            raise DuplicateFavorite(song.track_name, song.artist_name)

        entry = FavoriteEntry.from_song(song)
        favorites.append(entry)
        self._save(favorites)
        logger.info("Added favorite: %s - %s", entry.artist_name, entry.track_name)
        return entry

    def remove(self, track_name: str, artist_name: str) -> None:
        favorites = [fav for fav in self.list() if not fav.matches(track_name, artist_name)]
        self._save(favorites)

    def clear(self) -> None:
        self.store.remove_item(FAVORITES_KEY)

    def _save(self, favorites: list[FavoriteEntry]) -> None:
        self.store.set_item(FAVORITES_KEY, json.dumps([fav.to_json() for fav in favorites]))


class ThemePreference:
    """Light/dark flag; a missing value means light."""

    def __init__(self, store: PreferenceStore):
        self.store = store

    def load(self) -> str:
        return THEME_DARK if self.store.get_item(THEME_KEY) == THEME_DARK else THEME_LIGHT

    def is_dark(self) -> bool:
        return self.load() == THEME_DARK

    def toggle(self) -> str:
        new_theme = THEME_LIGHT if self.is_dark() else THEME_DARK
        self.store.set_item(THEME_KEY, new_theme)
        return new_theme
