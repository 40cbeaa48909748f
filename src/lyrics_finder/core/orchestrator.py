# core/orchestrator.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from lyrics_finder.core.exceptions import DuplicateFavorite, LyricsFinderError
from lyrics_finder.core.favorites import FavoritesManager, ThemePreference
from lyrics_finder.core.lrclib_client import LrcLibClient
from lyrics_finder.core.models import FavoriteEntry, Song
from lyrics_finder.core.state import Notice

logger = logging.getLogger(__name__)

NOTICE_TIMEOUT_MS = 5000

# runner(task, on_done, on_failed): executes task() and reports its outcome
TaskRunner = Callable[[Callable[[], Any], Callable[[Any], None], Callable[[Exception], None]], None]


def run_inline(task, on_done, on_failed) -> None:
    # same contract as RequestWorker.run: any task exception goes to on_failed
    try:
        result = task()
    except Exception as e:
        on_failed(e)
        return
    on_done(result)


def _error_text(error: Exception, fallback: str) -> str:
    if isinstance(error, LyricsFinderError) and str(error):
        return str(error)
    return fallback


class ViewState(Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    RESULTS_SHOWN = "results"
    FETCHING_LYRICS = "fetching"
    LYRICS_SHOWN = "lyrics"


class SearchController(QObject):
    """
    Owns the search -> results -> lyrics workflow and the session state
    (results, current song, busy flag, transient notice).

    Widgets only call the public methods and listen to the signals; the
    controller never touches a widget. One request is in flight at a time:
    submit/select/search_and_view are ignored while busy.
    """
    stateChanged = Signal(object)          # ViewState
    busyChanged = Signal(bool)
    resultsChanged = Signal(list)          # list[Song]
    songChanged = Signal(object)           # Song
    favoriteStateChanged = Signal(bool)    # current song is a favorite
    favoritesChanged = Signal(list)        # list[FavoriteEntry]
    noticeChanged = Signal(object)         # Notice | None
    themeChanged = Signal(str)             # "light" | "dark"
    queryAccepted = Signal()               # search went through, input may be cleared

    def __init__(
        self,
        client: LrcLibClient,
        favorites: FavoritesManager,
        theme: ThemePreference,
        runner: TaskRunner = run_inline,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.client = client
        self.favorites = favorites
        self.theme = theme
        self.runner = runner

        self.state = ViewState.IDLE
        self.results: list[Song] = []
        self.has_searched = False
        self.current_song: Optional[Song] = None
        self.busy = False
        self.notice: Optional[Notice] = None

        self._notice_timer = QTimer(self)
        self._notice_timer.setSingleShot(True)
        self._notice_timer.setInterval(NOTICE_TIMEOUT_MS)
        self._notice_timer.timeout.connect(self.dismiss_notice)

    # -------------------------
    # Search
    # -------------------------
    def submit(self, query: str) -> bool:
        """Returns True when a search request was started."""
        if self.busy:
            return False

        self.dismiss_notice()
        text = (query or "").strip()
        if not text:
            self.show_notice("Please enter a song name or artist", "error")
            return False

        self._set_busy(True)
        self._set_state(ViewState.SEARCHING)
        self.runner(lambda: self.client.search(text), self._on_search_done, self._on_search_failed)
        return True

    def _on_search_done(self, results: list[Song]):
        logger.info("Search returned %d result(s)", len(results))
        self.results = list(results)
        self.has_searched = True
        self._set_busy(False)
        self.resultsChanged.emit(list(self.results))
        self._set_state(ViewState.RESULTS_SHOWN)
        self.queryAccepted.emit()

    def _on_search_failed(self, error: Exception):
        logger.error("Search error: %r", error)
        self._set_busy(False)
        self._set_state(ViewState.IDLE)
        self.show_notice(_error_text(error, "Failed to search songs. Please try again."), "error")

    # -------------------------
    # Lyrics
    # -------------------------
    def select(self, song: Song) -> bool:
        if self.busy:
            return False

        prior_state = self.state
        self._set_busy(True)
        self._set_state(ViewState.FETCHING_LYRICS)
        self._fetch_lyrics(song.id, prior_state, "Failed to load lyrics for this song.")
        return True

    def search_and_view(self, track_name: str, artist_name: str) -> bool:
        """
        Reopen a favorite: search "track artist", take the result whose
        identity matches the favorite (first result when none does) and
        fetch its full record. The results list is left untouched.
        """
        if self.busy:
            return False

        self.dismiss_notice()
        prior_state = self.state
        self._set_busy(True)
        self._set_state(ViewState.SEARCHING)

        def on_done(results: list[Song]):
            if not results:
                self._set_busy(False)
                self._set_state(prior_state)
                self.show_notice("Song not found. Please try another search.", "error")
                return
            song = pick_favorite_match(results, track_name, artist_name)
            self._set_state(ViewState.FETCHING_LYRICS)
            self._fetch_lyrics(song.id, prior_state, "Failed to fetch lyrics. Please try again.")

        def on_failed(error: Exception):
            logger.error("Search and view error: %r", error)
            self._set_busy(False)
            self._set_state(prior_state)
            self.show_notice(_error_text(error, "Failed to fetch lyrics. Please try again."), "error")

        self.runner(lambda: self.client.search(f"{track_name} {artist_name}"), on_done, on_failed)
        return True

    def _fetch_lyrics(self, song_id: int, prior_state: ViewState, failure_message: str):
        def on_failed(error: Exception):
            logger.error("View lyrics error: %r", error)
            self._set_busy(False)
            self._set_state(prior_state)
            self.show_notice(failure_message, "error")

        self.runner(lambda: self.client.get_by_id(song_id), self._on_lyrics_loaded, on_failed)

    def _on_lyrics_loaded(self, song: Song):
        self.current_song = song
        self._set_busy(False)
        self.songChanged.emit(song)
        self.favoriteStateChanged.emit(self.is_current_favorited())
        self._set_state(ViewState.LYRICS_SHOWN)

    def back(self):
        if self.state is not ViewState.LYRICS_SHOWN:
            return
        if not self.has_searched:
            # lyrics were opened from a favorite with no search behind them
            self._set_state(ViewState.IDLE)
            return
        self.resultsChanged.emit(list(self.results))
        self._set_state(ViewState.RESULTS_SHOWN)

    # -------------------------
    # Favorites
    # -------------------------
    def is_current_favorited(self) -> bool:
        song = self.current_song
        return bool(song) and self.favorites.is_favorited(song.track_name, song.artist_name)

    def list_favorites(self) -> list[FavoriteEntry]:
        return self.favorites.list()

    def add_favorite(self):
        if self.state is not ViewState.LYRICS_SHOWN or self.current_song is None:
            return

        try:
            self.favorites.add(self.current_song)
        except DuplicateFavorite as e:
            self.show_notice(str(e), "warning")
        else:
            self.favoritesChanged.emit(self.favorites.list())
            self.show_notice("Song added to favorites!", "success")

        self.favoriteStateChanged.emit(True)

    def remove_favorite(self, track_name: str, artist_name: str):
        self.favorites.remove(track_name, artist_name)
        self.favoritesChanged.emit(self.favorites.list())

        song = self.current_song
        if song and FavoriteEntry.from_song(song).matches(track_name, artist_name):
            self.favoriteStateChanged.emit(False)

    def clear_favorites(self):
        """Irreversible; callers confirm with the user first."""
        self.favorites.clear()
        self.favoritesChanged.emit([])
        if self.current_song is not None:
            self.favoriteStateChanged.emit(False)

    # -------------------------
    # Theme
    # -------------------------
    def current_theme(self) -> str:
        return self.theme.load()

    def toggle_theme(self) -> str:
        new_theme = self.theme.toggle()
        self.themeChanged.emit(new_theme)
        return new_theme

    # -------------------------
    # Notices
    # -------------------------
    def show_notice(self, message: str, notify_type: str = "info"):
        # a new notice replaces the old one and restarts the dismiss timer
        self.notice = Notice(message=message, notify_type=notify_type)
        self.noticeChanged.emit(self.notice)
        self._notice_timer.start()

    def dismiss_notice(self):
        self._notice_timer.stop()
        if self.notice is None:
            return
        self.notice = None
        self.noticeChanged.emit(None)

    def notice_pending(self) -> bool:
        return self._notice_timer.isActive()

    # -------------------------
    # helpers
    # -------------------------
    def _set_state(self, state: ViewState):
        if state is self.state:
            return
        logger.debug("State %s -> %s", self.state.value, state.value)
        self.state = state
        self.stateChanged.emit(state)

    def _set_busy(self, busy: bool):
        if busy == self.busy:
            return
        self.busy = busy
        self.busyChanged.emit(busy)


def pick_favorite_match(results: list[Song], track_name: str, artist_name: str) -> Song:
    wanted = FavoriteEntry(track_name=track_name, artist_name=artist_name)
    for song in results:
        if wanted.matches(song.track_name, song.artist_name):
            return song
    return results[0]
