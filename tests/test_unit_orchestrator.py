"""Unit tests for the SearchController state machine (synchronous runner, mocked client)."""

import pytest
from PySide6.QtTest import QTest

from lyrics_finder.core.exceptions import RemoteError, TransportError
from lyrics_finder.core.models import FavoriteEntry, Song
from lyrics_finder.core.orchestrator import (
    NOTICE_TIMEOUT_MS,
    SearchController,
    ViewState,
    pick_favorite_match,
    run_inline,
)


class DeferredRunner:
    """Holds tasks until the test finishes them, like a request still in flight."""

    def __init__(self):
        self.pending = []

    def __call__(self, task, on_done, on_failed):
        self.pending.append((task, on_done, on_failed))

    def finish_next(self):
        task, on_done, on_failed = self.pending.pop(0)
        run_inline(task, on_done, on_failed)


def record(signal):
    seen = []
    signal.connect(lambda *args: seen.append(args[0] if args else None))
    return seen


def make_song(song_id, track, artist, album=None, plain=None):
    return Song(id=song_id, track_name=track, artist_name=artist, album_name=album, plain_lyrics=plain)


def open_lyrics(controller):
    controller.submit("Bohemian Rhapsody")
    controller.select(controller.results[0])
    assert controller.state is ViewState.LYRICS_SHOWN


def test_run_inline_reports_any_exception():
    errors = []

    run_inline(lambda: {}["id"], pytest.fail, errors.append)

    assert len(errors) == 1
    assert isinstance(errors[0], KeyError)


class TestSubmit:
    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    def test_blank_query_never_hits_network(self, controller, mock_client, query):
        states = record(controller.stateChanged)

        assert controller.submit(query) is False

        mock_client.search.assert_not_called()
        assert controller.state is ViewState.IDLE
        assert states == []
        assert controller.notice.message == "Please enter a song name or artist"
        assert controller.notice.notify_type == "error"
        assert controller.notice_pending()

    def test_results_shown(self, controller, mock_client):
        states = record(controller.stateChanged)
        busy = record(controller.busyChanged)
        results = record(controller.resultsChanged)
        accepted = record(controller.queryAccepted)

        assert controller.submit("  Bohemian Rhapsody  ") is True

        mock_client.search.assert_called_once_with("Bohemian Rhapsody")
        assert states == [ViewState.SEARCHING, ViewState.RESULTS_SHOWN]
        assert busy == [True, False]
        assert [s.id for s in results[-1]] == [2114851]
        assert accepted == [None]
        assert controller.notice is None

    def test_empty_results_is_not_an_error(self, controller, mock_client):
        mock_client.search.return_value = []
        results = record(controller.resultsChanged)

        controller.submit("qwzxqwzx nonsense")

        assert controller.state is ViewState.RESULTS_SHOWN
        assert results == [[]]
        assert controller.notice is None

    def test_http_500_shows_error_and_keeps_input(self, controller, mock_client):
        mock_client.search.side_effect = RemoteError(500, "Internal Server Error")
        busy = record(controller.busyChanged)
        accepted = record(controller.queryAccepted)

        controller.submit("Bohemian Rhapsody")

        assert controller.state is ViewState.IDLE
        assert busy == [True, False]
        assert controller.busy is False
        assert accepted == []  # the search box is not cleared
        assert "500" in controller.notice.message
        assert controller.notice.notify_type == "error"

    def test_transport_error(self, controller, mock_client):
        mock_client.search.side_effect = TransportError("Network error: connection refused")

        controller.submit("x")

        assert controller.state is ViewState.IDLE
        assert controller.notice.message == "Network error: connection refused"

    def test_malformed_record_becomes_error_notice(self, controller, mock_client):
        mock_client.search.side_effect = KeyError("id")

        controller.submit("Bohemian Rhapsody")

        assert controller.state is ViewState.IDLE
        assert controller.busy is False
        assert controller.notice.message == "Failed to search songs. Please try again."

    def test_new_search_clears_old_notice(self, controller):
        controller.show_notice("old", "error")

        controller.submit("Bohemian Rhapsody")

        assert controller.notice is None
        assert not controller.notice_pending()


class TestLyrics:
    def test_select_shows_lyrics(self, controller, mock_client):
        songs = record(controller.songChanged)
        fav_state = record(controller.favoriteStateChanged)

        open_lyrics(controller)

        mock_client.get_by_id.assert_called_once_with(2114851)
        assert controller.current_song.track_name == "Bohemian Rhapsody"
        assert controller.current_song.has_lyrics
        assert songs == [controller.current_song]
        assert fav_state == [False]

    def test_select_failure_stays_on_results(self, controller, mock_client):
        controller.submit("Bohemian Rhapsody")
        mock_client.get_by_id.side_effect = TransportError("boom")

        controller.select(controller.results[0])

        assert controller.state is ViewState.RESULTS_SHOWN
        assert controller.current_song is None
        assert controller.notice.message == "Failed to load lyrics for this song."
        assert controller.busy is False

    def test_new_fetch_supersedes_current_song(self, controller, mock_client):
        open_lyrics(controller)
        controller.back()
        other = make_song(7, "Another One Bites the Dust", "Queen", plain="Steve walks warily")
        mock_client.get_by_id.return_value = other

        controller.select(other)

        assert controller.current_song is other

    def test_missing_lyrics_still_shows_song(self, controller, mock_client):
        mock_client.get_by_id.return_value = make_song(5, "Silent", "Nobody")
        controller.submit("silent")

        controller.select(controller.results[0])

        assert controller.state is ViewState.LYRICS_SHOWN
        assert controller.current_song.has_lyrics is False
        assert controller.notice is None

    def test_back_reuses_results(self, controller, mock_client):
        open_lyrics(controller)
        results = record(controller.resultsChanged)

        controller.back()

        assert controller.state is ViewState.RESULTS_SHOWN
        assert [s.id for s in results[-1]] == [2114851]
        mock_client.search.assert_called_once()

    def test_back_after_favorite_without_search_goes_idle(self, controller, mock_client):
        results = record(controller.resultsChanged)
        controller.search_and_view("Bohemian Rhapsody", "Queen")
        assert controller.state is ViewState.LYRICS_SHOWN

        controller.back()

        assert controller.state is ViewState.IDLE
        assert results == []

    def test_back_outside_lyrics_is_noop(self, controller):
        controller.back()
        assert controller.state is ViewState.IDLE


class TestFavorites:
    def test_bohemian_rhapsody_scenario(self, controller):
        fav_state = record(controller.favoriteStateChanged)
        favs = record(controller.favoritesChanged)

        open_lyrics(controller)
        controller.add_favorite()

        assert controller.list_favorites() == [
            FavoriteEntry("Bohemian Rhapsody", "Queen", "A Night at the Opera")
        ]
        assert favs[-1] == controller.list_favorites()
        assert fav_state[-1] is True
        assert controller.notice.message == "Song added to favorites!"
        assert controller.state is ViewState.LYRICS_SHOWN

    def test_duplicate_add_is_a_notice(self, controller):
        open_lyrics(controller)
        controller.add_favorite()

        controller.add_favorite()

        assert len(controller.list_favorites()) == 1
        assert controller.notice.message == "This song is already in your favorites!"
        assert controller.notice.notify_type == "warning"

    def test_add_without_current_song_is_noop(self, controller):
        controller.add_favorite()
        assert controller.list_favorites() == []

    def test_remove_current_song_updates_button(self, controller):
        open_lyrics(controller)
        controller.add_favorite()
        fav_state = record(controller.favoriteStateChanged)

        controller.remove_favorite("BOHEMIAN RHAPSODY", "queen")

        assert controller.list_favorites() == []
        assert fav_state == [False]

    def test_remove_other_song_keeps_button(self, controller, favorites):
        favorites.add(make_song(1, "Other", "Someone"))
        open_lyrics(controller)
        fav_state = record(controller.favoriteStateChanged)

        controller.remove_favorite("Other", "Someone")

        assert fav_state == []

    def test_clear(self, controller, favorites):
        favorites.add(make_song(1, "A", "X"))
        favorites.add(make_song(2, "B", "Y"))
        favs = record(controller.favoritesChanged)

        controller.clear_favorites()

        assert controller.list_favorites() == []
        assert favs == [[]]

    def test_favorite_state_on_open(self, controller, favorites, bohemian):
        favorites.add(bohemian)
        fav_state = record(controller.favoriteStateChanged)

        open_lyrics(controller)

        assert fav_state == [True]


class TestSearchAndView:
    def test_matches_stored_identity(self, controller, mock_client):
        wrong = make_song(1, "Bohemian Rhapsody (Live)", "Queen")
        right = make_song(2114851, "bohemian rhapsody", "QUEEN")
        mock_client.search.return_value = [wrong, right]

        controller.search_and_view("Bohemian Rhapsody", "Queen")

        mock_client.search.assert_called_once_with("Bohemian Rhapsody Queen")
        mock_client.get_by_id.assert_called_once_with(2114851)
        assert controller.state is ViewState.LYRICS_SHOWN

    def test_falls_back_to_first_result(self, controller, mock_client):
        first = make_song(11, "Bohemian Rhapsody - Remastered", "Queen")
        mock_client.search.return_value = [first, make_song(12, "Something else", "Other")]

        controller.search_and_view("Bohemian Rhapsody", "Queen")

        mock_client.get_by_id.assert_called_once_with(11)

    def test_results_list_untouched(self, controller, mock_client):
        controller.submit("Bohemian Rhapsody")
        before = list(controller.results)
        mock_client.search.return_value = [make_song(3, "Other", "X")]

        controller.search_and_view("Other", "X")
        controller.back()

        assert controller.results == before

    def test_zero_results(self, controller, mock_client):
        mock_client.search.return_value = []

        controller.search_and_view("Ghost", "Nobody")

        mock_client.get_by_id.assert_not_called()
        assert controller.state is ViewState.IDLE
        assert controller.notice.message == "Song not found. Please try another search."
        assert controller.busy is False

    def test_fetch_failure_keeps_prior_state(self, controller, mock_client):
        controller.submit("Bohemian Rhapsody")
        mock_client.get_by_id.side_effect = RemoteError(503, "Service Unavailable")

        controller.search_and_view("Bohemian Rhapsody", "Queen")

        assert controller.state is ViewState.RESULTS_SHOWN
        assert controller.busy is False
        assert controller.notice is not None

    def test_pick_favorite_match_helper(self):
        a = make_song(1, "A", "X")
        b = make_song(2, "b", "y")
        assert pick_favorite_match([a, b], "B", "Y") is b
        assert pick_favorite_match([a, b], "C", "Z") is a


class TestBusy:
    @pytest.fixture
    def runner(self):
        return DeferredRunner()

    @pytest.fixture
    def slow_controller(self, qapp, mock_client, favorites, theme, runner):
        c = SearchController(client=mock_client, favorites=favorites, theme=theme, runner=runner)
        yield c
        c.dismiss_notice()

    def test_second_submit_ignored_while_in_flight(self, slow_controller, runner, mock_client):
        assert slow_controller.submit("one") is True
        assert slow_controller.busy is True
        assert slow_controller.state is ViewState.SEARCHING

        assert slow_controller.submit("two") is False
        assert slow_controller.search_and_view("a", "b") is False
        assert len(runner.pending) == 1

        runner.finish_next()

        mock_client.search.assert_called_once_with("one")
        assert slow_controller.busy is False
        assert slow_controller.state is ViewState.RESULTS_SHOWN

    def test_select_ignored_while_fetching(self, slow_controller, runner, mock_client):
        slow_controller.submit("one")
        runner.finish_next()

        assert slow_controller.select(slow_controller.results[0]) is True
        assert slow_controller.state is ViewState.FETCHING_LYRICS
        assert slow_controller.select(slow_controller.results[0]) is False

        runner.finish_next()
        assert slow_controller.state is ViewState.LYRICS_SHOWN
        mock_client.get_by_id.assert_called_once()


class TestNotices:
    def test_new_notice_replaces_old(self, controller):
        notices = record(controller.noticeChanged)

        controller.show_notice("first", "error")
        controller.show_notice("second", "info")

        assert controller.notice.message == "second"
        assert [n.message for n in notices] == ["first", "second"]
        assert controller.notice_pending()
        assert controller._notice_timer.interval() == NOTICE_TIMEOUT_MS == 5000

    def test_dismiss(self, controller):
        notices = record(controller.noticeChanged)
        controller.show_notice("hello")

        controller.dismiss_notice()
        controller.dismiss_notice()  # nothing left to clear

        assert controller.notice is None
        assert not controller.notice_pending()
        assert notices[-1] is None
        assert len(notices) == 2

    def test_auto_dismiss(self, controller):
        controller._notice_timer.setInterval(20)
        controller.show_notice("bye")

        QTest.qWait(200)

        assert controller.notice is None


class TestTheme:
    def test_toggle_persists_and_emits(self, controller, theme):
        themes = record(controller.themeChanged)

        assert controller.current_theme() == "light"
        assert controller.toggle_theme() == "dark"

        assert themes == ["dark"]
        assert theme.is_dark()
