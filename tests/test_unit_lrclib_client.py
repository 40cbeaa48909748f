"""Unit tests for LrcLibClient with a mocked requests session."""

from unittest.mock import Mock

import pytest
import requests

from conftest import BOHEMIAN_FULL, BOHEMIAN_SEARCH_ITEM
from lyrics_finder.core.exceptions import RemoteError, TransportError
from lyrics_finder.core.lrclib_client import LrcLibClient, normalize_lrclib_base


def make_response(status_code=200, body=None, reason="OK"):
    r = Mock()
    r.status_code = status_code
    r.reason = reason
    if isinstance(body, Exception):
        r.json.side_effect = body
    else:
        r.json.return_value = body
    return r


@pytest.fixture
def session():
    s = Mock()
    s.headers = {}
    return s


@pytest.fixture
def client(session):
    return LrcLibClient(base_url="https://lrclib.net", session=session, timeout=15)


class TestBaseUrl:
    def test_api_suffix_added(self):
        assert normalize_lrclib_base("https://lrclib.net") == "https://lrclib.net/api"

    def test_trailing_slash_and_existing_suffix(self):
        assert normalize_lrclib_base("https://example.org/api/") == "https://example.org/api"

    def test_empty_falls_back_to_default(self):
        assert normalize_lrclib_base("  ") == "https://lrclib.net/api"

    def test_user_agent_header_set(self, session):
        LrcLibClient(session=session, user_agent="tests/1.0")
        assert session.headers["User-Agent"] == "tests/1.0"


class TestSearch:
    def test_single_request_with_query_param(self, client, session):
        session.get.return_value = make_response(body=[BOHEMIAN_SEARCH_ITEM])

        songs = client.search("Bohemian Rhapsody")

        session.get.assert_called_once_with(
            "https://lrclib.net/api/search",
            params={"q": "Bohemian Rhapsody"},
            timeout=15,
        )
        assert [s.id for s in songs] == [2114851]
        assert songs[0].track_name == "Bohemian Rhapsody"
        assert songs[0].album_name == "A Night at the Opera"

    def test_remote_order_kept(self, client, session):
        items = [dict(BOHEMIAN_SEARCH_ITEM, id=i, trackName=f"T{i}") for i in (9, 3, 7)]
        session.get.return_value = make_response(body=items)

        assert [s.id for s in client.search("t")] == [9, 3, 7]

    def test_empty_array(self, client, session):
        session.get.return_value = make_response(body=[])
        assert client.search("qwzxqwzxqwzx") == []

    def test_non_list_body_is_empty(self, client, session):
        session.get.return_value = make_response(body={"unexpected": True})
        assert client.search("x") == []

    def test_http_500_raises_remote_error(self, client, session):
        session.get.return_value = make_response(500, body=ValueError("no json"), reason="Internal Server Error")

        with pytest.raises(RemoteError) as exc:
            client.search("x")

        assert exc.value.status == 500
        assert exc.value.message == "Internal Server Error"
        assert "500" in str(exc.value)

    def test_connection_error_raises_transport_error(self, client, session):
        session.get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(TransportError):
            client.search("x")

    def test_timeout_raises_transport_error(self, client, session):
        session.get.side_effect = requests.Timeout("read timed out")

        with pytest.raises(TransportError):
            client.search("x")

    def test_invalid_json_raises_transport_error(self, client, session):
        session.get.return_value = make_response(body=ValueError("bad json"))

        with pytest.raises(TransportError):
            client.search("x")


class TestGetById:
    def test_fetches_full_record(self, client, session):
        session.get.return_value = make_response(body=BOHEMIAN_FULL)

        song = client.get_by_id(2114851)

        session.get.assert_called_once_with("https://lrclib.net/api/get/2114851", params=None, timeout=15)
        assert song.track_name == "Bohemian Rhapsody"
        assert song.has_lyrics
        assert song.has_synced_lyrics

    def test_missing_lyrics_is_not_an_error(self, client, session):
        session.get.return_value = make_response(body=dict(BOHEMIAN_FULL, plainLyrics="", syncedLyrics=None))

        song = client.get_by_id(2114851)

        assert song.plain_lyrics is None
        assert not song.has_lyrics

    def test_404_message_from_body(self, client, session):
        body = {"code": 404, "name": "TrackNotFound", "message": "Failed to find specified track"}
        session.get.return_value = make_response(404, body=body, reason="Not Found")

        with pytest.raises(RemoteError) as exc:
            client.get_by_id(1)

        assert exc.value.status == 404
        assert exc.value.message == "Failed to find specified track"
