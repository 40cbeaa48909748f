import os
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

# No display needed for QObject/QTimer/widget tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from lyrics_finder.core.favorites import FavoritesManager, ThemePreference
from lyrics_finder.core.models import Song
from lyrics_finder.core.orchestrator import SearchController
from lyrics_finder.db.preferences import initialize_store


BOHEMIAN_SEARCH_ITEM = {
    "id": 2114851,
    "trackName": "Bohemian Rhapsody",
    "artistName": "Queen",
    "albumName": "A Night at the Opera",
    "duration": 354.0,
    "instrumental": False,
    "plainLyrics": None,
    "syncedLyrics": None,
}

BOHEMIAN_FULL = dict(
    BOHEMIAN_SEARCH_ITEM,
    plainLyrics="Is this the real life?\nIs this just fantasy?",
    syncedLyrics="[00:00.50] Is this the real life?\n[00:04.10] Is this just fantasy?",
)


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for the whole run."""
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def store(tmp_path):
    """Preference store backed by a temp SQLite file."""
    s = initialize_store(str(tmp_path))
    yield s
    s.close()


@pytest.fixture
def favorites(store):
    return FavoritesManager(store)


@pytest.fixture
def theme(store):
    return ThemePreference(store)


@pytest.fixture
def bohemian():
    return Song.from_api(BOHEMIAN_FULL)


@pytest.fixture
def mock_client():
    """Mocked LrcLibClient answering the Bohemian Rhapsody scenario."""
    client = Mock()
    client.search.return_value = [Song.from_api(BOHEMIAN_SEARCH_ITEM)]
    client.get_by_id.return_value = Song.from_api(BOHEMIAN_FULL)
    return client


@pytest.fixture
def controller(qapp, mock_client, favorites, theme):
    """SearchController with the synchronous runner."""
    c = SearchController(client=mock_client, favorites=favorites, theme=theme)
    yield c
    c.dismiss_notice()
