from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit,
    QPushButton, QToolButton, QProgressBar, QSplitter, QStackedWidget
)

from lyrics_finder.core.orchestrator import SearchController, ViewState
from lyrics_finder.ui.lyrics_view import LyricsView
from lyrics_finder.ui.theme import icon_for, stylesheet_for
from lyrics_finder.ui.widgets.favorites_list_widget import FavoritesListWidget
from lyrics_finder.ui.widgets.results_list_widget import ResultsListWidget
from lyrics_finder.ui.widgets.toast import ToastOverlay


class MainWindow(QMainWindow):
    def __init__(self, controller: SearchController):
        super().__init__()
        self.setWindowTitle("Lyrics Finder")
        self.resize(980, 640)
        self.controller = controller

        self.central_widget = QWidget()
        self.central_widget.setObjectName("Central")
        self.setCentralWidget(self.central_widget)
        self.layout = QVBoxLayout(self.central_widget)

        # --- Top bar (search + theme) ---
        top_bar = QHBoxLayout()

        self.search_box = QLineEdit()
        self.search_box.setPlaceholderText("Search by song name or artist...")
        self.search_box.returnPressed.connect(self._on_search_clicked)
        self.search_box.editingFinished.connect(self._trim_search_box)
        top_bar.addWidget(self.search_box, stretch=1)

        self.btn_search = QPushButton("Search")
        self.btn_search.clicked.connect(self._on_search_clicked)
        top_bar.addWidget(self.btn_search)

        self.btn_theme = QToolButton()
        self.btn_theme.setToolTip("Toggle light/dark theme")
        self.btn_theme.clicked.connect(self.controller.toggle_theme)
        top_bar.addWidget(self.btn_theme)

        self.layout.addLayout(top_bar)

        # --- Loading strip (hidden when idle) ---
        self.loading_row = QWidget()
        loading_layout = QHBoxLayout(self.loading_row)
        loading_layout.setContentsMargins(8, 4, 8, 4)
        self.loading_label = QLabel("Loading…")
        self.loading_label.setObjectName("LoadingLabel")
        self.progress_bar = QProgressBar()
        self.progress_bar.setObjectName("LoadingProgress")
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setRange(0, 0)  # indeterminate
        loading_layout.addWidget(self.loading_label)
        loading_layout.addWidget(self.progress_bar, 1)
        self.layout.addWidget(self.loading_row)
        self.loading_row.setVisible(False)

        # --- Body: (results | lyrics) + favorites ---
        splitter = QSplitter(Qt.Orientation.Horizontal)

        self.pages = QStackedWidget()
        self.welcome = QLabel("Search for a song to see its lyrics")
        self.welcome.setObjectName("NoResults")
        self.welcome.setAlignment(Qt.AlignCenter)
        self.results = ResultsListWidget()
        self.lyrics_view = LyricsView()
        self.pages.addWidget(self.welcome)
        self.pages.addWidget(self.results)
        self.pages.addWidget(self.lyrics_view)
        splitter.addWidget(self.pages)

        self.favorites = FavoritesListWidget()
        splitter.addWidget(self.favorites)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)

        self.layout.addWidget(splitter, 1)

        self.toasts = ToastOverlay(self, on_close=self.controller.dismiss_notice)

        # --- Shortcuts ---
        QShortcut(QKeySequence("Ctrl+F"), self, activated=self.search_box.setFocus)
        QShortcut(QKeySequence("Alt+Left"), self, activated=self.controller.back)

        # --- Widgets -> controller ---
        self.results.songSelected.connect(self.controller.select)
        self.lyrics_view.backRequested.connect(self.controller.back)
        self.lyrics_view.addFavoriteRequested.connect(self.controller.add_favorite)
        self.favorites.openFavorite.connect(self.controller.search_and_view)
        self.favorites.removeFavorite.connect(self.controller.remove_favorite)
        self.favorites.clearRequested.connect(self.controller.clear_favorites)

        # --- Controller -> widgets ---
        self.controller.stateChanged.connect(self._on_state_changed)
        self.controller.busyChanged.connect(self._on_busy_changed)
        self.controller.resultsChanged.connect(self.results.set_results)
        self.controller.songChanged.connect(self.lyrics_view.set_song)
        self.controller.favoriteStateChanged.connect(self.lyrics_view.set_favorited)
        self.controller.favoritesChanged.connect(self.favorites.set_favorites)
        self.controller.noticeChanged.connect(self.toasts.set_notice)
        self.controller.themeChanged.connect(self.apply_theme)
        self.controller.queryAccepted.connect(self.search_box.clear)

        # initial load
        self.apply_theme(self.controller.current_theme())
        self.favorites.set_favorites(self.controller.list_favorites())
        self._on_state_changed(self.controller.state)

    # ------------------ search ------------------
    def _on_search_clicked(self):
        self.controller.submit(self.search_box.text())

    def _trim_search_box(self):
        text = self.search_box.text()
        if text != text.strip():
            self.search_box.setText(text.strip())

    # ------------------ controller signals ------------------
    def _on_state_changed(self, state: ViewState):
        if state is ViewState.RESULTS_SHOWN:
            self.pages.setCurrentWidget(self.results)
        elif state is ViewState.LYRICS_SHOWN:
            self.pages.setCurrentWidget(self.lyrics_view)
        elif state is ViewState.IDLE and not self.controller.has_searched:
            self.pages.setCurrentWidget(self.welcome)
        elif state is ViewState.SEARCHING:
            self.loading_label.setText("Searching…")
        elif state is ViewState.FETCHING_LYRICS:
            self.loading_label.setText("Loading lyrics…")

    def _on_busy_changed(self, busy: bool):
        self.loading_row.setVisible(busy)
        self.btn_search.setEnabled(not busy)
        self.results.setEnabled(not busy)
        self.favorites.setEnabled(not busy)

    def apply_theme(self, theme: str):
        self.setStyleSheet(stylesheet_for(theme))
        self.btn_theme.setText(icon_for(theme))

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.toasts.reposition()
