# ui/theme.py
from __future__ import annotations

from lyrics_finder.core.favorites import THEME_DARK

THEME_ICONS = {"dark": "☀️", "light": "🌙"}

_PALETTES = {
    "dark": dict(
        bg="#020617", alt_bg="#030712", panel="#0b1222", border="#1f2937",
        text="#e5e7eb", muted="#9ca3af", accent="#38bdf8", fav="#16a34a",
    ),
    "light": dict(
        bg="#f8fafc", alt_bg="#f1f5f9", panel="#ffffff", border="#cbd5e1",
        text="#0f172a", muted="#64748b", accent="#0284c7", fav="#15803d",
    ),
}

_TEMPLATE = """
QMainWindow, QWidget#Central {{
    background: {bg};
    color: {text};
}}
QLabel {{ color: {text}; }}
QLabel#SongTitle {{ font-weight: 650; font-size: 16px; }}
QLabel#SongArtist, QLabel#SongAlbum, QLabel#FavoriteArtist, QLabel#LoadingLabel {{
    color: {muted};
    font-size: 11px;
}}
QLabel#NoResults, QLabel#NoLyrics {{ color: {muted}; }}
QLabel#FavoritesHeader {{ font-weight: 650; }}

QLineEdit, QTextEdit, QListWidget {{
    background: {panel};
    color: {text};
    border: 1px solid {border};
    border-radius: 8px;
    padding: 4px 6px;
}}

QTableView, QTableWidget {{
    background-color: {bg};
    alternate-background-color: {alt_bg};
    border: none;
    color: {text};
    gridline-color: {bg};
    selection-background-color: rgba(56, 189, 248, 0.2);
    selection-color: {text};
}}
QHeaderView::section {{
    background-color: {bg};
    color: {muted};
    padding: 4px 6px;
    border: none;
    border-bottom: 1px solid {border};
    font-size: 11px;
    text-transform: uppercase;
}}

QPushButton {{
    background: {panel};
    color: {text};
    border: 1px solid {border};
    border-radius: 8px;
    padding: 5px 12px;
}}
QPushButton:hover {{ border-color: {accent}; }}
QPushButton:checked {{ border-color: {accent}; color: {accent}; }}
QPushButton:disabled {{ color: {muted}; }}
QPushButton#FavoriteButton[favorited="true"] {{
    border-color: {fav};
    color: {fav};
}}

QToolButton {{
    border: 1px solid transparent;
    background: transparent;
    color: {text};
    padding: 6px;
    border-radius: 10px;
}}
QToolButton:hover {{
    background: {panel};
    border-color: {border};
}}

QProgressBar#LoadingProgress {{
    background: {panel};
    border: 1px solid {border};
    border-radius: 999px;
    height: 8px;
}}
QProgressBar#LoadingProgress::chunk {{
    border-radius: 999px;
    background: qlineargradient(
        x1:0, y1:0, x2:1, y2:0,
        stop:0 #38bdf8, stop:1 #22c55e
    );
}}
"""


def stylesheet_for(theme: str) -> str:
    palette = _PALETTES["dark" if theme == THEME_DARK else "light"]
    return _TEMPLATE.format(**palette)


def icon_for(theme: str) -> str:
    return THEME_ICONS["dark" if theme == THEME_DARK else "light"]
