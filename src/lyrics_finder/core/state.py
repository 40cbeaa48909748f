from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lyrics_finder.core.config import AppConfig
from lyrics_finder.core.favorites import FavoritesManager, ThemePreference
from lyrics_finder.core.lrclib_client import LrcLibClient
from lyrics_finder.db.preferences import PreferenceStore, initialize_store


@dataclass(frozen=True)
class Notice:
    message: str
    notify_type: str = "info"   # info/success/warning/error


@dataclass
class AppState:
    config: AppConfig
    store: PreferenceStore
    client: LrcLibClient
    favorites: FavoritesManager
    theme: ThemePreference

    @staticmethod
    def create(config: AppConfig, store: Optional[PreferenceStore] = None) -> "AppState":
        store = store or initialize_store(config.app_data_dir)
        client = LrcLibClient(
            base_url=config.lrclib_instance,
            user_agent=config.user_agent,
            timeout=config.request_timeout,
        )
        return AppState(
            config=config,
            store=store,
            client=client,
            favorites=FavoritesManager(store),
            theme=ThemePreference(store),
        )
