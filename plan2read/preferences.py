import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

USER_ID_KEY = "p2r_userId"
CURRENT_SCHEDULE_KEY = "p2r_currentScheduleId"
THEME_KEY = "p2r_theme"

THEMES = ("light", "dark")


class PreferenceStore:
    """
    String key/value store for client-side preferences.

    Backed by a JSON file when ``path`` is given, otherwise kept in memory.
    Every write is flushed to disk immediately.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else None
        self._values: Dict[str, str] = self._read()

    def _read(self) -> Dict[str, str]:
        if not self.path or not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, e)
            return {}
        return {str(k): str(v) for k, v in data.items()} if isinstance(data, dict) else {}

    def _flush(self):
        if not self.path:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._values, indent=2) + "\n", encoding="utf-8")

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key, default)

    def set(self, key: str, value: str):
        self._values[key] = str(value)
        self._flush()

    def remove(self, key: str):
        if self._values.pop(key, None) is not None:
            self._flush()

    # Typed accessors

    @property
    def user_id(self) -> Optional[str]:
        return self.get(USER_ID_KEY)

    @user_id.setter
    def user_id(self, value: str):
        self.set(USER_ID_KEY, value)

    @property
    def current_schedule_id(self) -> Optional[str]:
        return self.get(CURRENT_SCHEDULE_KEY)

    @current_schedule_id.setter
    def current_schedule_id(self, value: Optional[str]):
        if value is None:
            self.remove(CURRENT_SCHEDULE_KEY)
        else:
            self.set(CURRENT_SCHEDULE_KEY, value)

    @property
    def theme(self) -> str:
        theme = self.get(THEME_KEY)
        return theme if theme in THEMES else "light"

    @theme.setter
    def theme(self, value: str):
        if value not in THEMES:
            raise ValueError(f"Theme must be one of {', '.join(THEMES)}")
        self.set(THEME_KEY, value)

    def toggle_theme(self) -> str:
        self.theme = "light" if self.theme == "dark" else "dark"
        return self.theme
