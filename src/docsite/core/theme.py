"""Display theme preference.

Tracks the active theme, persists it to a key-value store and applies it to
the root presentation context. Storage is best-effort: failures are logged
and treated as "no stored value", never surfaced to the caller.

Store layout (JsonFileStore):
    .cache/
    └── preferences.json             # {"theme": "dark"}
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Protocol

from docsite.core.errors import StorageError

logger = logging.getLogger(__name__)

THEME_STORAGE_KEY = "theme"
THEME_ATTRIBUTE = "data-theme"


class ThemeChoice(str, Enum):
    """Display theme. DEVICE follows the operating system preference."""

    LIGHT = "light"
    DARK = "dark"
    DEVICE = "device"


class KeyValueStore(Protocol):
    """Persistent string store.

    Implementations raise StorageError when the backing storage fails.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class ThemeApplier(Protocol):
    """Applies a theme to the root presentation context."""

    def apply(self, theme: ThemeChoice) -> None: ...


class MemoryStore:
    """In-process key-value store."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileStore:
    """Key-value store backed by a JSON object on disk."""

    def __init__(self, path: Path) -> None:
        """Initialize store.

        Args:
            path: JSON file holding the stored values (created on first write)
        """
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except StorageError as e:
            # Unreadable contents are overwritten
            logger.debug(f"Overwriting unreadable {self._path}: {e}")
            data = {}
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e

    def _read(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Expected a JSON object in {self._path}")
        return data


class DocumentRoot:
    """Attributes of the root presentation element.

    Served to the frontend alongside the view model so it can set them on
    ``<html>``.
    """

    def __init__(self) -> None:
        self.attributes: dict[str, str] = {}

    def apply(self, theme: ThemeChoice) -> None:
        self.attributes[THEME_ATTRIBUTE] = theme.value


def read_preference(store: KeyValueStore, key: str) -> str | None:
    """Read a stored value, mapping storage failures to "absent"."""
    try:
        return store.get(key)
    except StorageError as e:
        logger.debug(f"Preference {key!r} unavailable: {e}")
        return None


def write_preference(store: KeyValueStore, key: str, value: str) -> bool:
    """Write a value, returning False instead of raising on failure."""
    try:
        store.set(key, value)
    except StorageError as e:
        logger.warning(f"Failed to persist preference {key!r}: {e}")
        return False
    return True


class ThemePreference:
    """Current theme with persistence and presentation side effects.

    Every theme can switch to every other theme; there are no guards.
    """

    def __init__(
        self,
        store: KeyValueStore,
        applier: ThemeApplier,
        theme: ThemeChoice = ThemeChoice.DEVICE,
    ) -> None:
        self._store = store
        self._applier = applier
        self._theme = theme

    @classmethod
    def load(cls, store: KeyValueStore, applier: ThemeApplier) -> "ThemePreference":
        """Create preference from the stored value, defaulting to DEVICE."""
        stored = read_preference(store, THEME_STORAGE_KEY)
        theme = ThemeChoice.DEVICE
        if stored:
            try:
                theme = ThemeChoice(stored)
            except ValueError:
                logger.debug(f"Ignoring unknown stored theme {stored!r}")
        return cls(store, applier, theme)

    @property
    def theme(self) -> ThemeChoice:
        return self._theme

    def apply_current(self) -> None:
        """Apply the current theme without persisting it (startup)."""
        self._applier.apply(self._theme)

    def switch(self, theme: ThemeChoice) -> None:
        """Switch theme, persist it (best-effort) and apply it."""
        self._theme = theme
        write_preference(self._store, THEME_STORAGE_KEY, theme.value)
        self._applier.apply(theme)
