"""
Palette management for asset pipelines
Loads palettes once and shares them between all textures that use them
"""

from typing import Optional

from .constants import MAX_PALETTE_FILE_SIZE, MAX_RECENT_FILES
from .file_system import DiskFileSystem, FileSystem, PathLike
from .logging_config import get_logger
from .palette import Palette
from .settings_manager import SettingsManager, get_settings

logger = get_logger(__name__)


class PaletteManager:
    """Loads, caches and remembers palettes"""

    def __init__(self, file_system: Optional[FileSystem] = None,
                 settings: Optional[SettingsManager] = None) -> None:
        self.settings = settings if settings is not None else get_settings()
        if file_system is None:
            file_system = DiskFileSystem(
                max_file_size=self.settings.get("max_palette_file_size",
                                                MAX_PALETTE_FILE_SIZE)
            )
        self.file_system = file_system
        self._cache: dict[str, Palette] = {}
        self._recent: list[str] = []

    @staticmethod
    def _cache_key(path: PathLike) -> str:
        return str(path).replace("\\", "/").lower()

    def load(self, path: PathLike) -> Palette:
        """
        Load a palette, reusing an earlier load of the same path.

        Raises:
            PaletteLoadError: If the palette cannot be loaded
        """
        key = self._cache_key(path)
        palette = self._cache.get(key)
        if palette is not None:
            logger.debug(f"Using cached palette {path}")
        else:
            palette = Palette.load_file(self.file_system, path)
            if self.settings.get("preferences.cache_palettes", True):
                self._cache[key] = palette
        self._add_recent(str(path))
        return palette

    def _add_recent(self, path: str) -> None:
        if path in self._recent:
            self._recent.remove(path)
        self._recent.insert(0, path)
        max_recent = self.settings.get("preferences.max_recent_files", MAX_RECENT_FILES)
        del self._recent[max_recent:]

    def default_palette(self) -> Optional[Palette]:
        """Load the palette configured as default, if any."""
        path = self.settings.get("default_palette", "")
        if not path:
            return None
        return self.load(path)

    def set_default_palette(self, path: PathLike) -> None:
        self.settings.set("default_palette", str(path))

    def recent_palettes(self) -> list[str]:
        return list(self._recent)

    def cached_paths(self) -> list[str]:
        return list(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()
